"""API routes for shopping list building and checked state."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from familyplate.ingest import IngredientLoader, RecipeDetailsClient
from familyplate.ingest.loader import IngredientSource
from familyplate.logging_config import LoggingContext, get_logger
from familyplate.plan import Meal, ShoppingList, ShoppingListBuilder, filter_meals
from familyplate.schemas import (
    ChecklistResponse,
    FailedMealSchema,
    ShoppingListRequest,
    ShoppingListResponse,
    ToggleRequest,
)
from familyplate.storage import (
    CheckedStateError,
    CheckedStateStore,
    ShoppingChecklist,
    get_checked_state_store,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


# =============================================================================
# Dependencies
# =============================================================================


def get_store() -> CheckedStateStore:
    """Checked-state store for the request."""
    return get_checked_state_store()


async def get_ingredient_source() -> AsyncIterator[IngredientSource]:
    """Recipe details client, closed when the request ends."""
    async with RecipeDetailsClient() as client:
        yield client


# =============================================================================
# Helper Functions
# =============================================================================


def _store_unavailable(e: CheckedStateError) -> HTTPException:
    logger.error(f"Checked-state store error: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Checked state is temporarily unavailable",
    )


async def _build(
    request: ShoppingListRequest,
    store: CheckedStateStore,
    source: IngredientSource,
) -> tuple[ShoppingList, list[FailedMealSchema]]:
    meals: list[Meal] = filter_meals(
        (m.to_meal() for m in request.meals),
        request.meal_types,
    )

    failed: list[FailedMealSchema] = []
    if any(not m.ingredients and m.recipe_id for m in meals):
        result = await IngredientLoader(source).load(meals)
        meals = result.meals
        failed = [
            FailedMealSchema(name=s.meal.name, recipe_id=s.meal.recipe_id, error=s.error)
            for s in result.failed
        ]

    checked: dict[str, bool] = {}
    if request.storage_key:
        try:
            checked = store.get(request.storage_key)
        except CheckedStateError as e:
            raise _store_unavailable(e) from e

    return ShoppingListBuilder(checked).build(meals), failed


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=ShoppingListResponse)
async def create_shopping_list(
    request: ShoppingListRequest,
    store: CheckedStateStore = Depends(get_store),
    source: IngredientSource = Depends(get_ingredient_source),
) -> ShoppingListResponse:
    """
    Build a consolidated shopping list from planned meals.

    Ingredients are aggregated across meals, grouped by grocery category
    and marked with the checked state stored under `storage_key`. Meals
    planned without ingredients are loaded from the recipe service;
    meals that could not be loaded are listed in `failed_meals`.
    """
    with LoggingContext(storage_key=request.storage_key):
        logger.info(f"Building shopping list for {len(request.meals)} meals")
        shopping_list, failed = await _build(request, store, source)

        if failed:
            logger.warning(f"{len(failed)} meals could not be loaded")

        return ShoppingListResponse.from_list(shopping_list, failed)


@router.post("/text", response_class=PlainTextResponse)
async def export_shopping_list_text(
    request: ShoppingListRequest,
    store: CheckedStateStore = Depends(get_store),
    source: IngredientSource = Depends(get_ingredient_source),
) -> PlainTextResponse:
    """Export the shopping list as plain text for copying or sharing."""
    shopping_list, _ = await _build(request, store, source)
    return PlainTextResponse(shopping_list.to_text())


@router.get("/checked/{storage_key}", response_model=ChecklistResponse)
async def get_checked_state(
    storage_key: str,
    store: CheckedStateStore = Depends(get_store),
) -> ChecklistResponse:
    """Get the checked items stored under a key."""
    try:
        checked = store.get(storage_key)
    except CheckedStateError as e:
        raise _store_unavailable(e) from e
    return ChecklistResponse(storage_key=storage_key, checked=checked)


@router.post("/checked/{storage_key}/toggle", response_model=ChecklistResponse)
async def toggle_checked_item(
    storage_key: str,
    request: ToggleRequest,
    store: CheckedStateStore = Depends(get_store),
) -> ChecklistResponse:
    """
    Check or uncheck one item.

    Flips the item unless `checked` is given, in which case the item is
    set to that value.
    """
    with LoggingContext(storage_key=storage_key):
        checklist = ShoppingChecklist(store, storage_key)
        try:
            checklist.load()
            if request.checked is None:
                value = checklist.toggle(request.name)
            else:
                value = checklist.set_checked(request.name, request.checked)
        except CheckedStateError as e:
            raise _store_unavailable(e) from e

        logger.debug(f"Item {request.name!r} checked={value}")
        return ChecklistResponse(storage_key=storage_key, checked=checklist.state)


@router.delete("/checked/{storage_key}", status_code=status.HTTP_204_NO_CONTENT)
async def reset_checked_state(
    storage_key: str,
    store: CheckedStateStore = Depends(get_store),
) -> Response:
    """Uncheck every item stored under a key."""
    try:
        ShoppingChecklist(store, storage_key).reset()
    except CheckedStateError as e:
        raise _store_unavailable(e) from e

    logger.info(f"Reset checked state for {storage_key}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
