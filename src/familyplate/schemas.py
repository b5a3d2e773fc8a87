"""Request and response schemas for the HTTP API."""

from typing import Annotated

from pydantic import BaseModel, Field

from familyplate.normalize.ingredients import ParsedIngredient
from familyplate.plan.shopping_list import CategoryGroup, Meal, MealType, ShoppingItem, ShoppingList

# Longest accepted ingredient line
IngredientLine = Annotated[str, Field(max_length=1000)]


class MealSchema(BaseModel):
    """A planned meal as sent by a client."""

    name: str = Field(min_length=1)
    meal_type: MealType | None = None
    day: str | None = None
    recipe_id: str | None = None
    ingredients: list[IngredientLine] | None = None

    def to_meal(self) -> Meal:
        return Meal(
            name=self.name,
            ingredients=list(self.ingredients) if self.ingredients is not None else None,
            meal_type=self.meal_type,
            day=self.day,
            recipe_id=self.recipe_id,
        )


class ParseRequest(BaseModel):
    """Ingredient lines to parse."""

    lines: list[IngredientLine] = Field(max_length=500)


class ParsedIngredientSchema(BaseModel):
    """One parsed ingredient line."""

    quantity: float
    unit: str
    name: str
    normalized_name: str
    notes: str | None = None
    raw_text: str

    @classmethod
    def from_parsed(cls, parsed: ParsedIngredient) -> "ParsedIngredientSchema":
        return cls(
            quantity=parsed.quantity,
            unit=parsed.unit,
            name=parsed.name,
            normalized_name=parsed.normalized_name,
            notes=parsed.notes,
            raw_text=parsed.raw_text,
        )


class ParseResponse(BaseModel):
    items: list[ParsedIngredientSchema]


class ShoppingListRequest(BaseModel):
    """Meals to build a shopping list from."""

    meals: list[MealSchema] = Field(default_factory=list, max_length=100)
    meal_types: list[MealType] | None = Field(
        None, description="Only include these meal types; all meals when omitted"
    )
    storage_key: str | None = Field(None, description="Checked-state key for this list")


class ShoppingItemSchema(BaseModel):
    """Single item in the shopping list."""

    name: str
    normalized_name: str
    total_quantity: float
    unit: str
    quantity: str = Field(description="Formatted quantity, e.g. '1 1/2 cups'")
    category: str
    used_in_meals: list[str] = Field(default_factory=list)
    checked: bool = False

    @classmethod
    def from_item(cls, item: ShoppingItem) -> "ShoppingItemSchema":
        return cls(
            name=item.name,
            normalized_name=item.normalized_name,
            total_quantity=item.total_quantity,
            unit=item.unit,
            quantity=item.quantity_display,
            category=item.category,
            used_in_meals=item.used_in_meals,
            checked=item.checked,
        )


class CategoryGroupSchema(BaseModel):
    category: str
    emoji: str
    items: list[ShoppingItemSchema]

    @classmethod
    def from_group(cls, group: CategoryGroup) -> "CategoryGroupSchema":
        return cls(
            category=group.category,
            emoji=group.emoji,
            items=[ShoppingItemSchema.from_item(item) for item in group.items],
        )


class FailedMealSchema(BaseModel):
    """A meal whose ingredients could not be loaded."""

    name: str
    recipe_id: str | None = None
    error: str | None = None


class ShoppingListResponse(BaseModel):
    """Consolidated shopping list grouped by category."""

    groups: list[CategoryGroupSchema]
    item_count: int
    checked_count: int
    failed_meals: list[FailedMealSchema] = Field(default_factory=list)

    @classmethod
    def from_list(
        cls,
        shopping_list: ShoppingList,
        failed_meals: list[FailedMealSchema] | None = None,
    ) -> "ShoppingListResponse":
        return cls(
            groups=[CategoryGroupSchema.from_group(g) for g in shopping_list.groups],
            item_count=shopping_list.item_count,
            checked_count=shopping_list.checked_count,
            failed_meals=failed_meals or [],
        )


class ChecklistResponse(BaseModel):
    storage_key: str
    checked: dict[str, bool]


class ToggleRequest(BaseModel):
    name: str = Field(min_length=1, description="Normalized ingredient name")
    checked: bool | None = Field(None, description="Set explicitly instead of toggling")
