"""Load missing ingredient lists for planned meals with bounded concurrency."""

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Literal, Protocol

from familyplate.config import get_settings
from familyplate.ingest.recipe_details import RecipeDetailsError
from familyplate.logging_config import LoggingContext, get_logger
from familyplate.plan.shopping_list import Meal

logger = get_logger(__name__)

LoadStatus = Literal["ready", "pending", "loaded", "failed", "skipped"]


class IngredientSource(Protocol):
    async def get_ingredients(self, recipe_id: str) -> list[str]: ...


@dataclass
class MealLoadState:
    """A meal together with how its ingredients were obtained."""

    meal: Meal
    status: LoadStatus
    error: str | None = None

    @property
    def has_ingredients(self) -> bool:
        return self.status in ("ready", "loaded") and bool(self.meal.ingredients)


@dataclass
class LoadProgress:
    """Counters for a load or retry pass."""

    total: int = 0
    loaded: int = 0
    failed: int = 0

    @property
    def done(self) -> int:
        return self.loaded + self.failed


@dataclass
class LoadResult:
    """Outcome of loading a set of meals, in input order."""

    states: list[MealLoadState] = field(default_factory=list)
    progress: LoadProgress = field(default_factory=LoadProgress)

    @property
    def meals(self) -> list[Meal]:
        """Meals that have ingredients to put on a shopping list."""
        return [s.meal for s in self.states if s.has_ingredients]

    @property
    def failed(self) -> list[MealLoadState]:
        return [s for s in self.states if s.status == "failed"]


class IngredientLoader:
    """
    Fills in ingredient lists for meals that were planned without them.

    - At most `concurrency` requests are in flight at once
    - A failed meal is marked and reported, never raised; the others still load
    - `retry_failed` fetches only the meals that failed
    """

    def __init__(self, source: IngredientSource, concurrency: int | None = None):
        self.source = source
        self.concurrency = max(1, concurrency or get_settings().ingredient_fetch_concurrency)

    async def load(self, meals: Iterable[Meal]) -> LoadResult:
        """Load ingredients for every meal that needs them."""
        states: list[MealLoadState] = []
        for meal in meals:
            if meal.ingredients:
                states.append(MealLoadState(meal=meal, status="ready"))
            elif meal.recipe_id:
                states.append(MealLoadState(meal=meal, status="pending"))
            else:
                states.append(MealLoadState(meal=meal, status="skipped"))

        pending = [i for i, s in enumerate(states) if s.status == "pending"]
        progress = await self._fetch_all(states, pending)
        return LoadResult(states=states, progress=progress)

    async def retry_failed(self, result: LoadResult) -> LoadResult:
        """Fetch again only the meals that failed; returns a new result."""
        states = list(result.states)
        pending = [i for i, s in enumerate(states) if s.status == "failed"]
        if not pending:
            return LoadResult(states=states, progress=LoadProgress())

        logger.info(f"Retrying {len(pending)} failed meals")
        progress = await self._fetch_all(states, pending)
        return LoadResult(states=states, progress=progress)

    @staticmethod
    def _mark_failed(states: list[MealLoadState], index: int, progress: LoadProgress) -> None:
        states[index] = MealLoadState(meal=states[index].meal, status="failed", error="Failed to load")
        progress.failed += 1

    async def _fetch_all(self, states: list[MealLoadState], pending: list[int]) -> LoadProgress:
        progress = LoadProgress(total=len(pending))
        if not pending:
            return progress

        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch(index: int) -> None:
            state = states[index]
            async with semaphore:
                with LoggingContext(recipe_id=state.meal.recipe_id):
                    try:
                        ingredients = await self.source.get_ingredients(state.meal.recipe_id or "")
                    except RecipeDetailsError as e:
                        logger.warning(f"Failed to load ingredients for {state.meal.name}: {e}")
                        self._mark_failed(states, index, progress)
                        return
                    except Exception as e:
                        logger.error(
                            f"Unexpected error loading ingredients for {state.meal.name}: {e}",
                            exc_info=True,
                        )
                        self._mark_failed(states, index, progress)
                        return

            states[index] = MealLoadState(
                meal=replace(state.meal, ingredients=ingredients),
                status="loaded",
            )
            progress.loaded += 1

        await asyncio.gather(*(fetch(i) for i in pending))

        logger.info(
            f"Loaded ingredients for {progress.loaded}/{progress.total} meals"
            + (f", {progress.failed} failed" if progress.failed else "")
        )
        return progress
