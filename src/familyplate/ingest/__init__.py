"""Fetch ingredient data that meals were planned without."""

from familyplate.ingest.loader import (
    IngredientLoader,
    LoadProgress,
    LoadResult,
    MealLoadState,
)
from familyplate.ingest.recipe_details import RecipeDetailsClient, RecipeDetailsError

__all__ = [
    "IngredientLoader",
    "LoadProgress",
    "LoadResult",
    "MealLoadState",
    "RecipeDetailsClient",
    "RecipeDetailsError",
]
