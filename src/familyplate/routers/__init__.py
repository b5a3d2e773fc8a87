"""API routers for the familyplate application."""

from familyplate.routers.ingredients import router as ingredients_router
from familyplate.routers.shopping_lists import router as shopping_lists_router

__all__ = [
    "ingredients_router",
    "shopping_lists_router",
]
