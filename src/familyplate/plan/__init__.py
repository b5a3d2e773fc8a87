"""Shopping list assembly for meal plans."""

from familyplate.plan.shopping_list import (
    CategoryGroup,
    Meal,
    MealType,
    ShoppingItem,
    ShoppingList,
    ShoppingListBuilder,
    build_shopping_list,
    filter_meals,
)

__all__ = [
    "CategoryGroup",
    "Meal",
    "MealType",
    "ShoppingItem",
    "ShoppingList",
    "ShoppingListBuilder",
    "build_shopping_list",
    "filter_meals",
]
