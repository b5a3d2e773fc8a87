"""Parse, normalize, aggregate and categorize ingredient lines."""

from familyplate.normalize.aggregate import (
    AggregatedIngredient,
    aggregate_ingredients,
    collect_meal_ingredients,
)
from familyplate.normalize.categories import (
    CATEGORIES,
    CategoryConfig,
    IngredientCategory,
    assign_category,
    get_category_config,
    group_by_category,
    sort_items,
)
from familyplate.normalize.ingredients import (
    ParsedIngredient,
    normalize_ingredient_name,
    parse_ingredient,
)
from familyplate.normalize.units import (
    can_aggregate,
    format_quantity,
    normalize_unit,
    parse_quantity_string,
)

__all__ = [
    "CATEGORIES",
    "AggregatedIngredient",
    "CategoryConfig",
    "IngredientCategory",
    "ParsedIngredient",
    "aggregate_ingredients",
    "assign_category",
    "can_aggregate",
    "collect_meal_ingredients",
    "format_quantity",
    "get_category_config",
    "group_by_category",
    "normalize_ingredient_name",
    "normalize_unit",
    "parse_ingredient",
    "parse_quantity_string",
    "sort_items",
]
