"""Shopping list generation from meal plans."""

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Literal

from familyplate.logging_config import get_logger
from familyplate.normalize.aggregate import (
    AggregatedIngredient,
    aggregate_ingredients,
    collect_meal_ingredients,
)
from familyplate.normalize.categories import (
    CategoryConfig,
    IngredientCategory,
    assign_category,
    group_by_category,
)

logger = get_logger(__name__)

MealType = Literal["breakfast", "lunch", "dinner"]


@dataclass
class Meal:
    """A planned meal and its free-text ingredient lines."""

    name: str
    ingredients: list[str] | None = None
    meal_type: MealType | None = None
    day: str | None = None
    recipe_id: str | None = None


@dataclass
class ShoppingItem:
    """A single item in the shopping list."""

    name: str
    normalized_name: str
    total_quantity: float
    unit: str
    quantity_display: str
    category: IngredientCategory
    used_in_meals: list[str] = field(default_factory=list)
    extra_quantities: list[tuple[float, str]] = field(default_factory=list)
    checked: bool = False

    @classmethod
    def from_aggregate(cls, aggregate: AggregatedIngredient, checked: bool = False) -> "ShoppingItem":
        return cls(
            name=aggregate.name,
            normalized_name=aggregate.normalized_name,
            total_quantity=aggregate.total_quantity,
            unit=aggregate.unit,
            quantity_display=aggregate.display_quantity(),
            category=assign_category(aggregate.normalized_name),
            used_in_meals=list(aggregate.used_in_meals),
            extra_quantities=list(aggregate.extra_quantities),
            checked=checked,
        )


@dataclass
class CategoryGroup:
    """Items of one grocery category, sorted by name."""

    category: IngredientCategory
    emoji: str
    items: list[ShoppingItem] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: CategoryConfig, items: list[ShoppingItem]) -> "CategoryGroup":
        return cls(category=config.name, emoji=config.emoji, items=items)


@dataclass
class ShoppingList:
    """Consolidated shopping list, grouped by category in display order."""

    groups: list[CategoryGroup] = field(default_factory=list)

    @property
    def items(self) -> list[ShoppingItem]:
        """All items in display order."""
        return [item for group in self.groups for item in group.items]

    @property
    def item_count(self) -> int:
        return sum(len(group.items) for group in self.groups)

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.checked)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def get(self, normalized_name: str) -> ShoppingItem | None:
        """Look up an item by its normalized name."""
        for item in self.items:
            if item.normalized_name == normalized_name:
                return item
        return None

    def by_meal(self) -> dict[str, list[ShoppingItem]]:
        """Items per contributing meal, meals in first-seen order."""
        meals: dict[str, list[ShoppingItem]] = {}
        for item in self.items:
            for meal_name in item.used_in_meals:
                meals.setdefault(meal_name, []).append(item)
        return meals

    def to_text(self) -> str:
        """Plain-text list for copying or sharing."""
        lines: list[str] = []
        for group in self.groups:
            lines.append(f"{group.emoji} {group.category}")
            for item in group.items:
                lines.append(f"- {item.name} ({item.quantity_display})")
            lines.append("")
        return "\n".join(lines).rstrip("\n")


def filter_meals(meals: Iterable[Meal], meal_types: Collection[str] | None = None) -> list[Meal]:
    """Keep meals of the given types; None keeps every meal."""
    if meal_types is None:
        return list(meals)
    wanted = {t.lower() for t in meal_types}
    return [m for m in meals if m.meal_type and m.meal_type.lower() in wanted]


class ShoppingListBuilder:
    """
    Builds shopping lists from meals with:
    - Ingredient parsing and quantity aggregation across meals
    - Grocery category assignment and display ordering
    - Checked state from the caller's store
    """

    def __init__(self, checked: Mapping[str, bool] | None = None):
        self.checked = dict(checked or {})

    def build(
        self,
        meals: Iterable[Meal],
        meal_types: Collection[str] | None = None,
    ) -> ShoppingList:
        """
        Build a shopping list from the given meals.

        Args:
            meals: Meals whose ingredients go on the list. Meals without
                ingredients contribute nothing.
            meal_types: Only include meals of these types (e.g. {"dinner"}).
                None includes every meal.

        Returns:
            ShoppingList with category groups in display order.
        """
        selected = filter_meals(meals, meal_types)
        entries = collect_meal_ingredients(selected)
        aggregated = aggregate_ingredients(entries)

        items = [
            ShoppingItem.from_aggregate(agg, checked=self.checked.get(key, False))
            for key, agg in aggregated.items()
        ]
        groups = [CategoryGroup.from_config(config, group) for config, group in group_by_category(items)]

        logger.debug(
            f"Built shopping list: {len(selected)} meals, {len(entries)} lines, "
            f"{len(items)} items in {len(groups)} categories"
        )
        return ShoppingList(groups=groups)


def build_shopping_list(
    meals: Iterable[Meal],
    checked: Mapping[str, bool] | None = None,
    meal_types: Collection[str] | None = None,
) -> ShoppingList:
    """Build a shopping list in one call."""
    return ShoppingListBuilder(checked).build(meals, meal_types=meal_types)
