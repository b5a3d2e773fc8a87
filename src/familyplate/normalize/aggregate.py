"""Merge parsed ingredient lines across meals."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from familyplate.logging_config import get_logger
from familyplate.normalize.ingredients import ParsedIngredient, parse_ingredient
from familyplate.normalize.units import can_aggregate, format_quantity

logger = get_logger(__name__)


class MealLike(Protocol):
    """Anything with a meal name and an optional list of ingredient lines."""

    name: str
    ingredients: list[str] | None


@dataclass
class AggregatedIngredient:
    """An ingredient with quantities summed over every meal that uses it."""

    name: str
    normalized_name: str
    total_quantity: float
    unit: str
    used_in_meals: list[str] = field(default_factory=list)
    # Amounts in a unit other than `unit`, summed per unit, in first-seen order
    extra_quantities: list[tuple[float, str]] = field(default_factory=list)

    def add_meal(self, meal_name: str) -> None:
        """Record a contributing meal, keeping insertion order and no duplicates."""
        if meal_name and meal_name not in self.used_in_meals:
            self.used_in_meals.append(meal_name)

    def add_extra(self, quantity: float, unit: str) -> None:
        """Keep an amount that cannot be folded into the total."""
        for i, (existing_quantity, existing_unit) in enumerate(self.extra_quantities):
            if can_aggregate(existing_unit, unit):
                self.extra_quantities[i] = (existing_quantity + quantity, existing_unit)
                return
        self.extra_quantities.append((quantity, unit))

    def display_quantity(self) -> str:
        """Get human-readable quantity string, e.g. "2 cups + 200 g"."""
        parts = [format_quantity(self.total_quantity, self.unit)]
        parts.extend(format_quantity(qty, unit) for qty, unit in self.extra_quantities)
        return " + ".join(parts)


def aggregate_ingredients(
    entries: Iterable[tuple[ParsedIngredient, str]],
) -> dict[str, AggregatedIngredient]:
    """
    Aggregate parsed ingredients by normalized name.

    Args:
        entries: (parsed ingredient, meal name) pairs in display order.

    Returns:
        Dict mapping normalized names to AggregatedIngredient, in first-seen order.

    Quantities are summed only when the units match. An occurrence in a
    different unit leaves the total and unit of the first occurrence alone
    and is kept in `extra_quantities` instead.
    """
    aggregated: dict[str, AggregatedIngredient] = {}

    for parsed, meal_name in entries:
        key = parsed.normalized_name
        if not key:
            continue

        existing = aggregated.get(key)
        if existing is None:
            aggregated[key] = AggregatedIngredient(
                name=parsed.name,
                normalized_name=key,
                total_quantity=parsed.quantity,
                unit=parsed.unit,
                used_in_meals=[meal_name] if meal_name else [],
            )
            continue

        if can_aggregate(existing.unit, parsed.unit):
            existing.total_quantity += parsed.quantity
        else:
            logger.debug(
                f"Unit mismatch for {key!r}: keeping {existing.unit!r}, "
                f"listing {parsed.quantity} {parsed.unit!r} separately"
            )
            existing.add_extra(parsed.quantity, parsed.unit)

        existing.add_meal(meal_name)

    return aggregated


def collect_meal_ingredients(meals: Iterable[MealLike]) -> list[tuple[ParsedIngredient, str]]:
    """Parse the ingredient lines of each meal, tagging them with the meal name."""
    entries: list[tuple[ParsedIngredient, str]] = []
    for meal in meals:
        for line in meal.ingredients or []:
            if not line or not str(line).strip():
                continue
            entries.append((parse_ingredient(line), meal.name))
    return entries
