"""Grocery categories for shopping list items."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Protocol, TypeVar

IngredientCategory = Literal[
    "Produce",
    "Dairy & Eggs",
    "Meat & Seafood",
    "Pantry & Spices",
    "Frozen",
    "Other",
]

DEFAULT_CATEGORY: IngredientCategory = "Other"


@dataclass(frozen=True)
class CategoryConfig:
    """Display settings for a category."""

    name: IngredientCategory
    emoji: str
    sort_order: int

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.name}"


CATEGORIES: tuple[CategoryConfig, ...] = (
    CategoryConfig(name="Produce", emoji="🥬", sort_order=1),
    CategoryConfig(name="Dairy & Eggs", emoji="🧀", sort_order=2),
    CategoryConfig(name="Meat & Seafood", emoji="🥩", sort_order=3),
    CategoryConfig(name="Pantry & Spices", emoji="🧂", sort_order=4),
    CategoryConfig(name="Frozen", emoji="🧊", sort_order=5),
    CategoryConfig(name="Other", emoji="🧴", sort_order=6),
)

_CONFIG_BY_NAME = {config.name: config for config in CATEGORIES}


# Rules are tried in order and the first keyword hit wins. Keywords are
# singular and match whole words of the normalized name, so "egg" does not
# hit "eggplant" and "butter" does not hit "butternut squash".
CATEGORY_RULES: tuple[tuple[IngredientCategory, tuple[str, ...]], ...] = (
    (
        "Frozen",
        ("frozen", "ice cream", "sorbet", "gelato", "popsicle"),
    ),
    (
        # Shelf-stable products named after a fresh ingredient
        "Pantry & Spices",
        (
            "egg noodle",
            "corn tortilla",
            "tortilla chip",
            "broth",
            "stock",
            "bouillon",
            "paste",
            "sauce",
            "puree",
            "powder",
            "flake",
            "seasoning",
            "extract",
            "oil",
            "vinegar",
            "canned",
            "peanut butter",
            "almond butter",
            "coconut milk",
            "almond milk",
            "oat milk",
            "soy milk",
            "condensed milk",
            "evaporated milk",
            "black pepper",
            "white pepper",
            "peppercorn",
            "bay leaf",
            "dried",
            "ground cumin",
            "ground cinnamon",
            "ground ginger",
            "ground coriander",
        ),
    ),
    (
        "Dairy & Eggs",
        (
            "milk",
            "buttermilk",
            "cream",
            "sour cream",
            "cream cheese",
            "half-and-half",
            "butter",
            "ghee",
            "cheese",
            "cheddar",
            "mozzarella",
            "parmesan",
            "parmigiano",
            "pecorino",
            "feta",
            "ricotta",
            "mascarpone",
            "gruyere",
            "brie",
            "halloumi",
            "paneer",
            "yogurt",
            "yoghurt",
            "kefir",
            "egg",
            "whey",
        ),
    ),
    (
        "Meat & Seafood",
        (
            "chicken",
            "beef",
            "pork",
            "lamb",
            "turkey",
            "duck",
            "veal",
            "bacon",
            "pancetta",
            "prosciutto",
            "sausage",
            "chorizo",
            "ham",
            "steak",
            "mince",
            "meatball",
            "fish",
            "salmon",
            "tuna",
            "cod",
            "tilapia",
            "trout",
            "halibut",
            "sardine",
            "anchovy",
            "mackerel",
            "shrimp",
            "prawn",
            "crab",
            "lobster",
            "scallop",
            "mussel",
            "clam",
            "oyster",
            "squid",
            "octopus",
            "seafood",
        ),
    ),
    (
        "Produce",
        (
            # Vegetables
            "tomato",
            "onion",
            "garlic",
            "potato",
            "sweet potato",
            "carrot",
            "celery",
            "bell pepper",
            "jalapeno",
            "jalapeño",
            "chili",
            "chile",
            "cucumber",
            "lettuce",
            "spinach",
            "kale",
            "cabbage",
            "broccoli",
            "cauliflower",
            "zucchini",
            "courgette",
            "eggplant",
            "aubergine",
            "mushroom",
            "corn",
            "pea",
            "green bean",
            "avocado",
            "squash",
            "pumpkin",
            "beet",
            "beetroot",
            "radish",
            "turnip",
            "leek",
            "shallot",
            "scallion",
            "green onion",
            "spring onion",
            "ginger",
            "asparagus",
            "artichoke",
            "sprout",
            "arugula",
            "rocket",
            "chard",
            "bok choy",
            "okra",
            "fennel",
            # Herbs
            "herb",
            "parsley",
            "cilantro",
            "coriander",
            "basil",
            "mint",
            "thyme",
            "rosemary",
            "dill",
            "oregano",
            "sage",
            "chive",
            # Fruits
            "apple",
            "banana",
            "orange",
            "lemon",
            "lime",
            "grape",
            "strawberry",
            "blueberry",
            "raspberry",
            "blackberry",
            "berry",
            "mango",
            "pineapple",
            "watermelon",
            "melon",
            "peach",
            "pear",
            "plum",
            "cherry",
            "apricot",
            "kiwi",
            "papaya",
            "pomegranate",
            "fig",
            "date",
            "coconut",
        ),
    ),
    (
        "Pantry & Spices",
        (
            # Grains and bread
            "flour",
            "rice",
            "pasta",
            "spaghetti",
            "penne",
            "noodle",
            "bread",
            "bun",
            "tortilla",
            "pita",
            "naan",
            "couscous",
            "quinoa",
            "bulgur",
            "oat",
            "oats",
            "cereal",
            "cracker",
            "breadcrumb",
            "panko",
            # Legumes and preserves
            "bean",
            "lentil",
            "chickpea",
            "olive",
            "pickle",
            "caper",
            "jam",
            "honey",
            "syrup",
            "molasses",
            # Condiments
            "mustard",
            "ketchup",
            "mayonnaise",
            "mayo",
            "salsa",
            "pesto",
            "tahini",
            "worcestershire",
            # Baking
            "sugar",
            "baking soda",
            "yeast",
            "vanilla",
            "cocoa",
            "chocolate",
            "cornstarch",
            # Nuts and seeds
            "nut",
            "almond",
            "walnut",
            "pecan",
            "cashew",
            "peanut",
            "hazelnut",
            "pistachio",
            "seed",
            "sesame",
            # Spices
            "salt",
            "pepper",
            "cayenne",
            "paprika",
            "cumin",
            "turmeric",
            "curry",
            "garam masala",
            "cinnamon",
            "nutmeg",
            "cardamom",
            "clove",
            "allspice",
            "saffron",
            "sumac",
            "za'atar",
            "spice",
            # Drinks
            "coffee",
            "tea",
            "water",
            "juice",
            "wine",
            "beer",
        ),
    ),
)


@lru_cache(maxsize=None)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w-]){re.escape(keyword)}(?![\w-])")


def assign_category(normalized_name: str) -> IngredientCategory:
    """
    Assign a category to an ingredient based on its normalized name.

    Every name maps to exactly one category; names no rule knows are "Other".
    """
    name = (normalized_name or "").lower()
    if not name:
        return DEFAULT_CATEGORY

    for category, keywords in CATEGORY_RULES:
        for keyword in keywords:
            if _keyword_pattern(keyword).search(name):
                return category

    return DEFAULT_CATEGORY


def get_category_config(category: str) -> CategoryConfig:
    """Get category configuration by name, falling back to "Other"."""
    return _CONFIG_BY_NAME.get(category, _CONFIG_BY_NAME[DEFAULT_CATEGORY])


class Categorized(Protocol):
    name: str
    normalized_name: str
    category: IngredientCategory


T = TypeVar("T", bound=Categorized)


def sort_key(item: Categorized) -> tuple[int, str, str]:
    """Category order first, then display name ignoring case."""
    return (
        get_category_config(item.category).sort_order,
        item.name.casefold(),
        item.normalized_name,
    )


def sort_items(items: Iterable[T]) -> list[T]:
    """Return the items in display order."""
    return sorted(items, key=sort_key)


def group_by_category(items: Iterable[T]) -> list[tuple[CategoryConfig, list[T]]]:
    """
    Group items by category in the fixed category order.

    Items within a group are sorted by name. Empty categories are left out.
    """
    grouped: dict[str, list[T]] = {}
    for item in sort_items(items):
        grouped.setdefault(get_category_config(item.category).name, []).append(item)

    return [(config, grouped[config.name]) for config in CATEGORIES if config.name in grouped]
