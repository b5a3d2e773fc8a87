"""Unit vocabulary, quantity parsing and quantity formatting."""

import re
from types import MappingProxyType


# =============================================================================
# Unit Vocabulary
# =============================================================================

# Surface form -> canonical unit. Lookups are done on the lowercased token.
UNIT_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        # Weight
        "g": "g",
        "gr": "g",
        "gram": "g",
        "grams": "g",
        "kg": "kg",
        "kgs": "kg",
        "kilogram": "kg",
        "kilograms": "kg",
        "mg": "mg",
        "milligram": "mg",
        "milligrams": "mg",
        "oz": "oz",
        "ounce": "oz",
        "ounces": "oz",
        "lb": "lb",
        "lbs": "lb",
        "pound": "lb",
        "pounds": "lb",
        # Volume
        "ml": "ml",
        "milliliter": "ml",
        "milliliters": "ml",
        "millilitre": "ml",
        "millilitres": "ml",
        "l": "l",
        "liter": "l",
        "liters": "l",
        "litre": "l",
        "litres": "l",
        "dl": "dl",
        "deciliter": "dl",
        "deciliters": "dl",
        "cl": "cl",
        "centiliter": "cl",
        "centiliters": "cl",
        "cup": "cup",
        "cups": "cup",
        "c": "cup",
        "tbsp": "tbsp",
        "tbs": "tbsp",
        "tbl": "tbsp",
        "tablespoon": "tbsp",
        "tablespoons": "tbsp",
        "tsp": "tsp",
        "teaspoon": "tsp",
        "teaspoons": "tsp",
        "fl oz": "fl oz",
        "fluid ounce": "fl oz",
        "fluid ounces": "fl oz",
        "pint": "pint",
        "pints": "pint",
        "pt": "pint",
        "quart": "quart",
        "quarts": "quart",
        "qt": "quart",
        "gallon": "gallon",
        "gallons": "gallon",
        "gal": "gallon",
        # Count
        "piece": "piece",
        "pieces": "piece",
        "pc": "piece",
        "pcs": "piece",
        "clove": "clove",
        "cloves": "clove",
        "slice": "slice",
        "slices": "slice",
        "can": "can",
        "cans": "can",
        "tin": "can",
        "tins": "can",
        "jar": "jar",
        "jars": "jar",
        "package": "package",
        "packages": "package",
        "pkg": "package",
        "pack": "package",
        "packs": "package",
        "packet": "package",
        "packets": "package",
        "bottle": "bottle",
        "bottles": "bottle",
        "bag": "bag",
        "bags": "bag",
        "box": "box",
        "boxes": "box",
        "stick": "stick",
        "sticks": "stick",
        "head": "head",
        "heads": "head",
        "bunch": "bunch",
        "bunches": "bunch",
        "sprig": "sprig",
        "sprigs": "sprig",
        "stalk": "stalk",
        "stalks": "stalk",
        "fillet": "fillet",
        "fillets": "fillet",
        "sheet": "sheet",
        "sheets": "sheet",
        "drop": "drop",
        "drops": "drop",
        # Unmeasured amounts
        "pinch": "pinch",
        "pinches": "pinch",
        "dash": "dash",
        "dashes": "dash",
        "handful": "handful",
        "handfuls": "handful",
        "splash": "splash",
        "splashes": "splash",
    }
)

# Units that may open a line without a number ("pinch of salt").
LEADING_DESCRIPTOR_UNITS: frozenset[str] = frozenset({"pinch", "dash", "handful", "splash"})

# Units recorded for "salt to taste" style lines; they render without a number.
DESCRIPTOR_UNITS: frozenset[str] = frozenset({"to taste", "as needed", "for garnish", "for serving"})

# Abbreviated units never take a plural form.
ABBREVIATED_UNITS: frozenset[str] = frozenset(
    {"g", "kg", "mg", "oz", "lb", "ml", "l", "dl", "cl", "tbsp", "tsp", "fl oz"}
)

# Longest alternatives first so "fl oz" wins over "fl" and "tbsp" over "tb".
UNIT_PATTERN = "|".join(
    re.escape(alias).replace(r"\ ", r"\s+")
    for alias in sorted(UNIT_ALIASES, key=len, reverse=True)
)


# =============================================================================
# Quantity Parsing
# =============================================================================

UNICODE_FRACTIONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "½": "1/2",
        "⅓": "1/3",
        "⅔": "2/3",
        "¼": "1/4",
        "¾": "3/4",
        "⅕": "1/5",
        "⅖": "2/5",
        "⅗": "3/5",
        "⅘": "4/5",
        "⅙": "1/6",
        "⅚": "5/6",
        "⅛": "1/8",
        "⅜": "3/8",
        "⅝": "5/8",
        "⅞": "7/8",
    }
)

WORD_NUMBERS: MappingProxyType[str, float] = MappingProxyType(
    {
        "a": 1.0,
        "an": 1.0,
        "one": 1.0,
        "two": 2.0,
        "three": 3.0,
        "four": 4.0,
        "five": 5.0,
        "six": 6.0,
        "seven": 7.0,
        "eight": 8.0,
        "nine": 9.0,
        "ten": 10.0,
        "eleven": 11.0,
        "twelve": 12.0,
        "half": 0.5,
        "half a": 0.5,
        "half an": 0.5,
        "a dozen": 12.0,
        "dozen": 12.0,
    }
)

_VULGAR = "[" + "".join(UNICODE_FRACTIONS) + "]"
_THOUSANDS = r"\d{1,3}(?:,\d{3})+(?![\d,])"
_NUMBER = rf"(?:{_THOUSANDS}|\d+(?:[.,]\d+)?)"
_FRACTION = r"\d+\s*/\s*\d+"
_SINGLE_QUANTITY = rf"(?:\d+\s+{_FRACTION}|{_FRACTION}|\d+\s*{_VULGAR}|{_VULGAR}|{_NUMBER})"

# A single amount or a range of two ("2-3", "2 to 3").
QUANTITY_PATTERN = rf"{_SINGLE_QUANTITY}(?:\s*(?:-|–|\bto\b)\s*{_SINGLE_QUANTITY})?"

_RANGE_RE = re.compile(rf"^({_SINGLE_QUANTITY})\s*(?:-|–|\bto\b)\s*({_SINGLE_QUANTITY})$")
_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)")
_NUMBER_RE = re.compile(r"^(\d+(?:\.\d+)?)")
_THOUSANDS_RE = re.compile(rf"(?<![\d.,]){_THOUSANDS}")


def _expand_unicode_fractions(text: str) -> str:
    for glyph, fraction in UNICODE_FRACTIONS.items():
        text = text.replace(glyph, f" {fraction}")
    return " ".join(text.split())


def _parse_single(text: str) -> float | None:
    mixed_match = _MIXED_RE.match(text)
    if mixed_match:
        whole = int(mixed_match.group(1))
        num = int(mixed_match.group(2))
        denom = int(mixed_match.group(3))
        if denom:
            return whole + (num / denom)
        return float(whole)

    frac_match = _FRACTION_RE.match(text)
    if frac_match:
        num = int(frac_match.group(1))
        denom = int(frac_match.group(2))
        if denom:
            return num / denom
        return None

    num_match = _NUMBER_RE.match(text)
    if num_match:
        return float(num_match.group(1))

    return None


def parse_quantity_string(quantity_str: str) -> float:
    """
    Parse a quantity string into a float.

    Handles formats like:
    - "2"
    - "1.5" or "1,5"
    - "1,000" (comma before exactly three digits groups thousands)
    - "1/2"
    - "1 1/2" (one and a half)
    - "1½" and "½"
    - "2-3" or "2 to 3" (range, returns average)
    - "two", "a", "half"

    Anything unreadable counts as 1.
    """
    if not quantity_str:
        return 1.0

    text = quantity_str.strip().lower()

    if not text or text in ("to taste", "pinch", "dash", "some"):
        return 1.0

    if text in WORD_NUMBERS:
        return WORD_NUMBERS[text]

    text = _expand_unicode_fractions(text)
    text = _THOUSANDS_RE.sub(lambda m: m.group(0).replace(",", ""), text)
    text = re.sub(r"(\d),(\d)", r"\1.\2", text)

    range_match = _RANGE_RE.match(text)
    if range_match:
        low = _parse_single(range_match.group(1))
        high = _parse_single(range_match.group(2))
        if low is not None and high is not None:
            return (low + high) / 2

    value = _parse_single(text)
    if value is None:
        return 1.0
    return value


def normalize_unit(unit: str | None) -> str | None:
    """Return the canonical unit for a surface form, or None if it is not a unit."""
    if not unit:
        return None
    token = " ".join(unit.lower().strip().rstrip(".").split())
    if token in DESCRIPTOR_UNITS:
        return token
    return UNIT_ALIASES.get(token)


def can_aggregate(unit1: str | None, unit2: str | None) -> bool:
    """
    Check if two quantities can be summed.

    Only identical units are summable; there is no conversion between
    cups and grams, or even cups and millilitres.
    """
    canonical1 = normalize_unit(unit1) or (unit1 or "").strip().lower()
    canonical2 = normalize_unit(unit2) or (unit2 or "").strip().lower()
    return canonical1 == canonical2


# =============================================================================
# Quantity Formatting
# =============================================================================

# Fractions a cook would write, checked in order.
KITCHEN_FRACTIONS: tuple[tuple[float, str], ...] = (
    (0.5, "1/2"),
    (0.25, "1/4"),
    (0.75, "3/4"),
    (1 / 3, "1/3"),
    (2 / 3, "2/3"),
    (0.125, "1/8"),
)

FRACTION_TOLERANCE = 0.01


def format_number(value: float) -> str:
    """Render a number the way a recipe would ("3", "1 1/2", "0.3")."""
    if abs(value - round(value)) < 0.005:
        return str(int(round(value)))

    whole = int(value)
    remainder = value - whole
    for fraction_value, text in KITCHEN_FRACTIONS:
        if abs(remainder - fraction_value) < FRACTION_TOLERANCE:
            return f"{whole} {text}" if whole else text

    return f"{value:.2f}".rstrip("0").rstrip(".")


def pluralize_unit(unit: str, quantity: float) -> str:
    """Plural display form of a unit for the given quantity."""
    if quantity <= 1 or unit in ABBREVIATED_UNITS or unit in DESCRIPTOR_UNITS:
        return unit
    if unit.endswith(("ch", "sh", "x", "s")):
        return f"{unit}es"
    return f"{unit}s"


def format_quantity(quantity: float, unit: str) -> str:
    """
    Format a quantity and unit for display.

    Examples:
        (2, "cup") -> "2 cups"
        (3, "") -> "3"
        (1.5, "tbsp") -> "1 1/2 tbsp"
        (1, "to taste") -> "to taste"
    """
    if unit in DESCRIPTOR_UNITS:
        return unit

    number = format_number(quantity)
    if not unit:
        return number
    return f"{number} {pluralize_unit(unit, quantity)}"
