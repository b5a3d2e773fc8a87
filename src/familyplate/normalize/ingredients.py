"""Parse free-text ingredient lines into structured records."""

import re
from dataclasses import dataclass

from familyplate.logging_config import get_logger
from familyplate.normalize.units import (
    DESCRIPTOR_UNITS,
    LEADING_DESCRIPTOR_UNITS,
    QUANTITY_PATTERN,
    UNIT_PATTERN,
    WORD_NUMBERS,
    normalize_unit,
    parse_quantity_string,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParsedIngredient:
    """A single ingredient line broken into quantity, unit and name."""

    quantity: float
    unit: str
    name: str
    normalized_name: str
    raw_text: str
    notes: str | None = None


# Preparation and size words that do not change what goes in the basket.
PREPARATION_DESCRIPTORS: tuple[str, ...] = (
    "freshly",
    "fresh",
    "finely",
    "roughly",
    "coarsely",
    "thinly",
    "thickly",
    "chopped",
    "diced",
    "minced",
    "sliced",
    "grated",
    "shredded",
    "crushed",
    "cubed",
    "julienned",
    "halved",
    "quartered",
    "peeled",
    "seeded",
    "deseeded",
    "pitted",
    "trimmed",
    "rinsed",
    "drained",
    "softened",
    "melted",
    "beaten",
    "boneless",
    "skinless",
    "organic",
    "ripe",
    "extra-large",
    "extra large",
    "large",
    "medium",
    "small",
)

_DESCRIPTOR_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(d) for d in PREPARATION_DESCRIPTORS) + r")\b",
    re.IGNORECASE,
)
_JOINER_RE = re.compile(r"^(?:and|or)\b|\b(?:and|or)$", re.IGNORECASE)
_BULLET_RE = re.compile(r"^\s*(?:[-*•·]+|\d+[.)])\s+")
_LEADING_QUANTITY_RE = re.compile(rf"^(?P<quantity>{QUANTITY_PATTERN})(?![\d/])")
_WORD_QUANTITY_RE = re.compile(
    r"^(?P<word>"
    + "|".join(re.escape(w) for w in sorted(WORD_NUMBERS, key=len, reverse=True))
    + r")\s+(?=\S)",
    re.IGNORECASE,
)
_UNIT_RE = re.compile(rf"^(?P<unit>{UNIT_PATTERN})\.?(?=[\s,(]|$)", re.IGNORECASE)
_LEADING_PAREN_RE = re.compile(r"^\(([^)]*)\)\s*")
_PAREN_RE = re.compile(r"\s*\(([^()]*)\)")
_OF_RE = re.compile(r"^of\s+", re.IGNORECASE)
_ARTICLE_RE = re.compile(r"^(?:a|an|the)\s+")
_UNMEASURED_SUFFIX_RE = re.compile(
    r"(?:\bor\s+)?\b(?P<phrase>"
    + "|".join(re.escape(p) for p in sorted(DESCRIPTOR_UNITS, key=len, reverse=True))
    + r")\)?\s*\.?$",
    re.IGNORECASE,
)

# Words whose last letter "s" is not a plural marker.
_INVARIANT_WORDS = frozenset(
    {
        "asparagus",
        "brussels",
        "citrus",
        "couscous",
        "hummus",
        "molasses",
        "octopus",
        "swiss",
        "series",
        "species",
        "grits",
        "oats",
    }
)
_IRREGULAR_PLURALS = {
    "leaves": "leaf",
    "loaves": "loaf",
    "halves": "half",
    "knives": "knife",
    "geese": "goose",
    "feet": "foot",
    "cookies": "cookie",
    "pies": "pie",
    "brownies": "brownie",
    "veggies": "veggie",
    "smoothies": "smoothie",
    "calories": "calorie",
}


def singularize(word: str) -> str:
    """Best-effort singular form of a lowercase English noun."""
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word in _INVARIANT_WORDS or len(word) <= 3:
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"  # berries -> berry
    if word.endswith("oes"):
        return word[:-2]  # tomatoes -> tomato
    if word.endswith(("ches", "shes", "xes", "zes", "sses")):
        return word[:-2]  # peaches -> peach, radishes -> radish
    if word.endswith("s") and not word.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def strip_descriptors(text: str) -> tuple[str, list[str]]:
    """Remove preparation descriptors, returning the cleaned text and what was removed."""
    found = [m.group(0).lower() for m in _DESCRIPTOR_RE.finditer(text)]
    if not found:
        return text, []
    cleaned = " ".join(_DESCRIPTOR_RE.sub(" ", text).split())
    # Leftover joiners from "peeled and chopped potatoes"
    cleaned = _JOINER_RE.sub("", cleaned.strip(" ,;-"))
    return " ".join(cleaned.strip(" ,;-").split()), found


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name into its grouping key.

    - Lowercase
    - Remove extra whitespace and stray punctuation
    - Remove leading articles (a, an, the)
    - Remove preparation descriptors (fresh, chopped, diced, etc.)
    - Singularize the last word

    A name with no letters or digits keeps its own lowercased text, so
    it still gets a key of its own.
    """
    if not name:
        return ""

    lowered = " ".join(name.lower().split())
    lowered = re.sub(r"[^\w\s'&/-]", " ", lowered)
    lowered = " ".join(lowered.split())

    stripped, _ = strip_descriptors(lowered)
    # A name made only of descriptors keeps them
    normalized = stripped or lowered
    normalized = _ARTICLE_RE.sub("", normalized)

    words = normalized.split()
    if not words:
        # Nothing but symbols; the text itself is the key
        return " ".join(name.lower().split())
    words[-1] = singularize(words[-1])
    return " ".join(words)


def _split_trailing_notes(text: str, notes: list[str]) -> str:
    """Move parentheticals and a trailing ", clause" into notes."""
    for match in _PAREN_RE.finditer(text):
        if match.group(1).strip():
            notes.append(match.group(1).strip())
    text = _PAREN_RE.sub("", text)

    head, sep, tail = text.partition(",")
    if sep and head.strip():
        if tail.strip():
            notes.append(tail.strip())
        text = head
    return text.strip()


def parse_ingredient(raw: str) -> ParsedIngredient:
    """
    Parse a free-text ingredient line.

    Examples:
        "2 cups chopped tomatoes" -> 2.0, "cup", "tomatoes"
        "500g chicken breast" -> 500.0, "g", "chicken breast"
        "a pinch of salt" -> 1.0, "pinch", "salt"
        "Salt to taste" -> 1.0, "to taste", "Salt"
        "3 eggs" -> 3.0, "", "eggs"

    Never raises: a line that cannot be read becomes its own name with
    quantity 1 and no unit.
    """
    raw_text = raw if isinstance(raw, str) else str(raw or "")
    text = _BULLET_RE.sub("", " ".join(raw_text.split()))
    fallback_name = text.strip()

    if not text:
        return ParsedIngredient(
            quantity=1.0, unit="", name="", normalized_name="", raw_text=raw_text
        )

    notes: list[str] = []
    quantity: float | None = None
    unit = ""

    # "Salt to taste", "parsley, for garnish"
    descriptor_unit = ""
    suffix_match = _UNMEASURED_SUFFIX_RE.search(text)
    if suffix_match:
        head = text[: suffix_match.start()].rstrip(" ,;(")
        if head:
            descriptor_unit = suffix_match.group("phrase").lower()
            text = head

    quantity_match = _LEADING_QUANTITY_RE.match(text)
    if quantity_match:
        quantity = parse_quantity_string(quantity_match.group("quantity"))
        text = text[quantity_match.end() :].lstrip()
    else:
        word_match = _WORD_QUANTITY_RE.match(text)
        if word_match:
            quantity = WORD_NUMBERS[" ".join(word_match.group("word").lower().split())]
            text = text[word_match.end() :]

    if quantity is not None:
        # "1 (15 oz) can black beans"
        paren_match = _LEADING_PAREN_RE.match(text)
        if paren_match:
            if paren_match.group(1).strip():
                notes.append(paren_match.group(1).strip())
            text = text[paren_match.end() :]

    unit_match = _UNIT_RE.match(text)
    if unit_match:
        candidate = normalize_unit(unit_match.group("unit")) or ""
        remainder = text[unit_match.end() :].strip()
        if remainder and (quantity is not None or candidate in LEADING_DESCRIPTOR_UNITS):
            unit = candidate
            text = remainder
            if quantity is None:
                quantity = 1.0

    text = _OF_RE.sub("", text.strip())
    text = _split_trailing_notes(text, notes)

    name, descriptors = strip_descriptors(text)
    if descriptors:
        notes.append(", ".join(descriptors))
    name = name.strip(" ,;:-")

    if not name:
        logger.debug(f"No ingredient name left in {raw_text!r}, keeping the whole line")
        name = fallback_name

    if descriptor_unit:
        if not unit and quantity is None:
            unit = descriptor_unit
        else:
            notes.append(descriptor_unit)

    if quantity is None or quantity <= 0:
        quantity = 1.0

    return ParsedIngredient(
        quantity=quantity,
        unit=unit,
        name=name,
        normalized_name=normalize_ingredient_name(name),
        raw_text=raw_text,
        notes="; ".join(notes) if notes else None,
    )
