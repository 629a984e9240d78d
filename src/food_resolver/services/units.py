"""Unit registry turning serving descriptions into portion multipliers.

Every rule resolves a unit to its gram (or millilitre) equivalent for one unit
of quantity; the multiplier applied to the per-100 baseline is then
``quantity * grams / 100``. Rules are evaluated in order and the first match
wins, because the patterns overlap ("medium portion (150g)" is both a
qualitative size and an explicit weight).
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from food_resolver.domain.foods import FoodRecord
from food_resolver.domain.nutrition import MacroProfile, PortionResult

_EXPLICIT_MAGNITUDE = re.compile(
    r"(?<![\d.])(\d+(?:\.\d+)?)\s*"
    r"(ml|g|gm|gms|grams?|kg|kgs|kilograms?|l|litres?|liters?)\b",
    re.IGNORECASE,
)
# Magnitudes in these units are scaled to grams/ml.
_THOUSANDFOLD_UNITS = frozenset(
    {"kg", "kgs", "kilogram", "kilograms", "l", "litre", "litres", "liter", "liters"}
)

# (container keyword, embedded size, grams/ml per unit)
CONTAINER_SIZES: tuple[tuple[str, str, float], ...] = (
    ("can", "500ml", 500),
    ("can", "330ml", 330),
    ("bottle", "650ml", 650),
    ("bottle", "500ml", 500),
    ("bottle", "330ml", 330),
    ("pint", "568ml", 568),
    ("pint", "500ml", 500),
    ("glass", "250ml", 250),
    ("glass", "200ml", 200),
    ("cup", "250ml", 250),
    ("cup", "200ml", 200),
)

_GRAM_MARKERS = {
    "250g": 250,
    "200g": 200,
    "180g": 180,
    "150g": 150,
    "120g": 120,
    "100g": 100,
    "80g": 80,
    "50g": 50,
    "30g": 30,
}

# Longest literal first, then largest, so "150g" is never taken by "50g".
GRAM_PORTIONS: tuple[tuple[str, float], ...] = tuple(
    sorted(
        _GRAM_MARKERS.items(),
        key=lambda item: (len(item[0]), item[1]),
        reverse=True,
    )
)


@dataclass(frozen=True)
class UnitContext:
    """Lower-cased view of a food and the unit being resolved."""

    food_name: str
    category: str
    is_liquid: bool
    unit: str

    @classmethod
    def build(cls, food: FoodRecord, unit: str) -> "UnitContext":
        """Create a context for a food and a unit descriptor."""
        return cls(
            food_name=food.name.lower(),
            category=food.category.lower(),
            is_liquid=food.is_liquid,
            unit=" ".join(unit.lower().split()),
        )

    @property
    def name_tokens(self) -> set[str]:
        """Alphanumeric words of the food name."""
        return set(re.findall(r"[a-z0-9]+", self.food_name))

    def name_has(self, keywords: tuple[str, ...]) -> bool:
        """Return True if any keyword (or its plural) is a word of the name."""
        tokens = self.name_tokens
        return any(
            keyword in tokens or f"{keyword}s" in tokens or f"{keyword}es" in tokens
            for keyword in keywords
        )


@dataclass(frozen=True)
class UnitRule:
    """A matcher/resolver pair in the unit registry."""

    name: str
    matcher: Callable[[UnitContext], bool]
    resolver: Callable[[UnitContext], float]


@dataclass(frozen=True)
class Adjustment:
    """Food-conditioned override for a qualitative unit."""

    applies: Callable[[UnitContext], bool]
    grams: float


@dataclass(frozen=True)
class QualitativeUnit:
    """Generic serving word with a heuristic weight."""

    pattern: re.Pattern[str]
    grams: float
    adjustments: tuple[Adjustment, ...] = ()
    excludes: re.Pattern[str] | None = None

    def matches(self, context: UnitContext) -> bool:
        """Return True if the unit text names this serving word."""
        if self.excludes is not None and self.excludes.search(context.unit):
            return False
        return bool(self.pattern.search(context.unit))

    def resolve(self, context: UnitContext) -> float:
        """Return grams per unit, applying the first matching adjustment."""
        for adjustment in self.adjustments:
            if adjustment.applies(context):
                return adjustment.grams
        return self.grams


BREAD_WORDS = ("bread", "roti", "chapati", "naan", "paratha", "toast", "phulka")
FRUIT_WORDS = ("apple", "banana", "orange", "mango", "fruit", "pear", "peach")
NUT_WORDS = ("almond", "cashew", "walnut", "peanut", "pistachio", "nut")
MEAT_WORDS = ("chicken", "mutton", "beef", "pork", "lamb")
SEAFOOD_WORDS = ("fish", "prawn", "shrimp", "salmon", "tuna")


def _name(*keywords: str) -> Callable[[UnitContext], bool]:
    return lambda context: context.name_has(keywords)


def _category(*categories: str) -> Callable[[UnitContext], bool]:
    lowered = {category.lower() for category in categories}
    return lambda context: context.category in lowered


def _either(
    *predicates: Callable[[UnitContext], bool],
) -> Callable[[UnitContext], bool]:
    return lambda context: any(predicate(context) for predicate in predicates)


def _liquid(context: UnitContext) -> bool:
    return context.is_liquid


def _word(pattern: str) -> re.Pattern[str]:
    return re.compile(rf"\b(?:{pattern})\b")


_IS_BREAD = _name(*BREAD_WORDS)
_IS_FRUIT = _either(_category("Fruits", "Fruit"), _name(*FRUIT_WORDS))
_IS_NUT = _either(_category("Nuts"), _name(*NUT_WORDS))

QUALITATIVE_UNITS: tuple[QualitativeUnit, ...] = (
    QualitativeUnit(re.compile(r"^(?:ml|millilitres?|milliliters?)$"), 1),
    QualitativeUnit(re.compile(r"^(?:g|gm|gms|grams?)$"), 1),
    QualitativeUnit(re.compile(r"^(?:l|litres?|liters?|kg|kilograms?)$"), 1000),
    QualitativeUnit(_word("small portion"), 70),
    QualitativeUnit(_word("medium portion"), 150),
    QualitativeUnit(_word("large portion"), 200),
    QualitativeUnit(
        _word("pieces?"),
        80,
        adjustments=(
            Adjustment(_IS_BREAD, 50),
            Adjustment(_IS_FRUIT, 120),
            Adjustment(_IS_NUT, 2),
            Adjustment(_name("egg"), 50),
            Adjustment(_name(*MEAT_WORDS), 100),
            Adjustment(_name(*SEAFOOD_WORDS), 75),
        ),
    ),
    QualitativeUnit(
        _word("slices?"),
        60,
        adjustments=(
            Adjustment(_IS_BREAD, 30),
            Adjustment(_name("pizza"), 120),
        ),
    ),
    QualitativeUnit(_word("handfuls?"), 30, adjustments=(Adjustment(_IS_NUT, 20),)),
    QualitativeUnit(_word("small bowls?"), 100),
    QualitativeUnit(_word("large bowls?"), 225),
    QualitativeUnit(_word("bowls?"), 150),
    QualitativeUnit(_word("cups?"), 120, adjustments=(Adjustment(_liquid, 240),)),
    QualitativeUnit(_word("glass|glasses"), 250),
    QualitativeUnit(_word("mugs?"), 250),
    QualitativeUnit(_word("bottles?"), 500),
    QualitativeUnit(_word("cans?"), 330),
    QualitativeUnit(_word("shots?"), 30),
    QualitativeUnit(_word("tablespoons?|tbsp"), 15),
    QualitativeUnit(_word("teaspoons?|tsp"), 5),
    QualitativeUnit(_word("scoops?"), 25),
    QualitativeUnit(_word("servings?"), 100),
    QualitativeUnit(_word("small"), 70, excludes=_word("pack")),
    QualitativeUnit(_word("medium"), 100, excludes=_word("pack")),
    QualitativeUnit(_word("large"), 150, excludes=_word("pack")),
)

BASELINE_GRAMS = 100.0


def is_water(context: UnitContext) -> bool:
    """Water is pinned to zero nutrients whatever the serving."""
    return "water" in context.food_name


def explicit_magnitude(unit: str) -> float | None:
    """Return the grams/ml embedded in a unit string, if any."""
    match = _EXPLICIT_MAGNITUDE.search(unit)
    if match is None:
        return None
    magnitude = float(match.group(1))
    if match.group(2).lower() in _THOUSANDFOLD_UNITS:
        return magnitude * 1000
    return magnitude


def _has_explicit_magnitude(context: UnitContext) -> bool:
    return explicit_magnitude(context.unit) is not None


def _resolve_explicit_magnitude(context: UnitContext) -> float:
    grams = explicit_magnitude(context.unit)
    return grams if grams is not None else BASELINE_GRAMS


def _find_container(context: UnitContext) -> float | None:
    words = set(re.findall(r"[a-z]+", context.unit))
    for keyword, size, grams in CONTAINER_SIZES:
        if keyword in words and size in context.unit:
            return grams
    return None


def _find_gram_portion(context: UnitContext) -> float | None:
    for marker, grams in GRAM_PORTIONS:
        if marker in context.unit:
            return grams
    return None


def _find_qualitative(context: UnitContext) -> QualitativeUnit | None:
    for qualitative in QUALITATIVE_UNITS:
        if qualitative.matches(context):
            return qualitative
    return None


def _resolve_qualitative(context: UnitContext) -> float:
    qualitative = _find_qualitative(context)
    if qualitative is None:
        return BASELINE_GRAMS
    return qualitative.resolve(context)


UNIT_RULES: tuple[UnitRule, ...] = (
    UnitRule("water", is_water, lambda _context: 0.0),
    UnitRule(
        "explicit-magnitude", _has_explicit_magnitude, _resolve_explicit_magnitude
    ),
    UnitRule(
        "container",
        lambda context: _find_container(context) is not None,
        lambda context: _find_container(context) or BASELINE_GRAMS,
    ),
    UnitRule(
        "gram-portion",
        lambda context: _find_gram_portion(context) is not None,
        lambda context: _find_gram_portion(context) or BASELINE_GRAMS,
    ),
    UnitRule(
        "qualitative",
        lambda context: _find_qualitative(context) is not None,
        _resolve_qualitative,
    ),
    UnitRule("default", lambda _context: True, lambda _context: BASELINE_GRAMS),
)


def match_rule(context: UnitContext) -> UnitRule:
    """Return the first rule accepting the context."""
    for rule in UNIT_RULES:
        if rule.matcher(context):
            return rule
    return UNIT_RULES[-1]


def grams_per_unit(food: FoodRecord, unit: str) -> float:
    """Return the gram/ml equivalent of one unit of a food."""
    context = UnitContext.build(food, unit)
    return match_rule(context).resolver(context)


def normalize(food: FoodRecord, unit: str, quantity: float) -> PortionResult:
    """Compute nutrients for ``quantity`` of ``unit`` of a food."""
    context = UnitContext.build(food, unit)
    rule = match_rule(context)
    if rule.name == "water":
        return PortionResult(
            calories=0,
            protein_g=0.0,
            carbs_g=0.0,
            fat_g=0.0,
            multiplier=0.0,
            exact_multiplier=0.0,
            grams=0.0,
            rule=rule.name,
        )
    grams = rule.resolver(context)
    multiplier = quantity * grams / BASELINE_GRAMS
    return scale(food.per_100, multiplier, grams=quantity * grams, rule=rule.name)


def scale(
    per_100: MacroProfile, multiplier: float, *, grams: float, rule: str
) -> PortionResult:
    """Apply a multiplier to a baseline and round for display."""
    return PortionResult(
        calories=int(round_half_up(per_100.calories * multiplier, 0)),
        protein_g=round_half_up(per_100.protein_g * multiplier, 1),
        carbs_g=round_half_up(per_100.carbs_g * multiplier, 1),
        fat_g=round_half_up(per_100.fat_g * multiplier, 1),
        multiplier=round_half_up(multiplier, 2),
        exact_multiplier=multiplier,
        grams=round_half_up(grams, 1),
        rule=rule,
    )


def round_half_up(value: float, digits: int) -> float:
    """Round like a person would: 0.5 goes up."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
