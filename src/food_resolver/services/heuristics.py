"""Keyword heuristics used when no trusted nutrition data is available."""

from food_resolver.domain.foods import (
    AccuracyTier,
    FoodId,
    FoodRecord,
    GeneratedSource,
    SourceKind,
    stable_hash,
)
from food_resolver.domain.nutrition import MacroProfile
from food_resolver.domain.query import normalize_text

LIQUID_CATEGORIES = frozenset(
    {"beverages", "hot beverage", "cold beverage", "drinks", "beverage"}
)
LIQUID_WORDS = (
    "tea",
    "coffee",
    "juice",
    "milk",
    "lassi",
    "shake",
    "beer",
    "wine",
    "soda",
    "water",
    "soup",
    "smoothie",
)

# (keywords, category) checked in order
_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("rice", "biryani", "curry", "dal"), "Main Course"),
    (("roti", "naan", "bread"), "Bread"),
    (("tea", "coffee", "juice", "lassi", "beer", "wine", "soda"), "Beverages"),
    (("samosa", "pakora", "biscuit", "chips"), "Snacks"),
    (("chicken", "mutton", "fish", "egg"), "Protein"),
    (("sweet", "dessert", "cake", "ice cream"), "Desserts"),
)

_CALORIE_RULES: tuple[tuple[tuple[str, ...], float], ...] = (
    (("rice", "biryani"), 130),
    (("curry", "dal"), 120),
    (("chicken",), 165),
    (("fish",), 140),
    (("vegetable",), 25),
    (("fruit", "apple", "banana"), 50),
    (("bread", "roti"), 250),
    (("sweet", "dessert"), 300),
)

_PROTEIN_RULES: tuple[tuple[tuple[str, ...], float], ...] = (
    (("chicken", "fish", "egg"), 20),
    (("dal", "lentil"), 8),
    (("paneer",), 18),
    (("vegetable", "fruit"), 2),
)

_CARB_RULES: tuple[tuple[tuple[str, ...], float], ...] = (
    (("rice", "bread", "roti"), 25),
    (("fruit", "sweet"), 15),
    (("vegetable",), 5),
)

_FAT_RULES: tuple[tuple[tuple[str, ...], float], ...] = (
    (("fried", "pakora", "samosa"), 15),
    (("curry", "chicken"), 8),
    (("sweet", "dessert"), 12),
    (("vegetable", "fruit"), 0.5),
)


def _first_match(
    name: str, rules: tuple[tuple[tuple[str, ...], float], ...], default: float
) -> float:
    lowered = name.lower()
    for keywords, value in rules:
        if any(keyword in lowered for keyword in keywords):
            return value
    return default


def categorize_food(name: str) -> str:
    """Guess a category from the food name."""
    lowered = name.lower()
    for keywords, category in _CATEGORY_RULES:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "Main Course"


def default_macros(name: str) -> MacroProfile:
    """Keyword-based per-100 g nutrient guesses."""
    return MacroProfile(
        calories=_first_match(name, _CALORIE_RULES, 100),
        protein_g=_first_match(name, _PROTEIN_RULES, 5),
        carbs_g=_first_match(name, _CARB_RULES, 15),
        fat_g=_first_match(name, _FAT_RULES, 3),
    )


def is_liquid_food(name: str, category: str, default_unit: str = "") -> bool:
    """Decide whether a baseline is per 100 ml rather than per 100 g."""
    if category.lower() in LIQUID_CATEGORIES:
        return True
    if "ml" in default_unit.lower():
        return True
    lowered = name.lower()
    return any(word in lowered for word in LIQUID_WORDS)


def unit_options_for(name: str, category: str) -> tuple[str, ...]:
    """Serving choices offered for a food without curated units."""
    lowered = name.lower()
    if category == "Beverages" or any(
        word in lowered for word in ("tea", "coffee", "juice", "milk")
    ):
        return (
            "100ml",
            "150ml",
            "200ml",
            "240ml",
            "300ml",
            "cup (240ml)",
            "glass (200ml)",
            "small cup (150ml)",
        )
    if category == "Fruits":
        return (
            "50g",
            "100g",
            "150g",
            "200g",
            "small (100g)",
            "medium (150g)",
            "large (200g)",
            "slice (50g)",
        )
    if category == "Nuts":
        return ("piece (1-3g)", "5 pieces", "10 pieces", "handful (20g)", "25g", "50g")
    if category == "Grains" or any(
        word in lowered for word in ("rice", "dal", "curry")
    ):
        return (
            "50g",
            "75g",
            "100g",
            "125g",
            "150g",
            "200g",
            "250g",
            "small bowl (100g)",
            "bowl (150g)",
            "large bowl (200g)",
            "serving (100g)",
            "medium portion (150g)",
            "large portion (200g)",
        )
    if category == "Protein" or any(
        word in lowered for word in ("chicken", "fish", "egg")
    ):
        return (
            "50g",
            "75g",
            "100g",
            "125g",
            "150g",
            "small piece (75g)",
            "piece (100g)",
            "large piece (125g)",
        )
    return (
        "25g",
        "50g",
        "75g",
        "100g",
        "125g",
        "150g",
        "200g",
        "250g",
        "serving (100g)",
        "small portion (75g)",
        "medium portion (150g)",
        "large portion (200g)",
    )


def fallback_record(query: str, category: str | None = None) -> FoodRecord:
    """Synthesize a low-confidence record from the query text alone."""
    normalized = normalize_text(query)
    name = query.strip() or "Unknown Food"
    category = category or categorize_food(name)
    units = unit_options_for(name, category)
    return FoodRecord(
        id=FoodId(SourceKind.GENERATED, stable_hash(f"{normalized}:fallback")),
        name=name,
        category=category,
        per_100=default_macros(name),
        is_liquid=is_liquid_food(name, category),
        default_unit="serving (100g)",
        common_units=units,
        source=GeneratedSource(query=normalized, item_index=0, heuristic=True),
        accuracy=AccuracyTier.LOW,
    )
