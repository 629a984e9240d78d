"""Serving recommendations and portion calculation."""

import logging
import re
from dataclasses import dataclass, field

from food_resolver.domain.foods import FoodRecord
from food_resolver.domain.nutrition import PortionDetails, PortionRecommendation
from food_resolver.services import units
from food_resolver.services.curated import CuratedFoodTable
from food_resolver.services.heuristics import fallback_record, unit_options_for

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PortionHint:
    keywords: tuple[str, ...]
    unit: str
    notes: str


# Evaluated top to bottom; first keyword hit wins.
PORTION_HINTS: tuple[_PortionHint, ...] = (
    _PortionHint(("water",), "glass (250ml)", "Water has no calories"),
    _PortionHint(
        ("kingfisher", "budweiser"),
        "bottle (650ml)",
        "Standard large beer bottle size in India",
    ),
    _PortionHint(("beer", "lager", "ale"), "bottle (500ml)", "Standard beer bottle"),
    _PortionHint(("wine",), "glass (150ml)", "Standard wine serving glass"),
    _PortionHint(
        ("whiskey", "whisky", "vodka", "rum", "gin", "brandy"),
        "shot (30ml)",
        "Standard spirit shot size",
    ),
    _PortionHint(
        ("coca-cola", "coca cola", "coke", "pepsi", "sprite", "fanta"),
        "bottle (500ml)",
        "Standard soft drink bottle size",
    ),
    _PortionHint(("juice",), "glass (250ml)", "Standard juice glass serving"),
    _PortionHint(
        ("tea", "chai", "coffee", "espresso", "latte", "cappuccino"),
        "cup (200ml)",
        "Standard tea/coffee cup size",
    ),
    _PortionHint(
        ("lassi", "buttermilk", "chaas"),
        "glass (250ml)",
        "Traditional Indian drink glass size",
    ),
    _PortionHint(
        ("biryani", "pulao", "pilaf", "fried rice"),
        "medium portion (200g)",
        "Larger portion for special rice dishes",
    ),
    _PortionHint(
        ("rice",), "medium portion (150g)", "Standard rice serving with Indian meals"
    ),
    _PortionHint(
        ("dal", "daal", "sambhar", "rasam"),
        "medium bowl (200g)",
        "Standard dal serving bowl in Indian meals",
    ),
    _PortionHint(
        ("curry", "sabzi", "gravy", "masala"),
        "serving (150g)",
        "Standard curry serving with rice/roti",
    ),
    _PortionHint(
        ("roti", "chapati", "phulka"),
        "medium roti (50g)",
        "Standard homemade roti size; typically eaten 2-3 pieces",
    ),
    _PortionHint(
        ("naan", "kulcha", "paratha"), "piece (80g)", "Restaurant-style bread size"
    ),
    _PortionHint(
        ("idli", "vada"),
        "piece (30g)",
        "Standard South Indian breakfast item; typically served 3-4 pieces",
    ),
    _PortionHint(("dosa", "uttapam"), "piece (100g)", "Standard dosa size"),
    _PortionHint(("apple",), "medium (180g)", "Medium-sized apple weight"),
    _PortionHint(("banana",), "medium (120g)", "Medium-sized banana weight"),
    _PortionHint(("mango", "mangoes"), "medium (200g)", "Medium-sized mango weight"),
    _PortionHint(("orange",), "medium (180g)", "Medium-sized orange weight"),
    _PortionHint(
        ("samosa",),
        "piece (100g)",
        "Standard samosa size; typically eaten 1-2 pieces",
    ),
    _PortionHint(("pizza",), "slice (120g)", "Medium pizza slice weight"),
    _PortionHint(("burger", "hamburger"), "piece (150g)", "Standard burger weight"),
    _PortionHint(
        ("hot dog", "hotdog"), "piece (75g)", "Standard hot dog with bun weight"
    ),
    _PortionHint(("milk",), "glass (250ml)", "Standard milk glass serving"),
    _PortionHint(("dahi", "yogurt", "curd"), "bowl (150g)", "Standard curd bowl"),
    _PortionHint(
        ("paneer", "cottage cheese"), "serving (100g)", "Standard paneer serving"
    ),
    _PortionHint(("chicken",), "serving (120g)", "Standard chicken serving portion"),
    _PortionHint(
        ("fish", "salmon", "tuna"), "serving (100g)", "Standard fish serving portion"
    ),
    _PortionHint(("soup", "broth"), "bowl (250ml)", "Standard soup bowl serving"),
)

DEFAULT_UNIT = "serving (100g)"
DEFAULT_NOTES = "Standard serving size"


def _mentions(name: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}(?:s|es)?\b", name) is not None


def _basis(food: FoodRecord) -> str:
    return "per 100ml" if food.is_liquid else "per 100g"


def recommend_portion(food: FoodRecord) -> PortionRecommendation:
    """Pick a typical serving for a food, with notes explaining it."""
    name = food.name.lower()
    options = food.common_units or unit_options_for(food.name, food.category)
    for hint in PORTION_HINTS:
        if any(_mentions(name, keyword) for keyword in hint.keywords):
            return PortionRecommendation(
                unit=hint.unit,
                quantity=1,
                unit_options=options,
                notes=f"{hint.notes}; calculated from base {_basis(food)}",
            )
    return PortionRecommendation(
        unit=DEFAULT_UNIT,
        quantity=1,
        unit_options=options,
        notes=f"{DEFAULT_NOTES}; calculated from base {_basis(food)}",
    )


def default_serving(food: FoodRecord) -> PortionRecommendation:
    """Use the record's own default unit when it names a size."""
    options = food.common_units or unit_options_for(food.name, food.category)
    if food.default_unit and units.explicit_magnitude(food.default_unit) is not None:
        return PortionRecommendation(
            unit=food.default_unit,
            quantity=1,
            unit_options=options,
            notes=f"Default serving; calculated from base {_basis(food)}",
        )
    return recommend_portion(food)


@dataclass
class PortionService:
    """Computes nutrients for a chosen or recommended serving."""

    curated: CuratedFoodTable = field(default_factory=CuratedFoodTable)

    def portion_for_name(
        self,
        name: str,
        category: str | None = None,
        unit: str | None = None,
        quantity: float | None = None,
    ) -> PortionDetails:
        """Compute a portion for a food known only by name."""
        food = self.curated.get(name) or fallback_record(name, category)
        return self.get_portion(food, unit, quantity)

    def get_portion(
        self,
        food: FoodRecord,
        unit: str | None = None,
        quantity: float | None = None,
    ) -> PortionDetails:
        """Return nutrients for a serving, filling in a recommendation."""
        recommendation = default_serving(food)
        chosen_unit = unit or recommendation.unit
        chosen_quantity = recommendation.quantity if quantity is None else quantity
        if chosen_quantity < 0:
            raise ValueError("quantity must be non-negative")
        portion = units.normalize(food, chosen_unit, chosen_quantity)
        _logger.debug(
            "Portion for %s: %s x %s -> %s (rule=%s)",
            food.name,
            chosen_quantity,
            chosen_unit,
            portion.multiplier,
            portion.rule,
        )
        notes = recommendation.notes if unit is None else ""
        return PortionDetails(
            unit=chosen_unit,
            quantity=chosen_quantity,
            unit_options=recommendation.unit_options,
            multiplier=portion.multiplier,
            calories=portion.calories,
            protein_g=portion.protein_g,
            carbs_g=portion.carbs_g,
            fat_g=portion.fat_g,
            notes=notes,
        )
