"""Plausibility scoring for nutrition records."""

from collections.abc import Iterable
from dataclasses import dataclass

from food_resolver.domain.foods import AccuracyTier, FoodRecord
from food_resolver.domain.nutrition import MacroProfile

# Calories per 100 g/ml considered realistic for a category.
CATEGORY_CALORIE_RANGES: dict[str, tuple[float, float]] = {
    "Grains": (100, 400),
    "Protein": (100, 300),
    "Dairy": (30, 350),
    "Fruits": (30, 100),
    "Vegetables": (10, 80),
    "Nuts": (500, 700),
    "Beverages": (0, 150),
    "Legumes": (70, 150),
}
DEFAULT_CALORIE_RANGE = (0.0, 500.0)

GENERIC_CATEGORIES = frozenset({"", "ai detected", "unknown", "other", "food"})
PLACEHOLDER_MARKERS = ("AI Generated", "Example")

# Points are counted in tenths.
_CALORIE_POINTS = 3
_MACRO_SUM_POINTS = 2
_NON_NEGATIVE_POINTS = 2
_CLEAN_NAME_POINTS = 2
_CATEGORY_POINTS = 1
_HIGH_THRESHOLD = 8
_MEDIUM_THRESHOLD = 5


@dataclass(frozen=True)
class AccuracyScore:
    """Result of a plausibility check."""

    tier: AccuracyTier
    raw_score: float
    issues: tuple[str, ...] = ()


def score_nutrients(name: str, category: str, per_100: MacroProfile) -> AccuracyScore:
    """Score raw nutrient values for a named food."""
    points = 0
    issues: list[str] = []

    low, high = CATEGORY_CALORIE_RANGES.get(category, DEFAULT_CALORIE_RANGE)
    if low <= per_100.calories <= high:
        points += _CALORIE_POINTS
    else:
        issues.append(f"Unrealistic calories for {category}: {per_100.calories}")

    macro_sum = per_100.macro_sum
    if 0 < macro_sum <= 100:
        points += _MACRO_SUM_POINTS
    else:
        issues.append("Unrealistic macro ratios")

    nutrients = (per_100.calories, per_100.protein_g, per_100.carbs_g, per_100.fat_g)
    if all(value >= 0 for value in nutrients):
        points += _NON_NEGATIVE_POINTS
    else:
        issues.append("Negative nutrient values")

    if name and not any(marker in name for marker in PLACEHOLDER_MARKERS):
        points += _CLEAN_NAME_POINTS
    else:
        issues.append("Placeholder name")

    if category.strip().lower() not in GENERIC_CATEGORIES:
        points += _CATEGORY_POINTS

    return AccuracyScore(
        tier=_tier_for(points), raw_score=points / 10, issues=tuple(issues)
    )


def score_food(record: FoodRecord) -> AccuracyScore:
    """Score a food record."""
    return score_nutrients(record.name, record.category, record.per_100)


def pick_best(records: Iterable[FoodRecord]) -> FoodRecord:
    """Return the most plausible record; earlier records win ties."""
    candidates = list(records)
    if not candidates:
        raise ValueError("pick_best requires at least one record")
    return max(candidates, key=lambda record: score_food(record).raw_score)


def _tier_for(points: int) -> AccuracyTier:
    if points >= _HIGH_THRESHOLD:
        return AccuracyTier.HIGH
    if points >= _MEDIUM_THRESHOLD:
        return AccuracyTier.MEDIUM
    return AccuracyTier.LOW
