"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile, per 100 g/ml for baselines."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @property
    def macro_sum(self) -> float:
        """Total grams of protein, carbs and fat."""
        return self.protein_g + self.carbs_g + self.fat_g


@dataclass(frozen=True)
class PortionResult:
    """Nutrients for an actual serving after unit normalization."""

    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    multiplier: float
    exact_multiplier: float
    grams: float
    rule: str


@dataclass(frozen=True)
class PortionRecommendation:
    """Suggested serving for a food."""

    unit: str
    quantity: float
    unit_options: tuple[str, ...]
    notes: str


@dataclass(frozen=True)
class PortionDetails:
    """A chosen serving together with its computed nutrients."""

    unit: str
    quantity: float
    unit_options: tuple[str, ...]
    multiplier: float
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    notes: str
