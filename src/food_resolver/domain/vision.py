"""Models for image analysis results."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from food_resolver.domain.foods import AccuracyTier

DEFAULT_CONFIDENCE = 75.0
DEFAULT_QUANTITY = "1 serving"
UNKNOWN_FOOD = "Unknown Food"


def _as_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class VisionFood(BaseModel):
    """Single food reported by the vision model, clamped to sane bounds."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = UNKNOWN_FOOD
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    confidence: float = DEFAULT_CONFIDENCE
    estimated_quantity: str = Field(default=DEFAULT_QUANTITY, alias="estimatedQuantity")

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value: object) -> str:
        text = str(value).strip() if value is not None else ""
        return text or UNKNOWN_FOOD

    @field_validator("calories", "protein", "carbs", "fat", mode="before")
    @classmethod
    def _non_negative(cls, value: object) -> float | None:
        number = _as_number(value)
        if number is None:
            return None
        return max(number, 0.0)

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: object) -> float:
        number = _as_number(value)
        if number is None:
            return DEFAULT_CONFIDENCE
        return min(max(number, 0.0), 100.0)

    @field_validator("estimated_quantity", mode="before")
    @classmethod
    def _default_quantity(cls, value: object) -> str:
        text = str(value).strip() if value is not None else ""
        return text or DEFAULT_QUANTITY


class VisionAnalysis(BaseModel):
    """Structured output for image analysis."""

    foods: list[VisionFood]
    suggestions: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class AnalyzedFood:
    """A detected food with nutrients per 100 g and an accuracy tier."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    confidence: float
    estimated_quantity: str
    category: str
    accuracy: AccuracyTier


@dataclass(frozen=True)
class ImageAnalysis:
    """Foods detected in an image plus user-facing suggestions."""

    foods: tuple[AnalyzedFood, ...]
    suggestions: tuple[str, ...]
    cached: bool
