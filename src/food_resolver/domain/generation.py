"""Models for generated nutrition payloads."""

from pydantic import BaseModel, ConfigDict, Field


class GeneratedFood(BaseModel):
    """One food suggested by the language model, values per 100 g/ml."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    category: str
    default_unit: str = Field(alias="defaultUnit")


class GeneratedFoods(BaseModel):
    """Structured output for food generation."""

    model_config = ConfigDict(strict=True)

    foods: list[GeneratedFood]
