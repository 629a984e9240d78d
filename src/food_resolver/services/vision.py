"""Image analysis using a vision LLM behind a content-addressed cache."""

import asyncio
import base64
import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from food_resolver.domain.nutrition import MacroProfile
from food_resolver.domain.vision import (
    AnalyzedFood,
    ImageAnalysis,
    VisionAnalysis,
    VisionFood,
)
from food_resolver.services.accuracy import score_nutrients
from food_resolver.services.cache import AnalysisCache
from food_resolver.services.heuristics import categorize_food, default_macros
from food_resolver.services.images import (
    ImagePreprocessor,
    InvalidImageError,
    content_hash,
)

_logger = logging.getLogger(__name__)

NO_FOOD_SUGGESTION = (
    "Could not identify food items in the image. Try uploading a clearer image."
)
UNAVAILABLE_SUGGESTION = (
    "Image analysis is temporarily unavailable. Please try again or search by name."
)
DEFAULT_SUGGESTION = "Foods detected successfully!"

VISION_PROMPT = (
    "Analyze this food image and identify all visible food items. "
    "For each food provide: name, calories (per 100g), protein (g), carbs (g), "
    "fat (g), confidence (0-100) and estimatedQuantity as a serving description. "
    "Add short suggestions or tips for the meal."
)

VISION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "calories": {"type": "number", "minimum": 0},
                    "protein": {"type": "number", "minimum": 0},
                    "carbs": {"type": "number", "minimum": 0},
                    "fat": {"type": "number", "minimum": 0},
                    "confidence": {"type": "number", "minimum": 0, "maximum": 100},
                    "estimatedQuantity": {"type": "string"},
                },
                "required": [
                    "name",
                    "calories",
                    "protein",
                    "carbs",
                    "fat",
                    "confidence",
                    "estimatedQuantity",
                ],
                "additionalProperties": False,
            },
        },
        "suggestions": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["foods", "suggestions"],
    "additionalProperties": False,
}


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class ImageAnalysisService:
    """Analyzes meal photos, reusing cached results for identical uploads."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool
    cache: AnalysisCache
    preprocessor: ImagePreprocessor = field(default_factory=ImagePreprocessor)
    timeout_seconds: float = 30.0

    async def analyze_image(self, image_bytes: bytes) -> ImageAnalysis:
        """Detect foods in an image; the cache is consulted before any model call."""
        image_hash = content_hash(image_bytes)
        cached = self.cache.get(image_hash)
        if cached is not None:
            return ImageAnalysis(
                foods=cached.foods, suggestions=cached.suggestions, cached=True
            )

        optimized = self.preprocessor.optimize(image_bytes)
        if not optimized.decoded:
            raise InvalidImageError("Uploaded file is not a readable image")

        try:
            raw = await asyncio.wait_for(
                self.client.extract(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    image_data_url=_to_data_url(optimized.optimized_image),
                    schema=VISION_SCHEMA,
                    prompt=VISION_PROMPT,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError:
            _logger.warning("Vision analysis timed out for hash %s", image_hash)
            return _empty(UNAVAILABLE_SUGGESTION)
        except Exception:
            _logger.exception("Vision analysis failed for hash %s", image_hash)
            return _empty(UNAVAILABLE_SUGGESTION)

        if not isinstance(raw, dict) or not isinstance(raw.get("foods"), list):
            _logger.warning("No foods detected in image %s", image_hash)
            return _empty(NO_FOOD_SUGGESTION)
        try:
            analysis = VisionAnalysis.model_validate(raw)
        except ValidationError as exc:
            _logger.warning(
                "Discarding malformed vision output for %s: %s",
                image_hash,
                exc.error_count(),
            )
            return _empty(NO_FOOD_SUGGESTION)

        foods = [_annotate(food) for food in analysis.foods]
        suggestions = analysis.suggestions or [DEFAULT_SUGGESTION]
        entry = self.cache.set(image_hash, foods, suggestions)
        _logger.info(
            "Analyzed image %s: %s foods, %s saved by preprocessing",
            image_hash,
            len(foods),
            optimized.savings,
        )
        return ImageAnalysis(
            foods=entry.foods, suggestions=entry.suggestions, cached=False
        )


def _annotate(food: VisionFood) -> AnalyzedFood:
    """Fill missing nutrients from keyword defaults and grade the result."""
    defaults = default_macros(food.name)
    per_100 = MacroProfile(
        calories=defaults.calories if food.calories is None else food.calories,
        protein_g=defaults.protein_g if food.protein is None else food.protein,
        carbs_g=defaults.carbs_g if food.carbs is None else food.carbs,
        fat_g=defaults.fat_g if food.fat is None else food.fat,
    )
    category = categorize_food(food.name)
    accuracy = score_nutrients(food.name, category, per_100)
    return AnalyzedFood(
        name=food.name,
        calories=per_100.calories,
        protein=per_100.protein_g,
        carbs=per_100.carbs_g,
        fat=per_100.fat_g,
        confidence=food.confidence,
        estimated_quantity=food.estimated_quantity,
        category=category,
        accuracy=accuracy.tier,
    )


def _empty(suggestion: str) -> ImageAnalysis:
    return ImageAnalysis(foods=(), suggestions=(suggestion,), cached=False)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
