"""Request models and response serializers for the HTTP API."""

from pydantic import BaseModel, Field

from food_resolver.domain.foods import FoodRecord, FoodResult
from food_resolver.domain.nutrition import PortionDetails
from food_resolver.domain.vision import AnalyzedFood, ImageAnalysis
from food_resolver.services.cache import CacheStats
from food_resolver.services.maintenance import CleanupReport


class PortionRequest(BaseModel):
    """Body for portion calculations."""

    name: str = Field(min_length=1)
    category: str | None = None
    unit: str | None = None
    quantity: float | None = Field(default=None, ge=0)


class ImageAnalysisRequest(BaseModel):
    """Body for image analysis; ``image`` is base64 (a data URL is accepted)."""

    image: str = Field(min_length=1)


class CleanupRequest(BaseModel):
    """Body for the corpus maintenance sweep."""

    remove_inaccurate: bool = False


def food_payload(record: FoodRecord) -> dict[str, object]:
    """Serialize a food record."""
    return {
        "id": str(record.id),
        "name": record.name,
        "category": record.category,
        "calories": record.per_100.calories,
        "protein": record.per_100.protein_g,
        "carbs": record.per_100.carbs_g,
        "fat": record.per_100.fat_g,
        "is_liquid": record.is_liquid,
        "default_unit": record.default_unit,
        "source": record.source_kind.value,
        "accuracy": record.accuracy.value,
    }


def result_payload(result: FoodResult) -> dict[str, object]:
    """Serialize a search result with its serving preview."""
    return {
        **food_payload(result.food),
        "unit": result.unit,
        "quantity": result.quantity,
        "unit_options": list(result.unit_options),
        "notes": result.notes,
        "preview": {
            "calories": result.preview.calories,
            "protein": result.preview.protein_g,
            "carbs": result.preview.carbs_g,
            "fat": result.preview.fat_g,
            "multiplier": result.preview.multiplier,
            "grams": result.preview.grams,
        },
    }


def portion_payload(details: PortionDetails) -> dict[str, object]:
    """Serialize a computed portion."""
    return {
        "unit": details.unit,
        "quantity": details.quantity,
        "unit_options": list(details.unit_options),
        "multiplier": details.multiplier,
        "calories": details.calories,
        "protein": details.protein_g,
        "carbs": details.carbs_g,
        "fat": details.fat_g,
        "notes": details.notes,
    }


def _analyzed_food_payload(food: AnalyzedFood) -> dict[str, object]:
    return {
        "name": food.name,
        "calories": food.calories,
        "protein": food.protein,
        "carbs": food.carbs,
        "fat": food.fat,
        "confidence": food.confidence,
        "estimated_quantity": food.estimated_quantity,
        "category": food.category,
        "accuracy": food.accuracy.value,
    }


def analysis_payload(analysis: ImageAnalysis) -> dict[str, object]:
    """Serialize an image analysis."""
    return {
        "foods": [_analyzed_food_payload(food) for food in analysis.foods],
        "suggestions": list(analysis.suggestions),
        "cached": analysis.cached,
    }


def cache_stats_payload(stats: CacheStats) -> dict[str, object]:
    """Serialize cache counters."""
    return {
        "size": stats.size,
        "hits": stats.hits,
        "misses": stats.misses,
        "max_entries": stats.max_entries,
        "ttl_seconds": stats.ttl_seconds,
    }


def cleanup_payload(report: CleanupReport) -> dict[str, object]:
    """Serialize a maintenance report."""
    return {
        "scanned": report.scanned,
        "duplicate_groups": report.duplicate_groups,
        "removed_duplicates": [str(food_id) for food_id in report.removed_duplicates],
        "removed_inaccurate": [str(food_id) for food_id in report.removed_inaccurate],
        "removed_total": report.removed_total,
    }
