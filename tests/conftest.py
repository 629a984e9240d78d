"""Shared test fixtures."""

import io
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta

import pytest
from PIL import Image

from food_resolver.config import Settings
from food_resolver.containers import AppContainer
from food_resolver.curated_foods import curated_food
from food_resolver.domain.foods import (
    AccuracyTier,
    CorpusSource,
    FoodId,
    FoodRecord,
    SourceKind,
)
from food_resolver.domain.nutrition import MacroProfile
from food_resolver.services.cache import AnalysisCache
from food_resolver.services.curated import CuratedFoodTable
from food_resolver.services.maintenance import CorpusMaintenanceService
from food_resolver.services.portions import PortionService
from food_resolver.services.resolver import (
    CompletionClient,
    CorpusRepository,
    FoodResolver,
)
from food_resolver.services.vision import ImageAnalysisService, VisionClient


def corpus_food(  # noqa: PLR0913
    row_id: int,
    name: str,
    category: str = "Main Course",
    calories: float = 150,
    protein: float = 6,
    carbs: float = 20,
    fat: float = 5,
    default_unit: str = "serving (100g)",
) -> FoodRecord:
    """Build a corpus record for tests."""
    return FoodRecord(
        id=FoodId(SourceKind.CORPUS, row_id),
        name=name,
        category=category,
        per_100=MacroProfile(
            calories=calories, protein_g=protein, carbs_g=carbs, fat_g=fat
        ),
        is_liquid=False,
        default_unit=default_unit,
        common_units=(),
        source=CorpusSource(row_id=row_id),
        accuracy=AccuracyTier.MEDIUM,
    )


@dataclass
class InMemoryCorpusRepository(CorpusRepository):
    """In-memory corpus repository for tests."""

    foods: list[FoodRecord] = field(default_factory=list)
    stored: list[FoodRecord] = field(default_factory=list)
    deleted: list[FoodId] = field(default_factory=list)
    searches: list[str] = field(default_factory=list)
    fail_search: bool = False
    fail_store: bool = False

    def search_foods(self, query: str) -> list[FoodRecord]:
        self.searches.append(query)
        if self.fail_search:
            raise RuntimeError("corpus unavailable")
        needle = query.lower()
        return [food for food in self.foods if needle in food.name.lower()]

    def store_food(self, record: FoodRecord) -> FoodRecord:
        if self.fail_store:
            raise RuntimeError("corpus read-only")
        row_id = len(self.foods) + 1
        food_id = (
            record.id
            if record.id.namespace is SourceKind.GENERATED
            else FoodId(SourceKind.CORPUS, row_id)
        )
        stored = replace(
            record,
            id=food_id,
            source=CorpusSource(row_id=row_id),
        )
        self.stored.append(record)
        self.foods.append(stored)
        return stored

    def list_foods(self) -> list[FoodRecord]:
        return list(self.foods)

    def delete_food(self, food_id: FoodId) -> None:
        self.deleted.append(food_id)
        self.foods = [food for food in self.foods if food.id != food_id]


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {
            "foods": [
                {
                    "name": "Hyderabadi Haleem",
                    "calories": 160,
                    "protein": 11,
                    "carbs": 12,
                    "fat": 7.5,
                    "category": "Main Course",
                    "defaultUnit": "bowl (250g)",
                }
            ]
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.calls.append({"model": model, "prompt": prompt, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.payload  # type: ignore[return-value]


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {
            "foods": [
                {
                    "name": "Chicken Biryani",
                    "calories": 185,
                    "protein": 12.3,
                    "carbs": 22.1,
                    "fat": 6.4,
                    "confidence": 88,
                    "estimatedQuantity": "1 plate",
                }
            ],
            "suggestions": ["Add a side of raita for protein."],
        }
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

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
        self.calls.append(image_data_url)
        if self.error is not None:
            raise self.error
        return self.payload  # type: ignore[return-value]


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_image_bytes(
    size: tuple[int, int] = (64, 48), image_format: str = "PNG"
) -> bytes:
    """Render a small solid-colour image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, (200, 120, 40)).save(buffer, format=image_format)
    return buffer.getvalue()


def toor_dal() -> FoodRecord:
    return curated_food(
        "Toor Dal (Cooked)",
        "Legumes",
        87,
        5.8,
        14.2,
        1.0,
        "bowl (150g)",
        ("100g", "bowl (150g)"),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def corpus() -> InMemoryCorpusRepository:
    return InMemoryCorpusRepository()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def resolver(
    corpus: InMemoryCorpusRepository, completion_client: FakeCompletionClient
) -> FoodResolver:
    return FoodResolver(
        corpus=corpus,
        completion_client=completion_client,
        model="gpt-5.2",
        reasoning_effort="low",
    )


@pytest.fixture
def container(
    settings: Settings,
    corpus: InMemoryCorpusRepository,
    completion_client: FakeCompletionClient,
    vision_client: FakeVisionClient,
) -> AppContainer:
    curated = CuratedFoodTable()
    analysis_cache = AnalysisCache()

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_resolver=FoodResolver(
            corpus=corpus,
            completion_client=completion_client,
            model=settings.openai_model,
            curated=curated,
        ),
        portion_service=PortionService(curated=curated),
        image_analysis_service=ImageAnalysisService(
            client=vision_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
            cache=analysis_cache,
        ),
        analysis_cache=analysis_cache,
        maintenance_service=CorpusMaintenanceService(corpus),
        close_resources=close_resources,
    )
