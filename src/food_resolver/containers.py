"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_resolver.adapters.openai_completion_client import OpenAICompletionClient
from food_resolver.adapters.openai_vision_client import OpenAIVisionClient
from food_resolver.adapters.supabase_corpus_repository import SupabaseCorpusRepository
from food_resolver.config import Settings
from food_resolver.services.cache import AnalysisCache
from food_resolver.services.curated import CuratedFoodTable
from food_resolver.services.maintenance import CorpusMaintenanceService
from food_resolver.services.portions import PortionService
from food_resolver.services.resolver import FoodResolver
from food_resolver.services.vision import ImageAnalysisService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_resolver: FoodResolver
    portion_service: PortionService
    image_analysis_service: ImageAnalysisService
    analysis_cache: AnalysisCache
    maintenance_service: CorpusMaintenanceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    corpus = SupabaseCorpusRepository(
        supabase_client, table=resolved_settings.corpus_table
    )
    curated = CuratedFoodTable()
    completion_client = OpenAICompletionClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    vision_client = OpenAIVisionClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    food_resolver = FoodResolver(
        corpus=corpus,
        completion_client=completion_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        curated=curated,
        corpus_timeout_seconds=resolved_settings.corpus_timeout_seconds,
        generation_timeout_seconds=resolved_settings.generation_timeout_seconds,
    )
    analysis_cache = AnalysisCache(
        ttl_seconds=resolved_settings.analysis_cache_ttl_seconds,
        max_entries=resolved_settings.analysis_cache_max_entries,
    )
    image_analysis_service = ImageAnalysisService(
        client=vision_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        cache=analysis_cache,
        timeout_seconds=resolved_settings.vision_timeout_seconds,
    )

    async def close_resources() -> None:
        await completion_client.close()
        await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_resolver=food_resolver,
        portion_service=PortionService(curated=curated),
        image_analysis_service=image_analysis_service,
        analysis_cache=analysis_cache,
        maintenance_service=CorpusMaintenanceService(corpus),
        close_resources=close_resources,
    )
