"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    openai_timeout_seconds: float = 60.0
    corpus_table: str = "foods"
    corpus_timeout_seconds: float = 5.0
    generation_timeout_seconds: float = 20.0
    vision_timeout_seconds: float = 45.0
    analysis_cache_ttl_seconds: int = 24 * 60 * 60
    analysis_cache_max_entries: int = 1000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
