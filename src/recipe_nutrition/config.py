"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from recipe_nutrition.domain.ingestion import SyncOptions

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

OPEN_FOOD_FACTS_DUMP_URL = (
    "https://static.openfoodfacts.org/data/openfoodfacts-products.jsonl.gz"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    catalog_dump_url: str = OPEN_FOOD_FACTS_DUMP_URL
    catalog_batch_size: int = 2000
    catalog_target_language: str = "cs"
    catalog_fallback_language: str = "en"
    catalog_strict_region: bool = False
    catalog_region_tag: str = ""
    catalog_progress_every: int = 100_000
    dump_connect_timeout_seconds: float = 10.0
    dump_read_timeout_seconds: float = 60.0
    search_similarity_threshold: float = 0.3
    search_default_limit: int = 15
    search_max_limit: int = 50
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def sync_options_from_settings(settings: Settings) -> SyncOptions:
    """Build catalog sync options from configuration."""
    return SyncOptions(
        batch_size=max(settings.catalog_batch_size, 1),
        target_language=settings.catalog_target_language.strip().lower(),
        fallback_language=settings.catalog_fallback_language.strip().lower(),
        strict_region=settings.catalog_strict_region,
        region_tag=settings.catalog_region_tag.strip(),
        progress_every=max(settings.catalog_progress_every, 1),
    )
