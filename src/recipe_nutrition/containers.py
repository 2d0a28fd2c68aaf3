"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from recipe_nutrition.adapters.dump_client import HttpxDumpSource
from recipe_nutrition.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from recipe_nutrition.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from recipe_nutrition.config import Settings
from recipe_nutrition.services.aggregation import AggregationService
from recipe_nutrition.services.backfill import LinkBackfillService
from recipe_nutrition.services.catalog import CatalogService
from recipe_nutrition.services.ingestion import DumpSource, IngestionService
from recipe_nutrition.services.matching import CatalogMatcher


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    catalog_matcher: CatalogMatcher
    ingestion_service: IngestionService
    aggregation_service: AggregationService
    link_backfill_service: LinkBackfillService
    dump_source: DumpSource
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    ingredient_repository = SupabaseIngredientRepository(supabase_client)
    catalog_service = CatalogService(
        repository=catalog_repository,
        ingredient_repository=ingredient_repository,
    )
    catalog_matcher = CatalogMatcher(
        repository=catalog_repository,
        similarity_threshold=resolved_settings.search_similarity_threshold,
        default_limit=resolved_settings.search_default_limit,
        max_limit=resolved_settings.search_max_limit,
    )
    dump_source = HttpxDumpSource.create(
        url=resolved_settings.catalog_dump_url,
        connect_timeout_seconds=resolved_settings.dump_connect_timeout_seconds,
        read_timeout_seconds=resolved_settings.dump_read_timeout_seconds,
    )

    async def close_resources() -> None:
        await dump_source.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        catalog_matcher=catalog_matcher,
        ingestion_service=IngestionService(catalog_repository),
        aggregation_service=AggregationService(catalog_service),
        link_backfill_service=LinkBackfillService(
            catalog_service=catalog_service,
            matcher=catalog_matcher,
            ingredient_repository=ingredient_repository,
        ),
        dump_source=dump_source,
        close_resources=close_resources,
    )
