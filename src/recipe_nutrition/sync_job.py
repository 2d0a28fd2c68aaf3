"""Maintenance job that refreshes the catalog from the product dump."""

import asyncio
import logging

from recipe_nutrition.app_logging import configure_logging
from recipe_nutrition.config import sync_options_from_settings
from recipe_nutrition.containers import AppContainer, build_container
from recipe_nutrition.domain.ingestion import SyncResult

_logger = logging.getLogger(__name__)


async def run_sync(container: AppContainer) -> SyncResult:
    """Run one sync with configured options and release resources."""
    try:
        return await container.ingestion_service.sync(
            container.dump_source, sync_options_from_settings(container.settings)
        )
    finally:
        await container.close_resources()


def main() -> int:
    """Console entrypoint; exits non-zero when the sync fails."""
    configure_logging()
    container = build_container()
    _logger.info("Syncing catalog from %s", container.settings.catalog_dump_url)
    result = asyncio.run(run_sync(container))
    if not result.ok:
        _logger.error("Catalog sync failed: %s", result.error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
