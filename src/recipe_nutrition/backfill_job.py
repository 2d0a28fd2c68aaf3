"""Maintenance job that links existing ingredients to catalog entries."""

import asyncio
import logging

from recipe_nutrition.app_logging import configure_logging
from recipe_nutrition.containers import build_container

_logger = logging.getLogger(__name__)


def main() -> int:
    """Console entrypoint; reports how many ingredients were linked."""
    configure_logging()
    container = build_container()
    try:
        result = container.link_backfill_service.run()
    finally:
        asyncio.run(container.close_resources())
    _logger.info("Linked %s ingredients, skipped %s", result.linked, result.skipped)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
