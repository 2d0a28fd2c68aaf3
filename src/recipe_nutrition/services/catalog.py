"""Services for reading and linking the local nutrition catalog."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from recipe_nutrition.domain.catalog import (
    CatalogEntry,
    CatalogLink,
    UnlinkedIngredient,
)
from recipe_nutrition.domain.errors import (
    CatalogEntryNotFoundError,
    IngredientNotFoundError,
)

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for catalog entries."""

    def upsert_batch(self, entries: list[CatalogEntry], synced_at: datetime) -> int:
        """Insert or fully replace entries by code and return the row count."""

    def get_by_code(self, code: str) -> CatalogEntry | None:
        """Return an entry by product code, if present."""

    def find_candidates(
        self, query: str, limit: int, threshold: float, local_only: bool = False
    ) -> list[CatalogEntry]:
        """Return rows that may match ``query`` by containment or trigrams."""

    def count(self) -> int:
        """Return the number of stored entries."""


class IngredientRepository(Protocol):
    """Persistence interface for recipe ingredient nutrition fields."""

    def apply_catalog_link(
        self, ingredient_id: int, entry: CatalogEntry, synced_at: datetime
    ) -> bool:
        """Copy catalog nutrition onto an ingredient; False if it is missing."""

    def list_unlinked(self) -> list[UnlinkedIngredient]:
        """Return ingredients without a catalog link, ordered by id."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CatalogService:
    """Application service for catalog lookups and ingredient linking."""

    repository: CatalogRepository
    ingredient_repository: IngredientRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    def get_entry(self, code: str) -> CatalogEntry | None:
        """Return a catalog entry by code, or None when unknown."""
        cleaned = code.strip()
        if not cleaned:
            return None
        return self.repository.get_by_code(cleaned)

    def count(self) -> int:
        """Return the catalog size."""
        return self.repository.count()

    def link_ingredient(self, ingredient_id: int, code: str) -> CatalogLink:
        """Copy a catalog entry's nutrition onto an ingredient row."""
        entry = self.get_entry(code)
        if entry is None:
            raise CatalogEntryNotFoundError(code)
        synced_at = self.clock()
        if not self.ingredient_repository.apply_catalog_link(
            ingredient_id, entry, synced_at
        ):
            raise IngredientNotFoundError(ingredient_id)
        _logger.info("Linked ingredient %s to catalog code %s", ingredient_id, code)
        return CatalogLink(
            ingredient_id=ingredient_id,
            catalog_code=entry.code,
            synced_at=synced_at,
        )
