"""Bulk linking of existing ingredients to their best catalog match."""

import logging
from dataclasses import dataclass

from recipe_nutrition.domain.catalog import BackfillResult, CatalogEntry
from recipe_nutrition.services.catalog import CatalogService, IngredientRepository
from recipe_nutrition.services.matching import CatalogMatcher
from recipe_nutrition.services.similarity import fold

_logger = logging.getLogger(__name__)

CANDIDATE_LIMIT = 8


def pick_best_match(name: str, candidates: list[CatalogEntry]) -> CatalogEntry | None:
    """Prefer a product whose name equals ``name``, else the top-ranked one."""
    if not candidates:
        return None
    wanted = fold(name)
    for entry in candidates:
        if fold(entry.name) == wanted:
            return entry
    return candidates[0]


@dataclass
class LinkBackfillService:
    """Link every ingredient without a catalog code to its best match."""

    catalog_service: CatalogService
    matcher: CatalogMatcher
    ingredient_repository: IngredientRepository

    def run(self) -> BackfillResult:
        """Link unlinked ingredients one by one and count the outcome."""
        linked = 0
        skipped = 0
        for ingredient in self.ingredient_repository.list_unlinked():
            candidates = self.matcher.search(ingredient.name, CANDIDATE_LIMIT)
            best = pick_best_match(ingredient.name, candidates)
            if best is None:
                _logger.info(
                    "No catalog match for ingredient %s (%s)",
                    ingredient.id,
                    ingredient.name,
                )
                skipped += 1
                continue
            try:
                self.catalog_service.link_ingredient(ingredient.id, best.code)
            except LookupError as exc:
                _logger.warning("Skipping ingredient %s: %s", ingredient.id, exc)
                skipped += 1
                continue
            linked += 1
        _logger.info(
            "Catalog link backfill finished: linked=%s skipped=%s", linked, skipped
        )
        return BackfillResult(linked=linked, skipped=skipped)
