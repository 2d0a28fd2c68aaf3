"""Ranked fuzzy search over the local nutrition catalog."""

from dataclasses import dataclass

from recipe_nutrition.domain.catalog import SOURCE_LOCAL, CatalogEntry
from recipe_nutrition.services.catalog import CatalogRepository
from recipe_nutrition.services.similarity import fold, trigram_similarity

MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 15
MAX_LIMIT = 50


@dataclass
class CatalogMatcher:
    """Match free-text ingredient names against catalog entries.

    Rows qualify by accent-insensitive containment or by trigram similarity
    at or above ``similarity_threshold`` on the name or brand. Results are
    ordered by: exact name match, exact brand match, name similarity, brand
    similarity, then name (the localized name for local search) and code so
    identical inputs always yield the same order.
    """

    repository: CatalogRepository
    similarity_threshold: float = 0.3
    default_limit: int = DEFAULT_LIMIT
    max_limit: int = MAX_LIMIT
    candidate_pool: int = 200

    def search(self, query: str | None, limit: int | None = None) -> list[CatalogEntry]:
        """Search all catalog entries."""
        return self._search(query, limit, local_only=False)

    def search_local(
        self, query: str | None, limit: int | None = None
    ) -> list[CatalogEntry]:
        """Search administrator-created entries, preferring localized names."""
        return self._search(query, limit, local_only=True)

    def clamp_limit(self, limit: int | None) -> int:
        """Apply the default and hard ceiling to a requested limit."""
        if limit is None:
            return self.default_limit
        return max(1, min(limit, self.max_limit))

    def _search(
        self, query: str | None, limit: int | None, *, local_only: bool
    ) -> list[CatalogEntry]:
        term = (query or "").strip()
        if len(term) < MIN_QUERY_LENGTH:
            return []
        size = self.clamp_limit(limit)
        candidates = self.repository.find_candidates(
            term,
            limit=max(self.candidate_pool, size),
            threshold=self.similarity_threshold,
            local_only=local_only,
        )
        if local_only:
            candidates = [entry for entry in candidates if entry.source == SOURCE_LOCAL]
        scored = [
            _score(term, entry, use_localized=local_only) for entry in candidates
        ]
        matches = [
            score
            for score in scored
            if score.contains or score.best_similarity >= self.similarity_threshold
        ]
        matches.sort(key=lambda score: score.sort_key)
        return [score.entry for score in _unique(matches)[:size]]


@dataclass(frozen=True)
class _Score:
    entry: CatalogEntry
    contains: bool
    localized_exact: bool
    name_exact: bool
    brand_exact: bool
    name_similarity: float
    brand_similarity: float
    sort_name: str

    @property
    def best_similarity(self) -> float:
        return max(self.name_similarity, self.brand_similarity)

    @property
    def sort_key(self) -> tuple[object, ...]:
        return (
            not self.localized_exact,
            not self.name_exact,
            not self.brand_exact,
            -self.name_similarity,
            -self.brand_similarity,
            self.sort_name,
            self.entry.code,
        )


def _score(term: str, entry: CatalogEntry, *, use_localized: bool) -> _Score:
    folded_term = fold(term)
    name = fold(entry.name)
    brands = fold(entry.brands)
    localized = fold(entry.localized_name) if use_localized else ""
    name_similarity = trigram_similarity(term, entry.name)
    if use_localized and localized:
        name_similarity = max(
            name_similarity, trigram_similarity(term, entry.localized_name)
        )
    return _Score(
        entry=entry,
        contains=any(folded_term in text for text in (name, brands, localized)),
        localized_exact=bool(localized) and localized == folded_term,
        name_exact=name == folded_term,
        brand_exact=folded_term in _split_brands(brands),
        name_similarity=name_similarity,
        brand_similarity=trigram_similarity(term, entry.brands),
        sort_name=fold(entry.display_name) if use_localized else name,
    )


def _split_brands(brands: str) -> set[str]:
    return {part.strip() for part in brands.split(",") if part.strip()}


def _unique(scores: list[_Score]) -> list[_Score]:
    seen: set[str] = set()
    unique: list[_Score] = []
    for score in scores:
        if score.entry.code in seen:
            continue
        seen.add(score.entry.code)
        unique.append(score)
    return unique
