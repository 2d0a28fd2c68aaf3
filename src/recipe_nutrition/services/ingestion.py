"""Streaming synchronization of the product dump into the local catalog."""

import asyncio
import json
import logging
import math
from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from recipe_nutrition.domain.catalog import SOURCE_OPEN_FOOD_FACTS, CatalogEntry
from recipe_nutrition.domain.errors import CatalogSyncError
from recipe_nutrition.domain.ingestion import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    SyncOptions,
    SyncResult,
)
from recipe_nutrition.domain.nutrition import NutrientProfile
from recipe_nutrition.services.catalog import CatalogRepository

_logger = logging.getLogger(__name__)

# Nutrient field -> keys in the product ``nutriments`` object, in priority order.
NUTRIENT_ALIASES: dict[str, tuple[str, ...]] = {
    "energy_kcal": ("energy-kcal_100g", "energy_kcal_100g"),
    "proteins": ("proteins_100g",),
    "carbohydrates": ("carbohydrates_100g", "carbs_100g"),
    "sugars": ("sugars_100g",),
    "fat": ("fat_100g",),
    "saturated_fat": ("saturated-fat_100g", "saturated_fat_100g"),
    "fiber": ("fiber_100g",),
    "sodium": ("sodium_100g", "salt_100g"),
}

# Text field -> keys on the product object, in priority order.
TEXT_ALIASES: dict[str, tuple[str, ...]] = {
    "brands": ("brands",),
    "quantity": ("quantity",),
    "image_url": ("image_small_url", "image_front_small_url", "image_url"),
}

ProgressCallback = Callable[[int, int], None]


class DumpSource(Protocol):
    """Line-oriented source of product records."""

    def iter_lines(self) -> AsyncIterator[str]:
        """Yield decoded lines; raise CatalogSyncError on transport failure."""


def parse_number(value: object) -> float | None:
    """Parse a nutrient value; anything non-finite or unparsable is absent."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", ".")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def pick_name(
    record: dict[str, object], target_language: str, fallback_language: str
) -> tuple[str | None, str | None]:
    """Return ``(name, localized_name)`` preferring the target language."""
    localized = _localized_name(record, target_language)
    fallback = _localized_name(record, fallback_language)
    base = _text(record.get("product_name"))
    return localized or fallback or base, localized


def parse_product(record: object, options: SyncOptions) -> CatalogEntry | None:
    """Map a raw dump record to a catalog entry, or None to discard it."""
    if not isinstance(record, dict):
        return None
    code = _text(record.get("code"))
    if code is None:
        return None
    if options.strict_region and options.region_tag:
        tags = record.get("countries_tags")
        if not isinstance(tags, list) or options.region_tag not in tags:
            return None

    name, localized_name = pick_name(
        record, options.target_language, options.fallback_language
    )
    nutriments = record.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    nutrients = NutrientProfile(
        **{
            field_name: _first_number(nutriments, keys)
            for field_name, keys in NUTRIENT_ALIASES.items()
        }
    )
    texts = {
        field_name: _first_text(record, keys)
        for field_name, keys in TEXT_ALIASES.items()
    }
    return CatalogEntry(
        code=code,
        name=name,
        localized_name=localized_name,
        nutrients=nutrients,
        source=SOURCE_OPEN_FOOD_FACTS,
        **texts,
    )


def parse_line(line: str, options: SyncOptions) -> CatalogEntry | None:
    """Parse one dump line; malformed JSON yields None."""
    if not line.strip():
        return None
    try:
        record = json.loads(line)
    except ValueError:
        return None
    return parse_product(record, options)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class IngestionService:
    """Stream a product dump and upsert it into the catalog in batches.

    Lines are consumed one at a time and each full batch is written before
    the next line is read, so memory stays bounded by one batch. Upserts
    replace rows by code, which makes a rerun from the start converge to the
    same catalog contents.
    """

    repository: CatalogRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    async def sync(
        self,
        source: DumpSource,
        options: SyncOptions,
        on_progress: ProgressCallback | None = None,
    ) -> SyncResult:
        """Run a full sync and report counters; never raises on transport errors."""
        processed = 0
        saved = 0
        batch: list[CatalogEntry] = []
        _logger.info(
            "Catalog sync started: language=%s fallback=%s strict_region=%s "
            "region_tag=%s batch_size=%s",
            options.target_language,
            options.fallback_language,
            options.strict_region,
            options.region_tag or "(none)",
            options.batch_size,
        )
        try:
            async with aclosing(source.iter_lines()) as lines:
                async for line in lines:
                    processed += 1
                    entry = parse_line(line, options)
                    if entry is not None:
                        batch.append(entry)
                        if len(batch) >= options.batch_size:
                            saved += await self._flush(batch)
                            batch = []
                    if processed % options.progress_every == 0:
                        _report(processed, saved, on_progress)
            saved += await self._flush(batch)
        except CatalogSyncError as exc:
            _logger.exception(
                "Catalog sync failed: processed=%s saved=%s", processed, saved
            )
            return SyncResult(
                status=STATUS_FAILED,
                processed=processed,
                saved=saved,
                error=str(exc),
            )
        _report(processed, saved, on_progress)
        _logger.info("Catalog sync finished: processed=%s saved=%s", processed, saved)
        return SyncResult(status=STATUS_COMPLETED, processed=processed, saved=saved)

    async def _flush(self, batch: list[CatalogEntry]) -> int:
        if not batch:
            return 0
        try:
            # Repository calls block, so they run in a worker thread.
            await asyncio.to_thread(
                self.repository.upsert_batch, _dedupe(batch), self.clock()
            )
        except Exception as exc:
            raise CatalogSyncError(f"Batch upsert failed: {exc}") from exc
        return len(batch)


def _report(processed: int, saved: int, on_progress: ProgressCallback | None) -> None:
    _logger.info("Catalog sync progress: processed=%s saved=%s", processed, saved)
    if on_progress is not None:
        on_progress(processed, saved)


def _dedupe(batch: list[CatalogEntry]) -> list[CatalogEntry]:
    """Keep the last entry per code; one upsert cannot touch a row twice."""
    by_code: dict[str, CatalogEntry] = {}
    for entry in batch:
        by_code.pop(entry.code, None)
        by_code[entry.code] = entry
    return list(by_code.values())


def _localized_name(record: dict[str, object], language: str) -> str | None:
    if not language:
        return None
    for key in (f"product_name_{language}", f"product_name:{language}"):
        value = _text(record.get(key))
        if value:
            return value
    return None


def _first_number(values: dict[str, object], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        number = parse_number(values.get(key))
        if number is not None:
            return number
    return None


def _first_text(values: dict[str, object], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        text = _text(values.get(key))
        if text:
            return text
    return None


def _text(value: object) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str | int | float):
        cleaned = str(value).strip()
        return cleaned or None
    return None
