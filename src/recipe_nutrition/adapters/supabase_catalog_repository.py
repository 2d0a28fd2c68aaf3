"""Supabase implementation for the nutrition catalog."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from recipe_nutrition.domain.catalog import SOURCE_OPEN_FOOD_FACTS, CatalogEntry
from recipe_nutrition.domain.nutrition import NutrientProfile
from recipe_nutrition.services.catalog import CatalogRepository

CATALOG_TABLE = "catalog_entries"
CANDIDATES_FUNCTION = "search_catalog_candidates"

# NutrientProfile field -> column name.
NUTRIENT_COLUMNS = {
    "energy_kcal": "energy_kcal_100g",
    "proteins": "proteins_100g",
    "carbohydrates": "carbs_100g",
    "sugars": "sugars_100g",
    "fat": "fat_100g",
    "saturated_fat": "saturated_fat_100g",
    "fiber": "fiber_100g",
    "sodium": "sodium_100g",
}


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for catalog entries."""

    client: Client

    def upsert_batch(self, entries: list[CatalogEntry], synced_at: datetime) -> int:
        """Insert or replace entries keyed by product code."""
        if not entries:
            return 0
        payload = [_serialize_entry(entry, synced_at) for entry in entries]
        self.client.table(CATALOG_TABLE).upsert(payload, on_conflict="code").execute()
        return len(payload)

    def get_by_code(self, code: str) -> CatalogEntry | None:
        """Return an entry by product code, if present."""
        response = (
            self.client.table(CATALOG_TABLE)
            .select("*")
            .eq("code", code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def find_candidates(
        self, query: str, limit: int, threshold: float, local_only: bool = False
    ) -> list[CatalogEntry]:
        """Return candidate rows using unaccent containment and pg_trgm."""
        response = self.client.rpc(
            CANDIDATES_FUNCTION,
            {
                "search_query": query,
                "min_similarity": threshold,
                "local_only": local_only,
                "max_rows": limit,
            },
        ).execute()
        return [_parse_entry(row) for row in response.data or []]

    def count(self) -> int:
        """Return the number of catalog rows."""
        response = (
            self.client.table(CATALOG_TABLE)
            .select("code", count="exact")
            .limit(1)
            .execute()
        )
        return int(response.count or 0)


def _serialize_entry(entry: CatalogEntry, synced_at: datetime) -> dict[str, object]:
    row: dict[str, object] = {
        "code": entry.code,
        "source": entry.source,
        "product_name": entry.name,
        "localized_name": entry.localized_name,
        "brands": entry.brands,
        "quantity": entry.quantity,
        "image_small_url": entry.image_url,
        "piece_weight_g": entry.piece_weight_g,
        "last_synced_at": synced_at.isoformat(),
    }
    if entry.local_id is not None:
        row["local_id"] = entry.local_id
    for field_name, column in NUTRIENT_COLUMNS.items():
        row[column] = getattr(entry.nutrients, field_name)
    return row


def _parse_entry(row: dict[str, object]) -> CatalogEntry:
    """Parse a catalog row into a domain model."""
    synced_raw = row.get("last_synced_at")
    last_synced_at = (
        datetime.fromisoformat(synced_raw)
        if isinstance(synced_raw, str) and synced_raw
        else None
    )
    nutrients = NutrientProfile(
        **{
            field_name: _optional_float(row.get(column))
            for field_name, column in NUTRIENT_COLUMNS.items()
        }
    )
    local_id = row.get("local_id")
    return CatalogEntry(
        code=str(row["code"]),
        name=row.get("product_name"),
        localized_name=row.get("localized_name"),
        brands=row.get("brands"),
        quantity=row.get("quantity"),
        image_url=row.get("image_small_url"),
        nutrients=nutrients,
        piece_weight_g=_optional_float(row.get("piece_weight_g")),
        source=str(row.get("source") or SOURCE_OPEN_FOOD_FACTS),
        local_id=int(local_id) if local_id is not None else None,
        last_synced_at=last_synced_at,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
