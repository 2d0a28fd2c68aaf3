"""Supabase repository for recipe ingredient nutrition fields."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from recipe_nutrition.adapters.supabase_catalog_repository import NUTRIENT_COLUMNS
from recipe_nutrition.domain.catalog import CatalogEntry, UnlinkedIngredient
from recipe_nutrition.services.catalog import IngredientRepository

INGREDIENTS_TABLE = "ingredients"


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase implementation for linking ingredients to the catalog."""

    client: Client

    def apply_catalog_link(
        self, ingredient_id: int, entry: CatalogEntry, synced_at: datetime
    ) -> bool:
        """Copy catalog nutrition onto an ingredient row."""
        payload: dict[str, object] = {
            "off_id": entry.code,
            "off_last_synced": synced_at.isoformat(),
        }
        for field_name, column in NUTRIENT_COLUMNS.items():
            payload[column] = getattr(entry.nutrients, field_name)
        response = (
            self.client.table(INGREDIENTS_TABLE)
            .update(payload)
            .eq("id", ingredient_id)
            .execute()
        )
        return bool(response.data)

    def list_unlinked(self) -> list[UnlinkedIngredient]:
        """Return ingredients with no catalog code, ordered by id."""
        response = (
            self.client.table(INGREDIENTS_TABLE)
            .select("id, name")
            .is_("off_id", "null")
            .order("id")
            .execute()
        )
        return [
            UnlinkedIngredient(id=int(row["id"]), name=str(row.get("name") or ""))
            for row in response.data or []
        ]
