"""Domain models for the local nutrition catalog."""

from dataclasses import dataclass, field
from datetime import datetime

from recipe_nutrition.domain.nutrition import NutrientProfile

SOURCE_OPEN_FOOD_FACTS = "off"
SOURCE_LOCAL = "local"


@dataclass(frozen=True)
class CatalogEntry:
    """Canonical nutrition record keyed by a unique product code."""

    code: str
    name: str | None
    localized_name: str | None = None
    brands: str | None = None
    quantity: str | None = None
    image_url: str | None = None
    nutrients: NutrientProfile = field(default_factory=NutrientProfile)
    piece_weight_g: float | None = None
    source: str = SOURCE_OPEN_FOOD_FACTS
    local_id: int | None = None
    last_synced_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Preferred name for presentation."""
        return self.localized_name or self.name or ""


@dataclass(frozen=True)
class CatalogLink:
    """Result of linking a recipe ingredient to a catalog entry."""

    ingredient_id: int
    catalog_code: str
    synced_at: datetime


@dataclass(frozen=True)
class UnlinkedIngredient:
    """Recipe ingredient that has no catalog link yet."""

    id: int
    name: str


@dataclass(frozen=True)
class BackfillResult:
    """Counters of a catalog link backfill run."""

    linked: int
    skipped: int
