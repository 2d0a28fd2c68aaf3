"""Pydantic models for HTTP request payloads."""

from pydantic import BaseModel, Field, field_validator

from recipe_nutrition.domain.ingredients import IngredientReference


class LinkIngredientRequest(BaseModel):
    """Request to link an ingredient row to a catalog entry."""

    ingredient_id: int
    catalog_code: str = Field(min_length=1)


class IngredientPayload(BaseModel):
    """Recipe ingredient row."""

    name: str
    amount: float = Field(allow_inf_nan=False)
    unit: str
    display: str | None = None
    piece_weight_g: float | None = Field(default=None, allow_inf_nan=False)
    catalog_code: str | None = None

    def to_reference(self) -> IngredientReference:
        """Convert to the domain model."""
        return IngredientReference(
            name=self.name,
            amount=self.amount,
            unit=self.unit,
            display=self.display,
            piece_weight_g=self.piece_weight_g,
            catalog_code=self.catalog_code,
        )


class AggregateItemPayload(BaseModel):
    """Ingredient row with the number of times its recipe is planned."""

    ingredient: IngredientPayload
    occurrence_count: int = Field(default=1, ge=1)


class AggregateRequest(BaseModel):
    """Rows to merge into a shopping list and nutrition total."""

    items: list[AggregateItemPayload]


class SyncRequest(BaseModel):
    """Optional overrides for a catalog sync run."""

    batch_size: int | None = Field(default=None, ge=1)
    target_language: str | None = None
    fallback_language: str | None = None
    strict_region: bool | None = None
    region_tag: str | None = None

    @field_validator("target_language", "fallback_language")
    @classmethod
    def _normalize_language(cls, value: str | None) -> str | None:
        return value.strip().lower() if value is not None else None

    @field_validator("region_tag")
    @classmethod
    def _strip_region_tag(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None
