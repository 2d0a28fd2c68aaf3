"""Domain models for recipe ingredient quantities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IngredientReference:
    """A recipe ingredient row as entered by the author."""

    name: str
    amount: float
    unit: str
    display: str | None = None
    piece_weight_g: float | None = None
    catalog_code: str | None = None


@dataclass(frozen=True)
class ResolvedQuantity:
    """Mass-basis quantity derived from an amount and unit."""

    grams: float
    is_exact: bool
    converted: bool = True
    unit_label: str = "g"
