"""Nutrition domain models."""

from dataclasses import asdict, dataclass

NUTRIENT_FIELDS = (
    "energy_kcal",
    "proteins",
    "carbohydrates",
    "sugars",
    "fat",
    "saturated_fat",
    "fiber",
    "sodium",
)


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values per 100 g (or 100 ml) of a product.

    ``None`` means the source did not provide the value, which is distinct
    from a measured zero.
    """

    energy_kcal: float | None = None
    proteins: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    fiber: float | None = None
    sodium: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        """Return nutrient values keyed by field name."""
        return asdict(self)


@dataclass(frozen=True)
class NutritionAmount:
    """Absolute nutrient amounts for a concrete quantity of food."""

    energy_kcal: float | None = None
    proteins: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    fiber: float | None = None
    sodium: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        """Return nutrient amounts keyed by field name."""
        return asdict(self)

    def is_empty(self) -> bool:
        """Return True when every nutrient is absent."""
        return all(getattr(self, name) is None for name in NUTRIENT_FIELDS)
