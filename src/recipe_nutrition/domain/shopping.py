"""Domain models for shopping list and nutrition aggregation."""

from dataclasses import dataclass

from recipe_nutrition.domain.catalog import CatalogEntry
from recipe_nutrition.domain.ingredients import IngredientReference
from recipe_nutrition.domain.nutrition import NutritionAmount


@dataclass(frozen=True)
class AggregationItem:
    """An ingredient row together with how often its recipe is planned."""

    reference: IngredientReference
    occurrence_count: int = 1
    entry: CatalogEntry | None = None


@dataclass(frozen=True)
class ShoppingAggregate:
    """One merged shopping list line."""

    name: str
    unit: str
    total_amount: float


@dataclass(frozen=True)
class AggregationResult:
    """Shopping list and nutrition total for an aggregation scope."""

    shopping_list: list[ShoppingAggregate]
    nutrition_total: NutritionAmount
