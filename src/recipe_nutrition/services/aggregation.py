"""Aggregation of ingredients across recipes into shopping and nutrition totals."""

import math
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from recipe_nutrition.domain.catalog import CatalogEntry
from recipe_nutrition.domain.ingredients import IngredientReference
from recipe_nutrition.domain.nutrition import NUTRIENT_FIELDS, NutritionAmount
from recipe_nutrition.domain.shopping import (
    AggregationItem,
    AggregationResult,
    ShoppingAggregate,
)
from recipe_nutrition.services.catalog import CatalogService
from recipe_nutrition.services.nutrition import multiply, nutrition_for, round_nutrition
from recipe_nutrition.services.quantities import PIECES, resolve_quantity

AMOUNT_DECIMAL_PLACES = 2


@dataclass
class _Line:
    name: str
    total: float = 0.0


def aggregate(items: Iterable[AggregationItem]) -> AggregationResult:
    """Merge ingredient rows into a shopping list and a nutrition total.

    Shopping lines are keyed by the lower-cased, trimmed name and the
    resolved unit, so the same name in different units stays on separate
    lines. Each row counts ``occurrence_count`` times; rows with a
    non-finite amount are skipped.

    Nutrition totals are best-effort: a nutrient absent for some rows sums
    the rows that have it, and is absent only when no row provides it.
    """
    lines: dict[tuple[str, str], _Line] = {}
    totals: dict[str, float | None] = dict.fromkeys(NUTRIENT_FIELDS)
    for item in items:
        count = item.occurrence_count
        if count <= 0 or not math.isfinite(item.reference.amount):
            continue
        default_weight = item.entry.piece_weight_g if item.entry else None
        amount, unit = shopping_quantity(item.reference, default_weight)
        key = (normalize_name(item.reference.name), unit)
        line = lines.setdefault(key, _Line(name=item.reference.name.strip()))
        line.total += amount * count

        contribution = multiply(nutrition_for(item.reference, item.entry), count)
        for name in NUTRIENT_FIELDS:
            value = getattr(contribution, name)
            if value is not None:
                totals[name] = (totals[name] or 0.0) + value

    shopping_list = [
        ShoppingAggregate(
            name=line.name,
            unit=unit,
            total_amount=round(line.total, AMOUNT_DECIMAL_PLACES),
        )
        for (_, unit), line in lines.items()
    ]
    shopping_list.sort(key=lambda line: (line.name.casefold(), line.unit))
    return AggregationResult(
        shopping_list=shopping_list,
        nutrition_total=round_nutrition(NutritionAmount(**totals)),
    )


def shopping_quantity(
    reference: IngredientReference, catalog_default_piece_weight: float | None
) -> tuple[float, str]:
    """Return the amount and unit a row contributes to the shopping list."""
    quantity = resolve_quantity(reference, catalog_default_piece_weight)
    if quantity.unit_label == PIECES:
        return reference.amount, PIECES
    if not quantity.converted:
        return reference.amount, quantity.unit_label.lower()
    return quantity.grams, quantity.unit_label


def normalize_name(name: str) -> str:
    """Grouping form of an ingredient name."""
    return " ".join(name.split()).lower()


def occurrence_counts(recipe_ids: Iterable[int]) -> dict[int, int]:
    """Count how often each recipe appears in a plan."""
    return dict(Counter(recipe_ids))


@dataclass
class AggregationService:
    """Resolve catalog links for ingredient rows and aggregate them."""

    catalog_service: CatalogService

    def aggregate(
        self, rows: Iterable[tuple[IngredientReference, int]]
    ) -> AggregationResult:
        """Aggregate ``(reference, occurrence_count)`` rows."""
        entries: dict[str, CatalogEntry | None] = {}
        items: list[AggregationItem] = []
        for reference, count in rows:
            entry = None
            code = reference.catalog_code
            if code:
                if code not in entries:
                    entries[code] = self.catalog_service.get_entry(code)
                entry = entries[code]
            items.append(
                AggregationItem(reference=reference, occurrence_count=count, entry=entry)
            )
        return aggregate(items)
