"""Scaling of per-100 nutrient values to concrete quantities."""

import math

from recipe_nutrition.domain.catalog import CatalogEntry
from recipe_nutrition.domain.ingredients import IngredientReference
from recipe_nutrition.domain.nutrition import (
    NUTRIENT_FIELDS,
    NutrientProfile,
    NutritionAmount,
)
from recipe_nutrition.services.quantities import PIECES, resolve_quantity

ENERGY_FIELD = "energy_kcal"
DECIMAL_PLACES = 2


def scale(per100: NutrientProfile, grams: float) -> NutritionAmount:
    """Scale per-100 values to ``grams``; absent values stay absent."""
    factor = grams / 100.0
    values = {}
    for name in NUTRIENT_FIELDS:
        value = getattr(per100, name)
        values[name] = None if value is None else value * factor
    return NutritionAmount(**values)


def nutrition_for(
    reference: IngredientReference, entry: CatalogEntry | None
) -> NutritionAmount:
    """Compute absolute nutrition for one ingredient row.

    Rows without catalog data, or piece quantities with no known weight,
    yield an all-absent amount rather than zeros.
    """
    if entry is None:
        return NutritionAmount()
    quantity = resolve_quantity(reference, entry.piece_weight_g)
    if quantity.unit_label == PIECES:
        return NutritionAmount()
    return scale(entry.nutrients, quantity.grams)


def multiply(amount: NutritionAmount, factor: float) -> NutritionAmount:
    """Multiply every present nutrient by ``factor``."""
    values = {}
    for name in NUTRIENT_FIELDS:
        value = getattr(amount, name)
        values[name] = None if value is None else value * factor
    return NutritionAmount(**values)


def round_nutrition(amount: NutritionAmount) -> NutritionAmount:
    """Round for presentation: kcal to integers, the rest to 2 decimals.

    Non-finite values are reported as absent.
    """
    values: dict[str, float | None] = {}
    for name in NUTRIENT_FIELDS:
        value = getattr(amount, name)
        if value is None or not math.isfinite(value):
            values[name] = None
        elif name == ENERGY_FIELD:
            values[name] = float(math.floor(value + 0.5))
        else:
            values[name] = round(value, DECIMAL_PLACES)
    return NutritionAmount(**values)
