"""Conversion of user-entered quantities into a common mass basis."""

import math

from recipe_nutrition.domain.ingredients import IngredientReference, ResolvedQuantity

GRAMS = "g"
MILLILITRES = "ml"
PIECES = "pcs"

# Lower-cased user input -> canonical unit code.
UNIT_ALIASES: dict[str, str] = {
    "g": GRAMS,
    "gr": GRAMS,
    "gram": GRAMS,
    "grams": GRAMS,
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "ml": MILLILITRES,
    "millilitre": MILLILITRES,
    "millilitres": MILLILITRES,
    "milliliter": MILLILITRES,
    "milliliters": MILLILITRES,
    "l": "l",
    "litre": "l",
    "litres": "l",
    "liter": "l",
    "liters": "l",
    "pcs": PIECES,
    "pc": PIECES,
    "piece": PIECES,
    "pieces": PIECES,
    "ks": PIECES,
    "kus": PIECES,
    "kusy": PIECES,
    "tbsp": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "lžíce": "tbsp",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "lžička": "tsp",
    "cup": "cup",
    "cups": "cup",
    "šálek": "cup",
    "mug": "mug",
    "mugs": "mug",
    "hrnek": "mug",
}

# Legacy volumetric units, grams per one unit.
LEGACY_UNIT_GRAMS: dict[str, float] = {
    "tbsp": 10.0,
    "tsp": 5.0,
    "cup": 240.0,
    "mug": 240.0,
}

# Multiples of the base units: code -> (base unit, factor).
SCALED_UNITS: dict[str, tuple[str, float]] = {
    "kg": (GRAMS, 1000.0),
    "l": (MILLILITRES, 1000.0),
}

FRACTION_LABELS: tuple[tuple[float, str], ...] = (
    (1 / 2, "half"),
    (1 / 3, "third"),
    (1 / 4, "quarter"),
)
FRACTION_TOLERANCE = 0.01


def normalize_unit(raw: str | None) -> str | None:
    """Return the canonical unit code for user text, or None if unknown."""
    if raw is None:
        return None
    return UNIT_ALIASES.get(raw.strip().lower())


def resolve_grams(
    amount: float,
    unit: str | None,
    per_piece_weight: float | None = None,
    catalog_default_piece_weight: float | None = None,
) -> float:
    """Convert an amount in the given unit to grams.

    Millilitres count as grams 1:1. Pieces use the explicit per-piece weight,
    then the catalog default, and resolve to 0 when neither is known. Unknown
    units return ``amount`` unchanged.
    """
    code = normalize_unit(unit)
    if code in (GRAMS, MILLILITRES):
        return amount
    if code == PIECES:
        weight = piece_weight(per_piece_weight, catalog_default_piece_weight)
        if weight is None:
            return 0.0
        return amount * weight
    if code in LEGACY_UNIT_GRAMS:
        return amount * LEGACY_UNIT_GRAMS[code]
    if code in SCALED_UNITS:
        return amount * SCALED_UNITS[code][1]
    return amount


def piece_weight(
    per_piece_weight: float | None, catalog_default_piece_weight: float | None
) -> float | None:
    """Pick the first usable per-piece weight."""
    for candidate in (per_piece_weight, catalog_default_piece_weight):
        if _is_positive(candidate):
            return float(candidate)
    return None


def resolve_quantity(
    reference: IngredientReference,
    catalog_default_piece_weight: float | None = None,
) -> ResolvedQuantity:
    """Resolve an ingredient row into grams, flagging inexact results."""
    code = normalize_unit(reference.unit)
    if code is None:
        return ResolvedQuantity(
            grams=reference.amount,
            is_exact=False,
            converted=False,
            unit_label=(reference.unit or "").strip(),
        )
    if code == PIECES and (
        piece_weight(reference.piece_weight_g, catalog_default_piece_weight) is None
    ):
        return ResolvedQuantity(
            grams=0.0, is_exact=False, converted=False, unit_label=PIECES
        )
    grams = resolve_grams(
        reference.amount,
        reference.unit,
        reference.piece_weight_g,
        catalog_default_piece_weight,
    )
    return ResolvedQuantity(grams=grams, is_exact=True, unit_label=base_unit(code))


def base_unit(code: str) -> str:
    """Return the unit a resolved amount is expressed in."""
    if code in (MILLILITRES, "l"):
        return MILLILITRES
    return GRAMS


def fraction_label(amount: float) -> str | None:
    """Return a word for common piece fractions (half, third, quarter)."""
    for value, label in FRACTION_LABELS:
        if abs(amount - value) < FRACTION_TOLERANCE:
            return label
    return None


def display_label(reference: IngredientReference) -> str:
    """Render an ingredient row for presentation."""
    if reference.display:
        return reference.display
    code = normalize_unit(reference.unit)
    if code == PIECES:
        label = fraction_label(reference.amount)
        if label:
            return f"{label} {reference.name}"
    unit_text = code or (reference.unit or "").strip()
    return f"{format_amount(reference.amount)} {unit_text} {reference.name}".strip()


def format_amount(amount: float) -> str:
    """Format a number without trailing zeros."""
    if not math.isfinite(amount):
        return str(amount)
    rounded = round(amount, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def _is_positive(value: float | None) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )
