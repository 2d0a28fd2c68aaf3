"""Tests for quantity resolution."""

import pytest

from recipe_nutrition.domain.ingredients import IngredientReference
from recipe_nutrition.services.quantities import (
    display_label,
    format_amount,
    fraction_label,
    normalize_unit,
    resolve_grams,
    resolve_quantity,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("g", "g"),
        (" Grams ", "g"),
        ("ks", "pcs"),
        ("kus", "pcs"),
        ("lžíce", "tbsp"),
        ("Tablespoon", "tbsp"),
        ("hrnek", "mug"),
        ("KG", "kg"),
        ("pinch", None),
        (None, None),
    ],
)
def test_normalize_unit(raw: str | None, expected: str | None) -> None:
    assert normalize_unit(raw) == expected


def test_grams_and_millilitres_pass_through() -> None:
    assert resolve_grams(250, "g") == 250
    assert resolve_grams(200, "ml") == 200


def test_scaled_and_legacy_units() -> None:
    assert resolve_grams(1.5, "kg") == 1500
    assert resolve_grams(0.5, "l") == 500
    assert resolve_grams(2, "lžíce") == 20
    assert resolve_grams(3, "tsp") == 15
    assert resolve_grams(1, "cup") == 240


def test_pieces_prefer_explicit_weight() -> None:
    assert resolve_grams(2, "pcs", per_piece_weight=60, catalog_default_piece_weight=100) == 120
    assert resolve_grams(2, "pcs", per_piece_weight=None, catalog_default_piece_weight=100) == 200


def test_pieces_without_weight_resolve_to_zero() -> None:
    assert resolve_grams(3, "ks") == 0.0
    assert resolve_grams(3, "ks", per_piece_weight=0, catalog_default_piece_weight=-5) == 0.0


@pytest.mark.parametrize(
    ("unit", "per_piece_weight"),
    [("g", None), ("ml", None), ("ks", 60.0), ("kg", None)],
)
def test_resolve_grams_is_linear_in_amount(unit: str, per_piece_weight: float | None) -> None:
    single = resolve_grams(1.25, unit, per_piece_weight=per_piece_weight)
    double = resolve_grams(2.5, unit, per_piece_weight=per_piece_weight)

    assert double == 2 * single


def test_unknown_unit_returns_amount() -> None:
    assert resolve_grams(7, "pinch") == 7


def test_resolve_quantity_exact_grams() -> None:
    quantity = resolve_quantity(IngredientReference(name="milk", amount=200, unit="ml"))

    assert quantity.grams == 200
    assert quantity.is_exact
    assert quantity.converted
    assert quantity.unit_label == "ml"


def test_resolve_quantity_unknown_unit_is_inexact() -> None:
    quantity = resolve_quantity(IngredientReference(name="salt", amount=2, unit="Pinch"))

    assert quantity.grams == 2
    assert not quantity.is_exact
    assert not quantity.converted
    assert quantity.unit_label == "Pinch"


def test_resolve_quantity_piece_without_weight() -> None:
    quantity = resolve_quantity(IngredientReference(name="egg", amount=2, unit="ks"))

    assert quantity.grams == 0.0
    assert not quantity.is_exact
    assert quantity.unit_label == "pcs"


def test_resolve_quantity_piece_with_catalog_weight() -> None:
    quantity = resolve_quantity(
        IngredientReference(name="onion", amount=1.5, unit="ks"),
        catalog_default_piece_weight=100,
    )

    assert quantity.grams == 150
    assert quantity.is_exact
    assert quantity.unit_label == "g"


def test_fraction_label() -> None:
    assert fraction_label(0.5) == "half"
    assert fraction_label(0.333) == "third"
    assert fraction_label(0.25) == "quarter"
    assert fraction_label(0.7) is None


def test_display_label() -> None:
    assert display_label(IngredientReference(name="onion", amount=0.5, unit="ks")) == (
        "half onion"
    )
    assert display_label(IngredientReference(name="flour", amount=250.0, unit="g")) == (
        "250 g flour"
    )
    assert (
        display_label(
            IngredientReference(name="flour", amount=1, unit="g", display="a cup of flour")
        )
        == "a cup of flour"
    )


def test_format_amount() -> None:
    assert format_amount(300.0) == "300"
    assert format_amount(1.5) == "1.5"
    assert format_amount(0.125) == "0.12"
    assert format_amount(float("inf")) == "inf"
