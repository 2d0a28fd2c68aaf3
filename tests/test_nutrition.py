"""Tests for nutrient scaling."""

from recipe_nutrition.domain.ingredients import IngredientReference
from recipe_nutrition.domain.nutrition import NutrientProfile, NutritionAmount
from recipe_nutrition.services.nutrition import (
    multiply,
    nutrition_for,
    round_nutrition,
    scale,
)
from recipe_nutrition.services.quantities import resolve_quantity
from tests.conftest import make_entry


def test_flour_energy_scales_to_quantity() -> None:
    flour = make_entry("flour-1", "Flour", energy_kcal=364, proteins=10.0)

    amount = nutrition_for(IngredientReference(name="flour", amount=150, unit="g"), flour)

    assert round_nutrition(amount).energy_kcal == 546
    assert amount.proteins == 15.0


def test_egg_pieces_use_catalog_weight_and_keep_absent_energy() -> None:
    egg = make_entry("egg-1", "Egg", piece_weight_g=50, proteins=12.6)
    reference = IngredientReference(name="egg", amount=2, unit="ks")

    quantity = resolve_quantity(reference, egg.piece_weight_g)
    amount = nutrition_for(reference, egg)

    assert quantity.grams == 100
    assert amount.energy_kcal is None
    assert amount.proteins == 12.6


def test_missing_catalog_entry_yields_absent_values() -> None:
    amount = nutrition_for(IngredientReference(name="salt", amount=5, unit="g"), None)

    assert amount.is_empty()


def test_piece_without_weight_yields_absent_values() -> None:
    egg = make_entry("egg-1", "Egg", energy_kcal=143)

    amount = nutrition_for(IngredientReference(name="egg", amount=2, unit="ks"), egg)

    assert amount.is_empty()


def test_measured_zero_is_not_absent() -> None:
    amount = scale(NutrientProfile(sugars=0.0), 200)

    assert amount.sugars == 0.0
    assert amount.fat is None


def test_multiply_keeps_absent_values() -> None:
    amount = multiply(NutritionAmount(energy_kcal=100.0, fat=None), 3)

    assert amount.energy_kcal == 300.0
    assert amount.fat is None


def test_round_nutrition() -> None:
    rounded = round_nutrition(
        NutritionAmount(energy_kcal=545.5, proteins=1.23456, sodium=None)
    )

    assert rounded.energy_kcal == 546
    assert rounded.proteins == 1.23
    assert rounded.sodium is None


def test_round_nutrition_drops_non_finite_values() -> None:
    rounded = round_nutrition(
        NutritionAmount(energy_kcal=float("inf"), fat=float("nan"), proteins=2.0)
    )

    assert rounded.energy_kcal is None
    assert rounded.fat is None
    assert rounded.proteins == 2.0
