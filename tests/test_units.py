"""Tests for the unit registry and portion normalizer."""

import pytest

from food_resolver.curated_foods import curated_food
from food_resolver.domain.foods import FoodRecord
from food_resolver.services.units import (
    UNIT_RULES,
    UnitContext,
    UnitRule,
    explicit_magnitude,
    grams_per_unit,
    match_rule,
    normalize,
    round_half_up,
)

BEER = curated_food(
    "Beer", "Beverages", 43, 0.5, 3.6, 0, "bottle (650ml)", ("can (330ml)",), True
)
APPLE = curated_food("Apple", "Fruits", 52, 0.3, 14, 0.2, "medium (180g)", ())
MILK = curated_food("Whole Milk", "Dairy", 42, 3.4, 4.8, 1.0, "cup (200ml)", (), True)
RICE = curated_food("Rice (Cooked)", "Grains", 130, 2.7, 28, 0.3, "bowl (150g)", ())
BREAD = curated_food("White Bread", "Grains", 265, 9, 49, 3.2, "slice (30g)", ())
ALMONDS = curated_food("Almonds", "Nuts", 579, 21.2, 21.6, 49.9, "handful (20g)", ())
CHICKEN = curated_food(
    "Chicken Breast (Cooked)", "Protein", 165, 31, 0, 3.6, "piece (100g)", ()
)
WATER = curated_food(
    "Mineral Water", "Beverages", 0, 0, 0, 0, "glass (250ml)", (), True
)


def _rule(name: str) -> UnitRule:
    return next(rule for rule in UNIT_RULES if rule.name == name)


def test_beer_can_scenario() -> None:
    result = normalize(BEER, "can (500ml)", 1)

    assert result.multiplier == 5
    assert result.calories == 215
    assert result.protein_g == 2.5
    assert result.carbs_g == 18.0
    assert result.fat_g == 0
    assert result.grams == 500
    assert result.rule == "explicit-magnitude"


def test_apple_piece_uses_fruit_heuristic() -> None:
    result = normalize(APPLE, "piece", 2)

    assert result.multiplier == 2.4
    assert result.calories == 125
    assert result.rule == "qualitative"


@pytest.mark.parametrize(
    ("unit", "quantity", "magnitude"),
    [
        ("medium portion (150g)", 1, 150),
        ("250ml", 3, 250),
        ("bowl (150g)", 0.5, 150),
        ("piece (1.2g)", 10, 1.2),
        ("10 pieces (12g)", 1, 12),
        ("330 ml", 2, 330),
        ("75 grams", 4, 75),
        ("bottle (1l)", 1, 1000),
        ("pack (1kg)", 1, 1000),
        ("1.5 litres", 2, 1500),
    ],
)
def test_explicit_magnitude_multiplier_is_exact(
    unit: str, quantity: float, magnitude: float
) -> None:
    result = normalize(RICE, unit, quantity)

    assert result.exact_multiplier == quantity * magnitude / 100
    assert result.multiplier == round_half_up(quantity * magnitude / 100, 2)
    assert result.rule == "explicit-magnitude"


@pytest.mark.parametrize("unit", ["glass (250ml)", "piece", "bottle", "100g", "cup"])
@pytest.mark.parametrize("quantity", [0, 1, 2.5, 1000])
def test_water_is_always_zero(unit: str, quantity: float) -> None:
    result = normalize(WATER, unit, quantity)

    assert (result.calories, result.protein_g, result.carbs_g, result.fat_g) == (
        0,
        0,
        0,
        0,
    )
    assert result.multiplier == 0
    assert result.rule == "water"


def test_water_match_ignores_case_and_baseline() -> None:
    coconut = curated_food("Coconut WATER", "Beverages", 19, 0.7, 3.7, 0.2, "", ())

    assert normalize(coconut, "bottle (500ml)", 1).calories == 0


@pytest.mark.parametrize(
    ("food", "unit", "expected"),
    [
        (RICE, "g", 1),
        (MILK, "ml", 1),
        (MILK, "litre", 1000),
        (RICE, "kg", 1000),
        (RICE, "small portion", 70),
        (RICE, "medium portion", 150),
        (RICE, "large portion", 200),
        (BREAD, "piece", 50),
        (ALMONDS, "piece", 2),
        (CHICKEN, "piece", 100),
        (RICE, "piece", 80),
        (BREAD, "slice", 30),
        (APPLE, "slice", 60),
        (ALMONDS, "handful", 20),
        (RICE, "handful", 30),
        (MILK, "cup", 240),
        (RICE, "cup", 120),
        (MILK, "glass", 250),
        (MILK, "mug", 250),
        (BEER, "bottle", 500),
        (BEER, "can", 330),
        (BEER, "shot", 30),
        (RICE, "small bowl", 100),
        (RICE, "large bowl", 225),
        (RICE, "bowl", 150),
        (RICE, "tbsp", 15),
        (RICE, "teaspoon", 5),
        (RICE, "scoop", 25),
        (RICE, "serving", 100),
        (APPLE, "small", 70),
        (APPLE, "medium", 100),
        (APPLE, "large", 150),
    ],
)
def test_qualitative_units(food: FoodRecord, unit: str, expected: float) -> None:
    assert grams_per_unit(food, unit) == expected


def test_piece_adjustments_follow_name_keywords() -> None:
    egg = curated_food("Boiled Egg", "Protein", 155, 13, 1.1, 11, "", ())
    prawns = curated_food("Prawns", "Protein", 99, 24, 0.2, 0.3, "", ())
    pizza = curated_food("Margherita Pizza", "Fast Food", 266, 11, 33, 10, "", ())

    assert grams_per_unit(egg, "2 pieces") == 50
    assert grams_per_unit(prawns, "piece") == 75
    assert grams_per_unit(pizza, "slice") == 120


def test_size_words_are_ignored_for_packs() -> None:
    context = UnitContext.build(APPLE, "medium pack")

    assert match_rule(context).name == "default"
    assert normalize(APPLE, "medium pack", 1).multiplier == 1.0


def test_unknown_unit_defaults_to_baseline() -> None:
    result = normalize(RICE, "dollop", 2)

    assert result.multiplier == 2.0
    assert result.calories == 260
    assert result.rule == "default"


def test_container_rule_needs_keyword_and_size() -> None:
    container = _rule("container")

    can = UnitContext.build(BEER, "can (500ml)")
    pint = UnitContext.build(BEER, "pint 568ml")
    bare = UnitContext.build(BEER, "bottle")

    assert container.matcher(can)
    assert container.resolver(can) == 500
    assert container.resolver(pint) == 568
    assert not container.matcher(bare)


def test_gram_portion_prefers_longest_marker() -> None:
    gram_portion = _rule("gram-portion")

    context = UnitContext.build(RICE, "plate (150g)")

    assert gram_portion.matcher(context)
    assert gram_portion.resolver(context) == 150


def test_rule_order_is_fixed() -> None:
    assert [rule.name for rule in UNIT_RULES] == [
        "water",
        "explicit-magnitude",
        "container",
        "gram-portion",
        "qualitative",
        "default",
    ]


def test_explicit_magnitude_parsing() -> None:
    assert explicit_magnitude("can (500ml)") == 500
    assert explicit_magnitude("piece (1.7g)") == 1.7
    assert explicit_magnitude("bottle (1l)") == 1000
    assert explicit_magnitude("2 L") == 2000
    assert explicit_magnitude("pack (0.5 kg)") == 500
    assert explicit_magnitude("1 large") is None
    assert explicit_magnitude("piece") is None
    assert explicit_magnitude("medium pack") is None


def test_nutrients_use_exact_multiplier() -> None:
    food = curated_food("Test Flour", "Grains", 333, 10, 70, 1, "", ())

    result = normalize(food, "33g", 1)

    assert result.multiplier == 0.33
    assert result.calories == 110
    assert result.protein_g == 3.3


def test_round_half_up() -> None:
    assert round_half_up(2.5, 0) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(2.675, 2) == 2.68
    assert round_half_up(-1.25, 1) == -1.3
