"""Tests for unit conversion."""

import math

from food_diary.services.units import (
    convert_to_grams,
    format_display_amount,
    parse_amount,
    piece_weight,
    resolve_unit,
)


def test_grams_and_millilitres_are_one_to_one() -> None:
    assert convert_to_grams(250, "г") == 250
    assert convert_to_grams(250, "мл") == 250
    assert convert_to_grams(1.5, "л") == 1500


def test_spoons_and_portions() -> None:
    assert convert_to_grams(2, "ст.л") == 30
    assert convert_to_grams(3, "ч.л") == 15
    assert convert_to_grams(2, "порция") == 200


def test_english_aliases_resolve_to_display_units() -> None:
    assert resolve_unit("g") == "г"
    assert resolve_unit("ML") == "мл"
    assert resolve_unit("tbsp") == "ст.л"
    assert resolve_unit("portion") == "порция"
    assert resolve_unit(None) == "г"
    assert convert_to_grams(1, "tsp") == 5


def test_piece_weight_uses_first_matching_keyword() -> None:
    assert convert_to_grams(1, "шт", "Яблоко") == 150
    assert convert_to_grams(2, "pcs", "Яйцо перепелиное") == 24
    assert convert_to_grams(1, "шт", "Яйцо куриное") == 55
    assert piece_weight("Green apple") == 150


def test_unknown_piece_food_uses_default_weight() -> None:
    assert convert_to_grams(2, "шт", "Неизвестный продукт") == 100
    assert convert_to_grams(1, "шт") == 50


def test_unknown_unit_is_treated_as_grams() -> None:
    assert convert_to_grams(42, "bucket") == 42


def test_invalid_amounts_become_zero() -> None:
    assert convert_to_grams(-5, "г") == 0
    assert convert_to_grams("abc", "г") == 0
    assert convert_to_grams(math.nan, "г") == 0
    assert convert_to_grams(math.inf, "л") == 0
    assert convert_to_grams(None, "г") == 0


def test_parse_amount_accepts_comma_decimal() -> None:
    assert parse_amount("1,5") == 1.5
    assert parse_amount(" 2 ") == 2
    assert parse_amount(True) == 0


def test_format_display_amount() -> None:
    assert format_display_amount(100, "г") == "100 г"
    assert format_display_amount(100.0, "г") == "100 г"
    assert format_display_amount(1.5, "шт") == "1.5 шт"
    assert format_display_amount(None, "г") == ""
