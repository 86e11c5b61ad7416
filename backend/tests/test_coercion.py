# backend/tests/test_coercion.py
import math

import numpy as np
import pytest

from backend.app.services.coercion import (
    CellKind,
    cell_kind,
    clean_numeric_array,
    coerce_numeric,
    is_missing,
    parse_cell,
    parse_float_prefix,
)


def test_clean_numeric_array_drops_missing_and_invalid():
    raw = [1, "2.5", "", None, "abc", float("nan"), float("inf"), "3"]
    assert clean_numeric_array(raw) == [1.0, 2.5, 3.0]


def test_cell_kind_tagged_union():
    assert cell_kind(None) is CellKind.MISSING
    assert cell_kind("") is CellKind.MISSING
    assert cell_kind(float("nan")) is CellKind.MISSING
    assert cell_kind(3) is CellKind.NUMBER
    assert cell_kind(np.float64(2.5)) is CellKind.NUMBER
    assert cell_kind(True) is CellKind.BOOLEAN
    assert cell_kind("N/A") is CellKind.TEXT


def test_missing_is_not_the_same_as_invalid():
    assert is_missing(None)
    assert is_missing("")
    assert not is_missing("N/A")
    assert not is_missing(" ")
    assert not is_missing(0)


@pytest.mark.parametrize("text,expected", [
    ("12.5kg", 12.5),
    ("  -3e2x", -300.0),
    (".5", 0.5),
    ("+7", 7.0),
    ("1e", 1.0),
    ("0x10", 0.0),
])
def test_parse_float_prefix(text, expected):
    assert parse_float_prefix(text) == expected


def test_parse_float_prefix_without_number():
    assert parse_float_prefix("abc") is None
    assert parse_float_prefix("") is None
    assert math.isinf(parse_float_prefix("Infinity"))


def test_coerce_numeric_rejects_non_finite_and_booleans():
    assert coerce_numeric(float("inf")) is None
    assert coerce_numeric("-Infinity") is None
    assert coerce_numeric("inf") is None
    assert coerce_numeric(True) is None
    assert coerce_numeric(np.int64(4)) == 4.0
    assert coerce_numeric(" 42 ") == 42.0


def test_parse_cell_dynamic_typing():
    assert parse_cell("") is None
    assert parse_cell(None) is None
    assert parse_cell("42") == 42 and isinstance(parse_cell("42"), int)
    assert parse_cell("-7") == -7
    assert parse_cell("3.14") == 3.14
    assert parse_cell("1e3") == 1000.0
    assert parse_cell("TRUE") is True
    assert parse_cell("false") is False
    assert parse_cell("N/A") == "N/A"
    assert parse_cell("12abc") == "12abc"


def test_booleans_only_in_lower_or_upper_case():
    assert parse_cell("TRUE") is True
    assert parse_cell("FALSE") is False
    assert parse_cell("True") == "True"
    assert parse_cell("tRuE") == "tRuE"


def test_ints_wider_than_a_double_are_invalid():
    huge = parse_cell("1" + "0" * 400)
    assert isinstance(huge, int)
    assert coerce_numeric(huge) is None
    assert coerce_numeric(-huge) is None
    assert clean_numeric_array([1, huge, "2"]) == [1.0, 2.0]
