from decimal import Decimal

import pytest

from mixinkit.number import (
    ZERO,
    Integer,
    integer_from_bytes,
    integer_from_decimal,
    integer_from_json,
    integer_from_string,
    new_integer,
)


def test_whole_number_formatting():
    assert str(new_integer(1)) == "1.00000000"


def test_small_value_formatting():
    assert str(integer_from_bytes(b"\x7b")) == "0.00000123"


def test_zero_has_empty_bytes():
    assert ZERO.to_bytes() == b""


def test_bytes_round_trip():
    value = new_integer(5)
    assert integer_from_bytes(value.to_bytes()) == value


def test_string_round_trip_preserves_value():
    value = integer_from_string("12.345")
    assert Decimal(value.to_json()) == Decimal("12.345")
    assert integer_from_json(value.to_json()) == value


def test_decimal_and_string_agree():
    assert integer_from_decimal(Decimal("3.5")) == integer_from_string("3.5")
    assert integer_from_decimal(2) == new_integer(2)


def test_rounding_half_away_from_zero():
    assert integer_from_string("0.000000015") == integer_from_string("0.00000002")
    assert integer_from_string("0.000000014") == integer_from_string("0.00000001")


def test_ordering():
    assert new_integer(1) < new_integer(2)
    assert integer_from_string("0.5") < new_integer(1)


@pytest.mark.parametrize("text", ["0", "-1", "abc", "NaN"])
def test_invalid_strings_raise(text):
    with pytest.raises(ValueError):
        integer_from_string(text)


def test_non_positive_decimal_raises():
    with pytest.raises(ValueError):
        integer_from_decimal(Decimal("-1"))
    with pytest.raises(ValueError):
        integer_from_decimal(Decimal("0"))


def test_negative_value_rejected():
    with pytest.raises(ValueError):
        Integer(-1)


def test_new_integer_range():
    with pytest.raises(ValueError):
        new_integer(-1)