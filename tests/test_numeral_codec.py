from __future__ import annotations

import pytest

from calc_errors import InvalidBaseError, InvalidDigitError, OutOfRangeError
from numeral_codec import (
    MAGNITUDE_MASK,
    digit_char,
    digit_value,
    format_magnitude,
    is_digit_for_base,
    parse_magnitude,
)


def test_digit_value_is_case_insensitive():
    assert digit_value("0") == 0
    assert digit_value("9") == 9
    assert digit_value("a") == digit_value("A") == 10
    assert digit_value("z") == digit_value("Z") == 35


@pytest.mark.parametrize("ch", ["", "+", " ", "é", "²", ":"])
def test_digit_value_rejects_non_digits(ch):
    assert digit_value(ch) is None


def test_digit_char_renders_uppercase_letters():
    assert digit_char(7) == "7"
    assert digit_char(15) == "F"
    assert digit_char(35) == "Z"
    with pytest.raises(ValueError):
        digit_char(36)


def test_is_digit_for_base_respects_radix():
    assert is_digit_for_base("1", 2)
    assert not is_digit_for_base("2", 2)
    assert is_digit_for_base("f", 16)
    assert not is_digit_for_base("g", 16)


def test_parse_magnitude_known_values():
    assert parse_magnitude("FF", 16) == 255
    assert parse_magnitude("ff", 16) == 255
    assert parse_magnitude("101", 2) == 5
    assert parse_magnitude("Z", 36) == 35
    assert parse_magnitude("000", 10) == 0


def test_parse_magnitude_rejects_bad_input():
    with pytest.raises(InvalidDigitError):
        parse_magnitude("", 10)
    with pytest.raises(InvalidDigitError):
        parse_magnitude("12", 2)
    with pytest.raises(InvalidDigitError):
        parse_magnitude("1-2", 10)
    with pytest.raises(InvalidBaseError):
        parse_magnitude("1", 37)
    with pytest.raises(InvalidBaseError):
        parse_magnitude("1", 1)


def test_parse_magnitude_wraps_at_64_bits():
    assert parse_magnitude("F" * 16, 16) == MAGNITUDE_MASK
    # 2**64 da la vuelta a 0
    assert parse_magnitude("1" + "0" * 16, 16) == 0
    assert parse_magnitude("1" + "0" * 64 + "1", 2) == 1


def test_format_magnitude_minimal_representation():
    assert format_magnitude(0, 2) == "0"
    assert format_magnitude(255, 16) == "FF"
    assert format_magnitude(255, 2) == "11111111"
    assert format_magnitude(35, 36) == "Z"
    assert format_magnitude(MAGNITUDE_MASK, 16) == "F" * 16


def test_format_magnitude_rejects_out_of_range():
    with pytest.raises(OutOfRangeError):
        format_magnitude(-1, 10)
    with pytest.raises(OutOfRangeError):
        format_magnitude(MAGNITUDE_MASK + 1, 10)
    with pytest.raises(InvalidBaseError):
        format_magnitude(5, 0)


@pytest.mark.parametrize("value", [0, 1, 35, 36, 2**53 - 1, 2**63, MAGNITUDE_MASK])
def test_format_then_parse_restores_value_in_every_base(value):
    for base in range(2, 37):
        assert parse_magnitude(format_magnitude(value, base), base) == value
