import pytest

from mazebuilder.model.validation import (
    NOT_A_NUMBER, DimensionInput, ErrorKind, Parsed, error_message, parse_dimension, validate,
    validate_dimensions, validate_input,
)


@pytest.mark.parametrize("raw, expected", [
    ("25", 25),
    (" 7 ", 7),
    ("5.9", 5),
    ("7.", 7),
    ("+12", 12),
    ("-4", -4),
    ("-3.7", -3),
])
def test_parse_accepts_numbers(raw, expected):
    assert parse_dimension(raw) == Parsed(expected)


@pytest.mark.parametrize("raw", [
    "", "   ", "abc", "5abc", "1e3", ".5", "--3", "3 4", None,
    "\u0662\u0665",  # Arabic-Indic 25
    "\uff12\uff15",  # fullwidth 25
    "1\u0660",
])
def test_parse_rejects_non_numbers(raw):
    assert parse_dimension(raw) is NOT_A_NUMBER


def test_valid_value_is_normalized(classic_bounds):
    result = validate("width", "25", classic_bounds)
    assert result.ok
    assert result.normalized_value == 25
    assert result.error_kind is None


def test_fraction_is_truncated(classic_bounds):
    result = validate("height", "5.9", classic_bounds)
    assert result.ok
    assert result.normalized_value == 5


@pytest.mark.parametrize("raw", ["3", "52"])
def test_bounds_are_inclusive(classic_bounds, raw):
    assert validate("width", raw, classic_bounds).ok


@pytest.mark.parametrize("raw", ["2", "53", "0", "-5", "1000"])
def test_out_of_range(classic_bounds, raw):
    result = validate("width", raw, classic_bounds)
    assert not result.ok
    assert result.error_kind is ErrorKind.OUT_OF_RANGE
    assert result.normalized_value is None
    assert (result.minimum, result.maximum) == (3, 52)


def test_huge_numbers_are_out_of_range(classic_bounds):
    for raw in ("9" * 5000, "-" + "9" * 5000, "1" + "0" * 30 + ".5"):
        result = validate("width", raw, classic_bounds)
        assert result.error_kind is ErrorKind.OUT_OF_RANGE
        assert error_message(result) == "Please make sure the width is between 3 and 52."


def test_leading_zeros_do_not_count_as_digits():
    assert parse_dimension("0" * 40 + "25") == Parsed(25)
    assert parse_dimension("-" + "0" * 40) == Parsed(0)


def test_height_uses_height_bounds(classic_bounds):
    assert validate("height", "40", classic_bounds).error_kind is ErrorKind.OUT_OF_RANGE
    assert validate("width", "40", classic_bounds).ok


@pytest.mark.parametrize("raw", ["abc", "", "twelve"])
def test_not_a_number(classic_bounds, raw):
    result = validate("width", raw, classic_bounds)
    assert not result.ok
    assert result.error_kind is ErrorKind.NOT_A_NUMBER


def test_every_integer_in_range_is_accepted(classic_bounds):
    for value in range(classic_bounds.min_height, classic_bounds.max_height + 1):
        assert validate("height", str(value), classic_bounds).normalized_value == value


def test_validate_input_uses_field_name(wide_bounds):
    result = validate_input(DimensionInput("119", "width"), wide_bounds)
    assert result.ok and result.field_name == "width"


def test_both_fields_are_validated(classic_bounds):
    width, height = validate_dimensions("abc", "99", classic_bounds)
    assert width.error_kind is ErrorKind.NOT_A_NUMBER
    assert height.error_kind is ErrorKind.OUT_OF_RANGE


def test_error_messages(classic_bounds):
    assert error_message(validate("width", "x", classic_bounds)) == "That's not a number."
    assert error_message(validate("height", "99", classic_bounds)) == \
        "Please make sure the height is between 3 and 33."
    assert error_message(validate("height", "9", classic_bounds)) is None
