"""
Dimension Validator
===================
Turns the raw text of a width/height field into either a normalized integer
or a classified error.

Parsing is an explicit step with a tagged outcome: a number is an optional
sign, at least one digit and an optional fractional part, which is truncated
toward zero ("5.9" -> 5). Everything else is NOT_A_NUMBER.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from mazebuilder.model.bounds import DimensionBounds

# ASCII digits only; \d would also match other scripts
_NUMBER_RE = re.compile(r"^([+-]?)([0-9]+)(?:\.[0-9]*)?$")

# Longer integral parts are far outside any bounds and are clamped before int()
_MAX_DIGITS = 18
_CLAMPED = 10 ** _MAX_DIGITS

NOT_A_NUMBER_MESSAGE = "That's not a number."


class ErrorKind(Enum):
    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"


class Unparsed(Enum):
    """Tag for input that holds no valid number."""
    NOT_A_NUMBER = "not_a_number"


NOT_A_NUMBER = Unparsed.NOT_A_NUMBER


@dataclass(frozen=True)
class Parsed:
    value: int


ParsedDimension = Union[Parsed, Unparsed]


@dataclass(frozen=True)
class DimensionInput:
    raw: Optional[str]
    field_name: str


@dataclass(frozen=True)
class ValidationResult:
    field_name: str
    ok: bool
    minimum: int
    maximum: int
    normalized_value: Optional[int] = None
    error_kind: Optional[ErrorKind] = None


def parse_dimension(raw: Optional[str]) -> ParsedDimension:
    if raw is None:
        return NOT_A_NUMBER
    match = _NUMBER_RE.match(raw.strip())
    if match is None:
        return NOT_A_NUMBER
    sign = -1 if match.group(1) == "-" else 1
    digits = match.group(2).lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return Parsed(sign * _CLAMPED)
    # Dropping the fractional part truncates toward zero for both signs
    return Parsed(sign * int(digits))


def validate(field_name: str, raw_value: Optional[str], bounds: DimensionBounds) -> ValidationResult:
    """
    Validates one dimension field against its bounds.

    Args:
        field_name: "width" or "height".
        raw_value: Text exactly as typed by the user.
        bounds: The active bounds profile.

    Returns:
        A ValidationResult; ok results carry the truncated integer, failed
        results carry the error kind and the violated bounds.
    """
    minimum, maximum = bounds.for_field(field_name)
    parsed = parse_dimension(raw_value)

    if parsed is NOT_A_NUMBER:
        return ValidationResult(field_name, False, minimum, maximum, error_kind=ErrorKind.NOT_A_NUMBER)
    if parsed.value < minimum or parsed.value > maximum:
        return ValidationResult(field_name, False, minimum, maximum, error_kind=ErrorKind.OUT_OF_RANGE)
    return ValidationResult(field_name, True, minimum, maximum, normalized_value=parsed.value)


def validate_input(dimension: DimensionInput, bounds: DimensionBounds) -> ValidationResult:
    return validate(dimension.field_name, dimension.raw, bounds)


def validate_dimensions(
    raw_width: Optional[str],
    raw_height: Optional[str],
    bounds: DimensionBounds,
) -> tuple[ValidationResult, ValidationResult]:
    """Validates width then height. Both always run so every error is reported."""
    width = validate_input(DimensionInput(raw_width, "width"), bounds)
    height = validate_input(DimensionInput(raw_height, "height"), bounds)
    return width, height


def error_message(result: ValidationResult) -> Optional[str]:
    """Human readable message for a failed result, None for a valid one."""
    if result.ok:
        return None
    if result.error_kind is ErrorKind.NOT_A_NUMBER:
        return NOT_A_NUMBER_MESSAGE
    return (f"Please make sure the {result.field_name} is between "
            f"{result.minimum} and {result.maximum}.")
