"""Input validation and coercion with strict type checking."""

import math
from decimal import Decimal
from fractions import Fraction
from typing import TypeVar

from scicalc.context import RADIXES, NumWidth, Operator
from scicalc.exceptions import InvalidInputError, OutOfRangeError

T = TypeVar("T", int, float, Fraction)

RationalLike = int | float | Fraction | Decimal | str


def validate_rational(value: RationalLike) -> Fraction:
    """
    Coerce a value into an exact ``Fraction``.

    Floats are converted exactly (no decimal rounding); strings are parsed
    with ``Fraction``'s own grammar ("1/3", "2.5", "1e-3").

    Args:
        value: The value to validate

    Returns:
        The value as a Fraction

    Raises:
        InvalidInputError: If value is NaN, Inf, or not a number
    """
    if isinstance(value, Fraction):
        return value

    if isinstance(value, bool):
        raise InvalidInputError(value, "Expected number, got bool")

    if isinstance(value, int):
        return Fraction(value)

    if isinstance(value, float):
        if math.isnan(value):
            raise InvalidInputError(value, "NaN is not allowed")
        if math.isinf(value):
            raise InvalidInputError(value, "Infinity is not allowed")
        return Fraction(value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidInputError(value, "Non-finite decimal is not allowed")
        return Fraction(value)

    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except (ValueError, ZeroDivisionError) as e:
            raise InvalidInputError(value, f"Cannot parse rational: {e}") from e

    raise InvalidInputError(value, f"Expected number, got {type(value).__name__}")


def validate_range(
    value: T,
    min_val: float | None = None,
    max_val: float | None = None,
    inclusive: bool = True,
) -> T:
    """
    Validate that a value is within a specified range.

    Args:
        value: The value to validate
        min_val: Minimum allowed value (None for no limit)
        max_val: Maximum allowed value (None for no limit)
        inclusive: Whether bounds are inclusive

    Returns:
        The validated value

    Raises:
        OutOfRangeError: If value is outside the range
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Fraction)):
        raise InvalidInputError(value, f"Expected number, got {type(value).__name__}")

    if min_val is not None:
        if inclusive and value < min_val:
            raise OutOfRangeError(value, min_val, max_val)
        if not inclusive and value <= min_val:
            raise OutOfRangeError(value, min_val, max_val)

    if max_val is not None:
        if inclusive and value > max_val:
            raise OutOfRangeError(value, min_val, max_val)
        if not inclusive and value >= max_val:
            raise OutOfRangeError(value, min_val, max_val)

    return value


def validate_word_width(value: int) -> NumWidth:
    """Return the ``NumWidth`` for a bit count, or raise ``OutOfRangeError``."""
    try:
        return NumWidth(value)
    except ValueError as e:
        raise OutOfRangeError(value, min(NumWidth), max(NumWidth)) from e


def validate_radix(value: int) -> int:
    if value not in RADIXES:
        raise OutOfRangeError(value, min(RADIXES), max(RADIXES))
    return value


def validate_operator(value: Operator | str) -> Operator:
    """Resolve an operator code, accepting either the enum or its value."""
    if isinstance(value, Operator):
        return value
    try:
        return Operator(value)
    except ValueError as e:
        raise InvalidInputError(value, "Unknown operator") from e
