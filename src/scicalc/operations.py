"""Unary scientific transforms applied to a rational operand."""

import math
from fractions import Fraction

from scicalc import rational
from scicalc.config import Settings
from scicalc.context import BinaryOperator, EvaluationContext, Operator

HUNDRED = Fraction(100)

_CIRCULAR = {
    Operator.SIN: (rational.sin, rational.asin),
    Operator.COS: (rational.cos, rational.acos),
    Operator.TAN: (rational.tan, rational.atan),
}

_HYPERBOLIC = {
    Operator.SINH: (rational.sinh, rational.asinh),
    Operator.COSH: (rational.cosh, rational.acosh),
    Operator.TANH: (rational.tanh, rational.atanh),
}


def chop(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """Integer part, or the fractional part when the inverse flag is set."""
    return rational.frac(value) if context.inverse else rational.integer(value)


def complement(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """
    Bitwise complement.

    Properties:
        - Decimal: complement(x) == -(floor(x) + 1) outside integer mode
        - Self-inverse in integer mode: complement(complement(w)) == w

    In integer mode (or any non-decimal radix) the integer part is XORed with
    the all-ones mask of the current word width.
    """
    if context.radix == 10 and not context.integer_mode:
        return Fraction(-(math.floor(value) + 1))
    return rational.bitwise_xor(value, context.chop_mask)


def rotate_left(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """
    Rotate left by one bit within the word width.

    The most significant bit of the word wraps around to bit 0. Outside
    integer mode the operand is returned unchanged.

    Properties:
        - Inverse: rotate_right(rotate_left(w)) == w
    """
    if not context.integer_mode:
        return value

    width = int(context.word_width)
    bits = rational.to_uint64(value)
    msb = (bits >> (width - 1)) & 1
    bits = (bits << 1) | msb
    return Fraction(bits & context.chop_mask)


def rotate_right(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """Rotate right by one bit; bit 0 wraps around to the top of the word."""
    if not context.integer_mode:
        return value

    width = int(context.word_width)
    bits = rational.to_uint64(value)
    lsb = bits & 1
    bits = (bits >> 1) | (lsb << (width - 1))
    return Fraction(bits & context.chop_mask)


def percent(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """
    Percent relative to the pending binary operation.

    With multiply or divide pending, ``X op Y%`` means ``X op (Y / 100)``.
    Otherwise it means ``X op (X * Y / 100)``, so ``200 + 10%`` gives 220.
    """
    if context.pending_operator in (BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE):
        return value / HUNDRED
    return value * (context.last_value / HUNDRED)


def circular(
    op: Operator, value: Fraction, context: EvaluationContext, settings: Settings
) -> Fraction:
    """sin/cos/tan or their inverses in the context's angle unit."""
    if context.integer_mode:
        return value
    forward, inverse = _CIRCULAR[op]
    function = inverse if context.inverse else forward
    return function(value, context.angle_type, settings)


def hyperbolic(
    op: Operator, value: Fraction, context: EvaluationContext, settings: Settings
) -> Fraction:
    if context.integer_mode:
        return value
    forward, inverse = _HYPERBOLIC[op]
    function = inverse if context.inverse else forward
    return function(value, settings)


def reciprocal(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.invert(value)


def square(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.power(value, Fraction(2), settings)


def cube(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.power(value, Fraction(3), settings)


def square_root(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.root(value, 2, settings)


def cube_root(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.root(value, 3, settings)


def common_log(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.log10(value, settings)


def power_of_ten(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    return rational.power(Fraction(10), value, settings)


def natural_log(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """ln(x), or e ** x when the inverse flag is set."""
    if context.inverse:
        return rational.exp(value, settings)
    return rational.log(value, settings)


def factorial(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    # There is no inverse factorial; the flag is ignored.
    return rational.factorial(value, settings)


def dms(value: Fraction, context: EvaluationContext, settings: Settings) -> Fraction:
    """
    Convert between decimal degrees and packed degree-minute-second form.

    Without the inverse flag, decimal degrees are encoded as D.MMSS (base 60
    digits read off, then packed in base 100). With the inverse flag, a
    D.MMSS value is decoded back to decimal degrees. All steps are exact, so
    encoding followed by decoding returns the original value.

    Properties:
        - dms(30.3025, inverse) == 30 + 30/60 + 25/3600
    """
    if context.integer_mode:
        return value

    shift = 100 if context.inverse else 60

    degrees = rational.integer(value)
    minutes = (value - degrees) * shift
    seconds = minutes
    minutes = rational.integer(minutes)
    seconds = (seconds - minutes) * shift

    shift = 60 if context.inverse else 100
    seconds /= shift
    minutes = (minutes + seconds) / shift

    return degrees + minutes
