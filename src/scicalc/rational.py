"""
Rational arithmetic library.

Values are ``fractions.Fraction`` instances. Operations whose result is
rational (powers with integer exponents, roots of perfect powers, factorials
of integers, quadrant angles) are computed exactly. Everything else is
evaluated by mpmath with guard digits, rounded to ``Settings.precision``
significant decimal digits and converted back to an exact Fraction.

Every function raises a ``CalculatorError`` subclass on failure:

    - DomainError: operand outside the function's domain
    - DivisionByZeroError: reciprocal or negative power of zero
    - OverflowError: result magnitude reaches 10 ** (max_exponent + 1)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from fractions import Fraction
from functools import lru_cache

from mpmath import mp, mpc, mpf

from scicalc.config import Settings, get_settings
from scicalc.context import AngleType
from scicalc.exceptions import DivisionByZeroError, DomainError, OverflowError

UINT64_MASK = (1 << 64) - 1

# Largest operand bit count raised to an integer power exactly.
EXACT_POWER_BITS = 1 << 18

# Above this, n! overflows for every permitted max_exponent.
FACTORIAL_HARD_LIMIT = 10**7

LN10 = math.log(10)

_QUARTER_TURN = {
    AngleType.DEGREES: Fraction(90),
    AngleType.GRADIANS: Fraction(100),
}

_SIN_BY_QUADRANT = (Fraction(0), Fraction(1), Fraction(0), Fraction(-1))
_COS_BY_QUADRANT = (Fraction(1), Fraction(0), Fraction(-1), Fraction(0))
_TAN_BY_QUADRANT = (Fraction(0), None, Fraction(0), None)


def _resolve(settings: Settings | None) -> Settings:
    return settings if settings is not None else get_settings()


@lru_cache(maxsize=8)
def _overflow_limit(max_exponent: int) -> int:
    return 10 ** (max_exponent + 1)


def _check_magnitude(value: Fraction, name: str, settings: Settings, *operands) -> Fraction:
    limit = _overflow_limit(settings.max_exponent)
    if abs(value.numerator) >= limit * value.denominator:
        raise OverflowError(name, *operands)
    return value


def _log10_estimate(value: Fraction) -> float:
    """Approximate log10(|value|) without converting huge values to float."""
    return math.log10(abs(value.numerator)) - math.log10(value.denominator)


def _to_mpf(value: Fraction) -> mpf:
    return mp.mpf(value.numerator) / value.denominator


def _to_fraction(value, name: str, settings: Settings, *operands) -> Fraction:
    """Round an mpmath result to the working precision as an exact Fraction."""
    if isinstance(value, mpc):
        if value.imag != 0:
            raise DomainError(name, operands[0] if operands else None)
        value = value.real
    if mp.isnan(value):
        raise DomainError(name, operands[0] if operands else None)
    if mp.isinf(value):
        raise OverflowError(name, *operands)
    if value == 0:
        return Fraction(0)

    exponent = int(mp.floor(mp.log10(abs(value))))
    if exponent > settings.max_exponent:
        raise OverflowError(name, *operands)
    if exponent < -(settings.max_exponent + settings.precision):
        return Fraction(0)

    rounded = Fraction(mp.nstr(value, settings.precision))
    return _check_magnitude(rounded, name, settings, *operands)


def _approximate(
    name: str, compute: Callable[[], mpf], settings: Settings, *operands
) -> Fraction:
    with mp.workdps(settings.working_digits):
        return _to_fraction(compute(), name, settings, *operands)


def _iroot(value: int, degree: int) -> int:
    """Floor of the real ``degree``-th root of a non-negative integer."""
    if value < 2:
        return value
    if degree == 2:
        return math.isqrt(value)
    if degree >= value.bit_length():
        # value < 2 ** degree, so the root lies in [1, 2).
        return 1
    x = 1 << -(-value.bit_length() // degree)
    while True:
        y = ((degree - 1) * x + value // x ** (degree - 1)) // degree
        if y >= x:
            return x
        x = y


def _exact_root(value: Fraction, degree: int) -> Fraction | None:
    """Return the rational ``degree``-th root of a positive value, if any."""
    # An integer n > 1 can only be a perfect q-th power when q <= log2(n).
    for part in (value.numerator, value.denominator):
        if part > 1 and degree > part.bit_length():
            return None
    num = _iroot(value.numerator, degree)
    if num**degree != value.numerator:
        return None
    den = _iroot(value.denominator, degree)
    if den**degree != value.denominator:
        return None
    return Fraction(num, den)


def _exact_log10(value: Fraction) -> Fraction | None:
    if value.numerator == 1:
        target, sign = value.denominator, -1
    elif value.denominator == 1:
        target, sign = value.numerator, 1
    else:
        return None
    k = round(math.log10(target))
    if 10**k != target:
        return None
    return Fraction(sign * k)


# Truncation and integer conversion


def integer(value: Fraction) -> Fraction:
    """Integer part, truncated toward zero."""
    return Fraction(math.trunc(value))


def frac(value: Fraction) -> Fraction:
    """Fractional part; carries the sign of ``value``."""
    return value - integer(value)


def to_uint64(value: Fraction) -> int:
    """Integer part as an unsigned 64-bit value (two's complement wrap)."""
    return math.trunc(value) & UINT64_MASK


def bitwise_xor(value: Fraction, mask: int) -> Fraction:
    return Fraction(math.trunc(value) ^ mask)


# Powers, roots, reciprocal


def invert(value: Fraction) -> Fraction:
    if value == 0:
        raise DivisionByZeroError(Fraction(1))
    return 1 / value


def power(
    base: Fraction, exponent: Fraction, settings: Settings | None = None
) -> Fraction:
    """
    Raise ``base`` to a rational ``exponent``.

    Integer exponents are exact. A rational exponent p/q is exact whenever
    the q-th root of ``base`` is rational; otherwise the result is rounded.

    Raises:
        DivisionByZeroError: zero raised to a negative power
        DomainError: negative base with an even-denominator exponent
        OverflowError: result too large
    """
    settings = _resolve(settings)
    base = Fraction(base)
    exponent = Fraction(exponent)

    if base == 0:
        if exponent < 0:
            raise DivisionByZeroError(base)
        return Fraction(1) if exponent == 0 else Fraction(0)

    if exponent.denominator == 1:
        return _integer_power(base, exponent.numerator, settings)

    if base < 0:
        if exponent.denominator % 2 == 0:
            raise DomainError("power", base)
        magnitude = power(-base, exponent, settings)
        return -magnitude if exponent.numerator % 2 else magnitude

    estimate = exponent * Fraction(_log10_estimate(base))
    if estimate > settings.max_exponent + 2:
        raise OverflowError("exponentiation", base, exponent)

    root_value = _exact_root(base, exponent.denominator)
    if root_value is not None:
        return _integer_power(root_value, exponent.numerator, settings)

    return _approximate(
        "exponentiation",
        lambda: mp.power(_to_mpf(base), _to_mpf(exponent)),
        settings,
        base,
        exponent,
    )


def _integer_power(base: Fraction, exponent: int, settings: Settings) -> Fraction:
    if exponent == 0:
        return Fraction(1)
    if abs(base) == 1:
        return base**exponent

    estimate = _log10_estimate(base) * exponent
    if estimate > settings.max_exponent + 2:
        raise OverflowError("exponentiation", base, exponent)

    size = abs(exponent) * max(base.numerator.bit_length(), base.denominator.bit_length())
    if size > EXACT_POWER_BITS:
        return _approximate(
            "exponentiation",
            lambda: mp.power(_to_mpf(base), exponent),
            settings,
            base,
            exponent,
        )

    return _check_magnitude(base**exponent, "exponentiation", settings, base, exponent)


def root(value: Fraction, degree: int, settings: Settings | None = None) -> Fraction:
    """Principal real ``degree``-th root."""
    settings = _resolve(settings)
    value = Fraction(value)

    if value == 0:
        return Fraction(0)
    if value < 0:
        if degree % 2 == 0:
            raise DomainError("root", value)
        return -root(-value, degree, settings)

    exact = _exact_root(value, degree)
    if exact is not None:
        return exact

    return _approximate(
        "root", lambda: mp.root(_to_mpf(value), degree), settings, value
    )


# Logarithms and exponentials


def log(value: Fraction, settings: Settings | None = None) -> Fraction:
    """Natural logarithm."""
    settings = _resolve(settings)
    if value <= 0:
        raise DomainError("ln", value)
    if value == 1:
        return Fraction(0)
    return _approximate("ln", lambda: mp.log(_to_mpf(value)), settings, value)


def log10(value: Fraction, settings: Settings | None = None) -> Fraction:
    """Common (base 10) logarithm; exact for powers of ten."""
    settings = _resolve(settings)
    if value <= 0:
        raise DomainError("log", value)
    exact = _exact_log10(value)
    if exact is not None:
        return exact
    return _approximate("log", lambda: mp.log10(_to_mpf(value)), settings, value)


def exp(value: Fraction, settings: Settings | None = None) -> Fraction:
    """e raised to ``value``."""
    settings = _resolve(settings)
    if value == 0:
        return Fraction(1)
    if value > (settings.max_exponent + 1) * LN10:
        raise OverflowError("exp", value)
    if value < -(settings.max_exponent + settings.precision + 1) * LN10:
        return Fraction(0)
    return _approximate("exp", lambda: mp.exp(_to_mpf(value)), settings, value)


# Circular functions


def _quadrant(value: Fraction, angle_type: AngleType) -> int | None:
    """Quadrant index (0-3) when ``value`` is an exact multiple of a right angle."""
    quarter = _QUARTER_TURN.get(angle_type)
    if quarter is None:
        return 0 if value == 0 else None
    turns = value / quarter
    if turns.denominator != 1:
        return None
    return turns.numerator % 4


def _reduce_angle(value: Fraction, angle_type: AngleType) -> Fraction:
    quarter = _QUARTER_TURN.get(angle_type)
    if quarter is None:
        return value
    return value % (4 * quarter)


def _to_radians(value: Fraction, angle_type: AngleType) -> mpf:
    angle = _to_mpf(_reduce_angle(value, angle_type))
    if angle_type is AngleType.DEGREES:
        return angle * mp.pi / 180
    if angle_type is AngleType.GRADIANS:
        return angle * mp.pi / 200
    return angle


def _from_radians(angle: mpf, angle_type: AngleType) -> mpf:
    if angle_type is AngleType.DEGREES:
        return angle * 180 / mp.pi
    if angle_type is AngleType.GRADIANS:
        return angle * 200 / mp.pi
    return angle


def _angle_bits(angle: Fraction, settings: Settings) -> int:
    """Binary precision that keeps ``angle`` exact enough to reduce mod 2*pi."""
    magnitude = max(angle.numerator.bit_length() - angle.denominator.bit_length(), 0)
    return magnitude + math.ceil(settings.working_digits * math.log2(10)) + 16


def _circular(
    name: str,
    function: Callable[[mpf], mpf],
    value: Fraction,
    angle_type: AngleType,
    settings: Settings,
) -> Fraction:
    reduced = _reduce_angle(value, angle_type)
    with mp.workprec(_angle_bits(reduced, settings)):
        return _to_fraction(function(_to_radians(value, angle_type)), name, settings, value)


def sin(value: Fraction, angle_type: AngleType, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    quadrant = _quadrant(value, angle_type)
    if quadrant is not None:
        return _SIN_BY_QUADRANT[quadrant]
    return _circular("sin", mp.sin, value, angle_type, settings)


def cos(value: Fraction, angle_type: AngleType, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    quadrant = _quadrant(value, angle_type)
    if quadrant is not None:
        return _COS_BY_QUADRANT[quadrant]
    return _circular("cos", mp.cos, value, angle_type, settings)


def tan(value: Fraction, angle_type: AngleType, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    quadrant = _quadrant(value, angle_type)
    if quadrant is not None:
        result = _TAN_BY_QUADRANT[quadrant]
        if result is None:
            raise DomainError("tan", value)
        return result
    return _circular("tan", mp.tan, value, angle_type, settings)


def asin(value: Fraction, angle_type: AngleType, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if abs(value) > 1:
        raise DomainError("asin", value)
    if value == 0:
        return Fraction(0)
    return _approximate(
        "asin",
        lambda: _from_radians(mp.asin(_to_mpf(value)), angle_type),
        settings,
        value,
    )


def acos(value: Fraction, angle_type: AngleType, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if abs(value) > 1:
        raise DomainError("acos", value)
    if value == 1:
        return Fraction(0)
    return _approximate(
        "acos",
        lambda: _from_radians(mp.acos(_to_mpf(value)), angle_type),
        settings,
        value,
    )


def atan(value: Fraction, angle_type: AngleType, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if value == 0:
        return Fraction(0)
    return _approximate(
        "atan",
        lambda: _from_radians(mp.atan(_to_mpf(value)), angle_type),
        settings,
        value,
    )


# Hyperbolic functions


def _check_hyperbolic_range(name: str, value: Fraction, settings: Settings) -> None:
    if abs(value) > (settings.max_exponent + 1) * LN10 + 1:
        raise OverflowError(name, value)


def sinh(value: Fraction, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if value == 0:
        return Fraction(0)
    _check_hyperbolic_range("sinh", value, settings)
    return _approximate("sinh", lambda: mp.sinh(_to_mpf(value)), settings, value)


def cosh(value: Fraction, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if value == 0:
        return Fraction(1)
    _check_hyperbolic_range("cosh", value, settings)
    return _approximate("cosh", lambda: mp.cosh(_to_mpf(value)), settings, value)


def tanh(value: Fraction, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if value == 0:
        return Fraction(0)
    if abs(value) > (settings.precision + settings.guard_digits) * LN10:
        return Fraction(1 if value > 0 else -1)
    return _approximate("tanh", lambda: mp.tanh(_to_mpf(value)), settings, value)


def asinh(value: Fraction, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if value == 0:
        return Fraction(0)
    return _approximate("asinh", lambda: mp.asinh(_to_mpf(value)), settings, value)


def acosh(value: Fraction, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if value < 1:
        raise DomainError("acosh", value)
    if value == 1:
        return Fraction(0)
    return _approximate("acosh", lambda: mp.acosh(_to_mpf(value)), settings, value)


def atanh(value: Fraction, settings: Settings | None = None) -> Fraction:
    settings = _resolve(settings)
    if abs(value) >= 1:
        raise DomainError("atanh", value)
    if value == 0:
        return Fraction(0)
    return _approximate("atanh", lambda: mp.atanh(_to_mpf(value)), settings, value)


# Factorial


def factorial(value: Fraction, settings: Settings | None = None) -> Fraction:
    """
    Factorial, extended to non-integers as Gamma(value + 1).

    Raises:
        DomainError: negative integers, where Gamma has poles
        OverflowError: result too large
    """
    settings = _resolve(settings)

    if value.denominator == 1:
        n = value.numerator
        if n < 0:
            raise DomainError("factorial", value)
        if n > FACTORIAL_HARD_LIMIT:
            raise OverflowError("factorial", value)
        if math.lgamma(n + 1) / LN10 >= settings.max_exponent + 1:
            raise OverflowError("factorial", value)
        return _check_magnitude(
            Fraction(math.factorial(n)), "factorial", settings, value
        )

    if value > FACTORIAL_HARD_LIMIT:
        raise OverflowError("factorial", value)
    return _approximate(
        "factorial", lambda: mp.gamma(_to_mpf(value) + 1), settings, value
    )


__all__ = [
    "UINT64_MASK",
    "acos",
    "acosh",
    "asin",
    "asinh",
    "atan",
    "atanh",
    "bitwise_xor",
    "cos",
    "cosh",
    "exp",
    "factorial",
    "frac",
    "integer",
    "invert",
    "log",
    "log10",
    "power",
    "root",
    "sin",
    "sinh",
    "tan",
    "tanh",
    "to_uint64",
]
