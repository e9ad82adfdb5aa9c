"""Error codes and exceptions raised by the rational library and evaluator."""

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Failure classes reported to the display boundary."""

    DIVIDE_BY_ZERO = 0
    DOMAIN = 1
    INDEFINITE = 2
    POSITIVE_INFINITY = 3
    NEGATIVE_INFINITY = 4
    INVALID_RANGE = 5
    OUT_OF_MEMORY = 6
    OVERFLOW = 7
    NO_RESULT = 8


class CalculatorError(Exception):
    """Base exception for all calculator errors."""

    code: ErrorCode = ErrorCode.NO_RESULT

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.message}: {self.value}"
        return self.message


class DivisionByZeroError(CalculatorError):
    """Raised when attempting to divide by zero."""

    code = ErrorCode.DIVIDE_BY_ZERO

    def __init__(self, numerator: Any) -> None:
        super().__init__("Division by zero", numerator)
        self.numerator = numerator


class DomainError(CalculatorError):
    """Raised when an operand lies outside a function's domain."""

    code = ErrorCode.DOMAIN

    def __init__(self, function: str, value: Any) -> None:
        super().__init__(f"{function} is undefined for this value", value)
        self.function = function


class InvalidInputError(DomainError):
    """Raised when input is invalid (NaN, Inf, wrong type)."""

    def __init__(self, value: Any, reason: str = "invalid input") -> None:
        CalculatorError.__init__(self, reason, value)
        self.function = None
        self.reason = reason


class OverflowError(CalculatorError):
    """Raised when a calculation results in overflow."""

    code = ErrorCode.OVERFLOW

    def __init__(self, operation: str, *operands: Any) -> None:
        super().__init__(f"Overflow in {operation}", operands)
        self.operation = operation
        self.operands = operands


class OutOfRangeError(CalculatorError):
    """Raised when a value is outside acceptable range."""

    code = ErrorCode.INVALID_RANGE

    def __init__(
        self, value: Any, min_val: float | None = None, max_val: float | None = None
    ) -> None:
        range_str = f"[{min_val}, {max_val}]"
        super().__init__(f"Value out of range {range_str}", value)
        self.min_val = min_val
        self.max_val = max_val
