"""
Scientific function evaluation over exact rationals.

This package provides:
- A rational arithmetic library (exact where possible, correctly rounded otherwise)
- The scientific function evaluator with a single error boundary
- Error display, history and string-resource collaborators
- A calculator session that owns the ambient evaluation context
"""

from scicalc.config import Settings, get_settings
from scicalc.context import (
    CHOP_MASKS,
    AngleType,
    BinaryOperator,
    EvaluationContext,
    NumWidth,
    Operator,
    toggle_inverse,
)
from scicalc.core import ScientificCalculator
from scicalc.display import DisplayBuffer, ErrorDisplayDriver, PrimaryDisplay
from scicalc.evaluator import (
    Evaluation,
    Failure,
    ScientificFunctionEvaluator,
    Success,
    compute,
)
from scicalc.exceptions import (
    CalculatorError,
    DivisionByZeroError,
    DomainError,
    ErrorCode,
    InvalidInputError,
    OutOfRangeError,
    OverflowError,
)
from scicalc.history import HistoryCollector, HistoryEntry, HistoryLog
from scicalc.resources import IDS_ERRORS_FIRST, StringResources
from scicalc.validators import (
    validate_operator,
    validate_radix,
    validate_range,
    validate_rational,
    validate_word_width,
)

__all__ = [
    "CHOP_MASKS",
    "IDS_ERRORS_FIRST",
    "AngleType",
    "BinaryOperator",
    "CalculatorError",
    "DisplayBuffer",
    "DivisionByZeroError",
    "DomainError",
    "ErrorCode",
    "ErrorDisplayDriver",
    "Evaluation",
    "EvaluationContext",
    "Failure",
    "HistoryCollector",
    "HistoryEntry",
    "HistoryLog",
    "InvalidInputError",
    "NumWidth",
    "Operator",
    "OutOfRangeError",
    "OverflowError",
    "PrimaryDisplay",
    "ScientificCalculator",
    "ScientificFunctionEvaluator",
    "Settings",
    "StringResources",
    "Success",
    "compute",
    "get_settings",
    "toggle_inverse",
    "validate_operator",
    "validate_radix",
    "validate_range",
    "validate_rational",
    "validate_word_width",
]

__version__ = "0.1.0"
