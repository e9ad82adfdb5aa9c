"""Scientific function evaluator: operator dispatch and the error boundary."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from fractions import Fraction
from functools import partial

from scicalc import operations
from scicalc.config import Settings, get_settings
from scicalc.context import EvaluationContext, Operator, toggle_inverse
from scicalc.display import ErrorDisplayDriver
from scicalc.exceptions import CalculatorError, ErrorCode
from scicalc.log import get_logger
from scicalc.validators import RationalLike, validate_operator, validate_rational

logger = get_logger()

Transform = Callable[[Fraction, EvaluationContext, Settings], Fraction]

DISPATCH: dict[Operator, Transform] = {
    Operator.CHOP: operations.chop,
    Operator.COMPLEMENT: operations.complement,
    Operator.ROTATE_LEFT: operations.rotate_left,
    Operator.ROTATE_RIGHT: operations.rotate_right,
    Operator.PERCENT: operations.percent,
    Operator.SIN: partial(operations.circular, Operator.SIN),
    Operator.COS: partial(operations.circular, Operator.COS),
    Operator.TAN: partial(operations.circular, Operator.TAN),
    Operator.SINH: partial(operations.hyperbolic, Operator.SINH),
    Operator.COSH: partial(operations.hyperbolic, Operator.COSH),
    Operator.TANH: partial(operations.hyperbolic, Operator.TANH),
    Operator.RECIPROCAL: operations.reciprocal,
    Operator.SQUARE: operations.square,
    Operator.SQRT: operations.square_root,
    Operator.CUBE: operations.cube,
    Operator.CUBE_ROOT: operations.cube_root,
    Operator.LOG: operations.common_log,
    Operator.POW10: operations.power_of_ten,
    Operator.LN: operations.natural_log,
    Operator.FACTORIAL: operations.factorial,
    Operator.DEGREES: operations.dms,
    Operator.DMS: operations.dms,
}


@dataclass(frozen=True)
class Success:
    value: Fraction
    context: EvaluationContext


@dataclass(frozen=True)
class Failure:
    code: ErrorCode
    context: EvaluationContext
    error: CalculatorError


Outcome = Success | Failure


@dataclass(frozen=True)
class Evaluation:
    """
    Result of one operator evaluation.

    ``value`` is the original operand whenever ``error`` is set.
    """

    value: Fraction
    context: EvaluationContext
    error: ErrorCode | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def compute(
    rat: Fraction,
    op: Operator,
    context: EvaluationContext,
    settings: Settings | None = None,
) -> Outcome:
    """
    Apply ``op`` to ``rat`` without side effects.

    ``Operator.DEGREES`` first toggles the inverse flag and then performs the
    DMS conversion with the toggled flag; the toggled context is part of the
    outcome whether or not the conversion succeeds.
    """
    settings = settings if settings is not None else get_settings()

    if op is Operator.DEGREES:
        context = toggle_inverse(context)

    try:
        value = DISPATCH[op](rat, context, settings)
    except CalculatorError as e:
        return Failure(code=e.code, context=context, error=e)

    return Success(value=value, context=context)


class ScientificFunctionEvaluator:
    """
    Evaluates unary scientific operators at a single error boundary.

    Failures raised by the rational library never escape ``evaluate``: they
    are sent to the error display driver and the operand is handed back
    unchanged.

    Example:
        >>> evaluator = ScientificFunctionEvaluator()
        >>> evaluator.evaluate(9, Operator.SQRT, EvaluationContext()).value
        Fraction(3, 1)
    """

    def __init__(
        self,
        driver: ErrorDisplayDriver | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.driver = driver if driver is not None else ErrorDisplayDriver()
        self.settings = settings if settings is not None else get_settings()

    def evaluate(
        self, rat: RationalLike, op: Operator | str, context: EvaluationContext
    ) -> Evaluation:
        """
        Evaluate ``op`` against ``rat``.

        Args:
            rat: The operand
            op: Operator code
            context: Ambient calculator state

        Returns:
            The evaluation; on failure its value is the original operand and
            its context carries the error flag

        Raises:
            InvalidInputError: If the operand or operator is not valid input
        """
        operand = validate_rational(rat)
        op = validate_operator(op)

        logger.debug("evaluating %s on %s", op.value, operand)
        outcome = compute(operand, op, context, self.settings)

        if isinstance(outcome, Failure):
            logger.debug("%s failed with %s: %s", op.value, outcome.code.name, outcome.error)
            failed_context = self.driver.display_error(outcome.code, outcome.context)
            return Evaluation(value=operand, context=failed_context, error=outcome.code)

        return Evaluation(value=outcome.value, context=outcome.context)

    def __call__(
        self, rat: RationalLike, op: Operator | str, context: EvaluationContext
    ) -> Evaluation:
        return self.evaluate(rat, op, context)
