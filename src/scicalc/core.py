"""Calculator session owning the ambient context."""

from __future__ import annotations

from fractions import Fraction

from scicalc.config import Settings
from scicalc.context import (
    AngleType,
    BinaryOperator,
    EvaluationContext,
    Operator,
    toggle_inverse,
)
from scicalc.display import DisplayBuffer, ErrorDisplayDriver
from scicalc.evaluator import Evaluation, ScientificFunctionEvaluator
from scicalc.history import HistoryLog
from scicalc.log import get_logger
from scicalc.resources import StringResources
from scicalc.validators import (
    RationalLike,
    validate_operator,
    validate_radix,
    validate_rational,
    validate_word_width,
)

logger = get_logger()


class ScientificCalculator:
    """
    A calculator session applying scientific functions to its current value.

    The session owns the evaluation context and is the only thing that
    changes it. Methods return ``self`` so calls can be chained.

    Example:
        >>> calc = ScientificCalculator(9)
        >>> calc.apply(Operator.SQRT).value
        Fraction(3, 1)
        >>> calc.set_integer_mode(True).set_word_width(8).set(0b10000001).value
        Fraction(129, 1)
        >>> calc.apply(Operator.ROTATE_LEFT).value
        Fraction(3, 1)
    """

    def __init__(
        self,
        initial_value: RationalLike = 0,
        context: EvaluationContext | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the session with a starting value.

        Args:
            initial_value: The initial value (default 0)
            context: Initial ambient state (defaults to decimal, degrees)
            settings: Precision settings for the rational library

        Raises:
            InvalidInputError: If initial_value is invalid
        """
        self._value = validate_rational(initial_value)
        self._context = context if context is not None else EvaluationContext()
        self.display = DisplayBuffer()
        self.history = HistoryLog()
        self.driver = ErrorDisplayDriver(self.display, self.history, StringResources())
        self.evaluator = ScientificFunctionEvaluator(self.driver, settings)
        self._last: Evaluation | None = None

    @property
    def value(self) -> Fraction:
        """Current calculator value."""
        return self._value

    @property
    def context(self) -> EvaluationContext:
        return self._context

    @property
    def is_error(self) -> bool:
        return self._context.error

    @property
    def last_evaluation(self) -> Evaluation | None:
        return self._last

    def apply(self, op: Operator | str) -> ScientificCalculator:
        """
        Apply a unary scientific operator to the current value.

        In integer mode the result is truncated and masked to the word
        width. Successful evaluations are recorded as history lines; a
        failure leaves the line cleared and annotated with the error text.
        Ignored while the error flag is set; call ``clear`` first.
        """
        if self._context.error:
            logger.debug("ignoring %s while in error state", op)
            return self

        op = validate_operator(op)
        self.history.add_token(f"{op.value}({self._value})")
        evaluation = self.evaluator.evaluate(self._value, op, self._context)
        self._last = evaluation
        self._context = evaluation.context
        if evaluation.ok:
            self._value = self._chop(evaluation.value)
            self.history.complete_line(str(self._value))
        else:
            self._value = evaluation.value
        return self

    def set(self, value: RationalLike) -> ScientificCalculator:
        """Set current value directly."""
        self._value = self._chop(validate_rational(value))
        return self

    def clear(self) -> ScientificCalculator:
        """Reset to zero and clear the error and inverse flags."""
        self._value = Fraction(0)
        self._context = self._context.evolve(
            error=False,
            inverse=False,
            pending_operator=BinaryOperator.NONE,
            last_value=Fraction(0),
        )
        self.display.set_primary_display("0", False)
        return self

    def toggle_inverse(self) -> ScientificCalculator:
        self._context = toggle_inverse(self._context)
        return self

    def set_angle_type(self, angle_type: AngleType) -> ScientificCalculator:
        self._context = self._context.evolve(angle_type=AngleType(angle_type))
        return self

    def set_integer_mode(self, enabled: bool) -> ScientificCalculator:
        self._context = self._context.evolve(integer_mode=bool(enabled))
        self._value = self._chop(self._value)
        return self

    def set_word_width(self, width: int) -> ScientificCalculator:
        """Select the word width; the value is masked to it in integer mode."""
        self._context = self._context.evolve(word_width=validate_word_width(width))
        self._value = self._chop(self._value)
        return self

    def set_radix(self, radix: int) -> ScientificCalculator:
        self._context = self._context.evolve(radix=validate_radix(radix))
        return self

    def set_pending_operator(
        self, op: BinaryOperator, last_value: RationalLike
    ) -> ScientificCalculator:
        """Record the binary operator waiting on ``last_value`` as its left operand."""
        self._context = self._context.evolve(
            pending_operator=BinaryOperator(op),
            last_value=validate_rational(last_value),
        )
        return self

    def _chop(self, value: Fraction) -> Fraction:
        if not self._context.integer_mode:
            return value
        return Fraction(int(value) & self._context.chop_mask)

    def __repr__(self) -> str:
        return (
            f"ScientificCalculator(value={self._value}, "
            f"error={self._context.error}, inverse={self._context.inverse})"
        )
