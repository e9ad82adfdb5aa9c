"""Operator codes and the ambient evaluation context."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from fractions import Fraction


class Operator(Enum):
    """Unary scientific operators understood by the evaluator."""

    CHOP = "chop"
    COMPLEMENT = "complement"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    PERCENT = "percent"
    SIN = "sin"
    SINH = "sinh"
    COS = "cos"
    COSH = "cosh"
    TAN = "tan"
    TANH = "tanh"
    RECIPROCAL = "reciprocal"
    SQUARE = "square"
    SQRT = "sqrt"
    CUBE = "cube"
    CUBE_ROOT = "cube_root"
    LOG = "log"
    POW10 = "pow10"
    LN = "ln"
    FACTORIAL = "factorial"
    DEGREES = "degrees"
    DMS = "dms"


class BinaryOperator(Enum):
    """Binary operator pending on the left-hand operand."""

    NONE = "none"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    POWER = "power"
    ROOT = "root"
    AND = "and"
    OR = "or"
    XOR = "xor"
    LEFT_SHIFT = "left_shift"
    RIGHT_SHIFT = "right_shift"


class AngleType(Enum):
    """Unit used by the circular trigonometric functions."""

    DEGREES = "deg"
    RADIANS = "rad"
    GRADIANS = "grad"


class NumWidth(IntEnum):
    """Word widths available in integer mode, in bits."""

    QWORD = 64
    DWORD = 32
    WORD = 16
    BYTE = 8


# All-ones mask for each word width.
CHOP_MASKS: dict[NumWidth, int] = {width: (1 << width) - 1 for width in NumWidth}

RADIXES = (2, 8, 10, 16)


@dataclass(frozen=True)
class EvaluationContext:
    """
    Calculator state read by the evaluator.

    The context is immutable. Anything that changes it (the inverse toggle
    performed by ``Operator.DEGREES``, the error flag set by the display
    driver) hands back a new instance.
    """

    angle_type: AngleType = AngleType.DEGREES
    integer_mode: bool = False
    radix: int = 10
    word_width: NumWidth = NumWidth.QWORD
    inverse: bool = False
    pending_operator: BinaryOperator = BinaryOperator.NONE
    last_value: Fraction = field(default_factory=Fraction)
    error: bool = False

    @property
    def chop_mask(self) -> int:
        """All-ones mask for the current word width."""
        return CHOP_MASKS[self.word_width]

    def evolve(self, **changes) -> EvaluationContext:
        """Return a copy of this context with ``changes`` applied."""
        return replace(self, **changes)


def toggle_inverse(context: EvaluationContext) -> EvaluationContext:
    """Flip the inverse-function flag, as the ``Inv`` key does."""
    return context.evolve(inverse=not context.inverse)
