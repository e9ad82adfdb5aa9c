"""Unit tests for the scientific function evaluator."""

from fractions import Fraction

import pytest

from scicalc import (
    BinaryOperator,
    ErrorCode,
    EvaluationContext,
    Failure,
    InvalidInputError,
    NumWidth,
    Operator,
    Settings,
    Success,
    compute,
)


class TestCompute:
    """compute() is side-effect free and returns an outcome value."""

    def test_success(self, context):
        outcome = compute(Fraction(9), Operator.SQRT, context, Settings())
        assert outcome == Success(value=Fraction(3), context=context)

    def test_failure_carries_code(self, context):
        outcome = compute(Fraction(-9), Operator.SQRT, context, Settings())
        assert isinstance(outcome, Failure)
        assert outcome.code is ErrorCode.DOMAIN
        assert outcome.context == context

    def test_degrees_toggles_inverse_in_outcome(self, context):
        outcome = compute(Fraction("30.3025"), Operator.DEGREES, context, Settings())
        assert outcome.context.inverse is True
        assert outcome.value == 30 + Fraction(30, 60) + Fraction(25, 3600)


class TestEvaluate:
    def test_square_root_is_exact(self, evaluator, context):
        result = evaluator.evaluate(9, Operator.SQRT, context)
        assert result.ok
        assert result.value == 3
        assert result.context == context

    def test_accepts_operator_value_string(self, evaluator, context):
        assert evaluator.evaluate(4, "square", context).value == 16

    def test_callable(self, evaluator, context):
        assert evaluator(5, Operator.FACTORIAL, context).value == 120

    def test_rotate_left_in_byte_mode(self, evaluator, integer_context):
        result = evaluator.evaluate(0b10000001, Operator.ROTATE_LEFT, integer_context)
        assert result.value == 0b00000011

    def test_percent_with_add_pending(self, evaluator):
        context = EvaluationContext(pending_operator=BinaryOperator.ADD, last_value=Fraction(200))
        assert evaluator.evaluate(10, Operator.PERCENT, context).value == 20

    def test_trig_ignored_in_integer_mode(self, evaluator, integer_context):
        result = evaluator.evaluate(45, Operator.SIN, integer_context)
        assert result.value == 45
        assert result.ok

    def test_complement_in_integer_mode(self, evaluator):
        context = EvaluationContext(integer_mode=True, word_width=NumWidth.DWORD)
        assert evaluator.evaluate(0, Operator.COMPLEMENT, context).value == 0xFFFFFFFF

    def test_inverse_ln_is_exp(self, evaluator):
        context = EvaluationContext(inverse=True)
        assert evaluator.evaluate(0, Operator.LN, context).value == 1

    def test_does_not_mutate_context(self, evaluator, context):
        evaluator.evaluate(Fraction("30.3025"), Operator.DEGREES, context)
        assert context.inverse is False


class TestDegrees:
    def test_degrees_decodes_when_inverse_clear(self, evaluator, context):
        result = evaluator.evaluate(Fraction("30.3025"), Operator.DEGREES, context)
        assert result.value == 30 + Fraction(30, 60) + Fraction(25, 3600)
        assert result.context.inverse is True

    def test_degrees_encodes_when_inverse_set(self, evaluator):
        context = EvaluationContext(inverse=True)
        value = 30 + Fraction(30, 60) + Fraction(25, 3600)
        result = evaluator.evaluate(value, Operator.DEGREES, context)
        assert result.value == Fraction("30.3025")
        assert result.context.inverse is False

    def test_dms_does_not_toggle(self, evaluator, context):
        result = evaluator.evaluate(Fraction("30.3025"), Operator.DMS, context)
        assert result.context.inverse is False


class TestErrorBoundary:
    """Failures are converted to a display action and an identity result."""

    @pytest.mark.parametrize(
        ("operand", "op", "code"),
        [
            (Fraction(-4), Operator.SQRT, ErrorCode.DOMAIN),
            (Fraction(0), Operator.RECIPROCAL, ErrorCode.DIVIDE_BY_ZERO),
            (Fraction(0), Operator.LOG, ErrorCode.DOMAIN),
            (Fraction(-1), Operator.LN, ErrorCode.DOMAIN),
            (Fraction(-3), Operator.FACTORIAL, ErrorCode.DOMAIN),
            (Fraction(90), Operator.TAN, ErrorCode.DOMAIN),
            (Fraction(10001), Operator.POW10, ErrorCode.OVERFLOW),
        ],
    )
    def test_failure_returns_operand(self, evaluator, context, recording_display, operand, op, code):
        result = evaluator.evaluate(operand, op, context)

        assert result.value == operand
        assert result.error is code
        assert result.context.error is True
        assert len(recording_display.calls) == 1
        assert recording_display.calls[0][1] is True

    def test_message_and_history(self, evaluator, context, recording_display, history_log):
        history_log.add_token("0")
        history_log.add_token("1/x")

        evaluator.evaluate(0, Operator.RECIPROCAL, context)

        assert recording_display.calls == [("Cannot divide by zero", True)]
        assert history_log.current_line == ""
        assert history_log.annotation == "Cannot divide by zero"

    def test_arc_sine_outside_domain(self, evaluator, recording_display):
        context = EvaluationContext(inverse=True)
        result = evaluator.evaluate(2, Operator.SIN, context)
        assert result.value == 2
        assert recording_display.calls == [("Invalid input", True)]

    def test_success_does_not_touch_display(self, evaluator, context, recording_display):
        evaluator.evaluate(2, Operator.SQUARE, context)
        assert recording_display.calls == []

    def test_failure_logged_at_debug(self, evaluator, context, caplog):
        with caplog.at_level("DEBUG", logger="scicalc"):
            evaluator.evaluate(-1, Operator.SQRT, context)
        failures = [r for r in caplog.records if "DOMAIN" in r.getMessage()]
        assert [r.levelname for r in failures] == ["DEBUG"]

    def test_handled_failure_is_quiet_at_info(self, evaluator, context, caplog):
        with caplog.at_level("INFO", logger="scicalc"):
            evaluator.evaluate(-1, Operator.SQRT, context)
            evaluator.evaluate(0, Operator.RECIPROCAL, context)
        assert caplog.records == []

    def test_invalid_operator_raises(self, evaluator, context):
        with pytest.raises(InvalidInputError):
            evaluator.evaluate(1, "arcsecant", context)

    def test_invalid_operand_raises(self, evaluator, context):
        with pytest.raises(InvalidInputError):
            evaluator.evaluate(float("nan"), Operator.SQRT, context)
