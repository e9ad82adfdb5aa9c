"""Pytest configuration and shared fixtures."""

from fractions import Fraction

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
import os

profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


class RecordingDisplay:
    """Primary display that keeps every call it receives."""

    def __init__(self):
        self.calls = []

    def set_primary_display(self, text, is_error):
        self.calls.append((text, is_error))


@pytest.fixture
def context():
    """Provide a decimal, degree-mode context."""
    from scicalc import EvaluationContext

    return EvaluationContext()


@pytest.fixture
def integer_context():
    """Provide an integer-mode context with an 8-bit word."""
    from scicalc import EvaluationContext, NumWidth

    return EvaluationContext(integer_mode=True, radix=16, word_width=NumWidth.BYTE)


@pytest.fixture
def recording_display():
    return RecordingDisplay()


@pytest.fixture
def history_log():
    from scicalc import HistoryLog

    return HistoryLog()


@pytest.fixture
def driver(recording_display, history_log):
    """Provide an error display driver wired to inspectable collaborators."""
    from scicalc import ErrorDisplayDriver, StringResources

    return ErrorDisplayDriver(recording_display, history_log, StringResources())


@pytest.fixture
def evaluator(driver):
    """Provide an evaluator using the default precision settings."""
    from scicalc import ScientificFunctionEvaluator, Settings

    return ScientificFunctionEvaluator(driver, Settings())


@pytest.fixture
def calculator():
    """Provide a fresh ScientificCalculator instance."""
    from scicalc import ScientificCalculator

    return ScientificCalculator()


@pytest.fixture
def sample_rationals():
    """Provide a set of interesting test numbers."""
    return [
        Fraction(0),
        Fraction(1),
        Fraction(-1),
        Fraction(1, 2),
        Fraction(-1, 2),
        Fraction(100),
        Fraction(-100),
        Fraction(1, 3),
        Fraction(22, 7),
        Fraction(10**20),
        Fraction(1, 10**20),
    ]
