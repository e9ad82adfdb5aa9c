"""Primary display sink and the error display driver."""

from __future__ import annotations

from typing import Protocol

from scicalc.context import EvaluationContext
from scicalc.exceptions import ErrorCode
from scicalc.history import HistoryCollector, HistoryLog
from scicalc.log import get_logger
from scicalc.resources import StringLookup, StringResources, error_resource_id

logger = get_logger()


class PrimaryDisplay(Protocol):
    def set_primary_display(self, text: str, is_error: bool) -> None: ...


class DisplayBuffer:
    """Primary display that remembers what it was last asked to show."""

    def __init__(self) -> None:
        self.text = "0"
        self.is_error = False
        self.updates = 0

    def set_primary_display(self, text: str, is_error: bool) -> None:
        self.text = text
        self.is_error = is_error
        self.updates += 1

    def __repr__(self) -> str:
        return f"DisplayBuffer(text={self.text!r}, is_error={self.is_error})"


class ErrorDisplayDriver:
    """
    Shows an error code to the user.

    The message is looked up at ``IDS_ERRORS_FIRST + code``, pushed to the
    primary display flagged as an error, and written over the current
    history line. The returned context always has its error flag set; only
    an explicit clear resets it.
    """

    def __init__(
        self,
        display: PrimaryDisplay | None = None,
        history: HistoryCollector | None = None,
        resources: StringLookup | None = None,
    ) -> None:
        self.display = display if display is not None else DisplayBuffer()
        self.history = history if history is not None else HistoryLog()
        self.resources = resources if resources is not None else StringResources()

    def message_for(self, code: ErrorCode | int) -> str:
        return self.resources.get_string(error_resource_id(code))

    def display_error(
        self, code: ErrorCode | int, context: EvaluationContext
    ) -> EvaluationContext:
        """
        Display ``code`` and return ``context`` with the error flag set.

        Args:
            code: Error code raised by the rational library
            context: Context at the time of the failure

        Returns:
            The context with ``error=True``
        """
        message = self.message_for(code)
        logger.debug("displaying error %s: %s", int(code), message)

        self.display.set_primary_display(message, True)
        self.history.clear_history_line(message)

        return context.evolve(error=True)
