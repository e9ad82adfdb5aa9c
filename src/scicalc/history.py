"""History collector receiving calculation lines and error annotations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class HistoryCollector(Protocol):
    def clear_history_line(self, error_text: str) -> None: ...


@dataclass(frozen=True)
class HistoryEntry:
    """A completed line of the computation log."""

    expression: str
    result: str

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class HistoryLog:
    """
    In-memory history collector.

    Tokens accumulate on the current line until ``complete_line`` moves it
    into ``entries``. On error the current line is discarded and the error
    text is kept as its annotation.
    """

    def __init__(self) -> None:
        self._tokens: list[str] = []
        self._entries: list[HistoryEntry] = []
        self._annotation: str | None = None

    @property
    def current_line(self) -> str:
        return " ".join(self._tokens)

    @property
    def annotation(self) -> str | None:
        """Error text attached to the current line, if any."""
        return self._annotation

    @property
    def entries(self) -> list[HistoryEntry]:
        return self._entries.copy()

    def add_token(self, token: str) -> None:
        self._tokens.append(token)
        self._annotation = None

    def complete_line(self, result: str) -> HistoryEntry:
        entry = HistoryEntry(expression=self.current_line, result=result)
        self._entries.append(entry)
        self._tokens.clear()
        return entry

    def clear_history_line(self, error_text: str) -> None:
        self._tokens.clear()
        self._annotation = error_text

    def __len__(self) -> int:
        return len(self._entries)
