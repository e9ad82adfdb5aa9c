"""String resources for user-facing error text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from scicalc.exceptions import ErrorCode

# Resource id of the message for ErrorCode 0; codes are offsets from here.
IDS_ERRORS_FIRST = 99

DEFAULT_ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DIVIDE_BY_ZERO: "Cannot divide by zero",
    ErrorCode.DOMAIN: "Invalid input",
    ErrorCode.INDEFINITE: "Result is undefined",
    ErrorCode.POSITIVE_INFINITY: "Positive infinity",
    ErrorCode.NEGATIVE_INFINITY: "Negative infinity",
    ErrorCode.INVALID_RANGE: "Invalid range",
    ErrorCode.OUT_OF_MEMORY: "Not enough memory",
    ErrorCode.OVERFLOW: "Overflow",
    ErrorCode.NO_RESULT: "No result",
}


class StringLookup(Protocol):
    def get_string(self, resource_id: int) -> str: ...


class StringResources:
    """
    Resource table keyed by integer id.

    Built with the English error messages by default; pass ``strings`` to
    override or localise individual entries.
    """

    def __init__(self, strings: Mapping[int, str] | None = None) -> None:
        self._strings: dict[int, str] = {
            IDS_ERRORS_FIRST + code: text for code, text in DEFAULT_ERROR_MESSAGES.items()
        }
        if strings:
            self._strings.update(strings)

    def get_string(self, resource_id: int) -> str:
        """Return the text for ``resource_id``, or an empty string if unknown."""
        return self._strings.get(resource_id, "")

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._strings

    def __len__(self) -> int:
        return len(self._strings)


def error_resource_id(code: ErrorCode | int) -> int:
    return IDS_ERRORS_FIRST + int(code)


__all__ = [
    "DEFAULT_ERROR_MESSAGES",
    "IDS_ERRORS_FIRST",
    "StringLookup",
    "StringResources",
    "error_resource_id",
]
