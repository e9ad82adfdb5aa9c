"""Numeric settings for the rational library."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from scicalc.exceptions import InvalidInputError
from scicalc.validators import validate_range

DEFAULT_PRECISION = 32
DEFAULT_GUARD_DIGITS = 8
DEFAULT_MAX_EXPONENT = 9999


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidInputError(raw, f"{name} must be an integer") from e


@dataclass(frozen=True)
class Settings:
    """
    Precision limits shared by every transcendental computation.

    Attributes:
        precision: Significant decimal digits kept in rounded results
        guard_digits: Extra digits carried while computing with mpmath
        max_exponent: Largest decimal exponent a result may have
    """

    precision: int = DEFAULT_PRECISION
    guard_digits: int = DEFAULT_GUARD_DIGITS
    max_exponent: int = DEFAULT_MAX_EXPONENT

    def __post_init__(self) -> None:
        validate_range(self.precision, 1, 10_000)
        validate_range(self.guard_digits, 0, 1_000)
        validate_range(self.max_exponent, 1, 1_000_000)

    @property
    def working_digits(self) -> int:
        return self.precision + self.guard_digits

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``SCICALC_*`` environment variables."""
        return cls(
            precision=_env_int("SCICALC_PRECISION", DEFAULT_PRECISION),
            guard_digits=_env_int("SCICALC_GUARD_DIGITS", DEFAULT_GUARD_DIGITS),
            max_exponent=_env_int("SCICALC_MAX_EXPONENT", DEFAULT_MAX_EXPONENT),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()


__all__ = ["Settings", "get_settings"]
