"""Coercion outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Strategy(Enum):
    """Step of the coercion chain that produced a value, in chain order."""

    DEFAULT = auto()  # Caller's default, nothing converted
    IDENTITY = auto()  # Value already assignable
    TOKEN = auto()  # Structured-data token extracted itself
    ENUM_VALUE = auto()  # Underlying value of an enum member
    ENUM_MEMBER = auto()  # Enum member looked up by integer value
    ENUM_NAME = auto()  # Enum member parsed from text
    TARGET_CONVERTER = auto()  # Converter of the target type
    SOURCE_CONVERTER = auto()  # Converter of the value's type


@dataclass(slots=True, frozen=True)
class CoercionOutcome:
    """Result of a coercion attempt. Always carries a usable value.

    Attributes:
        value: Converted value, or the caller's default.
        strategy: Step that produced ``value`` (DEFAULT when nothing converted).
        failed_at: Step that raised before falling back, if any.
    """

    value: Any
    strategy: Strategy
    failed_at: Strategy | None = None

    @property
    def fell_back(self) -> bool:
        """True if ``value`` is the caller's default."""
        return self.strategy is Strategy.DEFAULT

    @classmethod
    def fallback(cls, default: Any, failed_at: Strategy | None = None) -> CoercionOutcome:
        """Outcome carrying the caller's default."""
        return cls(value=default, strategy=Strategy.DEFAULT, failed_at=failed_at)
