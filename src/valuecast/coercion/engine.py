"""Coercion engine: best-effort conversion of any value to a target type.

Usage:
    engine = CoercionEngine()
    engine.coerce("42", int)                  # 42
    engine.coerce_or_default("abc", int, -1)  # -1
    engine.coerce(2, Color)                   # Color.GREEN
    engine.is_convertible("2024-01-31", date) # True
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import cache
from typing import Any

from valuecast.coercion.models import CoercionOutcome, Strategy
from valuecast.config import CoercionSettings, get_settings
from valuecast.core.converter import ConverterRegistry, get_registry, parse_enum
from valuecast.core.token import StructuredToken
from valuecast.core.types import (
    enum_type,
    is_assignable,
    is_null,
    is_nullable,
    to_simple_string,
    type_name,
    zero_value,
)

logger = logging.getLogger(__name__)


class CoercionEngine:
    """Converts values to target types through an ordered strategy chain.

    Chain, stopping at the first step that applies:
    1. Absent value (None / DB_NULL): default
    2. Value already assignable: value unchanged
    3. Structured-data token: token's own typed extraction
    4. Enum member with an integer value assignable to the target: that value
    5. Enum target, integer value: member with that value
    6. Enum target, other value: member parsed from the value's text
    7. Target type's converter, if it accepts the value's type
    8. Value type's converter, if it can produce the target type

    Any step that raises, and a chain where nothing applies, yields the
    default. Coercion never raises.

    Args:
        registry: Converter registry (default registry if None).
        settings: Coercion settings (loaded from the environment if None).
    """

    def __init__(
        self,
        registry: ConverterRegistry | None = None,
        settings: CoercionSettings | None = None,
    ) -> None:
        self._registry = registry if registry is not None else get_registry()
        self._settings = settings if settings is not None else get_settings()

    @property
    def registry(self) -> ConverterRegistry:
        """Converter registry used for steps 7 and 8."""
        return self._registry

    @property
    def settings(self) -> CoercionSettings:
        return self._settings

    def coerce(self, value: Any, target_type: Any) -> Any:
        """Coerce ``value`` to ``target_type``, defaulting to the type's zero value.

        Args:
            value: Any runtime value.
            target_type: Requested type.

        Returns:
            Converted value, or ``zero_value(target_type)``.
        """
        return self.coerce_or_default(value, target_type, zero_value(target_type))

    def coerce_or_default(self, value: Any, target_type: Any, default: Any) -> Any:
        """Coerce ``value`` to ``target_type``, falling back to ``default``.

        Args:
            value: Any runtime value.
            target_type: Requested type.
            default: Returned verbatim when the value is absent or unconvertible.

        Returns:
            Converted value, or ``default``.
        """
        return self.try_coerce(value, target_type, default).value

    def try_coerce(self, value: Any, target_type: Any, default: Any = None) -> CoercionOutcome:
        """Run the coercion chain and report which step produced the value.

        Args:
            value: Any runtime value.
            target_type: Requested type.
            default: Fallback value.

        Returns:
            Outcome with the value and the producing strategy. Never raises.
        """
        if is_null(value):
            return CoercionOutcome.fallback(default)

        strategy = Strategy.IDENTITY
        try:
            if is_assignable(value, target_type):
                return CoercionOutcome(value, strategy)

            if isinstance(value, StructuredToken):
                strategy = Strategy.TOKEN
                return CoercionOutcome(value.extract_as(target_type), strategy)

            if (
                isinstance(value, Enum)
                and isinstance(value.value, int)
                and is_assignable(value.value, target_type)
            ):
                return CoercionOutcome(value.value, Strategy.ENUM_VALUE)

            enum_cls = enum_type(target_type)
            if enum_cls is not None:
                if isinstance(value, int) and not isinstance(value, bool):
                    strategy = Strategy.ENUM_MEMBER
                    return CoercionOutcome(enum_cls(value), strategy)
                strategy = Strategy.ENUM_NAME
                member = parse_enum(
                    enum_cls,
                    to_simple_string(value),
                    numeric=self._settings.enum_numeric_strings,
                )
                return CoercionOutcome(member, strategy)

            strategy = Strategy.TARGET_CONVERTER
            converter = self._registry.get_converter(target_type)
            if converter.can_convert_from(type(value)):
                return CoercionOutcome(converter.convert_from(value), strategy)

            strategy = Strategy.SOURCE_CONVERTER
            converter = self._registry.get_converter(type(value))
            if converter.can_convert_to(target_type):
                return CoercionOutcome(converter.convert_to(value, target_type), strategy)
        except Exception:
            logger.debug(
                "Coercing %s to %s failed at %s, using default",
                type_name(type(value)),
                type_name(target_type),
                strategy.name,
                exc_info=True,
            )
            return CoercionOutcome.fallback(default, failed_at=strategy)

        return CoercionOutcome.fallback(default)

    def is_convertible(self, value: Any, target_type: Any) -> bool:
        """Check whether ``value`` converts to ``target_type``.

        Absent values are convertible exactly when the target admits None.
        Otherwise the target's converter must accept the value's type and a
        dry-run conversion (under the current locale) must succeed. Text for
        an enum target is parsed exactly as coercion parses it, honouring
        ``enum_numeric_strings``.

        Args:
            value: Any runtime value.
            target_type: Requested type.

        Returns:
            True if the conversion would succeed. Never raises.
        """
        if is_null(value):
            return is_nullable(target_type)
        try:
            enum_cls = enum_type(target_type)
            if enum_cls is not None and isinstance(value, str) and not isinstance(value, enum_cls):
                parse_enum(enum_cls, value, numeric=self._settings.enum_numeric_strings)
                return True
            converter = self._registry.get_converter(target_type)
            if not converter.can_convert_from(type(value)):
                return False
            converter.convert_from(value)
        except Exception:
            logger.debug(
                "Convertibility check of %s to %s failed",
                type_name(type(value)),
                type_name(target_type),
                exc_info=True,
            )
            return False
        return True

    @staticmethod
    def to_simple_string(value: Any) -> str:
        """Plain text of ``value``: empty for absent values, member name for enums."""
        return to_simple_string(value)


@cache
def get_engine() -> CoercionEngine:
    """Access the default engine (default registry, environment settings).

    Returns:
        The process-local CoercionEngine instance.
    """
    return CoercionEngine()


def coerce(value: Any, target_type: Any) -> Any:
    """Coerce with the default engine. See ``CoercionEngine.coerce``."""
    return get_engine().coerce(value, target_type)


def coerce_or_default(value: Any, target_type: Any, default: Any) -> Any:
    """Coerce with the default engine. See ``CoercionEngine.coerce_or_default``."""
    return get_engine().coerce_or_default(value, target_type, default)


def try_coerce(value: Any, target_type: Any, default: Any = None) -> CoercionOutcome:
    """Coerce with the default engine. See ``CoercionEngine.try_coerce``."""
    return get_engine().try_coerce(value, target_type, default)


def is_convertible(value: Any, target_type: Any) -> bool:
    """Check convertibility with the default engine. See ``CoercionEngine.is_convertible``."""
    return get_engine().is_convertible(value, target_type)
