"""Exceptions raised by valuecast.

Only the property accessor surfaces errors to callers; the coercion engine maps
every failure to the caller's default. ``ConversionError`` is what converters
raise internally when a value cannot be converted.
"""

from __future__ import annotations

from typing import Any

from valuecast.core.types import type_name


class ValueCastError(Exception):
    """Base class for all valuecast errors."""

    pass


class ConversionError(ValueCastError, ValueError):
    """Raised by a converter that cannot convert a particular value."""

    def __init__(self, value: Any, target_type: Any, reason: str | None = None) -> None:
        self.value = value
        self.target_type = target_type
        message = f"Cannot convert {type_name(type(value))} value {value!r} to {type_name(target_type)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PropertyNotFoundError(ValueCastError, AttributeError):
    """Raised when an entity type has no property with the requested name."""

    def __init__(self, name: str, type_name: str) -> None:
        self.name = name
        self.type_name = type_name
        super().__init__(f"Property '{name}' does not exist on {type_name}")


class TypeMismatchError(ValueCastError, TypeError):
    """Raised when a value cannot be converted to a property's declared type."""

    def __init__(self, name: str, value_type: Any, declared_type: Any) -> None:
        self.name = name
        self.value_type = value_type
        self.declared_type = declared_type
        super().__init__(
            f"Cannot assign {type_name(value_type)} to property '{name}' "
            f"declared as {type_name(declared_type)}"
        )
