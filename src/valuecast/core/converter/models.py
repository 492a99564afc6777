"""Converter models: the converter protocol and the base converter.

A converter is bound to one type and answers two questions in both
directions: which source types it can build its type from, and which target
types it can turn its type into.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from valuecast.core.errors import ConversionError
from valuecast.core.types import is_null, runtime_classes, to_simple_string


@runtime_checkable
class Converter(Protocol):
    """Bidirectional converter for a single type."""

    def can_convert_from(self, source_type: Any) -> bool: ...

    def can_convert_to(self, target_type: Any) -> bool: ...

    def convert_from(self, value: Any) -> Any: ...

    def convert_to(self, value: Any, target_type: Any) -> Any: ...


class TypeConverter:
    """Base converter used for types without a dedicated converter.

    Accepts instances of its own type (and subclasses) unchanged and can render
    any value as a string. Subclasses widen both directions.

    Args:
        target_type: The type this converter produces and consumes.
    """

    def __init__(self, target_type: Any) -> None:
        self.target_type = target_type

    def __repr__(self) -> str:
        return f"{type(self).__name__}({getattr(self.target_type, '__name__', self.target_type)!s})"

    def can_convert_from(self, source_type: Any) -> bool:
        """Check whether values of ``source_type`` can be converted into this type.

        Args:
            source_type: Runtime type of the candidate value.

        Returns:
            True if ``convert_from`` may succeed for such values.
        """
        if not isinstance(source_type, type):
            return False
        classes = runtime_classes(self.target_type)
        return bool(classes) and issubclass(source_type, classes)

    def can_convert_to(self, target_type: Any) -> bool:
        """Check whether values of this type can be converted to ``target_type``.

        Args:
            target_type: Requested output type.

        Returns:
            True if ``convert_to`` may succeed for that type.
        """
        return target_type is str

    def convert_from(self, value: Any) -> Any:
        """Convert ``value`` into this converter's type.

        Raises:
            ConversionError: If the value cannot be converted.
        """
        if self.can_convert_from(type(value)):
            return value
        raise ConversionError(value, self.target_type)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        """Convert a value of this converter's type into ``target_type``.

        Raises:
            ConversionError: If the value cannot be converted.
        """
        if target_type is str:
            return "" if is_null(value) else to_simple_string(value)
        raise ConversionError(value, target_type)
