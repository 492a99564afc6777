"""Built-in converters for the standard scalar types.

Every converter accepts its own type unchanged, parses its type from text and
renders it back to text. Numeric converters also convert between each other.
Text parsing of numbers honours the current process locale (thousands
separator and decimal point, see ``locale.delocalize``).
"""

from __future__ import annotations

import locale
import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, get_args, get_origin
from uuid import UUID

from pydantic import ValidationError

from valuecast.core.converter.models import Converter, TypeConverter
from valuecast.core.errors import ConversionError
from valuecast.core.types import NoneType, type_adapter

if TYPE_CHECKING:
    from valuecast.core.converter.core import ConverterRegistry

NUMERIC_TYPES: tuple[type, ...] = (int, float, Decimal)
_SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)

_TIMEDELTA_PATTERN = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{2})"
    r"(?::(?P<seconds>\d{2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)
_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$")


def parse_enum(enum_cls: type[Enum], text: str, numeric: bool = True) -> Enum:
    """Look up an enum member by exact name, or by value for integer literals.

    Args:
        enum_cls: Enum class to search.
        text: Member name (case-sensitive) or integer literal.
        numeric: Accept integer literals as member values.

    Returns:
        The matching member.

    Raises:
        ConversionError: If no member matches.
    """
    member = enum_cls.__members__.get(text)
    if member is not None:
        return member
    if numeric and _INTEGER_LITERAL.match(text.strip()):
        try:
            return enum_cls(int(text))
        except ValueError as e:
            raise ConversionError(text, enum_cls, "no member with that value") from e
    raise ConversionError(text, enum_cls, "no member with that name")


class AnyConverter(TypeConverter):
    """Converter for ``Any``/``object`` targets: every value already qualifies."""

    def __init__(self, target_type: Any = object) -> None:
        super().__init__(target_type)

    def can_convert_from(self, source_type: Any) -> bool:
        return True


class StringConverter(TypeConverter):
    """Converter for ``str``."""

    def __init__(self, target_type: Any = str) -> None:
        super().__init__(target_type)

    def convert_from(self, value: Any) -> Any:
        if isinstance(value, str):
            return str(value)
        raise ConversionError(value, str)


class NumberConverter(TypeConverter):
    """Base converter for numeric types.

    Subclasses implement ``_parse`` for text input; conversion between numeric
    types rounds half to even when narrowing to ``int``.
    """

    def can_convert_from(self, source_type: Any) -> bool:
        if isinstance(source_type, type) and issubclass(source_type, str):
            return True
        return super().can_convert_from(source_type)

    def can_convert_to(self, target_type: Any) -> bool:
        return target_type is str or target_type in NUMERIC_TYPES

    def convert_from(self, value: Any) -> Any:
        if isinstance(value, str):
            text = locale.delocalize(value.strip())
            try:
                return self._parse(text)
            except (ValueError, InvalidOperation) as e:
                raise ConversionError(value, self.target_type) from e
        return super().convert_from(value)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type is int:
            if isinstance(value, int):
                return int(value)
            return int(round(value))
        if target_type is float:
            return float(value)
        if target_type is Decimal:
            return value if isinstance(value, Decimal) else Decimal(str(value))
        return super().convert_to(value, target_type)

    def _parse(self, text: str) -> Any:
        raise NotImplementedError


class IntConverter(NumberConverter):
    def __init__(self, target_type: Any = int) -> None:
        super().__init__(target_type)

    def _parse(self, text: str) -> int:
        return int(text)


class FloatConverter(NumberConverter):
    def __init__(self, target_type: Any = float) -> None:
        super().__init__(target_type)

    def _parse(self, text: str) -> float:
        return float(text)


class DecimalConverter(NumberConverter):
    def __init__(self, target_type: Any = Decimal) -> None:
        super().__init__(target_type)

    def _parse(self, text: str) -> Decimal:
        result = Decimal(text)
        if not result.is_finite():
            raise ValueError(f"Non-finite decimal {text!r}")
        return result


class BooleanConverter(TypeConverter):
    """Converter for ``bool``: parses ``true``/``false`` in any case."""

    def __init__(self, target_type: Any = bool) -> None:
        super().__init__(target_type)

    def can_convert_from(self, source_type: Any) -> bool:
        if isinstance(source_type, type) and issubclass(source_type, str):
            return True
        return super().can_convert_from(source_type)

    def can_convert_to(self, target_type: Any) -> bool:
        return target_type is str or target_type in NUMERIC_TYPES

    def convert_from(self, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip().lower()
            if text == "true":
                return True
            if text == "false":
                return False
            raise ConversionError(value, bool)
        return super().convert_from(value)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type in NUMERIC_TYPES:
            return target_type(int(value))
        return super().convert_to(value, target_type)


class _IsoFormatConverter(TypeConverter):
    """Shared logic for the ``fromisoformat``/``isoformat`` types."""

    def can_convert_from(self, source_type: Any) -> bool:
        if isinstance(source_type, type) and issubclass(source_type, str):
            return True
        return super().can_convert_from(source_type)

    def convert_from(self, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return self.target_type.fromisoformat(value.strip())
            except ValueError as e:
                raise ConversionError(value, self.target_type) from e
        return super().convert_from(value)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type is str:
            return value.isoformat()
        return super().convert_to(value, target_type)


class DateTimeConverter(_IsoFormatConverter):
    def __init__(self, target_type: Any = datetime) -> None:
        super().__init__(target_type)

    def can_convert_to(self, target_type: Any) -> bool:
        return target_type is date or target_type is time or super().can_convert_to(target_type)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type is date:
            return value.date()
        if target_type is time:
            return value.timetz()
        return super().convert_to(value, target_type)


class DateConverter(_IsoFormatConverter):
    def __init__(self, target_type: Any = date) -> None:
        super().__init__(target_type)


class TimeConverter(_IsoFormatConverter):
    def __init__(self, target_type: Any = time) -> None:
        super().__init__(target_type)


def format_timedelta(value: timedelta) -> str:
    """Render a timedelta as ``[-][d.]hh:mm:ss[.ffffff]``."""
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, remainder = divmod(value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.days:
        text = f"{value.days}.{text}"
    if value.microseconds:
        text = f"{text}.{value.microseconds:06d}"
    return sign + text


class TimedeltaConverter(TypeConverter):
    """Converter for ``timedelta`` using the ``[-][d.]hh:mm[:ss[.fffffff]]`` format."""

    def __init__(self, target_type: Any = timedelta) -> None:
        super().__init__(target_type)

    def can_convert_from(self, source_type: Any) -> bool:
        if isinstance(source_type, type) and issubclass(source_type, str):
            return True
        return super().can_convert_from(source_type)

    def convert_from(self, value: Any) -> Any:
        if not isinstance(value, str):
            return super().convert_from(value)
        match = _TIMEDELTA_PATTERN.match(value.strip())
        if match is None:
            raise ConversionError(value, timedelta)
        hours = int(match["hours"])
        minutes = int(match["minutes"])
        seconds = int(match["seconds"] or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            raise ConversionError(value, timedelta, "component out of range")
        fraction = (match["fraction"] or "").ljust(6, "0")[:6]
        result = timedelta(
            days=int(match["days"] or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=int(fraction),
        )
        return -result if match["sign"] else result

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type is str:
            return format_timedelta(value)
        return super().convert_to(value, target_type)


class UUIDConverter(TypeConverter):
    """Converter for ``UUID`` from/to text and 16-byte values."""

    def __init__(self, target_type: Any = UUID) -> None:
        super().__init__(target_type)

    def can_convert_from(self, source_type: Any) -> bool:
        if isinstance(source_type, type) and issubclass(source_type, (str, bytes)):
            return True
        return super().can_convert_from(source_type)

    def can_convert_to(self, target_type: Any) -> bool:
        return target_type is bytes or super().can_convert_to(target_type)

    def convert_from(self, value: Any) -> Any:
        try:
            if isinstance(value, str):
                return UUID(value.strip())
            if isinstance(value, bytes):
                return UUID(bytes=value)
        except ValueError as e:
            raise ConversionError(value, UUID) from e
        return super().convert_from(value)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type is bytes:
            return value.bytes
        return super().convert_to(value, target_type)


class EnumConverter(TypeConverter):
    """Converter for one Enum class: members from names or integer values."""

    def can_convert_from(self, source_type: Any) -> bool:
        if isinstance(source_type, type) and issubclass(source_type, (str, int)):
            return source_type is not bool
        return super().can_convert_from(source_type)

    def can_convert_to(self, target_type: Any) -> bool:
        return target_type is int or super().can_convert_to(target_type)

    def convert_from(self, value: Any) -> Any:
        if isinstance(value, self.target_type):
            return value
        if isinstance(value, str):
            return parse_enum(self.target_type, value)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return self.target_type(value)
            except ValueError as e:
                raise ConversionError(value, self.target_type) from e
        raise ConversionError(value, self.target_type)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        if target_type is int:
            if isinstance(value.value, int):
                return int(value.value)
            raise ConversionError(value, int, "member value is not an integer")
        return super().convert_to(value, target_type)


class NullableConverter(TypeConverter):
    """Converter for ``X | None`` delegating to the converter of ``X``.

    Args:
        target_type: The nullable annotation.
        inner: Converter for the non-None member.
    """

    def __init__(self, target_type: Any, inner: Converter) -> None:
        super().__init__(target_type)
        self.inner = inner

    def can_convert_from(self, source_type: Any) -> bool:
        return source_type is NoneType or self.inner.can_convert_from(source_type)

    def can_convert_to(self, target_type: Any) -> bool:
        return self.inner.can_convert_to(target_type)

    def convert_from(self, value: Any) -> Any:
        if value is None:
            return None
        return self.inner.convert_from(value)

    def convert_to(self, value: Any, target_type: Any) -> Any:
        return self.inner.convert_to(value, target_type)


class GenericConverter(TypeConverter):
    """Converter for parameterized annotations (``list[int]``, ``dict[str, User]``,
    ``int | str``, ``Literal[...]``).

    Values are validated element by element through a pydantic ``TypeAdapter``
    in lax mode, so ``["1", "2"]`` converts to ``[1, 2]`` for ``list[int]`` and
    ``["x"]`` is rejected. Sequence targets accept any of list, tuple, set and
    frozenset as input.
    """

    def can_convert_from(self, source_type: Any) -> bool:
        if not isinstance(source_type, type):
            return False
        origin = get_origin(self.target_type)
        if origin is Literal:
            return any(type(arg) is source_type for arg in get_args(self.target_type))
        if origin in _SEQUENCE_TYPES and issubclass(source_type, _SEQUENCE_TYPES):
            return True
        return super().can_convert_from(source_type)

    def convert_from(self, value: Any) -> Any:
        try:
            return type_adapter(self.target_type).validate_python(value)
        except ValidationError as e:
            raise ConversionError(value, self.target_type, str(e.errors()[0]["msg"])) from e


def register_builtin_converters(registry: ConverterRegistry) -> None:
    """Register converters for str, numbers, bool, dates, timedelta and UUID.

    Args:
        registry: Registry to populate.
    """
    for converter in (
        StringConverter(),
        IntConverter(),
        FloatConverter(),
        DecimalConverter(),
        BooleanConverter(),
        DateTimeConverter(),
        DateConverter(),
        TimeConverter(),
        TimedeltaConverter(),
        UUIDConverter(),
    ):
        registry.register(converter.target_type, converter)
