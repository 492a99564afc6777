"""Type conversion service: converter protocol, built-ins, registry, decorator."""

from valuecast.core.converter.builtin import (
    AnyConverter,
    BooleanConverter,
    DateConverter,
    DateTimeConverter,
    DecimalConverter,
    EnumConverter,
    GenericConverter,
    FloatConverter,
    IntConverter,
    NullableConverter,
    NumberConverter,
    StringConverter,
    TimeConverter,
    TimedeltaConverter,
    UUIDConverter,
    parse_enum,
    register_builtin_converters,
)
from valuecast.core.converter.core import ConverterRegistry, converter, get_registry
from valuecast.core.converter.models import Converter, TypeConverter

__all__ = [
    # Models
    "Converter",
    "TypeConverter",
    # Built-ins
    "AnyConverter",
    "StringConverter",
    "NumberConverter",
    "IntConverter",
    "FloatConverter",
    "DecimalConverter",
    "BooleanConverter",
    "DateTimeConverter",
    "DateConverter",
    "TimeConverter",
    "TimedeltaConverter",
    "UUIDConverter",
    "EnumConverter",
    "GenericConverter",
    "NullableConverter",
    "parse_enum",
    "register_builtin_converters",
    # Core
    "ConverterRegistry",
    "converter",
    "get_registry",
]
