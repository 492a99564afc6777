"""Core functionalities: type helpers, errors, converters and tokens.

Architecture Note:
    core/ contains stateless building blocks. The converter registry is the
    only mutable object here and is written at import/registration time.
    For the coercion chain and property access, see coercion/ and access/.
"""

from valuecast.core.converter import (
    Converter,
    ConverterRegistry,
    TypeConverter,
    converter,
    get_registry,
)
from valuecast.core.errors import (
    ConversionError,
    PropertyNotFoundError,
    TypeMismatchError,
    ValueCastError,
)
from valuecast.core.token import JsonToken, StructuredToken
from valuecast.core.types import (
    DB_NULL,
    DbNull,
    is_assignable,
    is_null,
    is_nullable,
    to_simple_string,
    type_name,
    zero_value,
)

__all__ = [
    # Types
    "DB_NULL",
    "DbNull",
    "is_null",
    "is_nullable",
    "is_assignable",
    "zero_value",
    "type_name",
    "to_simple_string",
    # Errors
    "ValueCastError",
    "ConversionError",
    "PropertyNotFoundError",
    "TypeMismatchError",
    # Converter
    "Converter",
    "TypeConverter",
    "ConverterRegistry",
    "converter",
    "get_registry",
    # Token
    "StructuredToken",
    "JsonToken",
]
