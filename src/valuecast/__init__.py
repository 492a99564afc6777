"""valuecast: value coercion and by-name property access.

Usage:
    from dataclasses import dataclass
    from valuecast import coerce, coerce_or_default, entity, get_property, set_property

    coerce("42", int)                   # 42
    coerce_or_default("abc", int, -1)   # -1

    @entity
    @dataclass
    class User:
        id: int = 0

    user = User()
    set_property(user, "id", "1231")
    get_property(user, "id")            # 1231
"""

__version__ = "0.1.0"

# Core primitives
from valuecast.core import (
    DB_NULL,
    ConversionError,
    Converter,
    ConverterRegistry,
    JsonToken,
    PropertyNotFoundError,
    StructuredToken,
    TypeConverter,
    TypeMismatchError,
    ValueCastError,
    converter,
    get_registry,
    is_null,
    to_simple_string,
)

# Coercion
from valuecast.coercion import (
    CoercionEngine,
    CoercionOutcome,
    Strategy,
    coerce,
    coerce_or_default,
    is_convertible,
    try_coerce,
)

# Property access
from valuecast.access import (
    PropertyAccessor,
    entity,
    get_property,
    set_property,
)

# Cache
from valuecast.cache import (
    InMemoryCache,
    MetadataCache,
)

# Configuration
from valuecast.config import CoercionSettings

# Serialization
from valuecast.serialization import deep_copy, from_json, to_json

__all__ = [
    # Version
    "__version__",
    # Core
    "DB_NULL",
    "is_null",
    "to_simple_string",
    "Converter",
    "TypeConverter",
    "ConverterRegistry",
    "converter",
    "get_registry",
    "StructuredToken",
    "JsonToken",
    # Errors
    "ValueCastError",
    "ConversionError",
    "PropertyNotFoundError",
    "TypeMismatchError",
    # Coercion
    "CoercionEngine",
    "CoercionOutcome",
    "Strategy",
    "coerce",
    "coerce_or_default",
    "try_coerce",
    "is_convertible",
    # Access
    "entity",
    "PropertyAccessor",
    "get_property",
    "set_property",
    # Cache
    "MetadataCache",
    "InMemoryCache",
    # Config
    "CoercionSettings",
    # Serialization
    "to_json",
    "from_json",
    "deep_copy",
]
