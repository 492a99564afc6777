"""Type helpers shared by the converter registry, the coercion engine and accessors.

Target types are plain annotations: classes, ``X | None`` unions, ``Any``.
These helpers answer the questions every layer asks about them (is a value
assignable as-is, does the type admit ``None``, what is its zero value).
"""

from __future__ import annotations

import types
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Final, Literal, Union, get_args, get_origin

from pydantic import TypeAdapter

NoneType = type(None)


class DbNull:
    """Marker for a database NULL, distinct from a missing value.

    There is exactly one instance, ``DB_NULL``. It is falsy and survives
    copy/pickle as the same object.
    """

    _instance: DbNull | None = None

    def __new__(cls) -> DbNull:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DB_NULL"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "DB_NULL"

    def __copy__(self) -> DbNull:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> DbNull:
        return self


DB_NULL: Final = DbNull()

_ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
}


def is_null(value: Any) -> bool:
    """Check whether a value is absent (``None``) or the database-null marker."""
    return value is None or value is DB_NULL


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def is_nullable(target_type: Any) -> bool:
    """Check whether ``None`` is a legal value of ``target_type``.

    Args:
        target_type: Annotation to inspect.

    Returns:
        True for ``Any``, ``object``, ``None``/``NoneType`` and unions containing None.
    """
    if target_type is Any or target_type is object:
        return True
    if target_type is None or target_type is NoneType:
        return True
    if get_origin(target_type) is Annotated:
        return is_nullable(get_args(target_type)[0])
    if _is_union(target_type):
        return any(is_nullable(arg) for arg in get_args(target_type))
    return False


def unwrap_optional(target_type: Any) -> Any:
    """Strip ``None`` from ``X | None``; other annotations are returned as-is."""
    if get_origin(target_type) is Annotated:
        return unwrap_optional(get_args(target_type)[0])
    if _is_union(target_type):
        members = [arg for arg in get_args(target_type) if arg is not NoneType]
        if len(members) == 1:
            return members[0]
    return target_type


def enum_type(target_type: Any) -> type[Enum] | None:
    """Return the Enum class behind ``target_type`` (plain or nullable), if any."""
    inner = unwrap_optional(target_type)
    if isinstance(inner, type) and issubclass(inner, Enum):
        return inner
    return None


def is_assignable(value: Any, target_type: Any) -> bool:
    """Check whether ``value`` can be used as a ``target_type`` without conversion.

    Parameterized generics (``list[int]``) are never assignable here: checking
    them would mean validating every element, which is conversion work.

    Args:
        value: Runtime value.
        target_type: Annotation to check against.

    Returns:
        True if the value already satisfies the annotation.
    """
    if target_type is Any or target_type is object:
        return True
    if target_type is None or target_type is NoneType:
        return value is None
    origin = get_origin(target_type)
    if origin is Annotated:
        return is_assignable(value, get_args(target_type)[0])
    if _is_union(target_type):
        return any(is_assignable(value, arg) for arg in get_args(target_type))
    if origin is Literal:
        return value in get_args(target_type)
    if origin is not None:
        return False
    if isinstance(target_type, type):
        return isinstance(value, target_type)
    return False


def runtime_classes(target_type: Any) -> tuple[type, ...]:
    """Classes an instance must belong to (any of) to match ``target_type``.

    ``list[int]`` -> ``(list,)``, ``int | str`` -> ``(int, str)``. Annotations
    without a runtime class (``Literal``, ``TypeVar``) give an empty tuple.
    """
    if isinstance(target_type, type):
        return (target_type,)
    origin = get_origin(target_type)
    if origin is Annotated:
        return runtime_classes(get_args(target_type)[0])
    if _is_union(target_type):
        return tuple(cls for arg in get_args(target_type) for cls in runtime_classes(arg))
    if isinstance(origin, type):
        return (origin,)
    return ()


def zero_value(target_type: Any) -> Any:
    """Default value used when a caller does not supply one.

    ``False`` for bool, zero for the numeric types, ``None`` for everything else
    (strings, enums, nullable types and arbitrary classes).
    """
    if is_nullable(target_type):
        return None
    return _ZERO_VALUES.get(target_type)


def type_name(tp: Any) -> str:
    """Fully qualified name of a type, used for cache keys and error messages.

    Builtins are reported by their bare name; annotations that are not classes
    fall back to their repr.
    """
    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def to_simple_string(value: Any) -> str:
    """Render a value as plain text.

    Returns an empty string for absent values and the member name for enum
    members (so the text parses back to the same member), ``str(value)`` otherwise.
    """
    if is_null(value):
        return ""
    if isinstance(value, Enum):
        return value.name
    return str(value)


@lru_cache(maxsize=256)
def type_adapter(target_type: Any) -> TypeAdapter[Any]:
    """Pydantic ``TypeAdapter`` for an annotation, built once per annotation."""
    return TypeAdapter(target_type)
