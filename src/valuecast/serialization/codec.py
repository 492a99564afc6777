"""JSON encode/decode through pydantic, and deep copy by JSON round trip.

Usage:
    text = to_json(user)                  # '{"id":1231,"name":"ann"}'
    clone = from_json(text, User)
    clone = deep_copy(user)               # same thing in one call
    clones = deep_copy(users, list[User]) # containers need their element types
"""

from __future__ import annotations

from typing import Any, TypeVar

from valuecast.config import get_settings
from valuecast.core.types import type_adapter

T = TypeVar("T")

# JSON cannot carry element or key types for these, so a copy needs an annotation
_UNTYPED_CONTAINERS: tuple[type, ...] = (list, tuple, set, frozenset, dict)


def to_json(
    value: Any,
    *,
    indent: int | None = None,
    exclude_none: bool | None = None,
) -> str:
    """Serialize a value to JSON text.

    Dataclasses, Pydantic models, enums, dates, UUIDs and containers of them
    are supported. Circular references raise ``ValueError``.

    Args:
        value: Value to serialize.
        indent: Indentation (settings' ``json_indent`` if None).
        exclude_none: Drop None-valued fields (settings' ``json_exclude_none`` if None).

    Returns:
        JSON text.
    """
    settings = get_settings()
    if indent is None:
        indent = settings.json_indent
    if exclude_none is None:
        exclude_none = settings.json_exclude_none
    return (
        type_adapter(type(value))
        .dump_json(value, indent=indent, exclude_none=exclude_none)
        .decode()
    )


def from_json(text: str | bytes, target_type: Any) -> Any:
    """Parse JSON text into ``target_type``.

    Raises:
        pydantic.ValidationError: If the text is invalid or does not fit the type.
    """
    return type_adapter(target_type).validate_json(text)


def deep_copy(value: T, target_type: Any = None) -> T:
    """Copy a value by serializing it to JSON and parsing it back.

    The copy shares no mutable state with the original. Only state that
    survives JSON is copied: values typed ``Any`` come back as plain JSON
    values.

    Args:
        value: Value to copy (None returns None).
        target_type: Annotation to parse the copy as (``type(value)`` if None).
            Required for bare containers, e.g. ``list[User]`` or ``dict[int, str]``.

    Returns:
        Independent copy of ``value``.

    Raises:
        TypeError: If ``value`` is a bare container and no ``target_type`` is given.
    """
    if value is None:
        return value
    if target_type is None:
        if type(value) in _UNTYPED_CONTAINERS:
            raise TypeError(
                f"Cannot deep_copy a {type(value).__name__} without target_type: "
                f"element types do not survive JSON. Pass e.g. {type(value).__name__}[...]"
            )
        target_type = type(value)
    text = to_json(value, indent=None, exclude_none=False)
    return from_json(text, target_type)  # type: ignore[no-any-return]
