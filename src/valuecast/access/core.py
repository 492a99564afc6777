"""Entity decorator and property discovery.

Usage:
    @entity
    @dataclass
    class User:
        id: int
        name: str = ""

        @property
        def display(self) -> str:
            return f"#{self.id} {self.name}"

    describe_entity(User).names  # ("id", "name", "display")
"""

from __future__ import annotations

import dataclasses
import operator
import typing
from collections.abc import Callable
from types import MappingProxyType
from typing import Any, TypeVar, overload

from valuecast.access.models import EntityDescriptor, PropertyDescriptor
from valuecast.core.types import type_name

T = TypeVar("T", bound=type)

_ENTITY_MARKER = "__valuecast_entity__"


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


@overload
def entity(cls: T) -> T: ...


@overload
def entity(cls: None = None) -> Callable[[T], T]: ...


def entity(cls: T | None = None) -> T | Callable[[T], T]:
    """Mark a dataclass or Pydantic model as an entity for by-name property access.

    Supports both forms:
        @entity        # bare decorator
        @entity()      # parenthesized

    Args:
        cls: The class to mark, or None if called with parentheses.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If class is neither a dataclass nor Pydantic model.

    Note:
        Apply @entity AFTER @dataclass:

        >>> @entity
        ... @dataclass
        ... class User:
        ...     id: int
    """

    def decorator(c: T) -> T:
        if not (dataclasses.is_dataclass(c) or _is_pydantic(c)):
            raise TypeError(
                f"Entity {c.__name__} must be a dataclass or Pydantic model. "
                f"Did you forget @dataclass decorator?"
            )
        setattr(c, _ENTITY_MARKER, True)
        return c

    if cls is None:
        return decorator
    return decorator(cls)


def is_entity(cls: type) -> bool:
    """Check if a class (or a subclass of one) was marked with @entity."""
    return bool(getattr(cls, _ENTITY_MARKER, False))


def _attr_setter(name: str) -> Callable[[Any, Any], None]:
    def setter(obj: Any, value: Any) -> None:
        setattr(obj, name, value)

    return setter


def _field_types(cls: type) -> dict[str, Any]:
    """Declared field types, in declaration order."""
    if _is_pydantic(cls):
        return {name: info.annotation for name, info in cls.model_fields.items()}  # type: ignore[attr-defined]
    try:
        hints = typing.get_type_hints(cls)
    except NameError:
        # Annotations referring to names local to a function body
        hints = {}
    return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}


def _is_frozen(cls: type) -> bool:
    if _is_pydantic(cls):
        return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]


def _public_properties(cls: type) -> dict[str, property]:
    """Public ``property`` objects, base classes first, overrides winning.

    Properties defined by pydantic itself (``model_extra`` and friends) are skipped.
    """
    found: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and not name.startswith("_"):
                found[name] = attr
    return found


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return Any
    try:
        return typing.get_type_hints(prop.fget).get("return", Any)
    except (NameError, TypeError):
        return Any


def describe_entity(cls: type) -> EntityDescriptor:
    """Build the property descriptors of an entity type.

    Fields come first in declaration order, then public ``property`` objects.
    Fields of frozen classes and properties without a setter are read-only.

    Args:
        cls: Dataclass or Pydantic model class.

    Returns:
        Immutable descriptor of the type.
    """
    frozen = _is_frozen(cls)
    properties: dict[str, PropertyDescriptor] = {}

    for name, declared in _field_types(cls).items():
        properties[name] = PropertyDescriptor(
            name=name,
            declared_type=declared,
            getter=operator.attrgetter(name),
            setter=None if frozen else _attr_setter(name),
        )

    for name, prop in _public_properties(cls).items():
        if name in properties:
            continue
        properties[name] = PropertyDescriptor(
            name=name,
            declared_type=_property_type(prop),
            getter=operator.attrgetter(name),
            setter=None if prop.fset is None else _attr_setter(name),
        )

    return EntityDescriptor(
        entity_type=cls,
        type_name=type_name(cls),
        properties=MappingProxyType(properties),
    )
