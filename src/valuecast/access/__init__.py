"""Reflective property access: entity marker, descriptors and accessor."""

from valuecast.access.accessor import (
    PropertyAccessor,
    get_accessor,
    get_property,
    set_property,
)
from valuecast.access.core import describe_entity, entity, is_entity
from valuecast.access.models import EntityDescriptor, PropertyDescriptor
from valuecast.core.errors import PropertyNotFoundError, TypeMismatchError

__all__ = [
    # Models
    "PropertyDescriptor",
    "EntityDescriptor",
    # Core
    "entity",
    "is_entity",
    "describe_entity",
    # Accessor
    "PropertyAccessor",
    "get_accessor",
    "get_property",
    "set_property",
    "PropertyNotFoundError",
    "TypeMismatchError",
]
