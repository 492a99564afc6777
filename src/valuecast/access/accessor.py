"""Get and set entity properties by name.

Usage:
    accessor = PropertyAccessor()
    user = User(id=0)
    accessor.set_property(user, "id", "1231")   # converted to int
    accessor.get_property(user, "id")           # 1231
"""

from __future__ import annotations

import logging
from functools import cache
from typing import Any

from valuecast.access.core import describe_entity, is_entity
from valuecast.access.models import EntityDescriptor, PropertyDescriptor
from valuecast.cache import InMemoryCache, MetadataCache
from valuecast.coercion import CoercionEngine, get_engine
from valuecast.core.errors import PropertyNotFoundError, TypeMismatchError
from valuecast.core.types import type_name

logger = logging.getLogger(__name__)


class PropertyAccessor:
    """By-name property access for @entity classes.

    Property descriptors are memoized in the metadata cache under the entity
    type's fully qualified name, so each type is described at most once.

    Args:
        cache: Metadata cache (fresh InMemoryCache if None).
        engine: Coercion engine whose converter registry reconciles value
            types on set (default engine if None).
    """

    def __init__(
        self,
        cache: MetadataCache | None = None,
        engine: CoercionEngine | None = None,
    ) -> None:
        self._cache = cache if cache is not None else InMemoryCache()
        self._engine = engine if engine is not None else get_engine()

    @property
    def cache(self) -> MetadataCache:
        return self._cache

    def describe(self, obj: Any) -> EntityDescriptor:
        """Cached descriptor for an entity instance or class.

        Raises:
            TypeError: If the type is not marked with @entity.
        """
        cls = obj if isinstance(obj, type) else type(obj)
        if not is_entity(cls):
            raise TypeError(
                f"{cls.__name__} is not an entity. Did you forget @entity decorator?"
            )
        return self._cache.get(type_name(cls), lambda: describe_entity(cls))

    def _find(self, obj: Any, name: str) -> PropertyDescriptor:
        descriptor = self.describe(obj)
        prop = descriptor.find(name)
        if prop is None:
            raise PropertyNotFoundError(name, descriptor.type_name)
        return prop

    def get_property(self, obj: Any, name: str) -> Any:
        """Read a property by exact name.

        Args:
            obj: Entity instance.
            name: Property name (case-sensitive).

        Returns:
            Current property value.

        Raises:
            PropertyNotFoundError: If the entity type has no such property.
        """
        return self._find(obj, name).get_value(obj)

    def set_property(self, obj: Any, name: str, value: Any) -> None:
        """Write a property by exact name, converting to its declared type.

        A value whose type is exactly the declared type is written as-is.
        Otherwise it is converted by the declared type's converter, or failing
        that by the value type's converter.

        Args:
            obj: Entity instance.
            name: Property name (case-sensitive).
            value: New value.

        Raises:
            PropertyNotFoundError: If the entity type has no such property.
            TypeMismatchError: If no converter can reconcile the types; the
                property keeps its previous value.
            AttributeError: If the property is read-only.
        """
        prop = self._find(obj, name)
        prop.set_value(obj, self._reconcile(prop, value))

    def _reconcile(self, prop: PropertyDescriptor, value: Any) -> Any:
        value_type = type(value)
        declared = prop.declared_type
        if value_type is declared:
            return value

        registry = self._engine.registry
        error: Exception | None = None

        converter = registry.get_converter(declared)
        if converter.can_convert_from(value_type):
            try:
                return converter.convert_from(value)
            except Exception as e:
                error = e

        converter = registry.get_converter(value_type)
        if converter.can_convert_to(declared):
            try:
                return converter.convert_to(value, declared)
            except Exception as e:
                error = e

        logger.debug(
            "No converter reconciles %s with property '%s' (%s)",
            type_name(value_type),
            prop.name,
            type_name(declared),
        )
        raise TypeMismatchError(prop.name, value_type, declared) from error


@cache
def get_accessor() -> PropertyAccessor:
    """Access the default accessor (own in-memory cache, default engine).

    Returns:
        The process-local PropertyAccessor instance.
    """
    return PropertyAccessor()


def get_property(obj: Any, name: str) -> Any:
    """Read a property with the default accessor. See ``PropertyAccessor.get_property``."""
    return get_accessor().get_property(obj, name)


def set_property(obj: Any, name: str, value: Any) -> None:
    """Write a property with the default accessor. See ``PropertyAccessor.set_property``."""
    get_accessor().set_property(obj, name, value)
