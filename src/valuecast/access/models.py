"""Property descriptor models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class PropertyDescriptor:
    """Named, typed property of an entity type with its accessor functions."""

    name: str
    declared_type: Any
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None] | None = None

    @property
    def read_only(self) -> bool:
        return self.setter is None

    def get_value(self, obj: Any) -> Any:
        """Read this property off ``obj``."""
        return self.getter(obj)

    def set_value(self, obj: Any, value: Any) -> None:
        """Write ``value`` to this property on ``obj``.

        Raises:
            AttributeError: If the property is read-only.
        """
        if self.setter is None:
            raise AttributeError(f"Property '{self.name}' is read-only")
        self.setter(obj, value)


@dataclass(slots=True, frozen=True)
class EntityDescriptor:
    """All properties of an entity type, in declaration order.

    Built once per type and shared; never mutated after construction.
    """

    entity_type: type
    type_name: str
    properties: Mapping[str, PropertyDescriptor]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.properties)

    def find(self, name: str) -> PropertyDescriptor | None:
        """Property with exactly this name, or None."""
        return self.properties.get(name)
