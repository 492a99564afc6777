"""Converter registry and decorator.

Usage:
    @converter(Money)
    class MoneyConverter(TypeConverter):
        def can_convert_from(self, source_type):
            return source_type is str or super().can_convert_from(source_type)

        def convert_from(self, value):
            if isinstance(value, str):
                return Money.parse(value)
            return super().convert_from(value)

    get_registry().get_converter(Money).convert_from("12.50 EUR")
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from enum import Enum
from typing import Annotated, Any, TypeVar, get_args, get_origin

from valuecast.core.converter.builtin import (
    AnyConverter,
    EnumConverter,
    GenericConverter,
    NullableConverter,
    register_builtin_converters,
)
from valuecast.core.converter.models import Converter, TypeConverter
from valuecast.core.types import type_name, unwrap_optional

C = TypeVar("C", bound=type)


class ConverterRegistry:
    """Flat registry mapping types to converters.

    Lookup order for ``get_converter(tp)``:
    1. Converter registered for exactly ``tp``
    2. ``AnyConverter`` for ``Any``/``object``
    3. ``NullableConverter`` wrapping the inner converter for ``X | None``
    4. ``EnumConverter`` for Enum subclasses
    5. Converter registered for the nearest base class in the MRO
    6. ``GenericConverter`` for parameterized annotations (``list[int]``, ``int | str``)
    7. The base ``TypeConverter``

    Resolved converters are memoized until the next registration.

    Args:
        builtins: Register converters for the standard scalar types.
    """

    def __init__(self, builtins: bool = True) -> None:
        """Initialize registry, optionally with the built-in converters."""
        self._by_type: dict[Any, Converter] = {}
        self._resolved: dict[Any, Converter] = {}
        if builtins:
            register_builtin_converters(self)

    def register(self, target_type: Any, converter: Converter) -> Converter:
        """Register ``converter`` as the converter for ``target_type``.

        Args:
            target_type: Type the converter produces and consumes.
            converter: Converter instance.

        Returns:
            The registered converter.

        Raises:
            TypeError: If converter does not implement the Converter protocol.
        """
        if not isinstance(converter, Converter):
            raise TypeError(
                f"{type(converter).__name__} is not a converter: expected can_convert_from, "
                f"can_convert_to, convert_from and convert_to"
            )
        existing = self._by_type.get(target_type)
        if existing is not None and existing is not converter:
            warnings.warn(
                f"Replacing converter {existing!r} for {type_name(target_type)} with {converter!r}",
                stacklevel=2,
            )
        self._by_type[target_type] = converter
        self._resolved.clear()
        return converter

    def is_registered(self, target_type: Any) -> bool:
        """Check if a converter was registered for exactly ``target_type``."""
        return target_type in self._by_type

    def get_converter(self, target_type: Any) -> Converter:
        """Resolve the converter for ``target_type``. Never fails.

        Args:
            target_type: Type or annotation to resolve.

        Returns:
            Registered, derived, or base converter.
        """
        converter = self._resolved.get(target_type)
        if converter is None:
            converter = self._resolve(target_type)
            self._resolved[target_type] = converter
        return converter

    def _resolve(self, target_type: Any) -> Converter:
        registered = self._by_type.get(target_type)
        if registered is not None:
            return registered

        if target_type is Any or target_type is object:
            return AnyConverter(target_type)

        if get_origin(target_type) is Annotated:
            return self.get_converter(get_args(target_type)[0])

        inner = unwrap_optional(target_type)
        if inner is not target_type:
            return NullableConverter(target_type, self.get_converter(inner))

        if isinstance(target_type, type):
            if issubclass(target_type, Enum):
                return EnumConverter(target_type)
            for base in target_type.__mro__[1:]:
                if base is not object and base in self._by_type:
                    return self._by_type[base]

        if get_origin(target_type) is not None:
            return GenericConverter(target_type)

        return TypeConverter(target_type)


_registry = ConverterRegistry()


def get_registry() -> ConverterRegistry:
    """Access the default converter registry.

    Returns:
        The process-local ConverterRegistry with the built-in converters.
    """
    return _registry


def converter(
    target_type: Any, *, registry: ConverterRegistry | None = None
) -> Callable[[C], C]:
    """Register a converter class for ``target_type``.

    The class is instantiated with ``target_type`` as its only argument.

    Args:
        target_type: Type the converter handles.
        registry: Registry to use (default registry if None).

    Returns:
        Class decorator returning the class unchanged.
    """

    def decorator(cls: C) -> C:
        (registry or _registry).register(target_type, cls(target_type))
        return cls

    return decorator
