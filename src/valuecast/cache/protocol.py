"""Metadata cache protocol for swappable backends.

The property accessor memoizes per-type metadata through this interface, so
hosts can plug in whatever cache they already run.

Usage:
    cache = InMemoryCache()
    accessor = PropertyAccessor(cache=cache)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar, overload, runtime_checkable

V = TypeVar("V")


@runtime_checkable
class MetadataCache(Protocol):
    """Key-value cache with compute-once semantics for missing keys."""

    @overload
    def get(self, key: str) -> Any | None: ...

    @overload
    def get(self, key: str, factory: Callable[[], V]) -> V: ...

    def get(self, key: str, factory: Callable[[], Any] | None = None) -> Any:
        """Get cached value, computing and storing it via ``factory`` if missing.

        The first successful computation for a key is memoized and reused;
        concurrent first computations must not corrupt the entry.
        Returns None for a missing key when no factory is given.
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Store or replace a value."""
        ...

    def remove(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        ...

    def clear(self) -> None:
        """Remove all entries."""
        ...
