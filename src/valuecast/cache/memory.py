"""Local in-memory metadata cache.

Dict-based cache suitable for a single process. Lookups of present keys take
no lock; a missing key is computed under a per-key lock so concurrent callers
trigger exactly one factory call.

Usage:
    cache = InMemoryCache()
    props = cache.get("app.models.User", lambda: describe_entity(User))
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

_MISSING = object()


class InMemoryCache:
    """Thread-safe dict cache with compute-once ``get``.

    Structure:
        _entries[key] = value
        _key_locks[key] = lock held while computing key
        _waiters[key] = callers holding or waiting on _key_locks[key]

    A factory that raises stores nothing; the next caller computes again.
    A key lock lives only while some caller holds or waits on it.
    """

    def __init__(self) -> None:
        """Initialize empty cache."""
        self._entries: dict[str, Any] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._waiters: dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, key: str, factory: Callable[[], Any] | None = None) -> Any:
        """Get cached value, computing it once via ``factory`` if missing.

        Args:
            key: Cache key.
            factory: Zero-argument callable producing the value.

        Returns:
            Cached or freshly computed value; None if missing and no factory.
        """
        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            return value
        if factory is None:
            return None

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
            self._waiters[key] = self._waiters.get(key, 0) + 1

        try:
            with key_lock:
                value = self._entries.get(key, _MISSING)
                if value is _MISSING:
                    value = factory()
                    self._entries[key] = value
        finally:
            with self._lock:
                self._waiters[key] -= 1
                if not self._waiters[key]:
                    del self._waiters[key]
                    del self._key_locks[key]
        return value

    def set(self, key: str, value: Any) -> None:
        """Store or replace a value."""
        self._entries[key] = value

    def remove(self, key: str) -> bool:
        """Remove a key.

        Returns:
            True if the key existed.
        """
        return self._entries.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
