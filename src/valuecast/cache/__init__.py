"""Metadata cache backends."""

from valuecast.cache.memory import InMemoryCache
from valuecast.cache.protocol import MetadataCache

__all__ = [
    "MetadataCache",
    "InMemoryCache",
]
