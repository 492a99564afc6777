"""JSON serialization helpers and deep copy by JSON round trip."""

from valuecast.serialization.codec import deep_copy, from_json, to_json

__all__ = [
    "to_json",
    "from_json",
    "deep_copy",
]
