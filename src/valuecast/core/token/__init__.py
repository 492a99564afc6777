"""Structured-data tokens: protocol and the JSON implementation."""

from valuecast.core.token.jsontoken import JsonToken, JsonTokenKind
from valuecast.core.token.models import StructuredToken

__all__ = [
    "StructuredToken",
    "JsonToken",
    "JsonTokenKind",
]
