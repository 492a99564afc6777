"""JSON token backed by pydantic.

Usage:
    doc = JsonToken.parse('{"user": {"id": "42", "tags": ["a", "b"]}}')
    doc["user"]["id"].extract_as(int)        # 42
    doc["user"]["tags"].extract_as(list[str])  # ["a", "b"]
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any

import pydantic_core

from valuecast.core.types import type_adapter


class JsonTokenKind(Enum):
    """JSON node kinds."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class JsonToken:
    """A node of a parsed JSON document.

    Wraps the plain Python representation of the node (dict, list, str, int,
    float, bool or None). Typed extraction runs pydantic validation in lax mode,
    so ``"42"`` extracts as ``42`` for an ``int`` target.

    Tokens compare equal by node and are unhashable.

    Args:
        value: Parsed JSON node.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    @classmethod
    def parse(cls, text: str | bytes) -> JsonToken:
        """Parse JSON text into a root token.

        Raises:
            ValueError: If the text is not valid JSON.
        """
        return cls(pydantic_core.from_json(text))

    @property
    def value(self) -> Any:
        """The raw node."""
        return self._value

    @property
    def kind(self) -> JsonTokenKind:
        """JSON kind of this node."""
        value = self._value
        if value is None:
            return JsonTokenKind.NULL
        if isinstance(value, bool):
            return JsonTokenKind.BOOLEAN
        if isinstance(value, int | float):
            return JsonTokenKind.NUMBER
        if isinstance(value, str):
            return JsonTokenKind.STRING
        if isinstance(value, list):
            return JsonTokenKind.ARRAY
        return JsonTokenKind.OBJECT

    def __getitem__(self, key: str | int) -> JsonToken:
        """Child token by object key or array index."""
        return JsonToken(self._value[key])

    def get(self, key: str | int) -> JsonToken | None:
        """Child token, or None if the key/index is missing or this is a scalar."""
        try:
            return self[key]
        except (KeyError, IndexError, TypeError):
            return None

    def children(self) -> Iterator[JsonToken]:
        """Iterate array elements or object values."""
        if isinstance(self._value, list):
            nodes = self._value
        elif isinstance(self._value, dict):
            nodes = self._value.values()
        else:
            return
        for node in nodes:
            yield JsonToken(node)

    def extract_as(self, target_type: Any) -> Any:
        """Extract this node as ``target_type``.

        Args:
            target_type: Any annotation pydantic can validate.

        Returns:
            The validated value.

        Raises:
            pydantic.ValidationError: If the node does not fit ``target_type``.
        """
        return type_adapter(target_type).validate_python(self._value)

    def to_json(self) -> str:
        """Serialize this node back to compact JSON text."""
        return pydantic_core.to_json(self._value).decode()

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"JsonToken({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonToken):
            return bool(self._value == other._value)
        return NotImplemented

    # Nodes are mutable dicts and lists; equal tokens cannot share a stable hash
    __hash__ = None  # type: ignore[assignment]
