"""Structured-data token protocol.

A token is a node of a parsed, dynamically-typed document (JSON and friends)
that knows how to extract a typed value from itself.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StructuredToken(Protocol):
    """Node of a parsed document offering typed extraction."""

    def extract_as(self, target_type: Any) -> Any:
        """Extract this node's value as ``target_type``.

        Raises:
            Exception: Implementation-specific, when the node cannot be
                represented as ``target_type``.
        """
        ...
