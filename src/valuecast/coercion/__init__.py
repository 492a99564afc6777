"""Coercion engine, outcome models and default-engine shortcuts."""

from valuecast.coercion.engine import (
    CoercionEngine,
    coerce,
    coerce_or_default,
    get_engine,
    is_convertible,
    try_coerce,
)
from valuecast.coercion.models import CoercionOutcome, Strategy
from valuecast.core.types import is_null, to_simple_string

__all__ = [
    # Models
    "CoercionOutcome",
    "Strategy",
    # Engine
    "CoercionEngine",
    "get_engine",
    "coerce",
    "coerce_or_default",
    "try_coerce",
    "is_convertible",
    "is_null",
    "to_simple_string",
]
