"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from valuecast.access import PropertyAccessor
from valuecast.cache import InMemoryCache
from valuecast.coercion import CoercionEngine
from valuecast.config import CoercionSettings
from valuecast.core.converter import ConverterRegistry


@pytest.fixture
def settings():
    """Settings with defaults only (no .env file)."""
    return CoercionSettings(_env_file=None)


@pytest.fixture
def registry():
    """Fresh ConverterRegistry with the built-in converters."""
    return ConverterRegistry()


@pytest.fixture
def engine(registry, settings):
    """CoercionEngine bound to the fresh registry."""
    return CoercionEngine(registry=registry, settings=settings)


@pytest.fixture
def cache():
    """Empty InMemoryCache."""
    return InMemoryCache()


@pytest.fixture
def accessor(cache, engine):
    """PropertyAccessor with its own cache and engine."""
    return PropertyAccessor(cache=cache, engine=engine)
