"""Tests for configuration settings."""

from valuecast.coercion import CoercionEngine
from valuecast.config import CoercionSettings, get_settings


def test_defaults():
    settings = CoercionSettings(_env_file=None)

    assert settings.enum_numeric_strings is True
    assert settings.json_indent is None
    assert settings.json_exclude_none is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VALUECAST_ENUM_NUMERIC_STRINGS", "false")
    monkeypatch.setenv("VALUECAST_JSON_INDENT", "4")

    settings = CoercionSettings(_env_file=None)

    assert settings.enum_numeric_strings is False
    assert settings.json_indent == 4


def test_explicit_values_win(monkeypatch):
    monkeypatch.setenv("VALUECAST_JSON_INDENT", "4")

    assert CoercionSettings(_env_file=None, json_indent=2).json_indent == 2


def test_get_settings_cached():
    assert get_settings() is get_settings()


def test_default_engine_reads_shared_settings():
    """Settings are a core dependency: the default engine is built on them."""
    assert CoercionEngine().settings is get_settings()
