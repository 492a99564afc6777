"""Configuration settings using Pydantic Settings.

Usage:
    from valuecast.config import CoercionSettings

    # Load from environment variables (VALUECAST_*)
    settings = CoercionSettings()

    # Or override with explicit values
    settings = CoercionSettings(json_indent=2)
"""

from __future__ import annotations

from functools import cache

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install pydantic-settings"
    ) from e


class CoercionSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the coercion engine and JSON helpers.

    Attributes:
        enum_numeric_strings: Accept integer literals ("2") as enum member values
            when parsing text into an enum.
        json_indent: Indentation for ``to_json`` output (None for compact).
        json_exclude_none: Drop None-valued fields in ``to_json`` output.

    Environment Variables:
        VALUECAST_ENUM_NUMERIC_STRINGS
        VALUECAST_JSON_INDENT
        VALUECAST_JSON_EXCLUDE_NONE
    """

    model_config = SettingsConfigDict(
        env_prefix="VALUECAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enum_numeric_strings: bool = True
    json_indent: int | None = None
    json_exclude_none: bool = False


@cache
def get_settings() -> CoercionSettings:
    """Settings loaded once from the environment and ``.env``.

    Returns:
        The process-local CoercionSettings instance.
    """
    return CoercionSettings()
