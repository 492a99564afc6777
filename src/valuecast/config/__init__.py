"""Configuration module using Pydantic Settings.

Provides typed configuration for coercion and serialization with environment
variable support.

Usage:
    from valuecast.config import CoercionSettings

    settings = CoercionSettings(enum_numeric_strings=False)
"""

from valuecast.config.settings import CoercionSettings, get_settings

__all__ = [
    "CoercionSettings",
    "get_settings",
]
