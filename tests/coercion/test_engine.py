"""Tests for the coercion engine strategy chain."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum

import pytest

from valuecast.coercion import CoercionEngine, Strategy, coerce, coerce_or_default, is_convertible
from valuecast.config import CoercionSettings
from valuecast.core.converter import EnumConverter, TypeConverter
from valuecast.core.token import JsonToken
from valuecast.core.types import DB_NULL


class Color(Enum):
    RED = 1
    GREEN = 2


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Opaque:
    pass


@dataclass
class Temperature:
    degrees: float


class ExplodingConverter(TypeConverter):
    """Claims to accept text, then fails."""

    def can_convert_from(self, source_type):
        return source_type is str

    def convert_from(self, value):
        raise RuntimeError("boom")


class AlwaysRedConverter(EnumConverter):
    def can_convert_from(self, source_type):
        return True

    def convert_from(self, value):
        return Color.RED


# Absent values


def test_absent_value_returns_default(engine):
    """coerce_or_default(null, int, -1) == -1."""
    assert engine.coerce_or_default(None, int, -1) == -1
    assert engine.coerce_or_default(DB_NULL, int, -1) == -1


def test_absent_value_without_default_uses_zero_value(engine):
    assert engine.coerce(None, int) == 0
    assert engine.coerce(None, bool) is False
    assert engine.coerce(None, str) is None


def test_absent_outcome_reports_default(engine):
    outcome = engine.try_coerce(None, int, -1)

    assert outcome.fell_back
    assert outcome.strategy is Strategy.DEFAULT
    assert outcome.failed_at is None


# Identity


def test_assignable_value_returned_unchanged(engine):
    """CRITICAL: Identity law, assignable values are returned as the same object."""
    values = [1, 2]
    outcome = engine.try_coerce(values, list)

    assert outcome.value is values
    assert outcome.strategy is Strategy.IDENTITY


def test_identity_covers_subclasses_and_unions(engine):
    assert engine.coerce(True, int) is True
    assert engine.coerce(Priority.HIGH, int) is Priority.HIGH
    assert engine.coerce(5, int | str) == 5


# Structured-data tokens


def test_token_extracts_itself(engine):
    outcome = engine.try_coerce(JsonToken("12"), int, -1)

    assert outcome.value == 12
    assert outcome.strategy is Strategy.TOKEN


def test_token_extraction_failure_falls_back(engine):
    outcome = engine.try_coerce(JsonToken("twelve"), int, -1)

    assert outcome.value == -1
    assert outcome.failed_at is Strategy.TOKEN


def test_token_is_returned_as_is_for_any_target(engine):
    token = JsonToken([1])
    assert engine.coerce(token, object) is token


# Enums


def test_enum_member_to_underlying_int(engine):
    outcome = engine.try_coerce(Color.GREEN, int)

    assert outcome.value == 2
    assert outcome.strategy is Strategy.ENUM_VALUE


def test_int_to_enum_member(engine):
    """Coerce(i, E) yields the member whose value is i."""
    outcome = engine.try_coerce(2, Color)

    assert outcome.value is Color.GREEN
    assert outcome.strategy is Strategy.ENUM_MEMBER


def test_int_outside_enum_falls_back(engine):
    outcome = engine.try_coerce(9, Color, Color.RED)

    assert outcome.value is Color.RED
    assert outcome.failed_at is Strategy.ENUM_MEMBER


def test_name_to_enum_member(engine):
    outcome = engine.try_coerce("GREEN", Color)

    assert outcome.value is Color.GREEN
    assert outcome.strategy is Strategy.ENUM_NAME


def test_enum_name_match_is_case_sensitive(engine):
    assert engine.coerce_or_default("green", Color, None) is None


def test_numeric_text_to_enum_member(engine):
    assert engine.coerce("2", Color) is Color.GREEN


def test_numeric_text_disabled_by_settings(registry):
    engine = CoercionEngine(registry, CoercionSettings(_env_file=None, enum_numeric_strings=False))
    assert engine.coerce_or_default("2", Color, None) is None


def test_is_convertible_honours_numeric_text_setting(registry):
    """is_convertible parses enum text the same way coercion does."""
    engine = CoercionEngine(registry, CoercionSettings(_env_file=None, enum_numeric_strings=False))

    assert not engine.is_convertible("2", Color)
    assert not engine.is_convertible("2", Color | None)
    assert engine.is_convertible("GREEN", Color)
    assert engine.is_convertible(2, Color)


def test_nullable_enum_target(engine):
    assert engine.coerce("RED", Color | None) is Color.RED


def test_failed_enum_parse_skips_generic_converters(engine, registry):
    """Unmatched names end in the default; converters are not consulted.

    Why: Generic converters handle enums inconsistently, the enum rules are final.
    """
    registry.register(Color, AlwaysRedConverter(Color))

    outcome = engine.try_coerce("PURPLE", Color, None)

    assert outcome.value is None
    assert outcome.failed_at is Strategy.ENUM_NAME


def test_enum_member_to_text_uses_name(engine):
    assert engine.coerce(Color.RED, str) == "RED"


# Converters


def test_target_converter_parses_text(engine):
    outcome = engine.try_coerce("1231", int)

    assert outcome.value == 1231
    assert outcome.strategy is Strategy.TARGET_CONVERTER
    assert engine.coerce("2024-01-31", date) == date(2024, 1, 31)


def test_non_numeric_text_to_int_falls_back(engine):
    """coerce_or_default("abc", int, -1) == -1."""
    outcome = engine.try_coerce("abc", int, -1)

    assert outcome.value == -1
    assert outcome.failed_at is Strategy.TARGET_CONVERTER


def test_source_converter_renders_text(engine):
    outcome = engine.try_coerce(1231, str)

    assert outcome.value == "1231"
    assert outcome.strategy is Strategy.SOURCE_CONVERTER


def test_source_converter_narrows_float(engine):
    assert engine.coerce(2.5, int) == 2
    assert engine.coerce(7.6, int) == 8


def test_generic_target_converts_elements(engine):
    outcome = engine.try_coerce(["1", "2"], list[int])

    assert outcome.value == [1, 2]
    assert outcome.strategy is Strategy.TARGET_CONVERTER


def test_generic_target_with_bad_elements_falls_back(engine):
    """CRITICAL: A list of text is not returned for a list[int] target.

    Why: Coercion promises a value of the target type or the default.
    """
    outcome = engine.try_coerce(["x"], list[int], -1)

    assert outcome.value == -1
    assert outcome.failed_at is Strategy.TARGET_CONVERTER
    assert not engine.is_convertible(["x"], list[int])
    assert engine.is_convertible(["1"], list[int])


def test_no_applicable_strategy_returns_default(engine):
    outcome = engine.try_coerce(Opaque(), int, -1)

    assert outcome.value == -1
    assert outcome.strategy is Strategy.DEFAULT
    assert outcome.failed_at is None


def test_custom_converter_used(engine, registry):
    class TemperatureConverter(TypeConverter):
        def can_convert_from(self, source_type):
            return source_type is str or super().can_convert_from(source_type)

        def convert_from(self, value):
            if isinstance(value, str):
                return Temperature(float(value.removesuffix("C")))
            return super().convert_from(value)

    registry.register(Temperature, TemperatureConverter(Temperature))

    assert engine.coerce("21.5C", Temperature) == Temperature(21.5)


def test_converter_exception_is_swallowed_and_logged(engine, registry, caplog):
    """CRITICAL: Coercion never propagates converter errors.

    Why: "Could not convert" is a normal branch for callers such as form binding.
    """
    registry.register(Temperature, ExplodingConverter(Temperature))

    with caplog.at_level(logging.DEBUG, logger="valuecast.coercion.engine"):
        outcome = engine.try_coerce("21", Temperature, "fallback")

    assert outcome.value == "fallback"
    assert outcome.failed_at is Strategy.TARGET_CONVERTER
    assert "failed at TARGET_CONVERTER" in caplog.text


# Convertibility


def test_absent_value_convertible_only_to_nullable(engine):
    assert engine.is_convertible(None, int | None)
    assert engine.is_convertible(DB_NULL, object)
    assert not engine.is_convertible(None, int)


@pytest.mark.parametrize(
    ("value", "target", "expected"),
    [
        ("42", int, True),
        ("abc", int, False),
        (5, int, True),
        (2.5, int, False),
        ("RED", Color, True),
        ("PURPLE", Color, False),
        ("2024-01-31", date, True),
        (Opaque(), int, False),
    ],
)
def test_is_convertible(engine, value, target, expected):
    assert engine.is_convertible(value, target) is expected


def test_is_convertible_swallows_converter_errors(engine, registry):
    registry.register(Temperature, ExplodingConverter(Temperature))
    assert not engine.is_convertible("21", Temperature)


def test_to_simple_string(engine):
    assert engine.to_simple_string(None) == ""
    assert engine.to_simple_string(Color.RED) == "RED"
    assert engine.to_simple_string(3.5) == "3.5"


# Default engine shortcuts


def test_module_shortcuts_use_default_engine():
    assert coerce("5", int) == 5
    assert coerce_or_default("x", int, -1) == -1
    assert is_convertible("5", int)
