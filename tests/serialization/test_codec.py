"""Tests for JSON helpers and deep copy."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

import pytest
from pydantic import BaseModel, ValidationError

from valuecast.serialization import deep_copy, from_json, to_json


class Role(Enum):
    ADMIN = 1
    GUEST = 2


@dataclass
class Member:
    id: int
    role: Role = Role.GUEST
    tags: list[str] = field(default_factory=list)
    joined: date | None = None


class Team(BaseModel):
    name: str
    members: list[Member] = []


def test_to_json_dataclass():
    member = Member(id=1, role=Role.ADMIN, tags=["a"], joined=date(2024, 1, 31))

    assert to_json(member) == '{"id":1,"role":1,"tags":["a"],"joined":"2024-01-31"}'


def test_to_json_options():
    assert to_json(Member(id=1), exclude_none=True) == '{"id":1,"role":2,"tags":[]}'
    assert to_json([1], indent=2) == "[\n  1\n]"


def test_from_json_into_type():
    member = from_json('{"id": "5", "role": 1}', Member)

    assert member == Member(id=5, role=Role.ADMIN)
    assert from_json(b"[1, 2]", list[int]) == [1, 2]


def test_from_json_invalid_raises():
    with pytest.raises(ValidationError):
        from_json('{"role": 1}', Member)


def test_circular_reference_raises():
    data: dict = {}
    data["self"] = data

    with pytest.raises(ValueError):
        to_json(data)


def test_deep_copy_is_independent():
    """CRITICAL: The copy shares no mutable state with the original."""
    original = Team(name="core", members=[Member(id=1, tags=["x"])])

    clone = deep_copy(original)
    clone.members[0].tags.append("y")
    clone.name = "other"

    assert clone is not original
    assert original.members[0].tags == ["x"]
    assert original.name == "core"
    assert clone.members[0].id == 1


def test_deep_copy_keeps_none_fields():
    clone = deep_copy(Member(id=3))

    assert clone == Member(id=3)


def test_deep_copy_none():
    assert deep_copy(None) is None


def test_deep_copy_container_of_dataclasses_keeps_element_type():
    members = [Member(id=1, tags=["x"])]

    clone = deep_copy(members, list[Member])

    assert clone == members
    assert isinstance(clone[0], Member)
    assert clone[0] is not members[0]


def test_deep_copy_dict_keeps_int_keys():
    assert deep_copy({1: "a"}, dict[int, str]) == {1: "a"}


@pytest.mark.parametrize("value", [[Member(id=1)], {1: "a"}, (1, 2), {1}])
def test_deep_copy_bare_container_requires_target_type(value):
    """CRITICAL: A container copied without element types is refused.

    Why: JSON turns dataclasses into dicts and int keys into strings.
    """
    with pytest.raises(TypeError, match="without target_type"):
        deep_copy(value)
