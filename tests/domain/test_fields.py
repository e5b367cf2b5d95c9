"""Tests for field enumeration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import pytest
from sample_app import CreateUser, Paging, Ping, SearchUsers, ShowUser, UpdateEmail

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.fields import MISSING, enumerate_fields
from reqbind.domain.requests import OperationRequest


class _Broken(OperationRequest):
    value: DoesNotExist  # type: ignore[name-defined]  # noqa: F821


class _Slotted:
    __slots__ = ("name",)
    name: str


class _Base:
    first: int
    shared: str = "base"


class _Mixin:
    mixed: bool = True


class _Child(_Base, _Mixin):
    shared: str = "child"
    last: float
    counter: ClassVar[int] = 0


@dataclass
class _DataChild(_Base):
    extra: int = 3


class TestEnumerationOrder:
    def test_own_fields_in_declaration_order(self) -> None:
        assert list(enumerate_fields(ShowUser)) == ["userId", "verbose"]

    def test_ancestor_fields_come_first(self) -> None:
        assert list(enumerate_fields(SearchUsers)) == ["page", "perPage", "query", "locale"]

    def test_stable_across_calls(self) -> None:
        assert list(enumerate_fields(SearchUsers)) == list(enumerate_fields(SearchUsers))

    def test_mixins_walked_most_base_first(self) -> None:
        assert list(enumerate_fields(_Child)) == ["mixed", "first", "shared", "last"]


class TestInheritancePrecedence:
    def test_subtype_descriptor_wins(self) -> None:
        fields = enumerate_fields(SearchUsers)
        assert fields["perPage"].owner is SearchUsers
        assert fields["perPage"].default == 10

    def test_single_entry_for_shadowed_field(self) -> None:
        names = list(enumerate_fields(SearchUsers))
        assert names.count("perPage") == 1

    def test_unshadowed_ancestor_field_kept(self) -> None:
        fields = enumerate_fields(SearchUsers)
        assert fields["page"].owner is Paging

    def test_parent_enumeration_unchanged(self) -> None:
        assert enumerate_fields(Paging)["perPage"].owner is Paging

    def test_shadowed_default_on_plain_class(self) -> None:
        assert enumerate_fields(_Child)["shared"].default == "child"


class TestExclusions:
    def test_class_vars_skipped(self) -> None:
        assert "counter" not in enumerate_fields(_Child)
        assert enumerate_fields(Ping) == {}

    def test_marker_contributes_nothing(self) -> None:
        assert enumerate_fields(OperationRequest) == {}

    def test_slot_descriptor_is_not_a_default(self) -> None:
        descriptor = enumerate_fields(_Slotted)["name"]
        assert descriptor.default is MISSING
        assert not descriptor.has_default


class TestDescriptors:
    def test_dataclass_defaults(self) -> None:
        fields = enumerate_fields(CreateUser)
        assert not fields["email"].has_default
        assert fields["tags"].default_factory is list
        assert fields["tags"].make_default() == []

    def test_dataclass_inherits_plain_base(self) -> None:
        assert list(enumerate_fields(_DataChild)) == ["first", "shared", "extra"]

    def test_base_type_strips_constraints(self) -> None:
        assert enumerate_fields(ShowUser)["userId"].base_type is int

    def test_nullable(self) -> None:
        fields = enumerate_fields(SearchUsers)
        assert fields["locale"].nullable
        assert not fields["query"].nullable

    def test_frozen_dataclass_fields(self) -> None:
        assert list(enumerate_fields(UpdateEmail)) == ["userId", "email"]

    def test_result_is_read_only(self) -> None:
        fields = enumerate_fields(ShowUser)
        with pytest.raises(TypeError):
            fields["other"] = fields["userId"]  # type: ignore[index]


class TestConfigurationErrors:
    def test_unresolvable_annotation(self) -> None:
        with pytest.raises(ConfigurationError, match="_Broken"):
            enumerate_fields(_Broken)

    def test_not_a_class(self) -> None:
        with pytest.raises(ConfigurationError):
            enumerate_fields("ShowUser")  # type: ignore[arg-type]
