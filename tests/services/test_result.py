"""Tests for BindResult construction."""

from __future__ import annotations

import json

from sample_app import CreateUser, SearchUsers

from reqbind.domain.violations import ValidationFailed, Violation
from reqbind.services.result import VALIDATION_FAILED, BindResult


class TestFromInstance:
    def test_field_values(self) -> None:
        result = BindResult.from_instance(CreateUser(email="ada@example.com", age=36, tags=["ab"]))
        assert result.ok
        assert result.op == "bind"
        assert result.data == {"email": "ada@example.com", "age": 36, "tags": ["ab"]}
        assert result.error is None

    def test_unset_field_is_none(self) -> None:
        instance = SearchUsers()
        result = BindResult.from_instance(instance, op="fields")
        assert result.op == "fields"
        assert result.data["query"] is None
        assert result.data["perPage"] == 10


class TestFromFailure:
    def test_violations_carried(self) -> None:
        failure = ValidationFailed(
            CreateUser.__new__(CreateUser),
            [
                Violation("email", "String should match pattern", "nope", "string_pattern_mismatch"),
                Violation("age", "Input should be greater than or equal to 0", -1, "greater_than_equal"),
            ],
        )
        result = BindResult.from_failure(failure)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == VALIDATION_FAILED
        assert result.error.message == "2 violation(s) on CreateUser"
        assert [item.property_path for item in result.error.violations] == ["email", "age"]

    def test_unserializable_value_is_repr(self) -> None:
        marker = object()
        failure = ValidationFailed(CreateUser.__new__(CreateUser), [Violation("email", "bad", marker)])
        result = BindResult.from_failure(failure)
        payload = json.loads(result.model_dump_json())
        assert payload["error"]["violations"][0]["invalid_value"] == repr(marker)


class TestFromError:
    def test_code_and_message(self) -> None:
        result = BindResult.from_error("CONFIGURATION", "bad target", op="fields")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONFIGURATION"
        assert result.data == {}
