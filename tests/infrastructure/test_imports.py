"""Tests for module:Name reference resolution."""

from __future__ import annotations

import pytest
import sample_app

from reqbind.domain.errors import ConfigurationError
from reqbind.infrastructure.imports import import_module, import_object


class TestImportModule:
    def test_existing(self) -> None:
        assert import_module("sample_app") is sample_app

    def test_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="Cannot import module 'no_such_module'"):
            import_module("no_such_module")


class TestImportObject:
    def test_class(self) -> None:
        assert import_object("sample_app:ShowUser") is sample_app.ShowUser

    def test_nested_attribute(self) -> None:
        assert import_object("sample_app:UserHandlers.delete") is sample_app.UserHandlers.delete

    @pytest.mark.parametrize("reference", ["sample_app", "sample_app:", ":ShowUser"])
    def test_malformed(self, reference: str) -> None:
        with pytest.raises(ConfigurationError, match="Expected 'module:Name'"):
            import_object(reference)

    def test_missing_attribute(self) -> None:
        with pytest.raises(ConfigurationError, match="has no attribute 'Nope'"):
            import_object("sample_app:Nope")
