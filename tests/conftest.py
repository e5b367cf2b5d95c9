"""Shared pytest fixtures and test helpers for reqbind tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
import sample_app
from click.testing import CliRunner

from reqbind.domain import naming
from reqbind.domain.mapping import SourceMapping
from reqbind.infrastructure.routes import derive_from_modules
from reqbind.services.binder import RequestBinder


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(scope="session")
def sample_mapping() -> SourceMapping:
    """Source mapping derived from the route declarations in sample_app."""
    return derive_from_modules([sample_app])


@pytest.fixture
def binder(sample_mapping: SourceMapping) -> RequestBinder:
    """Binder over the sample mapping with default validator and converter."""
    return RequestBinder(sample_mapping)


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to an empty temp directory with no reqbind.toml above it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.delenv("REQBIND_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def _restore_name_converters() -> Generator[None]:
    """Undo converter registrations made by a test."""
    snapshot = dict(naming.NAME_CONVERTERS)
    yield
    naming.NAME_CONVERTERS.clear()
    naming.NAME_CONVERTERS.update(snapshot)
