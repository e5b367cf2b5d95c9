"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from reqbind.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    reqbind = logging.getLogger("reqbind")
    reqbind_level = reqbind.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    reqbind.setLevel(reqbind_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("reqbind").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("reqbind").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=False, stream=stream)
        structlog.get_logger("reqbind.test").warning("hello world", key="val")
        output = stream.getvalue()
        assert "hello world" in output
        assert "key" in output

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("reqbind.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "reqbind.test"
        assert "timestamp" in parsed

    def test_stdlib_reqbind_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        logging.getLogger("reqbind.services.binder").debug("Binding %s on route %s", "app.ShowUser", "users:show")

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "Binding app.ShowUser on route users:show"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "reqbind.services.binder"

    def test_debug_hidden_without_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        logging.getLogger("reqbind.services.binder").debug("noise")
        assert stream.getvalue() == ""

    def test_third_party_debug_is_suppressed(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        logging.getLogger("pluggy").debug("hook noise")
        logging.getLogger("pydantic").debug("schema noise")

        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
