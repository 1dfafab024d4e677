"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from dashctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    dash = logging.getLogger("dashctl")
    dash_level = dash.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    dash.setLevel(dash_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("dashctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("dashctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("dashctl.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "dashctl.test"
        assert "timestamp" in parsed

    def test_store_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("dashctl.infrastructure.store").warning("Restored from backup")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Restored from backup"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "dashctl.infrastructure.store"
        assert parsed["component"] == "store"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("dashctl.infrastructure.serializer").debug("Job queued")
        assert capfd.readouterr().err == ""

    def test_asyncio_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("asyncio").debug("selector noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_explicit_stream(self) -> None:
        buffer = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buffer)
        logging.getLogger("dashctl.services.tasks").info("added")
        parsed = json.loads(buffer.getvalue().strip())
        assert parsed["event"] == "added"
        assert parsed["component"] == "service"

    def test_unknown_logger_has_no_component(self) -> None:
        buffer = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buffer)
        logging.getLogger("somelib").warning("hi")
        assert "component" not in json.loads(buffer.getvalue().strip())
