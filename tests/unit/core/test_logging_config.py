"""Tests for logging configuration."""

import logging

import pytest
import structlog

from lakecatalog.config import Settings
from lakecatalog.logging_config import get_logger, log_error, log_operation, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default logging after each test."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_root_level(self):
        setup_logging(Settings(log_level="WARNING"))

        assert logging.getLogger().level == logging.WARNING

    def test_json_renderer(self):
        setup_logging(Settings(log_format="json"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestLogHelpers:
    """Tests for log_operation and log_error."""

    def test_log_operation(self):
        with structlog.testing.capture_logs() as logs:
            log_operation(get_logger("test"), "create_table", "c", table_path="db1.t1")

        assert logs == [
            {
                "event": "operation",
                "log_level": "info",
                "operation": "create_table",
                "catalog_name": "c",
                "table_path": "db1.t1",
            }
        ]

    def test_log_error(self):
        error = RuntimeError("boom")

        with structlog.testing.capture_logs() as logs:
            log_error(get_logger("test"), error, "drop_table", "c")

        assert logs[0]["event"] == "operation_failed"
        assert logs[0]["log_level"] == "error"
        assert logs[0]["error_type"] == "RuntimeError"
        assert logs[0]["error_message"] == "boom"
