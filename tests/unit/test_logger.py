"""
Unit tests for structured logging utility (src/utils/logger.py)

Tests covering:
- JSON log formatting with required fields (timestamp, level, message, operation, context)
- Log level resolution from environment
- Operation timing and duration tracking
- Error handling and error context
- Log operation decorator
"""

import json
import logging
from datetime import datetime
from io import StringIO

import pytest

from src.utils.logger import (
    StructuredLogger,
    log_operation,
    get_logger,
    resolve_log_level,
)


class TestResolveLogLevel:
    """Tests for log level resolution."""

    def test_explicit_level_name(self):
        assert resolve_log_level("DEBUG") == logging.DEBUG
        assert resolve_log_level("warning") == logging.WARNING

    def test_environment_level(self, monkeypatch):
        monkeypatch.setenv("BOOKING_FIELDS_LOG_LEVEL", "ERROR")
        assert resolve_log_level() == logging.ERROR

    def test_default_is_info(self, monkeypatch):
        monkeypatch.delenv("BOOKING_FIELDS_LOG_LEVEL", raising=False)
        assert resolve_log_level() == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        assert resolve_log_level("chatty") == logging.INFO


class TestStructuredLogger:
    """Tests for StructuredLogger class."""

    @pytest.fixture
    def logger_with_handler(self):
        """Fixture providing logger with string stream handler."""
        logger = StructuredLogger("test_logger", level="DEBUG")
        logger.logger.handlers.clear()

        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.logger.addHandler(handler)

        return logger, stream

    def test_logger_initialization(self, logger_with_handler):
        """Test logger initializes with correct settings."""
        logger, _ = logger_with_handler
        assert logger.logger.name == "test_logger"
        assert logger.logger.level == logging.DEBUG

    def test_format_log_basic_fields(self, logger_with_handler):
        """Test log formatting includes required fields."""
        logger, _ = logger_with_handler

        parsed = json.loads(logger._format_log("INFO", "Test message"))

        assert "timestamp" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert "operation" not in parsed
        assert "context" not in parsed

    def test_format_log_timestamp_format(self, logger_with_handler):
        """Test timestamp is in ISO format with Z suffix."""
        logger, _ = logger_with_handler

        timestamp = json.loads(logger._format_log("INFO", "Test"))["timestamp"]

        assert timestamp.endswith("Z")
        datetime.fromisoformat(timestamp.replace("Z", "+00:00"))

    def test_format_log_all_fields(self, logger_with_handler):
        """Test log formatting with all optional fields."""
        logger, _ = logger_with_handler

        context = {"added": ["name", "email"], "merged": []}
        parsed = json.loads(
            logger._format_log(
                "ERROR",
                "Something went wrong",
                operation="reconcile_booking_fields",
                context=context,
                duration_ms=45.678,
                error="bookingFields[0].type: 'bogus' is not one of [...]",
            )
        )

        assert parsed["level"] == "ERROR"
        assert parsed["operation"] == "reconcile_booking_fields"
        assert parsed["context"] == context
        assert parsed["duration_ms"] == 45.68
        assert parsed["error"].startswith("bookingFields[0].type")

    def test_debug_suppressed_below_level(self):
        """Debug records are not formatted when the logger is at INFO."""
        logger = StructuredLogger("test_logger_info", level="INFO")
        logger.logger.handlers.clear()
        stream = StringIO()
        logger.logger.addHandler(logging.StreamHandler(stream))

        logger.debug("hidden")
        logger.info("shown")

        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "shown"

    def test_logger_error_method(self, logger_with_handler):
        """Test logger error method."""
        logger, stream = logger_with_handler

        logger.error("Error message", operation="validate", error="Something wrong", duration_ms=1.5)

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["level"] == "ERROR"
        assert parsed["operation"] == "validate"
        assert parsed["error"] == "Something wrong"
        assert parsed["duration_ms"] == 1.5

    def test_unused_levels_not_exposed(self, logger_with_handler):
        """Only the levels the package logs at are part of the wrapper."""
        logger, _ = logger_with_handler
        assert not hasattr(logger, "warning")

    def test_non_json_context_values_are_stringified(self, logger_with_handler):
        """Context values json can't encode fall back to str()."""
        logger, stream = logger_with_handler

        logger.info("Info message", context={"names": {"name"}})

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["context"]["names"] == "{'name'}"


class TestLogOperationDecorator:
    """Tests for log_operation decorator."""

    def test_decorator_returns_result(self):
        @log_operation("add")
        def add(a, b):
            return a + b

        assert add(2, 3) == 5

    def test_decorator_preserves_name(self):
        @log_operation("noop")
        def noop():
            return None

        assert noop.__name__ == "noop"

    def test_decorator_logs_completion(self, caplog):
        @log_operation("reconcile")
        def reconcile(fields=None):
            return fields

        with caplog.at_level(logging.INFO, logger=__name__):
            reconcile(fields=[])

        messages = [json.loads(r.getMessage()) for r in caplog.records]
        completed = [m for m in messages if m["message"] == "Completed reconcile"]
        assert completed
        assert completed[0]["context"]["kwargs"] == ["fields"]
        assert "duration_ms" in completed[0]

    def test_decorator_logs_and_reraises(self, caplog):
        @log_operation("explode")
        def explode():
            raise ValueError("boom")

        with caplog.at_level(logging.INFO, logger=__name__):
            with pytest.raises(ValueError, match="boom"):
                explode()

        messages = [json.loads(r.getMessage()) for r in caplog.records]
        failed = [m for m in messages if m["message"] == "Failed explode"]
        assert failed
        assert failed[0]["level"] == "ERROR"
        assert failed[0]["error"] == "boom"


def test_get_logger_returns_structured_logger():
    logger = get_logger("factory_test")
    assert isinstance(logger, StructuredLogger)
    assert logger.logger.name == "factory_test"
