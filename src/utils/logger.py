"""
JSON logging for the booking fields package.

Each record is a single JSON object carrying the message plus optional
operation name, context dict, duration and error text. The level comes from
BOOKING_FIELDS_LOG_LEVEL unless a logger is given one explicitly.
"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Optional

DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(value: Optional[str] = None) -> int:
    """
    Map a level name to a logging constant; unknown names give INFO.

    Without a value the BOOKING_FIELDS_LOG_LEVEL environment variable is read.
    """
    if value is None:
        value = os.getenv("BOOKING_FIELDS_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


class StructuredLogger:
    """Thin wrapper around a stdlib logger that writes JSON lines."""

    def __init__(self, name: str, level: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(resolve_log_level(level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
    ) -> str:
        """Render one record; empty optional parts are left out."""
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "message": message,
        }
        for key, value in (("operation", operation), ("context", context), ("error", error)):
            if value:
                entry[key] = value
        if duration_ms is not None:
            entry["duration_ms"] = round(duration_ms, 2)

        return json.dumps(entry, ensure_ascii=False, default=str)

    def _emit(self, level_no: int, message: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level_no):
            record = self._format_log(logging.getLevelName(level_no), message, **fields)
            self.logger.log(level_no, record)

    def debug(self, message: str, operation: Optional[str] = None, context=None):
        self._emit(logging.DEBUG, message, operation=operation, context=context)

    def info(self, message: str, operation: Optional[str] = None, context=None, duration_ms=None):
        self._emit(
            logging.INFO, message, operation=operation, context=context, duration_ms=duration_ms
        )

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        context=None,
        error: Optional[str] = None,
        duration_ms=None,
    ):
        self._emit(
            logging.ERROR,
            message,
            operation=operation,
            context=context,
            duration_ms=duration_ms,
            error=error,
        )


def log_operation(operation_name: str):
    """
    Decorator logging the start, duration and failure of a call.

        @log_operation("get_booking_fields_with_system_fields")
        def get_booking_fields_with_system_fields(...):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context: Dict[str, Any] = {"function": func.__name__}
            if args:
                context["arg_count"] = len(args)
            if kwargs:
                context["kwargs"] = sorted(kwargs)

            logger.debug(f"Starting {operation_name}", operation=operation_name, context=context)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Failed {operation_name}",
                    operation=operation_name,
                    context=context,
                    error=str(e),
                    duration_ms=(time.perf_counter() - started) * 1000,
                )
                raise

            logger.info(
                f"Completed {operation_name}",
                operation=operation_name,
                context=context,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            return result

        return wrapper

    return decorator


def get_logger(name: str) -> StructuredLogger:
    """Return a StructuredLogger for a module (pass __name__)."""
    return StructuredLogger(name)
