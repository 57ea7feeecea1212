"""
Structured JSON logging configuration.
Every line is a single JSON object carrying the request id when one is known.
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from food_lovers.core.config import settings

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "request_id",
    ]
)


class JSONFormatter(logging.Formatter):
    """Render log records as JSON with the fields passed via ``extra={}``."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "request_id"):
            log_data["request_id"] = record.request_id

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


def setup_logging() -> logging.Logger:
    """
    Configure and return the application logger.
    Uses JSON formatting for structured logs.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger("food_lovers")
    logger.setLevel(level)

    # Re-imports must not stack handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logging()


def log_error(message: str, error: Exception = None, **kwargs):
    """Log an error with optional exception details."""
    extra = kwargs.copy()
    if error:
        extra["error_type"] = type(error).__name__
        extra["error_message"] = str(error)

    logger.error(message, extra=extra, exc_info=error is not None)


def log_info(message: str, **kwargs):
    """Log an info message with extra fields."""
    logger.info(message, extra=kwargs)


def log_warning(message: str, **kwargs):
    """Log a warning message with extra fields."""
    logger.warning(message, extra=kwargs)
