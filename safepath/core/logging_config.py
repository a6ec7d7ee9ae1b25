"""Structured logging configuration for the SafePath API."""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict

from safepath.config import get_settings

settings = get_settings()

# Correlation ID of the request being served, if any
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class StructuredFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            payload["request_id"] = request_id

        if record.exc_info:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        # Context passed as extra={"extra_fields": {...}}
        if hasattr(record, "extra_fields"):
            payload.update(record.extra_fields)

        return json.dumps(payload, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Coloured single-line formatter for local development."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")

        request_id = request_id_var.get()
        request_tag = f" [{request_id[:8]}]" if request_id else ""

        message = (
            f"{color}{timestamp} {record.levelname:8}{self.RESET} "
            f"{record.name}:{record.lineno}{request_tag} - {record.getMessage()}"
        )

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            message += " " + " ".join(f"{key}={value}" for key, value in extra_fields.items())

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging() -> None:
    """Configure the root logger.

    JSON output in production, human-readable output everywhere else.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if settings.APP_ENV == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())
    root_logger.addHandler(handler)

    # Quieten chatty third-party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "extra_fields": {
                "environment": settings.APP_ENV,
                "log_level": settings.LOG_LEVEL,
                "formatter": handler.formatter.__class__.__name__,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)


def set_request_id(request_id: str | None = None) -> str:
    """Set the correlation ID for the current context.

    Args:
        request_id: ID to use, or None to generate a new one

    Returns:
        The request ID that was set
    """
    if request_id is None:
        request_id = str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def get_request_id() -> str:
    """Current correlation ID, or empty string outside a request."""
    return request_id_var.get()


def clear_request_id() -> None:
    """Clear the correlation ID from the current context."""
    request_id_var.set("")
