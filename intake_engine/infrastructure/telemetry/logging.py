"""Structured logging with correlation-id injection."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Correlation IDs, set per request by RequestContextMiddleware
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)
session_id_var: ContextVar[str | None] = ContextVar("session_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def set_request_context(
    request_id: str | None = None,
    user_id: str | None = None,
    session_id: str | None = None,
) -> None:
    """Set context variables for request correlation."""
    if request_id is not None:
        request_id_var.set(request_id)
    if user_id is not None:
        user_id_var.set(user_id)
    if session_id is not None:
        session_id_var.set(session_id)


def clear_request_context() -> None:
    """Clear all context variables."""
    request_id_var.set(None)
    user_id_var.set(None)
    session_id_var.set(None)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """JSON formatter with automatic context injection."""

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "request_id": request_id_var.get(),
            "user_id": user_id_var.get(),
            "session_id": session_id_var.get(),
        }

        # Fields passed through ``extra=`` win over context values
        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        log_data = {k: v for k, v in log_data.items() if v is not None}

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")

        context_parts = []
        if request_id := request_id_var.get():
            context_parts.append(f"req={request_id[:8]}")
        if user_id := user_id_var.get():
            context_parts.append(f"user={user_id[:8]}")
        if session_id := session_id_var.get():
            context_parts.append(f"session={session_id[:8]}")
        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        base = f"{timestamp} | {record.levelname:8} | {record.name}{context_str} | {record.getMessage()}"

        extra = _extra_fields(record)
        if extra:
            base += " | " + " ".join(f"{k}={v}" for k, v in extra.items())

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges bound fields into ``extra``."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(
    level: str = "INFO",
    format_type: str = "json",
    service_name: str = "intake-engine",
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_type: Output format ('json' or 'text')
        service_name: Service name stamped on JSON records
    """
    handler = logging.StreamHandler(sys.stdout)

    if format_type == "json":
        formatter: logging.Formatter = StructuredFormatter(service_name=service_name)
    else:
        formatter = TextFormatter()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    # Reduce noise from external libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name (usually __name__)
        **extra: Fields included in every message from this logger

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), extra)
