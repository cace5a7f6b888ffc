"""Telemetry infrastructure (structured logging)."""

from intake_engine.infrastructure.telemetry.logging import (
    ContextLogger,
    StructuredFormatter,
    TextFormatter,
    clear_request_context,
    configure_logging,
    get_logger,
    request_id_var,
    session_id_var,
    set_request_context,
    user_id_var,
)

__all__ = [
    "ContextLogger",
    "StructuredFormatter",
    "TextFormatter",
    "configure_logging",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    "request_id_var",
    "user_id_var",
    "session_id_var",
]
