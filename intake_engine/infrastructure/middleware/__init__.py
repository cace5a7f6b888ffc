"""Middleware infrastructure."""

from intake_engine.infrastructure.middleware.error_handler import error_handler_middleware
from intake_engine.infrastructure.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware", "error_handler_middleware"]
