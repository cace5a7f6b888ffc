"""Exception handlers mapping domain errors onto HTTP responses."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from intake_engine.domain.errors import (
    AppError,
    NotFoundError,
    ProviderError,
    SessionAlreadyCompletedError,
    ValidationError,
)
from intake_engine.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

# Checked in order, so subclasses must precede their bases
_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (NotFoundError, 404),
    (SessionAlreadyCompletedError, 409),
    (ValidationError, 400),
    (ProviderError, 502),
)


def error_handler_middleware(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        status_code = _get_status_code(exc)

        log = logger.warning if status_code < 500 else logger.error
        log(
            f"Request failed: {exc.message}",
            extra={
                "error_code": exc.code,
                "error_details": exc.details,
                "retryable": exc.retryable,
                "status_code": status_code,
                "path": request.url.path,
            },
        )

        return _error_response(
            request,
            status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
            retryable=exc.retryable,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            f"Unhandled exception: {exc}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )

        return _error_response(
            request,
            500,
            code="INTERNAL_ERROR",
            message="An unexpected error occurred",
        )


def _get_status_code(error: AppError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return 500


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    retryable: bool = False,
) -> JSONResponse:
    """Build the ``{"error": {...}}`` envelope shared by every failure."""
    headers = {}
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["X-Request-ID"] = request_id

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "retryable": retryable,
            }
        },
        headers=headers,
    )
