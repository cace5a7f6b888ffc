"""Request context middleware for correlation IDs."""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from intake_engine.infrastructure.telemetry.logging import (
    clear_request_context,
    set_request_context,
)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds the request id and caller to the logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid4())

        set_request_context(
            request_id=request_id,
            user_id=request.headers.get("X-User-ID"),
        )
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_context()
