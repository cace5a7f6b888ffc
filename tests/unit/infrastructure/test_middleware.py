"""Tests for HTTP middleware and error handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from intake_engine.domain.errors import (
    AppError,
    DatabaseError,
    ProviderTimeoutError,
    SessionAlreadyCompletedError,
    SessionNotFoundError,
    ValidationError,
)
from intake_engine.infrastructure.middleware import (
    RequestContextMiddleware,
    error_handler_middleware,
)
from intake_engine.infrastructure.middleware.error_handler import _get_status_code
from intake_engine.infrastructure.telemetry import request_id_var, user_id_var


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    error_handler_middleware(app)

    @app.get("/context")
    async def context():
        return {"request_id": request_id_var.get(), "user_id": user_id_var.get()}

    @app.get("/missing")
    async def missing():
        raise SessionNotFoundError(message="Session not found", details={"session_id": "x"})

    @app.get("/timeout")
    async def timeout():
        raise ProviderTimeoutError(message="slow", provider="groq", operation="chat")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("kaboom")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandler:
    """Test error to HTTP mapping."""

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (SessionNotFoundError(message="x"), 404),
            (SessionAlreadyCompletedError(message="x"), 409),
            (ValidationError(message="x"), 400),
            (ProviderTimeoutError(message="x"), 502),
            (DatabaseError(message="x"), 500),
            (AppError(message="x"), 500),
        ],
    )
    def test_status_codes(self, error, status):
        assert _get_status_code(error) == status

    def test_app_error_body(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {
            "error": {
                "code": "SESSION_NOT_FOUND",
                "message": "Session not found",
                "details": {"session_id": "x"},
                "retryable": False,
            }
        }

    def test_provider_error_is_retryable(self, client):
        response = client.get("/timeout")

        assert response.status_code == 502
        assert response.json()["error"]["retryable"] is True

    def test_unhandled_exception(self, client):
        response = client.get("/crash")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestRequestContextMiddleware:
    """Test correlation ids."""

    def test_echoes_request_id(self, client):
        response = client.get("/context", headers={"X-Request-ID": "req-1", "X-User-ID": "u-1"})

        assert response.headers["X-Request-ID"] == "req-1"
        assert response.json() == {"request_id": "req-1", "user_id": "u-1"}

    def test_generates_request_id(self, client):
        response = client.get("/context")

        assert response.headers["X-Request-ID"]
        assert response.json()["request_id"] == response.headers["X-Request-ID"]

    def test_error_response_keeps_request_id(self, client):
        response = client.get("/missing", headers={"X-Request-ID": "req-9"})

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "req-9"
