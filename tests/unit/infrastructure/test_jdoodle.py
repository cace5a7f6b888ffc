"""Tests for the JDoodle code runner."""

import json

import httpx
import pytest

from intake_engine.domain.errors import (
    ProviderInvalidRequestError,
    ProviderMalformedResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from intake_engine.infrastructure.providers.execution import JDoodleCodeRunner


def _runner(settings, handler) -> JDoodleCodeRunner:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return JDoodleCodeRunner(settings, client=client)


class TestJDoodleCodeRunner:
    """Test execution requests and error translation."""

    @pytest.mark.asyncio
    async def test_execute_success(self, settings):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"output": "[1,2,3]\n", "statusCode": 200, "cpuTime": "0.05", "memory": "1024"},
            )

        result = await _runner(settings, handler).execute("console.log(1)", "JavaScript", stdin="[3]")

        assert result.output == "[1,2,3]\n"
        assert result.error is None
        assert result.cpu_time == "0.05"
        assert captured["body"]["language"] == "nodejs"
        assert captured["body"]["versionIndex"] == "4"
        assert captured["body"]["stdin"] == "[3]"
        assert captured["body"]["clientId"] == "test_client_id"

    @pytest.mark.asyncio
    async def test_non_200_status_code_is_error(self, settings):
        runner = _runner(
            settings,
            lambda request: httpx.Response(200, json={"output": "SyntaxError", "statusCode": 417}),
        )

        result = await runner.execute("nope(", "python")

        assert result.error == "Execution error"
        assert result.output == "SyntaxError"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, settings):
        runner = JDoodleCodeRunner(settings.model_copy(update={"jdoodle_client_id": ""}))

        with pytest.raises(ProviderUnavailableError):
            await runner.execute("x", "python")

    @pytest.mark.asyncio
    async def test_unsupported_language(self, settings):
        runner = _runner(settings, lambda request: httpx.Response(200, json={}))

        with pytest.raises(ProviderInvalidRequestError) as exc_info:
            await runner.execute("x", "cobol")

        assert "python" in exc_info.value.details["supported"]

    @pytest.mark.asyncio
    async def test_http_error(self, settings):
        runner = _runner(settings, lambda request: httpx.Response(500, text="down"))

        with pytest.raises(ProviderUnavailableError):
            await runner.execute("x", "python")

    @pytest.mark.asyncio
    async def test_timeout(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ProviderTimeoutError):
            await _runner(settings, handler).execute("x", "python")

    @pytest.mark.asyncio
    async def test_non_json_payload(self, settings):
        runner = _runner(settings, lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ProviderMalformedResponseError):
            await runner.execute("x", "python")
