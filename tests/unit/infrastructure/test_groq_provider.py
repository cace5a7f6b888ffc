"""Tests for the Groq chat completion provider."""

import json

import httpx
import pytest

from intake_engine.domain.errors import (
    ProviderInvalidRequestError,
    ProviderMalformedResponseError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from intake_engine.domain.protocols import LLMMessage
from intake_engine.infrastructure.providers.llm import GroqProvider

MESSAGES = [LLMMessage(role="user", content="Hi")]


def _provider(settings, handler) -> GroqProvider:
    client = httpx.AsyncClient(
        base_url="https://groq.test/openai/v1",
        transport=httpx.MockTransport(handler),
    )
    return GroqProvider(settings, client=client)


class TestGroqProvider:
    """Test request building and error translation."""

    def test_name_property(self, settings):
        assert GroqProvider(settings).provider_name == "groq"

    @pytest.mark.asyncio
    async def test_chat_success(self, settings):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["path"] = request.url.path
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "choices": [
                        {"message": {"role": "assistant", "content": "Hello"}, "finish_reason": "stop"}
                    ],
                    "usage": {"prompt_tokens": 3, "completion_tokens": 1},
                },
            )

        provider = _provider(settings, handler)
        resp = await provider.chat(MESSAGES, temperature=0.1, max_tokens=5)

        assert resp.content == "Hello"
        assert resp.model == settings.grader_model
        assert resp.tokens_in == 3
        assert resp.tokens_out == 1
        assert resp.finish_reason == "stop"
        assert captured["path"].endswith("/chat/completions")
        assert captured["body"]["temperature"] == 0.1
        assert captured["body"]["max_tokens"] == 5
        assert captured["body"]["messages"] == [{"role": "user", "content": "Hi"}]

    @pytest.mark.asyncio
    async def test_rate_limited(self, settings):
        provider = _provider(
            settings, lambda request: httpx.Response(429, headers={"retry-after": "7"})
        )

        with pytest.raises(ProviderRateLimitError) as exc_info:
            await provider.chat(MESSAGES)

        assert exc_info.value.retry_after_seconds == 7
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_rate_limited_with_unparseable_header(self, settings):
        provider = _provider(
            settings, lambda request: httpx.Response(429, headers={"retry-after": "soon"})
        )

        with pytest.raises(ProviderRateLimitError) as exc_info:
            await provider.chat(MESSAGES)

        assert exc_info.value.retry_after_seconds == 60

    @pytest.mark.asyncio
    async def test_server_error(self, settings):
        provider = _provider(settings, lambda request: httpx.Response(503))

        with pytest.raises(ProviderUnavailableError):
            await provider.chat(MESSAGES)

    @pytest.mark.asyncio
    async def test_bad_request(self, settings):
        provider = _provider(settings, lambda request: httpx.Response(400, text="bad model"))

        with pytest.raises(ProviderInvalidRequestError) as exc_info:
            await provider.chat(MESSAGES)

        assert exc_info.value.details["body"] == "bad model"

    @pytest.mark.asyncio
    async def test_timeout(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ProviderTimeoutError):
            await _provider(settings, handler).chat(MESSAGES)

    @pytest.mark.asyncio
    async def test_connection_error(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ProviderUnavailableError):
            await _provider(settings, handler).chat(MESSAGES)

    @pytest.mark.asyncio
    async def test_malformed_payload(self, settings):
        provider = _provider(settings, lambda request: httpx.Response(200, json={"choices": []}))

        with pytest.raises(ProviderMalformedResponseError):
            await provider.chat(MESSAGES)

    @pytest.mark.asyncio
    async def test_close(self, settings):
        provider = _provider(settings, lambda request: httpx.Response(200))

        await provider.close()

        assert provider._client is None
