"""Groq LLM provider implementation (OpenAI-compatible chat completions)."""

import httpx

from intake_engine.config import Settings
from intake_engine.domain.errors import (
    ProviderInvalidRequestError,
    ProviderMalformedResponseError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from intake_engine.domain.protocols.providers import LLMMessage, LLMProvider, LLMResponse
from intake_engine.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)


def _retry_after(response: httpx.Response, default: int = 60) -> int:
    try:
        return int(response.headers.get("retry-after", default))
    except ValueError:
        return default


class GroqProvider:
    """Groq LLM provider using their REST API."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.api_key = settings.groq_api_key
        self.default_model = settings.grader_model
        self.base_url = settings.grader_base_url
        self.timeout = settings.grader_timeout_seconds
        self._client = client

    @property
    def provider_name(self) -> str:
        return "groq"

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def chat(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Generate a chat completion."""
        model = model or self.default_model

        payload = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        logger.debug(
            "Calling Groq API",
            extra={"model": model, "message_count": len(messages)},
        )

        try:
            response = await self.client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                message="Groq request timed out",
                provider="groq",
                operation="chat",
            ) from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(
                message=f"Groq unreachable: {e}",
                provider="groq",
                operation="chat",
            ) from e

        if response.status_code == 429:
            raise ProviderRateLimitError(
                message="Groq rate limit exceeded",
                provider="groq",
                operation="chat",
                retry_after_seconds=_retry_after(response),
            )

        if response.status_code >= 500:
            raise ProviderUnavailableError(
                message=f"Groq service error: {response.status_code}",
                provider="groq",
                operation="chat",
            )

        if response.status_code >= 400:
            raise ProviderInvalidRequestError(
                message=f"Groq rejected the request: {response.status_code}",
                details={"body": response.text[:500]},
                provider="groq",
                operation="chat",
            )

        try:
            data = response.json()
            choice = data["choices"][0]
            content = choice["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderMalformedResponseError(
                message="Groq returned an unexpected payload",
                provider="groq",
                operation="chat",
            ) from e

        usage = data.get("usage") or {}
        return LLMResponse(
            content=content or "",
            model=model,
            tokens_in=usage.get("prompt_tokens", 0),
            tokens_out=usage.get("completion_tokens", 0),
            finish_reason=choice.get("finish_reason"),
        )


# Protocol compliance
_: type[LLMProvider] = GroqProvider  # type: ignore
