"""JDoodle code execution provider."""

import httpx

from intake_engine.config import Settings
from intake_engine.domain.errors import (
    ProviderInvalidRequestError,
    ProviderMalformedResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from intake_engine.domain.protocols.providers import CodeExecutionProvider, ExecutionResult
from intake_engine.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

# language -> (jdoodle language, version index)
LANGUAGE_MAP: dict[str, tuple[str, str]] = {
    "javascript": ("nodejs", "4"),
    "typescript": ("nodejs", "4"),
    "python": ("python3", "4"),
    "java": ("java", "4"),
    "cpp": ("cpp17", "1"),
    "go": ("go", "4"),
    "rust": ("rust", "4"),
}


class JDoodleCodeRunner:
    """Runs code through the JDoodle execute API."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.client_id = settings.jdoodle_client_id
        self.client_secret = settings.jdoodle_client_secret
        self.api_url = settings.jdoodle_api_url
        self.timeout = settings.code_execution_timeout_seconds
        self._client = client

    @property
    def provider_name(self) -> str:
        return "jdoodle"

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def execute(self, code: str, language: str, stdin: str = "") -> ExecutionResult:
        """Run code once and return its output.

        Raises:
            ProviderUnavailableError: Credentials missing or JDoodle unreachable
            ProviderInvalidRequestError: Language not supported
            ProviderTimeoutError: Request timed out
        """
        if not (self.client_id and self.client_secret):
            raise ProviderUnavailableError(
                message="JDoodle credentials are not configured",
                provider="jdoodle",
                operation="execute",
            )

        mapping = LANGUAGE_MAP.get(language.lower())
        if mapping is None:
            raise ProviderInvalidRequestError(
                message=f"Unsupported language: {language}",
                details={"supported": sorted(LANGUAGE_MAP)},
                provider="jdoodle",
                operation="execute",
            )
        jdoodle_language, version_index = mapping

        payload = {
            "clientId": self.client_id,
            "clientSecret": self.client_secret,
            "script": code,
            "language": jdoodle_language,
            "versionIndex": version_index,
            "stdin": stdin,
        }

        logger.debug(
            "Executing code on JDoodle",
            extra={"language": jdoodle_language, "code_length": len(code)},
        )

        try:
            response = await self.client.post(self.api_url, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                message="Code execution timed out",
                provider="jdoodle",
                operation="execute",
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailableError(
                message=f"JDoodle API error: {e.response.status_code}",
                details={"body": e.response.text[:500]},
                provider="jdoodle",
                operation="execute",
            ) from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(
                message=f"JDoodle unreachable: {e}",
                provider="jdoodle",
                operation="execute",
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderMalformedResponseError(
                message="JDoodle returned a non-JSON payload",
                provider="jdoodle",
                operation="execute",
            ) from e

        status_code = data.get("statusCode")
        return ExecutionResult(
            output=data.get("output") or "",
            status_code=status_code,
            cpu_time=data.get("cpuTime"),
            memory=data.get("memory"),
            error="Execution error" if status_code != 200 else None,
        )


# Protocol compliance
_: type[CodeExecutionProvider] = JDoodleCodeRunner  # type: ignore
