"""Typed error hierarchy for the intake engine.

All application errors inherit from AppError and provide:
- code: Machine-readable error code
- message: Human-readable description
- details: Additional context as dict
- retryable: Whether the operation can be retried
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error with full context."""

    code: str = "APP_ERROR"
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for API responses and logging."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


# --- Not Found Errors ---


@dataclass
class NotFoundError(AppError):
    """Resource not found."""

    code: str = "NOT_FOUND"
    retryable: bool = False


@dataclass
class SessionNotFoundError(NotFoundError):
    """Assessment session not found."""

    code: str = "SESSION_NOT_FOUND"


@dataclass
class StepNotFoundError(NotFoundError):
    """Step id is not part of the step catalog."""

    code: str = "STEP_NOT_FOUND"


@dataclass
class SkillNotFoundError(NotFoundError):
    """Skill key is not part of the taxonomy."""

    code: str = "SKILL_NOT_FOUND"


@dataclass
class DimensionNotFoundError(NotFoundError):
    """Dimension key is not part of the taxonomy."""

    code: str = "DIMENSION_NOT_FOUND"


# --- Validation Errors ---


@dataclass
class ValidationError(AppError):
    """Input validation failed."""

    code: str = "VALIDATION_ERROR"
    retryable: bool = False


@dataclass
class InvalidStateError(ValidationError):
    """Invalid state transition."""

    code: str = "INVALID_STATE"


@dataclass
class SessionAlreadyCompletedError(InvalidStateError):
    """Answer submitted to a session that is already completed."""

    code: str = "SESSION_ALREADY_COMPLETED"


@dataclass
class ProfileIncompleteError(ValidationError):
    """Not enough stored data to build a student profile."""

    code: str = "PROFILE_INCOMPLETE"


# --- Provider Errors ---


@dataclass
class ProviderError(AppError):
    """External provider failed."""

    code: str = "PROVIDER_ERROR"
    provider: str = ""
    operation: str = ""


@dataclass
class ProviderTimeoutError(ProviderError):
    """Provider call timed out."""

    code: str = "PROVIDER_TIMEOUT"
    retryable: bool = True


@dataclass
class ProviderRateLimitError(ProviderError):
    """Provider rate limit exceeded."""

    code: str = "PROVIDER_RATE_LIMITED"
    retryable: bool = True
    retry_after_seconds: int = 60


@dataclass
class ProviderUnavailableError(ProviderError):
    """Provider is unavailable or not configured."""

    code: str = "PROVIDER_UNAVAILABLE"
    retryable: bool = True


@dataclass
class ProviderInvalidRequestError(ProviderError):
    """Invalid request to provider."""

    code: str = "PROVIDER_INVALID_REQUEST"
    retryable: bool = False


@dataclass
class ProviderMalformedResponseError(ProviderError):
    """Provider answered, but the payload could not be parsed."""

    code: str = "PROVIDER_MALFORMED_RESPONSE"
    retryable: bool = False


# --- Database Errors ---


@dataclass
class DatabaseError(AppError):
    """Database operation failed."""

    code: str = "DATABASE_ERROR"
    operation: str = ""


@dataclass
class MasteryUpdateError(DatabaseError):
    """Persisting a single skill mastery update failed."""

    code: str = "MASTERY_UPDATE_FAILED"
    skill_key: str = ""


@dataclass
class ProfileExtractionError(DatabaseError):
    """Extracting or saving the learner profile failed."""

    code: str = "PROFILE_EXTRACTION_FAILED"
