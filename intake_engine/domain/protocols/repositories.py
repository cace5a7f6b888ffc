"""Repository protocols - abstract interfaces for data access."""

from typing import Protocol
from uuid import UUID

from intake_engine.domain.entities import (
    AssessmentResponse,
    AssessmentSession,
    LearnerProfile,
    SkillMasteryRecord,
)


class AssessmentSessionRepository(Protocol):
    """Abstract interface for assessment session data access."""

    async def get_by_id(self, session_id: UUID) -> AssessmentSession | None:
        """Get session by ID."""
        ...

    async def get_in_progress(
        self, user_id: UUID, session_type: str
    ) -> AssessmentSession | None:
        """Get the user's IN_PROGRESS session of a type, if any."""
        ...

    async def get_latest(
        self, user_id: UUID, session_type: str
    ) -> AssessmentSession | None:
        """Get the most recently started session of a type."""
        ...

    async def has_completed(self, user_id: UUID, session_type: str) -> bool:
        """Check whether the user has a COMPLETED session of a type."""
        ...

    async def create(self, session: AssessmentSession) -> AssessmentSession:
        """Create a new session."""
        ...

    async def update(self, session: AssessmentSession) -> AssessmentSession:
        """Persist status, current step and completion time."""
        ...


class AssessmentResponseRepository(Protocol):
    """Abstract interface for step responses, unique per (session, step)."""

    async def get(self, session_id: UUID, step_id: str) -> AssessmentResponse | None:
        """Get the stored response for a step."""
        ...

    async def list_by_session(self, session_id: UUID) -> list[AssessmentResponse]:
        """List responses in submission order."""
        ...

    async def upsert(self, response: AssessmentResponse) -> AssessmentResponse:
        """Create or replace the response for (session_id, step_id)."""
        ...


class SkillMasteryRepository(Protocol):
    """Abstract interface for mastery records, unique per (user, skill)."""

    async def get(self, user_id: UUID, skill_key: str) -> SkillMasteryRecord | None:
        """Get one mastery record."""
        ...

    async def list_by_user(self, user_id: UUID) -> list[SkillMasteryRecord]:
        """List every mastery record for a user."""
        ...

    async def record_attempt(
        self,
        user_id: UUID,
        skill_key: str,
        mastery: float,
        confidence: float,
    ) -> SkillMasteryRecord:
        """Upsert mastery/confidence and atomically increment attempts."""
        ...

    async def set_values(
        self,
        user_id: UUID,
        skill_key: str,
        mastery: float,
        confidence: float,
        attempts_if_new: int = 1,
    ) -> SkillMasteryRecord:
        """Upsert mastery/confidence, keeping attempts on existing records."""
        ...


class LearnerProfileRepository(Protocol):
    """Abstract interface for learner goals and interests."""

    async def get(self, user_id: UUID) -> LearnerProfile | None:
        """Get the learner profile for a user."""
        ...

    async def upsert(self, profile: LearnerProfile) -> LearnerProfile:
        """Create or update the learner profile."""
        ...
