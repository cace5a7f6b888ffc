"""Assessment session and response entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from intake_engine.domain.entities.grading import GradeResult
from intake_engine.domain.entities.skills import ProfileSummary
from intake_engine.domain.entities.steps import AnyStep, StepKind


SUMMARY_STEP_ID = "summary"


class SessionStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"  # terminal
    ABANDONED = "ABANDONED"  # terminal


@dataclass
class AssessmentSession:
    """One attempt at an assessment by a user.

    current_step is a step id, the 'summary' sentinel, or None before the
    first step has been assigned.
    """

    id: UUID
    user_id: UUID
    session_type: str = "INTAKE"
    status: SessionStatus = SessionStatus.IN_PROGRESS
    current_step: str | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.status = SessionStatus(self.status)

    def is_in_progress(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS

    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    def complete(self) -> None:
        """Move to the terminal COMPLETED state."""
        self.status = SessionStatus.COMPLETED
        self.current_step = SUMMARY_STEP_ID
        self.completed_at = datetime.now(UTC)

    def abandon(self) -> None:
        self.status = SessionStatus.ABANDONED


@dataclass
class AssessmentResponse:
    """Stored answer for one (session, step) pair."""

    session_id: UUID
    step_id: str
    step_kind: StepKind
    raw_answer: Any
    grade_result: GradeResult
    skill_updates: list[dict[str, Any]] = field(default_factory=list)
    submitted_at: datetime = field(default_factory=lambda: datetime.now(UTC))


# --- Operation results ---


@dataclass
class StartSessionResult:
    session_id: UUID
    first_step: AnyStep
    total_steps: int
    estimated_minutes: float
    is_resuming: bool


@dataclass
class CurrentStepResult:
    step: AnyStep
    progress: int
    can_go_back: bool
    previous_answer: Any = None


@dataclass
class SkillDelta:
    skill_key: str
    delta: float


@dataclass
class SubmitAnswerResult:
    grade_result: GradeResult
    skill_updates: list[SkillDelta]
    next_step: AnyStep | None
    is_complete: bool
    progress: int


@dataclass
class StepResultSummary:
    step_id: str
    step_title: str
    grade_result: GradeResult | None


@dataclass
class SessionSummary:
    session_id: UUID
    completed_at: datetime
    total_steps: int
    profile_summary: ProfileSummary
    step_results: list[StepResultSummary]
