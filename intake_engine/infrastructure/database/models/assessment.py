"""Assessment session and response database models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from intake_engine.domain.entities import (
    AssessmentResponse,
    AssessmentSession,
    GradeResult,
    SessionStatus,
    StepKind,
)
from intake_engine.infrastructure.database.models.base import Base, TimestampMixin, utcnow


class AssessmentSessionModel(Base, TimestampMixin):
    """SQLAlchemy model for assessment_sessions table."""

    __tablename__ = "assessment_sessions"
    __table_args__ = (
        Index("ix_assessment_sessions_user_type_status", "user_id", "session_type", "status"),
    )

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), nullable=False, index=True)
    session_type: Mapped[str] = mapped_column(String(50), nullable=False, default="INTAKE")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SessionStatus.IN_PROGRESS.value
    )
    current_step: Mapped[str | None] = mapped_column(String(100), nullable=True)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )

    def to_entity(self) -> AssessmentSession:
        """Convert to domain entity."""
        return AssessmentSession(
            id=self.id,
            user_id=self.user_id,
            session_type=self.session_type,
            status=SessionStatus(self.status),
            current_step=self.current_step,
            started_at=self.started_at,
            completed_at=self.completed_at,
            metadata=self.metadata_ or {},
        )

    @classmethod
    def from_entity(cls, entity: AssessmentSession) -> "AssessmentSessionModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            session_type=entity.session_type,
            status=entity.status.value,
            current_step=entity.current_step,
            started_at=entity.started_at,
            completed_at=entity.completed_at,
            metadata_=entity.metadata,
        )


class AssessmentResponseModel(Base, TimestampMixin):
    """SQLAlchemy model for assessment_responses table.

    One row per (session, step); re-submitting a step overwrites it.
    """

    __tablename__ = "assessment_responses"
    __table_args__ = (
        UniqueConstraint("session_id", "step_id", name="uq_assessment_responses_session_step"),
    )

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    session_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("assessment_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_id: Mapped[str] = mapped_column(String(100), nullable=False)
    step_kind: Mapped[str] = mapped_column(String(30), nullable=False)
    raw_answer: Mapped[Any] = mapped_column(JSONB, nullable=True)
    grade_result: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    skill_updates: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, nullable=False, default=list
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def to_entity(self) -> AssessmentResponse:
        """Convert to domain entity."""
        return AssessmentResponse(
            session_id=self.session_id,
            step_id=self.step_id,
            step_kind=StepKind(self.step_kind),
            raw_answer=self.raw_answer,
            grade_result=GradeResult.from_dict(self.grade_result or {}),
            skill_updates=list(self.skill_updates or []),
            submitted_at=self.submitted_at,
        )

    @classmethod
    def values_from_entity(cls, entity: AssessmentResponse) -> dict[str, Any]:
        """Column values for an upsert statement."""
        return {
            "session_id": entity.session_id,
            "step_id": entity.step_id,
            "step_kind": entity.step_kind.value,
            "raw_answer": entity.raw_answer,
            "grade_result": entity.grade_result.to_dict(),
            "skill_updates": entity.skill_updates,
            "submitted_at": entity.submitted_at,
        }
