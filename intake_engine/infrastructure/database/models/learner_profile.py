"""Learner profile database model."""

from uuid import UUID

from sqlalchemy import Text
from sqlalchemy.dialects.postgresql import JSONB, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from intake_engine.domain.entities import LearnerProfile
from intake_engine.infrastructure.database.models.base import Base, TimestampMixin


class LearnerProfileModel(Base, TimestampMixin):
    """SQLAlchemy model for learner_profiles table (one row per user)."""

    __tablename__ = "learner_profiles"

    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True)
    interests: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    short_term_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    medium_term_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_term_goal: Mapped[str | None] = mapped_column(Text, nullable=True)

    def to_entity(self) -> LearnerProfile:
        """Convert to domain entity."""
        return LearnerProfile(
            user_id=self.user_id,
            interests=list(self.interests or []),
            short_term_goal=self.short_term_goal,
            medium_term_goal=self.medium_term_goal,
            long_term_goal=self.long_term_goal,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: LearnerProfile) -> "LearnerProfileModel":
        """Create from domain entity."""
        return cls(
            user_id=entity.user_id,
            interests=list(entity.interests),
            short_term_goal=entity.short_term_goal,
            medium_term_goal=entity.medium_term_goal,
            long_term_goal=entity.long_term_goal,
            updated_at=entity.updated_at,
        )
