"""Skill mastery database model."""

from uuid import UUID, uuid4

from sqlalchemy import Float, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from intake_engine.domain.entities import SkillMasteryRecord
from intake_engine.infrastructure.database.models.base import Base, TimestampMixin


class SkillMasteryModel(Base, TimestampMixin):
    """SQLAlchemy model for user_skill_mastery table."""

    __tablename__ = "user_skill_mastery"
    __table_args__ = (
        UniqueConstraint("user_id", "skill_key", name="uq_user_skill_mastery_user_skill"),
    )

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), nullable=False, index=True)
    skill_key: Mapped[str] = mapped_column(String(100), nullable=False)
    mastery: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def to_entity(self) -> SkillMasteryRecord:
        """Convert to domain entity."""
        return SkillMasteryRecord(
            user_id=self.user_id,
            skill_key=self.skill_key,
            mastery=self.mastery,
            confidence=self.confidence,
            attempts=self.attempts,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
