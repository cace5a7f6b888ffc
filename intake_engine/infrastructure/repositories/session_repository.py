"""Assessment session repository implementation."""

from uuid import UUID

from sqlalchemy import exists, select

from intake_engine.domain.entities import AssessmentSession, SessionStatus
from intake_engine.infrastructure.database.models import AssessmentSessionModel
from intake_engine.infrastructure.repositories.base import BaseRepository, translate_errors


class AssessmentSessionRepositoryImpl(BaseRepository[AssessmentSessionModel, AssessmentSession]):
    """SQLAlchemy implementation of AssessmentSessionRepository."""

    model_class = AssessmentSessionModel

    async def _latest(self, user_id: UUID, session_type: str, status: SessionStatus | None):
        stmt = select(AssessmentSessionModel).where(
            AssessmentSessionModel.user_id == user_id,
            AssessmentSessionModel.session_type == session_type,
        )
        if status is not None:
            stmt = stmt.where(AssessmentSessionModel.status == status.value)
        stmt = stmt.order_by(AssessmentSessionModel.started_at.desc()).limit(1)

        with translate_errors("assessment_sessions.latest"):
            result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def get_in_progress(
        self, user_id: UUID, session_type: str
    ) -> AssessmentSession | None:
        """Get the user's IN_PROGRESS session of a type, if any."""
        return await self._latest(user_id, session_type, SessionStatus.IN_PROGRESS)

    async def get_latest(self, user_id: UUID, session_type: str) -> AssessmentSession | None:
        """Get the most recently started session of a type."""
        return await self._latest(user_id, session_type, None)

    async def has_completed(self, user_id: UUID, session_type: str) -> bool:
        stmt = select(
            exists().where(
                AssessmentSessionModel.user_id == user_id,
                AssessmentSessionModel.session_type == session_type,
                AssessmentSessionModel.status == SessionStatus.COMPLETED.value,
            )
        )
        with translate_errors("assessment_sessions.has_completed"):
            result = await self.session.execute(stmt)
        return bool(result.scalar())
