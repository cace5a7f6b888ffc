"""Assessment response repository implementation."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from intake_engine.domain.entities import AssessmentResponse
from intake_engine.infrastructure.database.models import AssessmentResponseModel
from intake_engine.infrastructure.database.models.base import utcnow
from intake_engine.infrastructure.repositories.base import translate_errors


class AssessmentResponseRepositoryImpl:
    """SQLAlchemy implementation of AssessmentResponseRepository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, session_id: UUID, step_id: str) -> AssessmentResponse | None:
        stmt = select(AssessmentResponseModel).where(
            AssessmentResponseModel.session_id == session_id,
            AssessmentResponseModel.step_id == step_id,
        )
        with translate_errors("assessment_responses.get"):
            result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_by_session(self, session_id: UUID) -> list[AssessmentResponse]:
        """List responses in submission order."""
        stmt = (
            select(AssessmentResponseModel)
            .where(AssessmentResponseModel.session_id == session_id)
            .order_by(AssessmentResponseModel.submitted_at.asc())
        )
        with translate_errors("assessment_responses.list_by_session"):
            result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def upsert(self, response: AssessmentResponse) -> AssessmentResponse:
        """Create or replace the response for (session_id, step_id)."""
        values = AssessmentResponseModel.values_from_entity(response)
        stmt = insert(AssessmentResponseModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[AssessmentResponseModel.session_id, AssessmentResponseModel.step_id],
            set_={
                "raw_answer": stmt.excluded.raw_answer,
                "grade_result": stmt.excluded.grade_result,
                "skill_updates": stmt.excluded.skill_updates,
                "submitted_at": stmt.excluded.submitted_at,
                "updated_at": utcnow(),
            },
        ).returning(AssessmentResponseModel)
        stmt = stmt.execution_options(populate_existing=True)

        with translate_errors("assessment_responses.upsert"):
            result = await self.session.execute(stmt)
            model = result.scalar_one()
            await self.session.flush()
        return model.to_entity()
