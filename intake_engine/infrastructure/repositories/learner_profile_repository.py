"""Learner profile repository implementation."""

from uuid import UUID

from sqlalchemy.dialects.postgresql import insert

from intake_engine.domain.entities import LearnerProfile
from intake_engine.infrastructure.database.models import LearnerProfileModel
from intake_engine.infrastructure.repositories.base import BaseRepository, translate_errors


class LearnerProfileRepositoryImpl(BaseRepository[LearnerProfileModel, LearnerProfile]):
    """SQLAlchemy implementation of LearnerProfileRepository."""

    model_class = LearnerProfileModel

    async def get(self, user_id: UUID) -> LearnerProfile | None:
        return await self.get_by_id(user_id)

    async def upsert(self, profile: LearnerProfile) -> LearnerProfile:
        stmt = insert(LearnerProfileModel).values(
            user_id=profile.user_id,
            interests=list(profile.interests),
            short_term_goal=profile.short_term_goal,
            medium_term_goal=profile.medium_term_goal,
            long_term_goal=profile.long_term_goal,
            updated_at=profile.updated_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[LearnerProfileModel.user_id],
            set_={
                "interests": stmt.excluded.interests,
                "short_term_goal": stmt.excluded.short_term_goal,
                "medium_term_goal": stmt.excluded.medium_term_goal,
                "long_term_goal": stmt.excluded.long_term_goal,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(LearnerProfileModel)
        stmt = stmt.execution_options(populate_existing=True)

        with translate_errors("learner_profiles.upsert"):
            result = await self.session.execute(stmt)
            model = result.scalar_one()
            await self.session.flush()
        return model.to_entity()
