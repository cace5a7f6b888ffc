"""Skill mastery repository implementation."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from intake_engine.domain.entities import SkillMasteryRecord
from intake_engine.infrastructure.database.models import SkillMasteryModel
from intake_engine.infrastructure.database.models.base import utcnow
from intake_engine.infrastructure.repositories.base import translate_errors

_CONFLICT_KEYS = [SkillMasteryModel.user_id, SkillMasteryModel.skill_key]


class SkillMasteryRepositoryImpl:
    """SQLAlchemy implementation of SkillMasteryRepository.

    Writes are single-statement upserts on (user_id, skill_key), so a record
    is created lazily on its first update.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: UUID, skill_key: str) -> SkillMasteryRecord | None:
        stmt = select(SkillMasteryModel).where(
            SkillMasteryModel.user_id == user_id,
            SkillMasteryModel.skill_key == skill_key,
        )
        with translate_errors("user_skill_mastery.get"):
            result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_by_user(self, user_id: UUID) -> list[SkillMasteryRecord]:
        stmt = (
            select(SkillMasteryModel)
            .where(SkillMasteryModel.user_id == user_id)
            .order_by(SkillMasteryModel.skill_key)
        )
        with translate_errors("user_skill_mastery.list_by_user"):
            result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def record_attempt(
        self,
        user_id: UUID,
        skill_key: str,
        mastery: float,
        confidence: float,
    ) -> SkillMasteryRecord:
        """Upsert mastery/confidence and increment attempts in the database."""
        stmt = insert(SkillMasteryModel).values(
            user_id=user_id,
            skill_key=skill_key,
            mastery=mastery,
            confidence=confidence,
            attempts=1,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_KEYS,
            set_={
                "mastery": stmt.excluded.mastery,
                "confidence": stmt.excluded.confidence,
                "attempts": SkillMasteryModel.attempts + 1,
                "updated_at": utcnow(),
            },
        ).returning(SkillMasteryModel)
        stmt = stmt.execution_options(populate_existing=True)

        with translate_errors("user_skill_mastery.record_attempt"):
            result = await self.session.execute(stmt)
            model = result.scalar_one()
            await self.session.flush()
        return model.to_entity()

    async def set_values(
        self,
        user_id: UUID,
        skill_key: str,
        mastery: float,
        confidence: float,
        attempts_if_new: int = 1,
    ) -> SkillMasteryRecord:
        """Upsert mastery/confidence, keeping attempts on existing records."""
        stmt = insert(SkillMasteryModel).values(
            user_id=user_id,
            skill_key=skill_key,
            mastery=mastery,
            confidence=confidence,
            attempts=attempts_if_new,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_KEYS,
            set_={
                "mastery": stmt.excluded.mastery,
                "confidence": stmt.excluded.confidence,
                "updated_at": utcnow(),
            },
        ).returning(SkillMasteryModel)
        stmt = stmt.execution_options(populate_existing=True)

        with translate_errors("user_skill_mastery.set_values"):
            result = await self.session.execute(stmt)
            model = result.scalar_one()
            await self.session.flush()
        return model.to_entity()
