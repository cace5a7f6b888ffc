"""Skill mastery - confidence-weighted updates and dimension aggregation.

Each (user, skill) pair carries a mastery estimate and a confidence in that
estimate. New evidence moves mastery toward the observed score; the less
confident we are, the further it moves. Confidence grows with every update
and approaches, but never reaches, 1.
"""

from collections.abc import Iterable, Mapping
from uuid import UUID

from intake_engine.application.catalog.skill_taxonomy import (
    DIMENSIONS,
    SKILL_TAGS,
    get_all_dimension_keys,
    get_skills_by_dimension,
    map_tags_to_skill_keys,
    require_dimension,
)
from intake_engine.domain.entities import (
    DimensionScore,
    DimensionSummary,
    MasteryUpdate,
    MasteryUpdateResult,
    ProfileSummary,
    SkillMastery,
    SkillProfile,
    WeakDimension,
    WeakSkill,
)
from intake_engine.domain.errors import DatabaseError, MasteryUpdateError
from intake_engine.domain.protocols import SkillMasteryRepository
from intake_engine.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

BASE_LEARNING_RATE = 0.3
CONFIDENCE_DAMPING = 0.7
CONFIDENCE_GAIN_RATE = 0.15
SELF_REPORT_CONFIDENCE = 0.2


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


# =============================================================================
# Pure algorithm
# =============================================================================


def apply_evidence(current: SkillMastery, score: float, weight: float = 1.0) -> SkillMastery:
    """Fold one observation into a skill's belief state.

    Args:
        current: Mastery, confidence and attempts before the update
        score: Observed performance in [0, 1]
        weight: Trust in the observation in [0, 1]

    Returns:
        The updated belief state, with attempts incremented
    """
    confidence_factor = 1 - current.confidence * CONFIDENCE_DAMPING
    learning_rate = BASE_LEARNING_RATE * confidence_factor * weight
    new_mastery = _clamp(current.mastery + (score - current.mastery) * learning_rate)

    confidence_gain = (1 - current.confidence) * CONFIDENCE_GAIN_RATE * weight
    new_confidence = _clamp(current.confidence + confidence_gain)

    return SkillMastery(
        mastery=new_mastery,
        confidence=new_confidence,
        attempts=current.attempts + 1,
    )


def self_report_to_mastery(level: float) -> SkillMastery:
    """Initial belief state from a 1-5 self-reported level."""
    return SkillMastery(
        mastery=_clamp((level - 1) / 4),
        confidence=SELF_REPORT_CONFIDENCE,
        attempts=1,
    )


def calculate_dimension_scores(skills: Mapping[str, SkillMastery]) -> dict[str, DimensionScore]:
    """Importance-weighted mean per dimension over skills with attempts > 0."""
    dimensions: dict[str, DimensionScore] = {}

    for dimension_key in get_all_dimension_keys():
        dimension_skills = get_skills_by_dimension(dimension_key)
        weighted_mastery = 0.0
        weighted_confidence = 0.0
        total_weight = 0.0
        assessed = 0

        for tag in dimension_skills:
            data = skills.get(tag.key)
            if data is None or data.attempts <= 0:
                continue
            weighted_mastery += data.mastery * tag.weight
            weighted_confidence += data.confidence * tag.weight
            total_weight += tag.weight
            assessed += 1

        dimensions[dimension_key] = DimensionScore(
            score=weighted_mastery / total_weight if total_weight > 0 else 0.0,
            confidence=weighted_confidence / total_weight if total_weight > 0 else 0.0,
            skill_count=len(dimension_skills),
            assessed_count=assessed,
        )

    return dimensions


# =============================================================================
# Service
# =============================================================================


class MasteryService:
    """Reads and updates a user's skill mastery records."""

    def __init__(self, mastery_repo: SkillMasteryRepository):
        self.mastery_repo = mastery_repo

    async def get_skill_mastery(self, user_id: UUID, skill_key: str) -> SkillMastery:
        """Current belief for one skill, or the default prior if never assessed."""
        record = await self.mastery_repo.get(user_id, skill_key)
        return record.to_mastery() if record else SkillMastery()

    async def get_skill_profile(self, user_id: UUID) -> SkillProfile:
        records = await self.mastery_repo.list_by_user(user_id)
        skills = {r.skill_key: r.to_mastery() for r in records}

        profile = SkillProfile(
            user_id=user_id,
            skills=skills,
            dimensions=calculate_dimension_scores(skills),
        )
        if records:
            profile.last_updated = max(r.updated_at for r in records)
        return profile

    async def update_skill_mastery(
        self, user_id: UUID, update: MasteryUpdate
    ) -> MasteryUpdateResult:
        """Apply one piece of evidence and persist it.

        Raises:
            MasteryUpdateError: If the record could not be read or written
        """
        try:
            current = await self.get_skill_mastery(user_id, update.skill_key)
            updated = apply_evidence(current, update.score, update.weight)
            await self.mastery_repo.record_attempt(
                user_id,
                update.skill_key,
                mastery=updated.mastery,
                confidence=updated.confidence,
            )
        except DatabaseError as exc:
            raise MasteryUpdateError(
                message=f"Failed to update mastery for {update.skill_key}",
                details={"user_id": str(user_id), "cause": exc.message},
                operation="update_skill_mastery",
                skill_key=update.skill_key,
            ) from exc

        logger.debug(
            "Skill mastery updated",
            extra={
                "user_id": str(user_id),
                "skill_key": update.skill_key,
                "score": update.score,
                "weight": update.weight,
                "source": update.source,
                "previous_mastery": current.mastery,
                "new_mastery": updated.mastery,
                "new_confidence": updated.confidence,
            },
        )

        return MasteryUpdateResult(
            skill_key=update.skill_key,
            previous_mastery=current.mastery,
            new_mastery=updated.mastery,
            previous_confidence=current.confidence,
            new_confidence=updated.confidence,
        )

    async def update_multiple_skill_masteries(
        self, user_id: UUID, updates: Iterable[MasteryUpdate]
    ) -> list[MasteryUpdateResult]:
        """Apply a batch of updates. A failed update is logged and dropped."""
        results: list[MasteryUpdateResult] = []

        for update in updates:
            try:
                results.append(await self.update_skill_mastery(user_id, update))
            except MasteryUpdateError as exc:
                logger.error(
                    "Failed to update skill in batch",
                    extra={
                        "user_id": str(user_id),
                        "skill_key": exc.skill_key,
                        "error_code": exc.code,
                    },
                )

        return results

    async def set_initial_masteries_from_self_report(
        self, user_id: UUID, reports: Mapping[str, float]
    ) -> None:
        """Seed mastery from 1-5 self-reported levels.

        Existing records keep their attempt count.
        """
        for skill_key, level in reports.items():
            seeded = self_report_to_mastery(level)
            try:
                await self.mastery_repo.set_values(
                    user_id,
                    skill_key,
                    mastery=seeded.mastery,
                    confidence=seeded.confidence,
                    attempts_if_new=seeded.attempts,
                )
            except DatabaseError as exc:
                logger.error(
                    "Failed to set self-reported mastery",
                    extra={"user_id": str(user_id), "skill_key": skill_key, "error_code": exc.code},
                )

    async def update_mastery_from_challenge(
        self,
        user_id: UUID,
        challenge_tags: list[str],
        passed: bool,
        score: float,
    ) -> list[MasteryUpdateResult]:
        """Fold a coding challenge result (score 0-100) into the tagged skills."""
        skill_keys = map_tags_to_skill_keys(challenge_tags)
        if not skill_keys:
            logger.warning(
                "No skill keys mapped from challenge tags",
                extra={"user_id": str(user_id), "tags": challenge_tags},
            )
            return []

        weight = 1.0 if passed else 0.8
        normalized = _clamp(score / 100)

        return await self.update_multiple_skill_masteries(
            user_id,
            [
                MasteryUpdate(skill_key=key, score=normalized, weight=weight, source="challenge")
                for key in skill_keys
            ],
        )

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_weak_dimensions(
        self, user_id: UUID, threshold: float = 0.5
    ) -> list[WeakDimension]:
        profile = await self.get_skill_profile(user_id)
        weak = [
            WeakDimension(dimension=key, score=data.score, confidence=data.confidence)
            for key, data in profile.dimensions.items()
            if data.score < threshold
        ]
        return sorted(weak, key=lambda d: d.score)

    async def get_weak_skills_in_dimension(
        self, user_id: UUID, dimension: str, threshold: float = 0.5
    ) -> list[WeakSkill]:
        """Skills of a dimension below ``threshold``; unassessed skills count as 0.

        Raises:
            DimensionNotFoundError: If the dimension is not in the taxonomy
        """
        require_dimension(dimension)
        profile = await self.get_skill_profile(user_id)

        weak = []
        for tag in get_skills_by_dimension(dimension):
            data = profile.skills.get(tag.key)
            if data is not None and data.mastery >= threshold:
                continue
            weak.append(
                WeakSkill(
                    skill_key=tag.key,
                    mastery=data.mastery if data else 0.0,
                    confidence=data.confidence if data else 0.0,
                )
            )
        return sorted(weak, key=lambda s: s.mastery)

    async def get_skills_needing_assessment(
        self, user_id: UUID, confidence_threshold: float = 0.3
    ) -> list[str]:
        profile = await self.get_skill_profile(user_id)
        return [
            tag.key
            for tag in SKILL_TAGS
            if tag.key not in profile.skills
            or profile.skills[tag.key].confidence < confidence_threshold
        ]

    async def get_profile_summary(self, user_id: UUID) -> ProfileSummary:
        profile = await self.get_skill_profile(user_id)

        summaries = sorted(
            (
                DimensionSummary(
                    key=dimension.key,
                    label=dimension.label,
                    score=profile.dimensions[dimension.key].score,
                    confidence=profile.dimensions[dimension.key].confidence,
                    assessed_ratio=(
                        profile.dimensions[dimension.key].assessed_count
                        / profile.dimensions[dimension.key].skill_count
                        if profile.dimensions[dimension.key].skill_count
                        else 0.0
                    ),
                )
                for dimension in DIMENSIONS
            ),
            key=lambda d: d.key,
        )

        assessed = [d for d in summaries if d.assessed_ratio > 0]
        return ProfileSummary(
            dimensions=summaries,
            overall_score=sum(d.score for d in assessed) / len(assessed) if assessed else 0.0,
            overall_confidence=(
                sum(d.confidence for d in assessed) / len(assessed) if assessed else 0.0
            ),
            total_skills_assessed=sum(
                profile.dimensions[d.key].assessed_count for d in assessed
            ),
            total_skills=len(SKILL_TAGS),
        )
