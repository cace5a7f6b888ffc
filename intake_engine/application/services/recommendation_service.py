"""Recommendation service - assembles a student profile from stored data."""

from uuid import UUID

from intake_engine.application.services.recommendation_engine import recommend_projects
from intake_engine.domain.entities import (
    DEFAULT_WEIGHTS,
    RecommendationResponse,
    RecommendationWeights,
    StudentGoals,
    StudentProfile,
)
from intake_engine.domain.errors import ProfileIncompleteError
from intake_engine.domain.protocols import LearnerProfileRepository, SkillMasteryRepository
from intake_engine.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


class RecommendationService:
    """Builds student profiles and recommends projects for stored users."""

    def __init__(
        self,
        mastery_repo: SkillMasteryRepository,
        learner_repo: LearnerProfileRepository,
    ):
        self.mastery_repo = mastery_repo
        self.learner_repo = learner_repo

    async def build_student_profile(self, user_id: UUID) -> StudentProfile:
        """Combine mastery records with the extracted goals and interests.

        Raises:
            ProfileIncompleteError: If the user has no mastery records or no goals
        """
        records = await self.mastery_repo.list_by_user(user_id)
        learner = await self.learner_repo.get(user_id)

        if not records or learner is None or not learner.has_goals():
            raise ProfileIncompleteError(
                message="Complete the intake assessment before requesting recommendations",
                details={
                    "user_id": str(user_id),
                    "has_mastery": bool(records),
                    "has_goals": bool(learner and learner.has_goals()),
                },
            )

        return StudentProfile(
            interests=list(learner.interests),
            assessment_scores={r.skill_key: r.mastery for r in records},
            goals=StudentGoals(
                short_term=learner.short_term_goal or "",
                medium_term=learner.medium_term_goal or "",
                long_term=learner.long_term_goal or "",
            ),
        )

    async def recommend_for_user(
        self,
        user_id: UUID,
        count: int = 5,
        min_difficulty: int = 1,
        max_difficulty: int = 5,
        weights: RecommendationWeights = DEFAULT_WEIGHTS,
    ) -> RecommendationResponse:
        profile = await self.build_student_profile(user_id)
        response = recommend_projects(
            profile,
            count=count,
            min_difficulty=min_difficulty,
            max_difficulty=max_difficulty,
            weights=weights,
        )

        logger.info(
            "Generated project recommendations",
            extra={
                "user_id": str(user_id),
                "project_count": len(response.projects),
                "skills_analyzed": response.metadata.skills_analyzed,
            },
        )
        return response
