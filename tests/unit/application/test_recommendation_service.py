"""Tests for stored-profile recommendations."""

import pytest

from intake_engine.application.services import RecommendationService
from intake_engine.domain.entities import LearnerProfile
from intake_engine.domain.errors import ProfileIncompleteError


@pytest.fixture
def service(mastery_repo, learner_repo) -> RecommendationService:
    return RecommendationService(mastery_repo, learner_repo)


class TestRecommendationService:
    """Test profile assembly from repositories."""

    @pytest.mark.asyncio
    async def test_requires_mastery_records(self, service, learner_repo, user_id):
        await learner_repo.upsert(LearnerProfile(user_id=user_id, short_term_goal="Learn"))

        with pytest.raises(ProfileIncompleteError) as exc_info:
            await service.build_student_profile(user_id)

        assert exc_info.value.details["has_mastery"] is False
        assert exc_info.value.details["has_goals"] is True

    @pytest.mark.asyncio
    async def test_requires_goals(self, service, mastery_repo, user_id):
        await mastery_repo.record_attempt(user_id, "js_async", mastery=0.4, confidence=0.2)

        with pytest.raises(ProfileIncompleteError):
            await service.build_student_profile(user_id)

    @pytest.mark.asyncio
    async def test_builds_profile(self, service, mastery_repo, learner_repo, user_id):
        await mastery_repo.record_attempt(user_id, "js_async", mastery=0.4, confidence=0.2)
        await learner_repo.upsert(
            LearnerProfile(user_id=user_id, interests=["react"], long_term_goal="Lead a team")
        )

        profile = await service.build_student_profile(user_id)

        assert profile.interests == ["react"]
        assert profile.assessment_scores == {"js_async": 0.4}
        assert profile.goals.long_term == "Lead a team"
        assert profile.goals.short_term == ""

    @pytest.mark.asyncio
    async def test_recommend_for_user(self, service, mastery_repo, learner_repo, user_id):
        await mastery_repo.record_attempt(user_id, "js_async", mastery=0.4, confidence=0.2)
        await learner_repo.upsert(
            LearnerProfile(user_id=user_id, interests=["react"], short_term_goal="Ship it")
        )

        response = await service.recommend_for_user(user_id, count=3)

        assert len(response.projects) == 3
        assert response.metadata.skills_analyzed == 1
