"""Tests for recommendation endpoints."""

import pytest

from intake_engine.domain.entities import LearnerProfile, SkillMasteryRecord


@pytest.fixture
def seed_mastery(mastery_repo, user_id):
    mastery_repo.records[(user_id, "js_async")] = SkillMasteryRecord(
        user_id=user_id, skill_key="js_async", mastery=0.4, confidence=0.2, attempts=1
    )


class TestRecommendForProfile:
    """Test recommendations for an explicit profile."""

    def test_recommend(self, client):
        response = client.post(
            "/recommendations/projects",
            json={
                "interests": ["react"],
                "assessment_scores": {"js_async": 0.3},
                "goals": {"short_term": "Build a portfolio"},
                "count": 3,
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["projects"]) == 3
        assert body["metadata"]["skills_analyzed"] == 1
        assert all(1 <= p["difficulty"] <= 5 for p in body["projects"])

    def test_difficulty_range(self, client):
        body = client.post(
            "/recommendations/projects",
            json={"count": 14, "min_difficulty": 2, "max_difficulty": 2},
        ).json()

        assert {p["difficulty"] for p in body["projects"]} <= {2}

    def test_weights_must_sum_to_one(self, client):
        response = client.post(
            "/recommendations/projects",
            json={"weights": {"interest": 0.5, "skill_gap": 0.5, "goal": 0.5, "difficulty": 0.5}},
        )

        assert response.status_code == 422

    def test_count_bounds(self, client):
        response = client.post("/recommendations/projects", json={"count": 0})

        assert response.status_code == 422


class TestRecommendForUser:
    """Test recommendations from stored learner data."""

    def test_incomplete_profile(self, client, headers):
        response = client.get("/recommendations/projects", headers=headers)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "PROFILE_INCOMPLETE"
        assert error["details"]["has_mastery"] is False

    @pytest.mark.usefixtures("seed_mastery")
    def test_default_count_from_settings(self, client, headers, learner_repo, user_id):
        learner_repo.profiles[user_id] = LearnerProfile(
            user_id=user_id, interests=["react"], short_term_goal="Ship it"
        )

        body = client.get("/recommendations/projects", headers=headers).json()

        assert len(body["projects"]) == 5

    @pytest.mark.usefixtures("seed_mastery")
    def test_explicit_count(self, client, headers, learner_repo, user_id):
        learner_repo.profiles[user_id] = LearnerProfile(user_id=user_id, long_term_goal="Lead")

        body = client.get("/recommendations/projects?count=2", headers=headers).json()

        assert len(body["projects"]) == 2
