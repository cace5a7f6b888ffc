"""Tests for project recommendation scoring and selection."""

import pytest

from intake_engine.application.catalog import PROJECT_TEMPLATES
from intake_engine.application.catalog.project_templates import get_template_by_id
from intake_engine.application.services.recommendation_engine import (
    analyze_skill_gaps,
    build_reason,
    generate_recommendations,
    infer_dimension,
    recommend_projects,
    score_difficulty,
    score_goal_alignment,
    score_interest_alignment,
    score_skill_gap_coverage,
    score_template,
)
from intake_engine.domain.entities import (
    RecommendationWeights,
    StudentGoals,
    StudentProfile,
)

INTEREST_ONLY = RecommendationWeights(interest=1.0, skill_gap=0.0, goal=0.0, difficulty=0.0)


@pytest.fixture
def profile() -> StudentProfile:
    return StudentProfile(
        interests=["web-development", "javascript"],
        assessment_scores={"js_async": 0.2, "js_dom": 0.5, "css_layout": 0.9},
        goals=StudentGoals(short_term="Build a portfolio", long_term="Get hired"),
    )


class TestSkillGaps:
    """Test gap analysis."""

    def test_gaps_below_threshold_by_priority(self):
        gaps = analyze_skill_gaps({"js_async": 0.2, "js_dom": 0.5, "css_layout": 0.6})

        assert [g.skill_key for g in gaps] == ["js_async", "js_dom"]
        assert gaps[0].priority == pytest.approx(0.8)
        assert gaps[0].dimension == "JavaScript"

    def test_ties_keep_input_order(self):
        gaps = analyze_skill_gaps({"b_skill": 0.1, "a_skill": 0.1})
        assert [g.skill_key for g in gaps] == ["b_skill", "a_skill"]

    def test_infer_dimension(self):
        assert infer_dimension("backend_rest") == "Backend"
        assert infer_dimension("css_layout") == "Web"
        assert infer_dimension("design_color") == "Design"
        assert infer_dimension("prog_arrays") == "Programming"


class TestScoringFactors:
    """Test the individual scoring factors."""

    def test_interest_alignment(self):
        template = get_template_by_id("task-tracker")

        assert score_interest_alignment(template, []) == 0.5
        assert score_interest_alignment(template, ["javascript", "ai"]) == 0.5
        assert score_interest_alignment(template, ["ai"]) == 0.0

    def test_skill_gap_coverage_without_gaps(self):
        assert score_skill_gap_coverage(get_template_by_id("task-tracker"), []) == 0.5

    def test_goal_alignment_by_horizon(self, profile):
        assert score_goal_alignment(get_template_by_id("task-tracker"), profile) == 0.7
        assert score_goal_alignment(get_template_by_id("game-development"), profile) == 0.7
        assert score_goal_alignment(get_template_by_id("task-tracker"), StudentProfile()) == 0.3

    def test_difficulty_fit(self):
        task_tracker = get_template_by_id("task-tracker")

        assert score_difficulty(task_tracker, 0.0) == 1.0
        assert score_difficulty(task_tracker, 1.0) == 0.0

    def test_template_score_is_weighted_sum(self, profile):
        template = get_template_by_id("task-tracker")
        score = score_template(template, profile, analyze_skill_gaps(profile.assessment_scores))
        assert 0.0 <= score <= 1.0


class TestGenerateRecommendations:
    """Test selection and ordering."""

    def test_exact_interest_match_ranks_first(self):
        """With interest-only weights the single matching template wins."""
        profile = StudentProfile(interests=["blockchain"])
        gaps = analyze_skill_gaps(profile.assessment_scores)
        dapp = get_template_by_id("blockchain-dapp")

        dapp_score = score_template(dapp, profile, gaps, INTEREST_ONLY)
        for template in PROJECT_TEMPLATES:
            if template.id != dapp.id:
                assert score_template(template, profile, gaps, INTEREST_ONLY) < dapp_score

        top = generate_recommendations(profile, count=1, weights=INTEREST_ONLY)
        assert [r.title for r in top] == [dapp.title]

    def test_easiest_first(self, profile):
        recommendations = generate_recommendations(profile, count=5)

        difficulties = [r.difficulty for r in recommendations]
        assert difficulties == sorted(difficulties)
        assert len(recommendations) == 5

    def test_deterministic(self, profile):
        first = generate_recommendations(profile, count=5)
        second = generate_recommendations(profile, count=5)

        assert [r.title for r in first] == [r.title for r in second]

    def test_titles_are_unique(self, profile):
        titles = [r.title for r in generate_recommendations(profile, count=14)]
        assert len(titles) == len(set(titles))

    def test_aligned_interests_and_targeted_skills(self, profile):
        for rec in generate_recommendations(profile, count=5):
            assert set(rec.aligned_interests) <= set(profile.interests)
            assert set(rec.targeted_skills) <= {"js_async", "js_dom"}

    def test_reason_mentions_each_factor(self, profile):
        template = get_template_by_id("task-tracker")
        gaps = analyze_skill_gaps(profile.assessment_scores)

        reason = build_reason(template, profile, gaps)

        assert reason.startswith("This project aligns with your interest in web-development, javascript")
        assert "supports your short-term goal" in reason
        assert reason.endswith("difficulty level 1/5.")


class TestRecommendProjects:
    """Test the filtered response with metadata."""

    def test_difficulty_filter_after_selection(self, profile):
        response = recommend_projects(profile, count=5, min_difficulty=4, max_difficulty=5)

        assert all(4 <= p.difficulty <= 5 for p in response.projects)
        assert len(response.projects) <= 5

    def test_metadata(self, profile):
        response = recommend_projects(profile, count=5)

        assert response.metadata.skills_analyzed == 3
        assert response.metadata.interests_matched <= len(profile.interests)
        assert response.metadata.generated_at is not None
