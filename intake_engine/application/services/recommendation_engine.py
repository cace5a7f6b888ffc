"""Project recommendation scoring.

Scores every project template against a student profile with four weighted
factors (interest alignment, skill-gap coverage, goal alignment and difficulty
fit), picks a diverse top-N and orders the result easiest first.

Everything here is a pure function of its inputs plus the template catalog.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from intake_engine.application.catalog.project_templates import PROJECT_TEMPLATES
from intake_engine.domain.entities import (
    DEFAULT_WEIGHTS,
    ProjectRecommendation,
    ProjectTemplate,
    RecommendationMetadata,
    RecommendationResponse,
    RecommendationWeights,
    SkillGap,
    StudentProfile,
)

GAP_THRESHOLD = 0.6
ALWAYS_SELECTED = 3

_HORIZON_LABELS = {
    "short": "short-term",
    "medium": "medium-term",
    "long": "long-term",
}

# Checked in order; first match wins
_DIMENSION_HINTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("js_", "javascript"), "JavaScript"),
    (("react", "vue", "angular"), "Web"),
    (("node", "backend", "api"), "Backend"),
    (("html", "css"), "Web"),
    (("database", "sql"), "Backend"),
    (("git", "testing"), "Dev Practices"),
    (("design", "ux"), "Design"),
)


@dataclass
class _ScoredTemplate:
    template: ProjectTemplate
    score: float


# =============================================================================
# Skill gaps
# =============================================================================


def infer_dimension(skill_key: str) -> str:
    """Guess a display dimension for a skill key from its naming convention."""
    for needles, dimension in _DIMENSION_HINTS:
        if any(needle in skill_key for needle in needles):
            return dimension
    return "Programming"


def analyze_skill_gaps(assessment_scores: dict[str, float]) -> list[SkillGap]:
    """Skills below the gap threshold, highest priority first."""
    gaps = [
        SkillGap(
            skill_key=skill_key,
            current_mastery=mastery,
            priority=1 - mastery,
            dimension=infer_dimension(skill_key),
        )
        for skill_key, mastery in assessment_scores.items()
        if mastery < GAP_THRESHOLD
    ]
    # sorted() is stable, so equal priorities keep insertion order
    return sorted(gaps, key=lambda gap: gap.priority, reverse=True)


# =============================================================================
# Scoring factors
# =============================================================================


def score_interest_alignment(template: ProjectTemplate, interests: Sequence[str]) -> float:
    if not interests:
        return 0.5
    matching = [i for i in interests if i in template.related_interests]
    return len(matching) / len(interests)


def score_skill_gap_coverage(template: ProjectTemplate, gaps: Sequence[SkillGap]) -> float:
    if not gaps:
        return 0.5
    total_priority = sum(gap.priority for gap in gaps)
    covered = sum(gap.priority for gap in gaps if gap.skill_key in template.skills_covered)
    return covered / total_priority if total_priority > 0 else 0.0


def score_goal_alignment(template: ProjectTemplate, profile: StudentProfile) -> float:
    goal_text = profile.goals.for_horizon(template.goal_horizon)
    return 0.7 if goal_text and goal_text.strip() else 0.3


def score_difficulty(template: ProjectTemplate, average_mastery: float) -> float:
    """Closeness of the template difficulty to the 1-5 level implied by mastery."""
    ideal = 1 + average_mastery * 4
    return max(0.0, 1 - abs(template.difficulty - ideal) / 4)


def score_template(
    template: ProjectTemplate,
    profile: StudentProfile,
    gaps: Sequence[SkillGap],
    weights: RecommendationWeights = DEFAULT_WEIGHTS,
) -> float:
    return (
        score_interest_alignment(template, profile.interests) * weights.interest
        + score_skill_gap_coverage(template, gaps) * weights.skill_gap
        + score_goal_alignment(template, profile) * weights.goal
        + score_difficulty(template, profile.average_mastery) * weights.difficulty
    )


# =============================================================================
# Selection
# =============================================================================


def build_reason(
    template: ProjectTemplate,
    profile: StudentProfile,
    gaps: Sequence[SkillGap],
) -> str:
    reasons: list[str] = []

    matching = [i for i in profile.interests if i in template.related_interests]
    if matching:
        reasons.append(f"aligns with your interest in {', '.join(matching)}")

    covered = [gap for gap in gaps if gap.skill_key in template.skills_covered][:2]
    if covered:
        names = " and ".join(gap.skill_key.replace("_", " ") for gap in covered)
        reasons.append(f"addresses skill gaps in {names}")

    goal_text = profile.goals.for_horizon(template.goal_horizon)
    if goal_text and goal_text.strip():
        reasons.append(f"supports your {_HORIZON_LABELS[template.goal_horizon]} goal")

    reasons.append(
        f"offers an appropriate challenge at difficulty level {template.difficulty}/5"
    )

    return f"This project {', '.join(reasons)}."


def _to_recommendation(
    template: ProjectTemplate,
    profile: StudentProfile,
    gaps: Sequence[SkillGap],
) -> ProjectRecommendation:
    return ProjectRecommendation(
        title=template.title,
        description=template.description,
        difficulty=template.difficulty,
        goal_horizon=template.goal_horizon,
        recommendation_reason=build_reason(template, profile, gaps),
        aligned_interests=[i for i in profile.interests if i in template.related_interests],
        targeted_skills=[gap.skill_key for gap in gaps if gap.skill_key in template.skills_covered],
        learning_outcomes=list(template.learning_outcomes),
        tech_stack=list(template.tech_stack),
        deliverables=list(template.deliverables),
        supporting_resources=list(template.supporting_resources),
    )


def generate_recommendations(
    profile: StudentProfile,
    count: int = 5,
    weights: RecommendationWeights = DEFAULT_WEIGHTS,
    templates: Sequence[ProjectTemplate] = PROJECT_TEMPLATES,
) -> list[ProjectRecommendation]:
    """Pick up to ``count`` diverse templates for a profile, easiest first.

    The three best-scoring templates are always taken. Past those, a template
    is admitted only if it brings a goal horizon, a category, or one of the
    student's interests that no earlier pick covered.
    """
    gaps = analyze_skill_gaps(profile.assessment_scores)

    ranked = sorted(
        (_ScoredTemplate(t, score_template(t, profile, gaps, weights)) for t in templates),
        key=lambda item: item.score,
        reverse=True,
    )

    selected: list[ProjectRecommendation] = []
    used_horizons: set[str] = set()
    used_interests: set[str] = set()
    used_categories: set[str] = set()

    for item in ranked:
        if len(selected) >= count:
            break

        template = item.template
        has_new_horizon = template.goal_horizon not in used_horizons
        has_new_category = template.category not in used_categories
        has_new_interest = any(
            i in profile.interests and i not in used_interests
            for i in template.related_interests
        )

        if not (
            len(selected) < ALWAYS_SELECTED
            or has_new_horizon
            or has_new_interest
            or has_new_category
        ):
            continue

        selected.append(_to_recommendation(template, profile, gaps))
        used_horizons.add(template.goal_horizon)
        used_interests.update(template.related_interests)
        used_categories.add(template.category)

    selected.sort(key=lambda rec: rec.difficulty)
    return selected


def recommend_projects(
    profile: StudentProfile,
    count: int = 5,
    min_difficulty: int = 1,
    max_difficulty: int = 5,
    weights: RecommendationWeights = DEFAULT_WEIGHTS,
) -> RecommendationResponse:
    """Generate recommendations, filter by difficulty and attach metadata.

    The difficulty filter runs after selection, so fewer than ``count``
    projects may come back.
    """
    projects = [
        rec
        for rec in generate_recommendations(profile, count, weights)
        if min_difficulty <= rec.difficulty <= max_difficulty
    ]
    interests_matched = {i for rec in projects for i in rec.aligned_interests}

    return RecommendationResponse(
        projects=projects,
        metadata=RecommendationMetadata(
            skills_analyzed=len(profile.assessment_scores),
            interests_matched=len(interests_matched),
        ),
    )
