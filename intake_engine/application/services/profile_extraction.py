"""Profile extraction - derives goals and interests from a completed intake.

Runs in the background after a session completes. Failures are logged and
never reach the request that completed the session.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from intake_engine.domain.entities import AssessmentResponse, LearnerProfile, StepKind
from intake_engine.domain.errors import ProfileExtractionError
from intake_engine.domain.protocols import (
    AssessmentResponseRepository,
    LearnerProfileRepository,
)
from intake_engine.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

BACKGROUND_STEP_ID = "questionnaire_background"

# learning_goal -> ((short, medium, long), interests)
_LEARNING_GOALS: dict[str, tuple[tuple[str | None, str | None, str | None], tuple[str, ...]]] = {
    "career_change": (
        (None, "Transition into a tech career", "Become a professional software engineer"),
        ("web-development", "full-stack"),
    ),
    "skill_upgrade": (
        ("Learn new technologies and frameworks", "Advance current technical skills", None),
        (),
    ),
    "freelance": (
        ("Build portfolio projects", "Start freelancing", "Run a successful freelance business"),
        ("web-development", "full-stack"),
    ),
    "side_projects": (
        ("Build personal projects", "Create a portfolio of side projects", None),
        ("web-development", "react"),
    ),
    "startup": (
        ("Build MVP", "Launch a product", "Build and scale a tech startup"),
        ("web-development", "full-stack", "saas"),
    ),
    "curiosity": (
        ("Learn programming fundamentals", "Build confidence with coding", None),
        (),
    ),
}

_PROJECT_PREFERENCES: dict[str, tuple[str, ...]] = {
    "web_app": ("web-development", "full-stack"),
    "mobile_app": ("mobile", "react-native"),
    "api": ("backend", "apis"),
    "data": ("data", "analytics"),
    "game": ("game-dev", "graphics"),
}

DEFAULT_GOALS = (
    "Build fundamental programming skills",
    "Create projects that showcase my abilities",
    "Advance my career in software development",
)
DEFAULT_INTERESTS = ("web-development", "javascript")


@dataclass
class ExtractedProfile:
    short_term_goal: str | None = None
    medium_term_goal: str | None = None
    long_term_goal: str | None = None
    interests: list[str] = field(default_factory=list)


def _find_questionnaire(responses: Sequence[AssessmentResponse]) -> AssessmentResponse | None:
    background = next((r for r in responses if r.step_id == BACKGROUND_STEP_ID), None)
    if background is not None:
        return background
    return next((r for r in responses if r.step_kind == StepKind.QUESTIONNAIRE), None)


def extract_profile_data(responses: Sequence[AssessmentResponse]) -> ExtractedProfile:
    """Map questionnaire answers onto goal texts and interest tags.

    Falls back to generic goals and interests when the answers yield none.
    """
    profile = ExtractedProfile()
    # dict keeps first-seen order while de-duplicating
    interests: dict[str, None] = {}

    response = _find_questionnaire(responses)
    answers: dict[str, Any] = (
        response.raw_answer if response and isinstance(response.raw_answer, dict) else {}
    )

    goal_mapping = _LEARNING_GOALS.get(answers.get("learning_goal") or "")
    if goal_mapping:
        (short, medium, long), goal_interests = goal_mapping
        profile.short_term_goal = short
        profile.medium_term_goal = medium
        profile.long_term_goal = long
        interests.update(dict.fromkeys(goal_interests))

    if answers.get("experience_level") == "beginner":
        interests.update(dict.fromkeys(DEFAULT_INTERESTS))

    tech_interests = answers.get("tech_interests") or answers.get("interests")
    if isinstance(tech_interests, list):
        interests.update(dict.fromkeys(str(i) for i in tech_interests))
    elif isinstance(tech_interests, str):
        interests[tech_interests] = None

    project_type = answers.get("project_preference") or answers.get("preferred_projects")
    interests.update(dict.fromkeys(_PROJECT_PREFERENCES.get(project_type or "", ())))

    if not (profile.short_term_goal or profile.medium_term_goal or profile.long_term_goal):
        profile.short_term_goal, profile.medium_term_goal, profile.long_term_goal = DEFAULT_GOALS

    profile.interests = list(interests) or list(DEFAULT_INTERESTS)
    return profile


class ProfileExtractionService:
    """Persists the goals and interests extracted from a session's answers."""

    def __init__(
        self,
        response_repo: AssessmentResponseRepository,
        learner_repo: LearnerProfileRepository,
    ):
        self.response_repo = response_repo
        self.learner_repo = learner_repo

    async def extract_and_save(self, user_id: UUID, session_id: UUID) -> LearnerProfile | None:
        """Extract and store the learner profile; returns None on failure."""
        logger.info(
            "Extracting learner profile from assessment",
            extra={"user_id": str(user_id), "session_id": str(session_id)},
        )

        try:
            responses = await self.response_repo.list_by_session(session_id)
            extracted = extract_profile_data(responses)

            incoming = LearnerProfile(
                user_id=user_id,
                interests=extracted.interests,
                short_term_goal=extracted.short_term_goal,
                medium_term_goal=extracted.medium_term_goal,
                long_term_goal=extracted.long_term_goal,
            )
            existing = await self.learner_repo.get(user_id)
            if existing is not None:
                existing.merge(incoming)
                incoming = existing

            saved = await self.learner_repo.upsert(incoming)
        except Exception as exc:
            error = ProfileExtractionError(
                message="Failed to extract and save learner profile",
                details={"error": str(exc)},
                operation="profile_extraction.extract_and_save",
            )
            logger.error(
                error.message,
                extra={
                    "error_code": error.code,
                    "error_details": error.details,
                    "user_id": str(user_id),
                    "session_id": str(session_id),
                },
                exc_info=True,
            )
            return None

        logger.info(
            "Learner profile extracted and saved",
            extra={
                "user_id": str(user_id),
                "session_id": str(session_id),
                "goal_count": sum(
                    1
                    for g in (saved.short_term_goal, saved.medium_term_goal, saved.long_term_goal)
                    if g
                ),
                "interest_count": len(saved.interests),
            },
        )
        return saved
