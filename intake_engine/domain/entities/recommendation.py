"""Project recommendation entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal


GoalHorizon = Literal["short", "medium", "long"]


@dataclass(frozen=True)
class ProjectTemplate:
    """A catalog project that can be recommended."""

    id: str
    title: str
    description: str
    difficulty: int
    goal_horizon: GoalHorizon
    category: str
    related_interests: tuple[str, ...]
    skills_covered: tuple[str, ...]
    learning_outcomes: tuple[str, ...] = ()
    tech_stack: tuple[str, ...] = ()
    deliverables: tuple[str, ...] = ()
    supporting_resources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.difficulty <= 5:
            raise ValueError(f"difficulty must be within [1, 5], got {self.difficulty}")


@dataclass
class StudentGoals:
    short_term: str = ""
    medium_term: str = ""
    long_term: str = ""

    def for_horizon(self, horizon: GoalHorizon) -> str:
        return {
            "short": self.short_term,
            "medium": self.medium_term,
            "long": self.long_term,
        }[horizon]


@dataclass
class StudentProfile:
    """Derived view of a learner used for recommendations."""

    interests: list[str] = field(default_factory=list)
    assessment_scores: dict[str, float] = field(default_factory=dict)
    goals: StudentGoals = field(default_factory=StudentGoals)

    @property
    def average_mastery(self) -> float:
        return sum(self.assessment_scores.values()) / max(1, len(self.assessment_scores))


@dataclass(frozen=True)
class RecommendationWeights:
    """Weights of the four scoring factors. Must sum to 1."""

    interest: float = 0.3
    skill_gap: float = 0.4
    goal: float = 0.2
    difficulty: float = 0.1

    def __post_init__(self) -> None:
        total = self.interest + self.skill_gap + self.goal + self.difficulty
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Recommendation weights must sum to 1, got {total}")


DEFAULT_WEIGHTS = RecommendationWeights()


@dataclass
class SkillGap:
    skill_key: str
    current_mastery: float
    priority: float
    dimension: str


@dataclass
class ProjectRecommendation:
    title: str
    description: str
    difficulty: int
    goal_horizon: GoalHorizon
    recommendation_reason: str
    aligned_interests: list[str]
    targeted_skills: list[str]
    learning_outcomes: list[str] = field(default_factory=list)
    tech_stack: list[str] = field(default_factory=list)
    deliverables: list[str] = field(default_factory=list)
    supporting_resources: list[str] = field(default_factory=list)


@dataclass
class RecommendationMetadata:
    skills_analyzed: int
    interests_matched: int
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class RecommendationResponse:
    projects: list[ProjectRecommendation]
    metadata: RecommendationMetadata
