"""Skill taxonomy and mastery entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID


SkillDimension = Literal[
    "programming_fundamentals",
    "web_foundations",
    "javascript",
    "backend",
    "dev_practices",
    "system_thinking",
    "design",
    "meta",
]


@dataclass(frozen=True)
class DimensionConfig:
    """A named cluster of related skills."""

    key: SkillDimension
    label: str
    description: str
    order: int


@dataclass(frozen=True)
class SkillTag:
    """A single assessable skill.

    weight is the importance of the skill when aggregating its dimension.
    """

    key: str
    dimension: SkillDimension
    label: str
    description: str
    weight: float
    prerequisites: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"weight must be within [0, 1], got {self.weight}")


@dataclass
class SkillMastery:
    """Belief state for one skill."""

    mastery: float = 0.5
    confidence: float = 0.0
    attempts: int = 0


@dataclass
class SkillMasteryRecord:
    """Persisted mastery for a (user, skill) pair."""

    user_id: UUID
    skill_key: str
    mastery: float = 0.5
    confidence: float = 0.0
    attempts: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_mastery(self) -> SkillMastery:
        return SkillMastery(
            mastery=self.mastery,
            confidence=self.confidence,
            attempts=self.attempts,
        )


@dataclass
class MasteryUpdate:
    """A single piece of evidence for a skill."""

    skill_key: str
    score: float
    weight: float = 1.0
    source: str | None = None  # e.g. 'intake_mcq', 'challenge', 'self_report'


@dataclass
class MasteryUpdateResult:
    """Outcome of applying a MasteryUpdate."""

    skill_key: str
    previous_mastery: float
    new_mastery: float
    previous_confidence: float
    new_confidence: float

    @property
    def delta(self) -> float:
        return self.new_mastery - self.previous_mastery

    def to_dict(self) -> dict[str, float | str]:
        return {
            "skill_key": self.skill_key,
            "previous_mastery": self.previous_mastery,
            "new_mastery": self.new_mastery,
            "previous_confidence": self.previous_confidence,
            "new_confidence": self.new_confidence,
            "delta": self.delta,
        }


@dataclass
class DimensionScore:
    """Aggregated mastery for a dimension."""

    score: float = 0.0
    confidence: float = 0.0
    skill_count: int = 0
    assessed_count: int = 0


@dataclass
class SkillProfile:
    """A user's skills with dimension aggregates."""

    user_id: UUID
    skills: dict[str, SkillMastery]
    dimensions: dict[str, DimensionScore]
    last_updated: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class DimensionSummary:
    """Display row for a dimension (e.g. radar chart data)."""

    key: str
    label: str
    score: float
    confidence: float
    assessed_ratio: float


@dataclass
class ProfileSummary:
    """Display summary of a skill profile."""

    dimensions: list[DimensionSummary]
    overall_score: float
    overall_confidence: float
    total_skills_assessed: int
    total_skills: int


@dataclass
class WeakDimension:
    dimension: str
    score: float
    confidence: float


@dataclass
class WeakSkill:
    skill_key: str
    mastery: float
    confidence: float
