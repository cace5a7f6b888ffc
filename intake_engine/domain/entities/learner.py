"""Learner profile entity (goals and interests)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class LearnerProfile:
    """Goals and interests extracted from a completed intake."""

    user_id: UUID
    interests: list[str] = field(default_factory=list)
    short_term_goal: str | None = None
    medium_term_goal: str | None = None
    long_term_goal: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def has_goals(self) -> bool:
        return any((self.short_term_goal, self.medium_term_goal, self.long_term_goal))

    def merge(self, other: "LearnerProfile") -> None:
        """Overwrite fields with the non-empty values of ``other``."""
        if other.short_term_goal:
            self.short_term_goal = other.short_term_goal
        if other.medium_term_goal:
            self.medium_term_goal = other.medium_term_goal
        if other.long_term_goal:
            self.long_term_goal = other.long_term_goal
        if other.interests:
            self.interests = list(other.interests)
        self.updated_at = datetime.now(UTC)
