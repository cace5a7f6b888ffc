"""Grade result entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GradeResult:
    """Normalized outcome of grading one step answer.

    score is always within [0, 1]. skill_scores maps skill keys to the
    evidence this answer provides for them; confidence is how much that
    evidence should be trusted by the mastery update.
    """

    score: float
    passed: bool
    feedback: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    skill_scores: dict[str, float] = field(default_factory=dict)
    confidence: float | None = None

    def __post_init__(self) -> None:
        self.score = min(1.0, max(0.0, float(self.score)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON persistence."""
        return {
            "score": self.score,
            "passed": self.passed,
            "feedback": self.feedback,
            "details": self.details,
            "skill_scores": self.skill_scores,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GradeResult":
        return cls(
            score=data.get("score", 0.0),
            passed=bool(data.get("passed", False)),
            feedback=data.get("feedback"),
            details=data.get("details") or {},
            skill_scores=data.get("skill_scores") or {},
            confidence=data.get("confidence"),
        )
