"""SQLAlchemy database models."""

from intake_engine.infrastructure.database.models.assessment import (
    AssessmentResponseModel,
    AssessmentSessionModel,
)
from intake_engine.infrastructure.database.models.base import Base, TimestampMixin
from intake_engine.infrastructure.database.models.learner_profile import LearnerProfileModel
from intake_engine.infrastructure.database.models.mastery import SkillMasteryModel

__all__ = [
    "Base",
    "TimestampMixin",
    # Assessment
    "AssessmentSessionModel",
    "AssessmentResponseModel",
    # Learner state
    "SkillMasteryModel",
    "LearnerProfileModel",
]
