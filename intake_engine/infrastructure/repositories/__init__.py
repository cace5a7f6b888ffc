"""Repository implementations - SQLAlchemy-based data access."""

from intake_engine.infrastructure.repositories.learner_profile_repository import (
    LearnerProfileRepositoryImpl,
)
from intake_engine.infrastructure.repositories.mastery_repository import (
    SkillMasteryRepositoryImpl,
)
from intake_engine.infrastructure.repositories.response_repository import (
    AssessmentResponseRepositoryImpl,
)
from intake_engine.infrastructure.repositories.session_repository import (
    AssessmentSessionRepositoryImpl,
)

__all__ = [
    "AssessmentSessionRepositoryImpl",
    "AssessmentResponseRepositoryImpl",
    "SkillMasteryRepositoryImpl",
    "LearnerProfileRepositoryImpl",
]
