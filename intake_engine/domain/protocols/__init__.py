"""Domain protocols - abstract interfaces for infrastructure implementations."""

from intake_engine.domain.protocols.providers import (
    CodeExecutionProvider,
    CodeQuality,
    ExecutionResult,
    LLMMessage,
    LLMProvider,
    LLMResponse,
    ProfileExtractionScheduler,
    RubricGrader,
    RubricScore,
    TaskRunner,
)
from intake_engine.domain.protocols.repositories import (
    AssessmentResponseRepository,
    AssessmentSessionRepository,
    LearnerProfileRepository,
    SkillMasteryRepository,
)

__all__ = [
    # Repositories
    "AssessmentSessionRepository",
    "AssessmentResponseRepository",
    "SkillMasteryRepository",
    "LearnerProfileRepository",
    # Providers
    "LLMMessage",
    "LLMResponse",
    "LLMProvider",
    "RubricGrader",
    "RubricScore",
    "CodeQuality",
    "CodeExecutionProvider",
    "ExecutionResult",
    "TaskRunner",
    "ProfileExtractionScheduler",
]
