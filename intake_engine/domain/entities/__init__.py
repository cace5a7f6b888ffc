"""Domain entities - pure Python dataclasses representing business objects."""

from intake_engine.domain.entities.assessment import (
    SUMMARY_STEP_ID,
    AssessmentResponse,
    AssessmentSession,
    CurrentStepResult,
    SessionStatus,
    SessionSummary,
    SkillDelta,
    StartSessionResult,
    StepResultSummary,
    SubmitAnswerResult,
)
from intake_engine.domain.entities.grading import GradeResult
from intake_engine.domain.entities.learner import LearnerProfile
from intake_engine.domain.entities.recommendation import (
    DEFAULT_WEIGHTS,
    ProjectRecommendation,
    ProjectTemplate,
    RecommendationMetadata,
    RecommendationResponse,
    RecommendationWeights,
    SkillGap,
    StudentGoals,
    StudentProfile,
)
from intake_engine.domain.entities.skills import (
    DimensionConfig,
    DimensionScore,
    DimensionSummary,
    MasteryUpdate,
    MasteryUpdateResult,
    ProfileSummary,
    SkillMastery,
    SkillMasteryRecord,
    SkillProfile,
    SkillTag,
    WeakDimension,
    WeakSkill,
)
from intake_engine.domain.entities.steps import (
    AnyStep,
    SkipCondition,
    SkipRule,
    StepConfig,
    StepKind,
)

__all__ = [
    # Assessment
    "SUMMARY_STEP_ID",
    "AssessmentSession",
    "AssessmentResponse",
    "SessionStatus",
    "StartSessionResult",
    "CurrentStepResult",
    "SubmitAnswerResult",
    "SkillDelta",
    "SessionSummary",
    "StepResultSummary",
    # Grading
    "GradeResult",
    # Steps
    "AnyStep",
    "StepConfig",
    "StepKind",
    "SkipRule",
    "SkipCondition",
    # Skills
    "DimensionConfig",
    "SkillTag",
    "SkillMastery",
    "SkillMasteryRecord",
    "MasteryUpdate",
    "MasteryUpdateResult",
    "DimensionScore",
    "SkillProfile",
    "DimensionSummary",
    "ProfileSummary",
    "WeakDimension",
    "WeakSkill",
    # Learner
    "LearnerProfile",
    # Recommendations
    "ProjectTemplate",
    "ProjectRecommendation",
    "RecommendationWeights",
    "RecommendationMetadata",
    "RecommendationResponse",
    "DEFAULT_WEIGHTS",
    "SkillGap",
    "StudentGoals",
    "StudentProfile",
]
