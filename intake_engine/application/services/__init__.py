"""Application services."""

from intake_engine.application.services.intake_service import IntakeService
from intake_engine.application.services.mastery_service import MasteryService
from intake_engine.application.services.profile_extraction import ProfileExtractionService
from intake_engine.application.services.recommendation_service import RecommendationService
from intake_engine.application.services.step_grader import StepGrader

__all__ = [
    "IntakeService",
    "MasteryService",
    "ProfileExtractionService",
    "RecommendationService",
    "StepGrader",
]
