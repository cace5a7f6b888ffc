"""Project recommendation API endpoints."""

from dataclasses import asdict
from datetime import datetime
from typing import Literal, Self
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, model_validator

from intake_engine.application.services import RecommendationService
from intake_engine.application.services.recommendation_engine import recommend_projects
from intake_engine.config import Settings
from intake_engine.domain.entities import (
    RecommendationResponse,
    RecommendationWeights,
    StudentGoals,
    StudentProfile,
)
from intake_engine.presentation.http.dependencies import (
    get_app_settings,
    get_recommendation_service,
    get_user_id,
)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


# Request/Response models
class GoalsRequest(BaseModel):
    short_term: str = ""
    medium_term: str = ""
    long_term: str = ""


class WeightsRequest(BaseModel):
    interest: float = Field(0.3, ge=0.0, le=1.0)
    skill_gap: float = Field(0.4, ge=0.0, le=1.0)
    goal: float = Field(0.2, ge=0.0, le=1.0)
    difficulty: float = Field(0.1, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_sum(self) -> Self:
        total = self.interest + self.skill_gap + self.goal + self.difficulty
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"weights must sum to 1, got {total}")
        return self


class RecommendRequest(BaseModel):
    """An explicit student profile to recommend against."""

    interests: list[str] = Field(default_factory=list)
    assessment_scores: dict[str, float] = Field(default_factory=dict)
    goals: GoalsRequest = Field(default_factory=GoalsRequest)
    count: int = Field(5, ge=1, le=14)
    min_difficulty: int = Field(1, ge=1, le=5)
    max_difficulty: int = Field(5, ge=1, le=5)
    weights: WeightsRequest = Field(default_factory=WeightsRequest)


class ProjectResponse(BaseModel):
    title: str
    description: str
    difficulty: int
    goal_horizon: Literal["short", "medium", "long"]
    recommendation_reason: str
    aligned_interests: list[str]
    targeted_skills: list[str]
    learning_outcomes: list[str]
    tech_stack: list[str]
    deliverables: list[str]
    supporting_resources: list[str]


class MetadataResponse(BaseModel):
    generated_at: datetime
    skills_analyzed: int
    interests_matched: int


class RecommendationsResponse(BaseModel):
    projects: list[ProjectResponse]
    metadata: MetadataResponse


# Endpoints
@router.post("/projects", response_model=RecommendationsResponse)
async def recommend_for_profile(request: RecommendRequest) -> RecommendationsResponse:
    """Recommend projects for a caller-supplied profile."""
    profile = StudentProfile(
        interests=request.interests,
        assessment_scores=request.assessment_scores,
        goals=StudentGoals(**request.goals.model_dump()),
    )

    result = recommend_projects(
        profile,
        count=request.count,
        min_difficulty=request.min_difficulty,
        max_difficulty=request.max_difficulty,
        weights=RecommendationWeights(**request.weights.model_dump()),
    )
    return _to_response(result)


@router.get("/projects", response_model=RecommendationsResponse)
async def recommend_for_user(
    count: int | None = Query(None, ge=1, le=14),
    min_difficulty: int = Query(1, ge=1, le=5),
    max_difficulty: int = Query(5, ge=1, le=5),
    user_id: UUID = Depends(get_user_id),
    service: RecommendationService = Depends(get_recommendation_service),
    settings: Settings = Depends(get_app_settings),
) -> RecommendationsResponse:
    """Recommend projects from the user's stored mastery and goals."""
    result = await service.recommend_for_user(
        user_id,
        count=count or settings.recommendation_count,
        min_difficulty=min_difficulty,
        max_difficulty=max_difficulty,
    )
    return _to_response(result)


def _to_response(result: RecommendationResponse) -> RecommendationsResponse:
    return RecommendationsResponse(
        projects=[ProjectResponse(**asdict(p)) for p in result.projects],
        metadata=MetadataResponse(**asdict(result.metadata)),
    )
