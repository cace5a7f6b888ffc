"""Skill mastery API endpoints."""

from dataclasses import asdict
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from intake_engine.application.services import MasteryService
from intake_engine.config import Settings
from intake_engine.presentation.http.dependencies import (
    get_app_settings,
    get_mastery_service,
    get_user_id,
)
from intake_engine.presentation.http.intake import (
    ProfileSummaryResponse,
    profile_summary_to_response,
)

router = APIRouter(prefix="/mastery", tags=["mastery"])


class SkillMasteryResponse(BaseModel):
    mastery: float
    confidence: float
    attempts: int


class DimensionScoreResponse(BaseModel):
    score: float
    confidence: float
    skill_count: int
    assessed_count: int


class SkillProfileResponse(BaseModel):
    user_id: UUID
    skills: dict[str, SkillMasteryResponse]
    dimensions: dict[str, DimensionScoreResponse]
    last_updated: datetime


class WeakDimensionResponse(BaseModel):
    dimension: str
    score: float
    confidence: float


class WeakSkillResponse(BaseModel):
    skill_key: str
    mastery: float
    confidence: float


class NeedsAssessmentResponse(BaseModel):
    skill_keys: list[str]


@router.get("/profile", response_model=SkillProfileResponse)
async def get_skill_profile(
    user_id: UUID = Depends(get_user_id),
    service: MasteryService = Depends(get_mastery_service),
) -> SkillProfileResponse:
    """Every assessed skill plus per-dimension aggregates."""
    profile = await service.get_skill_profile(user_id)

    return SkillProfileResponse(
        user_id=profile.user_id,
        skills={k: SkillMasteryResponse(**asdict(v)) for k, v in profile.skills.items()},
        dimensions={k: DimensionScoreResponse(**asdict(v)) for k, v in profile.dimensions.items()},
        last_updated=profile.last_updated,
    )


@router.get("/summary", response_model=ProfileSummaryResponse)
async def get_profile_summary(
    user_id: UUID = Depends(get_user_id),
    service: MasteryService = Depends(get_mastery_service),
) -> ProfileSummaryResponse:
    summary = await service.get_profile_summary(user_id)
    return profile_summary_to_response(summary)


@router.get("/weak-dimensions", response_model=list[WeakDimensionResponse])
async def get_weak_dimensions(
    threshold: float | None = Query(None, ge=0.0, le=1.0),
    user_id: UUID = Depends(get_user_id),
    service: MasteryService = Depends(get_mastery_service),
    settings: Settings = Depends(get_app_settings),
) -> list[WeakDimensionResponse]:
    """Dimensions scoring below the threshold, weakest first."""
    if threshold is None:
        threshold = settings.weak_dimension_threshold

    weak = await service.get_weak_dimensions(user_id, threshold)
    return [WeakDimensionResponse(**asdict(d)) for d in weak]


@router.get("/dimensions/{dimension}/weak-skills", response_model=list[WeakSkillResponse])
async def get_weak_skills(
    dimension: str,
    threshold: float | None = Query(None, ge=0.0, le=1.0),
    user_id: UUID = Depends(get_user_id),
    service: MasteryService = Depends(get_mastery_service),
    settings: Settings = Depends(get_app_settings),
) -> list[WeakSkillResponse]:
    if threshold is None:
        threshold = settings.weak_dimension_threshold

    weak = await service.get_weak_skills_in_dimension(user_id, dimension, threshold)
    return [WeakSkillResponse(**asdict(s)) for s in weak]


@router.get("/needs-assessment", response_model=NeedsAssessmentResponse)
async def get_skills_needing_assessment(
    confidence_threshold: float | None = Query(None, ge=0.0, le=1.0),
    user_id: UUID = Depends(get_user_id),
    service: MasteryService = Depends(get_mastery_service),
    settings: Settings = Depends(get_app_settings),
) -> NeedsAssessmentResponse:
    """Skills never assessed or assessed with low confidence."""
    if confidence_threshold is None:
        confidence_threshold = settings.assessment_confidence_threshold

    keys = await service.get_skills_needing_assessment(user_id, confidence_threshold)
    return NeedsAssessmentResponse(skill_keys=keys)
