"""Intake assessment API endpoints."""

from dataclasses import asdict
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from intake_engine.application.services import IntakeService
from intake_engine.domain.entities import (
    AnyStep,
    AssessmentSession,
    CurrentStepResult,
    GradeResult,
    ProfileSummary,
)
from intake_engine.infrastructure.database import get_db
from intake_engine.presentation.http.dependencies import (
    bind_session_id,
    get_intake_service,
    get_user_id,
)

router = APIRouter(prefix="/intake", tags=["intake"])


# Request/Response models
class SubmitAnswerRequest(BaseModel):
    """Answer for one step. The answer shape depends on the step kind."""

    step_id: str = Field(..., min_length=1)
    answer: Any = None


class GradeResultResponse(BaseModel):
    score: float
    passed: bool
    feedback: str | None
    details: dict[str, Any]
    skill_scores: dict[str, float]
    confidence: float | None


class SkillDeltaResponse(BaseModel):
    skill_key: str
    delta: float


class SessionResponse(BaseModel):
    id: UUID
    user_id: UUID
    session_type: str
    status: str
    current_step: str | None
    started_at: datetime
    completed_at: datetime | None


class StartSessionResponse(BaseModel):
    session_id: UUID
    first_step: dict[str, Any]
    total_steps: int
    estimated_minutes: float
    is_resuming: bool


class CurrentStepResponse(BaseModel):
    step: dict[str, Any]
    progress: int
    can_go_back: bool
    previous_answer: Any = None


class SubmitAnswerResponse(BaseModel):
    grade_result: GradeResultResponse
    skill_updates: list[SkillDeltaResponse]
    next_step: dict[str, Any] | None
    is_complete: bool
    progress: int


class DimensionSummaryResponse(BaseModel):
    key: str
    label: str
    score: float
    confidence: float
    assessed_ratio: float


class ProfileSummaryResponse(BaseModel):
    dimensions: list[DimensionSummaryResponse]
    overall_score: float
    overall_confidence: float
    total_skills_assessed: int
    total_skills: int


class StepResultResponse(BaseModel):
    step_id: str
    step_title: str
    grade_result: GradeResultResponse | None


class SessionSummaryResponse(BaseModel):
    session_id: UUID
    completed_at: datetime
    total_steps: int
    profile_summary: ProfileSummaryResponse
    step_results: list[StepResultResponse]


class IntakeStatusResponse(BaseModel):
    has_completed: bool
    latest_session: SessionResponse | None


# Endpoints
@router.post("/start", response_model=StartSessionResponse)
async def start_intake(
    user_id: UUID = Depends(get_user_id),
    service: IntakeService = Depends(get_intake_service),
) -> StartSessionResponse:
    """Start a new intake session or resume the one in progress."""
    result = await service.start_session(user_id)

    return StartSessionResponse(
        session_id=result.session_id,
        first_step=step_to_dict(result.first_step),
        total_steps=result.total_steps,
        estimated_minutes=result.estimated_minutes,
        is_resuming=result.is_resuming,
    )


@router.get("/status", response_model=IntakeStatusResponse)
async def intake_status(
    user_id: UUID = Depends(get_user_id),
    service: IntakeService = Depends(get_intake_service),
) -> IntakeStatusResponse:
    """Whether the user has finished the intake, plus their latest session."""
    has_completed = await service.has_completed_intake(user_id)
    latest = await service.get_latest_intake_session(user_id)

    return IntakeStatusResponse(
        has_completed=has_completed,
        latest_session=_session_to_response(latest) if latest else None,
    )


@router.get("/sessions/{session_id}/current", response_model=CurrentStepResponse | None)
async def get_current_step(
    session_id: UUID = Depends(bind_session_id),
    service: IntakeService = Depends(get_intake_service),
) -> CurrentStepResponse | None:
    result = await service.get_current_step(session_id)
    return _current_to_response(result) if result else None


@router.post("/sessions/{session_id}/submit", response_model=SubmitAnswerResponse)
async def submit_answer(
    request: SubmitAnswerRequest,
    session_id: UUID = Depends(bind_session_id),
    service: IntakeService = Depends(get_intake_service),
    db: AsyncSession = Depends(get_db),
) -> SubmitAnswerResponse:
    """Grade an answer, update mastery and advance the session."""
    result = await service.submit_answer(session_id, request.step_id, request.answer)

    if result.is_complete:
        # Profile extraction reads this session from a separate connection
        await db.commit()

    return SubmitAnswerResponse(
        grade_result=_grade_to_response(result.grade_result),
        skill_updates=[
            SkillDeltaResponse(skill_key=u.skill_key, delta=u.delta) for u in result.skill_updates
        ],
        next_step=step_to_dict(result.next_step) if result.next_step else None,
        is_complete=result.is_complete,
        progress=result.progress,
    )


@router.post("/sessions/{session_id}/previous", response_model=CurrentStepResponse | None)
async def go_to_previous_step(
    session_id: UUID = Depends(bind_session_id),
    service: IntakeService = Depends(get_intake_service),
) -> CurrentStepResponse | None:
    result = await service.go_to_previous_step(session_id)
    return _current_to_response(result) if result else None


@router.post("/sessions/{session_id}/abandon", response_model=SessionResponse)
async def abandon_session(
    session_id: UUID = Depends(bind_session_id),
    service: IntakeService = Depends(get_intake_service),
) -> SessionResponse:
    session = await service.abandon_session(session_id)
    return _session_to_response(session)


@router.get("/sessions/{session_id}/summary", response_model=SessionSummaryResponse)
async def get_session_summary(
    session_id: UUID = Depends(bind_session_id),
    service: IntakeService = Depends(get_intake_service),
) -> SessionSummaryResponse:
    """Per-step results and the resulting skill profile summary."""
    summary = await service.get_session_summary(session_id)

    return SessionSummaryResponse(
        session_id=summary.session_id,
        completed_at=summary.completed_at,
        total_steps=summary.total_steps,
        profile_summary=profile_summary_to_response(summary.profile_summary),
        step_results=[
            StepResultResponse(
                step_id=r.step_id,
                step_title=r.step_title,
                grade_result=_grade_to_response(r.grade_result) if r.grade_result else None,
            )
            for r in summary.step_results
        ],
    )


# Converters
def step_to_dict(step: AnyStep) -> dict[str, Any]:
    """Serialize a step definition for the client."""
    data = asdict(step)
    data["kind"] = step.kind.value
    return data


def profile_summary_to_response(summary: ProfileSummary) -> ProfileSummaryResponse:
    return ProfileSummaryResponse(
        dimensions=[DimensionSummaryResponse(**asdict(d)) for d in summary.dimensions],
        overall_score=summary.overall_score,
        overall_confidence=summary.overall_confidence,
        total_skills_assessed=summary.total_skills_assessed,
        total_skills=summary.total_skills,
    )


def _grade_to_response(grade: GradeResult) -> GradeResultResponse:
    return GradeResultResponse(**grade.to_dict())


def _current_to_response(result: CurrentStepResult) -> CurrentStepResponse:
    return CurrentStepResponse(
        step=step_to_dict(result.step),
        progress=result.progress,
        can_go_back=result.can_go_back,
        previous_answer=result.previous_answer,
    )


def _session_to_response(session: AssessmentSession) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        user_id=session.user_id,
        session_type=session.session_type,
        status=session.status.value,
        current_step=session.current_step,
        started_at=session.started_at,
        completed_at=session.completed_at,
    )
