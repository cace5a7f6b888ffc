"""FastAPI dependencies wiring repositories, providers and services."""

from uuid import UUID

from fastapi import BackgroundTasks, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from intake_engine.application.services import (
    IntakeService,
    MasteryService,
    ProfileExtractionService,
    RecommendationService,
    StepGrader,
)
from intake_engine.config import Settings, get_settings
from intake_engine.domain.protocols.providers import (
    CodeExecutionProvider,
    ProfileExtractionScheduler,
    RubricGrader,
    TaskRunner,
)
from intake_engine.infrastructure.database import get_db, get_db_session
from intake_engine.infrastructure.repositories import (
    AssessmentResponseRepositoryImpl,
    AssessmentSessionRepositoryImpl,
    LearnerProfileRepositoryImpl,
    SkillMasteryRepositoryImpl,
)
from intake_engine.infrastructure.telemetry import set_request_context


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_user_id(x_user_id: UUID = Header(..., alias="X-User-ID")) -> UUID:
    """The learner making the request."""
    return x_user_id


async def bind_session_id(session_id: UUID) -> UUID:
    """Path session id, also stamped on every log line of the request."""
    set_request_context(session_id=str(session_id))
    return session_id


def get_rubric_grader(request: Request) -> RubricGrader | None:
    return getattr(request.app.state, "rubric_grader", None)


def get_code_runner(request: Request) -> CodeExecutionProvider | None:
    return getattr(request.app.state, "code_runner", None)


def get_task_runner(request: Request) -> TaskRunner:
    return request.app.state.task_runner


async def extract_profile_in_background(user_id: UUID, session_id: UUID) -> None:
    """Run profile extraction in its own database session."""
    set_request_context(user_id=str(user_id), session_id=str(session_id))
    async with get_db_session() as session:
        service = ProfileExtractionService(
            response_repo=AssessmentResponseRepositoryImpl(session),
            learner_repo=LearnerProfileRepositoryImpl(session),
        )
        await service.extract_and_save(user_id, session_id)


def get_profile_extraction_scheduler(
    background_tasks: BackgroundTasks,
    runner: TaskRunner = Depends(get_task_runner),
) -> ProfileExtractionScheduler:
    """Schedule extraction once the response has been sent.

    Handing the job to the runner from a response background task keeps it
    from reading the session before the request transaction commits.
    """

    def schedule(user_id: UUID, session_id: UUID) -> None:
        async def submit() -> None:
            runner.submit(
                f"profile-extraction-{session_id}",
                lambda: extract_profile_in_background(user_id, session_id),
            )

        background_tasks.add_task(submit)

    return schedule


def get_mastery_service(db: AsyncSession = Depends(get_db)) -> MasteryService:
    return MasteryService(SkillMasteryRepositoryImpl(db))


def get_step_grader(
    rubric_grader: RubricGrader | None = Depends(get_rubric_grader),
    code_runner: CodeExecutionProvider | None = Depends(get_code_runner),
) -> StepGrader:
    return StepGrader(rubric_grader=rubric_grader, code_runner=code_runner)


def get_intake_service(
    db: AsyncSession = Depends(get_db),
    mastery_service: MasteryService = Depends(get_mastery_service),
    grader: StepGrader = Depends(get_step_grader),
    on_complete: ProfileExtractionScheduler = Depends(get_profile_extraction_scheduler),
    settings: Settings = Depends(get_app_settings),
) -> IntakeService:
    return IntakeService(
        session_repo=AssessmentSessionRepositoryImpl(db),
        response_repo=AssessmentResponseRepositoryImpl(db),
        mastery_service=mastery_service,
        grader=grader,
        on_complete=on_complete,
        session_type=settings.intake_session_type,
        default_mastery_weight=settings.default_mastery_weight,
    )


def get_recommendation_service(db: AsyncSession = Depends(get_db)) -> RecommendationService:
    return RecommendationService(
        mastery_repo=SkillMasteryRepositoryImpl(db),
        learner_repo=LearnerProfileRepositoryImpl(db),
    )
