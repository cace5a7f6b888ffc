"""Intake service - drives an assessment session through the step catalog."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from intake_engine.application.catalog.intake_steps import DEFAULT_CATALOG, StepCatalog
from intake_engine.application.services.mastery_service import MasteryService
from intake_engine.application.services.step_grader import StepGrader
from intake_engine.domain.entities import (
    SUMMARY_STEP_ID,
    AnyStep,
    AssessmentResponse,
    AssessmentSession,
    CurrentStepResult,
    GradeResult,
    MasteryUpdate,
    SessionSummary,
    SkillDelta,
    SkipCondition,
    SkipRule,
    StartSessionResult,
    StepKind,
    StepResultSummary,
    SubmitAnswerResult,
)
from intake_engine.domain.errors import (
    InvalidStateError,
    SessionAlreadyCompletedError,
    SessionNotFoundError,
    StepNotFoundError,
)
from intake_engine.domain.protocols import (
    AssessmentResponseRepository,
    AssessmentSessionRepository,
    ProfileExtractionScheduler,
)
from intake_engine.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

INTAKE_SESSION_TYPE = "INTAKE"
DEFAULT_MASTERY_WEIGHT = 0.8


def skip_rule_fires(rule: SkipRule, dependency: GradeResult | None) -> bool:
    """Check a skip rule against the stored grade of the step it depends on.

    SCORE_GT also accepts a numeric ``details.correct_count``, since burst
    steps keep the raw count next to the normalized score.
    """
    if dependency is None:
        return False

    if rule.condition == SkipCondition.CORRECT:
        return dependency.passed is True

    if rule.condition == SkipCondition.SCORE_GT:
        if dependency.score >= rule.value:
            return True
        correct_count = dependency.details.get("correct_count")
        return (
            isinstance(correct_count, int | float)
            and not isinstance(correct_count, bool)
            and correct_count >= rule.value
        )

    return False


class IntakeService:
    """Session state machine for the intake assessment.

    IN_PROGRESS moves to COMPLETED or ABANDONED; both are terminal.
    """

    def __init__(
        self,
        session_repo: AssessmentSessionRepository,
        response_repo: AssessmentResponseRepository,
        mastery_service: MasteryService,
        grader: StepGrader,
        catalog: StepCatalog = DEFAULT_CATALOG,
        on_complete: ProfileExtractionScheduler | None = None,
        session_type: str = INTAKE_SESSION_TYPE,
        default_mastery_weight: float = DEFAULT_MASTERY_WEIGHT,
    ):
        self.session_repo = session_repo
        self.response_repo = response_repo
        self.mastery_service = mastery_service
        self.grader = grader
        self.catalog = catalog
        self.on_complete = on_complete
        self.session_type = session_type
        self.default_mastery_weight = default_mastery_weight

    async def _get_session(self, session_id: UUID) -> AssessmentSession:
        session = await self.session_repo.get_by_id(session_id)
        if not session:
            raise SessionNotFoundError(
                message=f"Session {session_id} not found",
                details={"session_id": str(session_id)},
            )
        return session

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start_session(self, user_id: UUID) -> StartSessionResult:
        """Start an intake session, or resume the user's in-progress one."""
        total_steps = self.catalog.get_total_steps()
        estimated_minutes = self.catalog.get_total_estimated_minutes()

        existing = await self.session_repo.get_in_progress(user_id, self.session_type)
        if existing:
            current = (
                self.catalog.get_step_by_id(existing.current_step)
                if existing.current_step
                else None
            )

            logger.info(
                "Resuming intake session",
                extra={"session_id": str(existing.id), "user_id": str(user_id)},
            )

            return StartSessionResult(
                session_id=existing.id,
                first_step=current or self.catalog.get_first_step(),
                total_steps=total_steps,
                estimated_minutes=estimated_minutes,
                is_resuming=True,
            )

        first_step = self.catalog.get_first_step()
        session = await self.session_repo.create(
            AssessmentSession(
                id=uuid4(),
                user_id=user_id,
                session_type=self.session_type,
                current_step=first_step.id,
            )
        )

        logger.info(
            "Intake session created",
            extra={"session_id": str(session.id), "user_id": str(user_id)},
        )

        return StartSessionResult(
            session_id=session.id,
            first_step=first_step,
            total_steps=total_steps,
            estimated_minutes=estimated_minutes,
            is_resuming=False,
        )

    async def abandon_session(self, session_id: UUID) -> AssessmentSession:
        """Force the session into ABANDONED, whatever its current state."""
        session = await self._get_session(session_id)
        session.abandon()
        updated = await self.session_repo.update(session)

        logger.info("Intake session abandoned", extra={"session_id": str(session_id)})
        return updated

    # =========================================================================
    # Navigation
    # =========================================================================

    async def get_current_step(self, session_id: UUID) -> CurrentStepResult | None:
        """Current step with progress and any answer already stored for it.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = await self._get_session(session_id)

        if session.is_completed():
            summary = self.catalog.get_step_by_id(SUMMARY_STEP_ID)
            if summary is None:
                raise InvalidStateError(
                    message="Step catalog has no summary step",
                    details={"session_id": str(session_id)},
                )
            return CurrentStepResult(step=summary, progress=100, can_go_back=False)

        if not session.current_step:
            return None

        step = self.catalog.get_step_by_id(session.current_step)
        if step is None:
            return None

        stored = await self.response_repo.get(session_id, step.id)

        return CurrentStepResult(
            step=step,
            progress=self.catalog.get_step_progress(step.id),
            can_go_back=self.catalog.index_of(step.id) > 0,
            previous_answer=stored.raw_answer if stored else None,
        )

    async def go_to_previous_step(self, session_id: UUID) -> CurrentStepResult | None:
        """Rewind one step in catalog order. Skip rules are not re-applied.

        Returns None at the first step and for sessions no longer in progress.
        """
        session = await self._get_session(session_id)
        if not session.is_in_progress() or not session.current_step:
            return None

        previous = self.catalog.get_previous_step(session.current_step)
        if previous is None:
            return None

        session.current_step = previous.id
        await self.session_repo.update(session)

        return await self.get_current_step(session_id)

    # =========================================================================
    # Answers
    # =========================================================================

    async def _resolve_next_step(self, session_id: UUID, step_id: str) -> AnyStep | None:
        """Next step after ``step_id``, hopping over it once if its skip rule fires."""
        next_step = self.catalog.get_next_step(step_id)
        if next_step is None or next_step.skip_rules is None:
            return next_step

        rule = next_step.skip_rules
        dependency = await self.response_repo.get(session_id, rule.depends_on_step_id)
        if not skip_rule_fires(rule, dependency.grade_result if dependency else None):
            return next_step

        logger.info(
            "Skipping step",
            extra={
                "session_id": str(session_id),
                "skipped_step_id": next_step.id,
                "depends_on": rule.depends_on_step_id,
            },
        )
        return self.catalog.get_next_step(next_step.id)

    async def submit_answer(
        self, session_id: UUID, step_id: str, answer: Any
    ) -> SubmitAnswerResult:
        """Grade an answer, fold it into mastery and advance the session.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionAlreadyCompletedError: If the session is completed
            StepNotFoundError: If the step is not in the catalog
        """
        session = await self._get_session(session_id)

        if session.is_completed():
            raise SessionAlreadyCompletedError(
                message="Session already completed",
                details={"session_id": str(session_id)},
            )

        step = self.catalog.get_step_by_id(step_id)
        if step is None:
            raise StepNotFoundError(
                message=f"Step not found: {step_id}",
                details={"step_id": step_id},
            )

        grade_result = await self.grader.grade(step, answer)

        weight = (
            grade_result.confidence
            if grade_result.confidence is not None
            else self.default_mastery_weight
        )
        source = f"intake_{step.kind.value.lower()}"
        updates = [
            MasteryUpdate(skill_key=key, score=score, weight=weight, source=source)
            for key, score in grade_result.skill_scores.items()
        ]
        update_results = (
            await self.mastery_service.update_multiple_skill_masteries(session.user_id, updates)
            if updates
            else []
        )

        await self.response_repo.upsert(
            AssessmentResponse(
                session_id=session_id,
                step_id=step_id,
                step_kind=step.kind,
                raw_answer=answer,
                grade_result=grade_result,
                skill_updates=[r.to_dict() for r in update_results],
            )
        )

        next_step = await self._resolve_next_step(session_id, step_id)
        is_complete = (
            self.catalog.is_last_step(step_id)
            or next_step is None
            or next_step.kind == StepKind.SUMMARY
        )

        # Abandoned sessions keep their terminal status even at the end of the flow
        finishes_session = is_complete and session.is_in_progress()
        if finishes_session:
            session.complete()
        elif not is_complete:
            session.current_step = next_step.id
        await self.session_repo.update(session)

        logger.info(
            "Step answer submitted",
            extra={
                "session_id": str(session_id),
                "step_id": step_id,
                "step_kind": step.kind.value,
                "score": grade_result.score,
                "is_complete": is_complete,
            },
        )

        if finishes_session and self.on_complete is not None:
            try:
                self.on_complete(session.user_id, session_id)
            except Exception:
                logger.error(
                    "Failed to schedule profile extraction",
                    extra={"session_id": str(session_id), "user_id": str(session.user_id)},
                    exc_info=True,
                )

        return SubmitAnswerResult(
            grade_result=grade_result,
            skill_updates=[SkillDelta(skill_key=r.skill_key, delta=r.delta) for r in update_results],
            next_step=None if is_complete else next_step,
            is_complete=is_complete,
            progress=self.catalog.get_step_progress(next_step.id) if next_step else 100,
        )

    # =========================================================================
    # Results
    # =========================================================================

    async def get_session_summary(self, session_id: UUID) -> SessionSummary:
        """Per-step grades plus the user's profile summary.

        An unfinished session reports the current time as its completion time.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = await self._get_session(session_id)

        responses = await self.response_repo.list_by_session(session_id)
        profile_summary = await self.mastery_service.get_profile_summary(session.user_id)

        step_results = []
        for response in responses:
            step = self.catalog.get_step_by_id(response.step_id)
            step_results.append(
                StepResultSummary(
                    step_id=response.step_id,
                    step_title=step.title if step else response.step_id,
                    grade_result=response.grade_result,
                )
            )

        return SessionSummary(
            session_id=session_id,
            completed_at=session.completed_at or datetime.now(UTC),
            total_steps=self.catalog.get_total_steps(),
            profile_summary=profile_summary,
            step_results=step_results,
        )

    async def has_completed_intake(self, user_id: UUID) -> bool:
        return await self.session_repo.has_completed(user_id, self.session_type)

    async def get_latest_intake_session(self, user_id: UUID) -> AssessmentSession | None:
        return await self.session_repo.get_latest(user_id, self.session_type)
