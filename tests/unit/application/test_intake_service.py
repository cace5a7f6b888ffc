"""Tests for the intake session state machine."""

import logging
from uuid import uuid4

import pytest

from intake_engine.application.services import IntakeService, StepGrader
from intake_engine.application.services.intake_service import skip_rule_fires
from intake_engine.domain.entities import (
    AssessmentSession,
    GradeResult,
    SessionStatus,
    SkipCondition,
    SkipRule,
)
from intake_engine.domain.errors import (
    SessionAlreadyCompletedError,
    SessionNotFoundError,
    StepNotFoundError,
)

PERFECT_PROBE = {"answers": {"probe_const": "a", "probe_flex": "b", "probe_http": "c"}}


class TestSkipRules:
    """Test skip rule evaluation."""

    def test_correct_condition(self):
        rule = SkipRule(depends_on_step_id="x", condition=SkipCondition.CORRECT)

        assert skip_rule_fires(rule, GradeResult(score=1, passed=True))
        assert not skip_rule_fires(rule, GradeResult(score=1, passed=False))
        assert not skip_rule_fires(rule, None)

    def test_score_condition_uses_correct_count(self):
        rule = SkipRule(depends_on_step_id="x", condition=SkipCondition.SCORE_GT, value=3)

        assert skip_rule_fires(
            rule, GradeResult(score=1, passed=True, details={"correct_count": 3})
        )
        assert not skip_rule_fires(
            rule, GradeResult(score=0.67, passed=True, details={"correct_count": 2})
        )


class TestStartSession:
    """Test starting and resuming sessions."""

    @pytest.mark.asyncio
    async def test_creates_session(self, intake_service, session_repo, user_id):
        result = await intake_service.start_session(user_id)

        assert result.is_resuming is False
        assert result.first_step.id == "level_self_prediction"
        assert result.total_steps == 30
        assert result.estimated_minutes > 0
        stored = session_repo.sessions[result.session_id]
        assert stored.current_step == "level_self_prediction"
        assert stored.status == SessionStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_resume_is_idempotent(self, intake_service, session_repo, user_id):
        first = await intake_service.start_session(user_id)
        await intake_service.submit_answer(first.session_id, "level_self_prediction", {})

        second = await intake_service.start_session(user_id)

        assert second.session_id == first.session_id
        assert second.is_resuming is True
        assert second.first_step.id == "quick_skill_probe"
        assert len(session_repo.sessions) == 1

    @pytest.mark.asyncio
    async def test_new_session_after_completion(self, intake_service, session_repo, user_id):
        first = await intake_service.start_session(user_id)
        await intake_service.submit_answer(first.session_id, "meta_ai_reasoning", {"text": ""})

        second = await intake_service.start_session(user_id)

        assert second.session_id != first.session_id
        assert second.is_resuming is False


class TestSubmitAnswer:
    """Test grading, mastery updates and advancement."""

    @pytest.mark.asyncio
    async def test_advances_and_updates_mastery(self, intake_service, mastery_repo, user_id):
        started = await intake_service.start_session(user_id)

        result = await intake_service.submit_answer(
            started.session_id, "mcq_async", {"selected_option_id": "c"}
        )

        assert result.grade_result.passed is True
        assert result.is_complete is False
        assert result.next_step.id == "mcq_css_layout"
        assert result.progress == 33
        # intermediate MCQ evidence is weighted by its confidence
        assert result.skill_updates[0].skill_key == "js_async"
        assert result.skill_updates[0].delta == pytest.approx(0.5 * 0.3 * 0.75)
        assert (await mastery_repo.get(user_id, "js_async")).attempts == 1

    @pytest.mark.asyncio
    async def test_stores_response(self, intake_service, response_repo, user_id):
        started = await intake_service.start_session(user_id)

        await intake_service.submit_answer(
            started.session_id, "mcq_async", {"selected_option_id": "a"}
        )

        stored = await response_repo.get(started.session_id, "mcq_async")
        assert stored.raw_answer == {"selected_option_id": "a"}
        assert stored.grade_result.passed is False
        assert stored.skill_updates[0]["skill_key"] == "js_async"

    @pytest.mark.asyncio
    async def test_completed_session_is_rejected(self, intake_service, session_repo, user_id):
        """Submitting to a completed session fails and leaves it untouched."""
        session = AssessmentSession(
            id=uuid4(), user_id=user_id, status=SessionStatus.COMPLETED, current_step="summary"
        )
        await session_repo.create(session)

        with pytest.raises(SessionAlreadyCompletedError):
            await intake_service.submit_answer(session.id, "mcq_async", {"selected_option_id": "c"})

        assert session_repo.update_calls == 0
        assert session_repo.sessions[session.id] == session

    @pytest.mark.asyncio
    async def test_unknown_session(self, intake_service):
        with pytest.raises(SessionNotFoundError):
            await intake_service.submit_answer(uuid4(), "mcq_async", {})

    @pytest.mark.asyncio
    async def test_unknown_step(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)

        with pytest.raises(StepNotFoundError):
            await intake_service.submit_answer(started.session_id, "nope", {})

    @pytest.mark.asyncio
    async def test_perfect_probe_skips_one_step(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(started.session_id, "quick_skill_probe", PERFECT_PROBE)

        result = await intake_service.submit_answer(
            started.session_id, "questionnaire_learning_style", {}
        )

        assert result.next_step.id == "mcq_arrays"

    @pytest.mark.asyncio
    async def test_imperfect_probe_does_not_skip(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(
            started.session_id, "quick_skill_probe", {"answers": {"probe_const": "a"}}
        )

        result = await intake_service.submit_answer(
            started.session_id, "questionnaire_learning_style", {}
        )

        assert result.next_step.id == "mcq_variables"

    @pytest.mark.asyncio
    async def test_correct_answer_skips_follow_up(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(
            started.session_id, "mcq_css_layout", {"selected_option_id": "c"}
        )

        result = await intake_service.submit_answer(started.session_id, "mcq_dom", {})

        assert result.next_step.id == "mcq_architecture"

    @pytest.mark.asyncio
    async def test_last_answer_completes_session(
        self, intake_service, session_repo, scheduler, user_id
    ):
        started = await intake_service.start_session(user_id)

        result = await intake_service.submit_answer(
            started.session_id, "meta_ai_reasoning", {"text": ""}
        )

        assert result.is_complete is True
        assert result.next_step is None
        assert result.progress == 100
        session = session_repo.sessions[started.session_id]
        assert session.status == SessionStatus.COMPLETED
        assert session.current_step == "summary"
        assert scheduler.calls == [(user_id, started.session_id)]

    @pytest.mark.asyncio
    async def test_no_scheduler_call_before_completion(self, intake_service, scheduler, user_id):
        started = await intake_service.start_session(user_id)

        await intake_service.submit_answer(started.session_id, "level_self_prediction", {})

        assert scheduler.calls == []

    @pytest.mark.asyncio
    async def test_abandoned_session_accepts_answers(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.abandon_session(started.session_id)

        result = await intake_service.submit_answer(started.session_id, "level_self_prediction", {})

        assert result.next_step.id == "quick_skill_probe"

    @pytest.mark.asyncio
    async def test_abandoned_session_stays_abandoned_at_last_step(
        self, intake_service, session_repo, scheduler, user_id
    ):
        """Answering the last step never moves an abandoned session to COMPLETED."""
        started = await intake_service.start_session(user_id)
        await intake_service.abandon_session(started.session_id)

        result = await intake_service.submit_answer(
            started.session_id, "meta_ai_reasoning", {"text": "x"}
        )

        assert result.is_complete is True
        session = session_repo.sessions[started.session_id]
        assert session.status == SessionStatus.ABANDONED
        assert session.completed_at is None
        assert scheduler.calls == []

    @pytest.mark.asyncio
    async def test_scheduler_failure_does_not_fail_submission(
        self, session_repo, response_repo, mastery_service, user_id, caplog
    ):
        def broken_scheduler(user_id, session_id):
            raise RuntimeError("queue full")

        service = IntakeService(
            session_repo=session_repo,
            response_repo=response_repo,
            mastery_service=mastery_service,
            grader=StepGrader(),
            on_complete=broken_scheduler,
        )
        started = await service.start_session(user_id)

        with caplog.at_level(
            logging.ERROR, logger="intake_engine.application.services.intake_service"
        ):
            result = await service.submit_answer(
                started.session_id, "meta_ai_reasoning", {"text": ""}
            )

        assert result.is_complete is True
        assert session_repo.sessions[started.session_id].status == SessionStatus.COMPLETED
        failures = [
            r for r in caplog.records if r.getMessage() == "Failed to schedule profile extraction"
        ]
        assert len(failures) == 1

    @pytest.mark.asyncio
    async def test_default_weight_without_confidence(
        self, session_repo, response_repo, mastery_service, user_id
    ):
        class NoConfidenceGrader(StepGrader):
            async def grade(self, step, answer):
                return GradeResult(score=1.0, passed=True, skill_scores={"js_dom": 1.0})

        service = IntakeService(
            session_repo=session_repo,
            response_repo=response_repo,
            mastery_service=mastery_service,
            grader=NoConfidenceGrader(),
            default_mastery_weight=0.5,
        )
        started = await service.start_session(user_id)

        result = await service.submit_answer(started.session_id, "mcq_dom", {})

        assert result.skill_updates[0].delta == pytest.approx(0.5 * 0.3 * 0.5)


class TestNavigation:
    """Test current step lookup and going back."""

    @pytest.mark.asyncio
    async def test_current_step_with_previous_answer(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        answer = {"predicted_level": "beginner"}
        await intake_service.submit_answer(started.session_id, "level_self_prediction", answer)

        back = await intake_service.go_to_previous_step(started.session_id)

        assert back.step.id == "level_self_prediction"
        assert back.previous_answer == answer
        assert back.can_go_back is False

    @pytest.mark.asyncio
    async def test_previous_at_first_step(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)

        assert await intake_service.go_to_previous_step(started.session_id) is None

    @pytest.mark.asyncio
    async def test_previous_after_abandon(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(started.session_id, "level_self_prediction", {})
        await intake_service.abandon_session(started.session_id)

        assert await intake_service.go_to_previous_step(started.session_id) is None

    @pytest.mark.asyncio
    async def test_current_step_in_progress(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)

        current = await intake_service.get_current_step(started.session_id)

        assert current.step.id == "level_self_prediction"
        assert current.progress == 3
        assert current.previous_answer is None

    @pytest.mark.asyncio
    async def test_current_step_of_completed_session(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(started.session_id, "meta_ai_reasoning", {"text": ""})

        current = await intake_service.get_current_step(started.session_id)

        assert current.step.id == "summary"
        assert current.progress == 100
        assert current.can_go_back is False

    @pytest.mark.asyncio
    async def test_current_step_unknown_session(self, intake_service):
        with pytest.raises(SessionNotFoundError):
            await intake_service.get_current_step(uuid4())


class TestSessionResults:
    """Test abandon, summary and status queries."""

    @pytest.mark.asyncio
    async def test_abandon(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)

        session = await intake_service.abandon_session(started.session_id)

        assert session.status == SessionStatus.ABANDONED

    @pytest.mark.asyncio
    async def test_summary_lists_responses_in_order(self, intake_service, user_id):
        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(started.session_id, "mcq_async", {"selected_option_id": "c"})
        await intake_service.submit_answer(started.session_id, "mcq_dom", {})

        summary = await intake_service.get_session_summary(started.session_id)

        assert [r.step_id for r in summary.step_results] == ["mcq_async", "mcq_dom"]
        assert summary.step_results[0].step_title == "Async Programming"
        assert summary.total_steps == 30
        assert summary.profile_summary.total_skills_assessed >= 1

    @pytest.mark.asyncio
    async def test_completion_status(self, intake_service, user_id):
        assert await intake_service.has_completed_intake(user_id) is False
        assert await intake_service.get_latest_intake_session(user_id) is None

        started = await intake_service.start_session(user_id)
        await intake_service.submit_answer(started.session_id, "meta_ai_reasoning", {"text": ""})

        assert await intake_service.has_completed_intake(user_id) is True
        latest = await intake_service.get_latest_intake_session(user_id)
        assert latest.id == started.session_id
