"""Step grading - turns a raw answer into a GradeResult.

One grader per step kind. Graders never raise: collaborator failures
(rubric grader, code runner) degrade to a heuristic score or a zero grade so
the session can always advance.
"""

import re
from collections.abc import Awaitable, Callable
from typing import Any

from intake_engine.application.services.code_evaluation import evaluate_submission
from intake_engine.application.services.mastery_service import self_report_to_mastery
from intake_engine.domain.entities import GradeResult
from intake_engine.domain.entities.steps import (
    AnyStep,
    CodeReviewStep,
    CodeStep,
    DesignComparisonStep,
    DesignCritiqueStep,
    McqStep,
    MicroMcqBurstStep,
    QuestionnaireStep,
    ShortTextStep,
    StepKind,
    SummaryStep,
)
from intake_engine.domain.errors import ProviderError
from intake_engine.domain.protocols import CodeExecutionProvider, RubricGrader
from intake_engine.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

Answer = dict[str, Any]

# Evidence weight per grading method
SELF_REPORT_CONFIDENCE = 0.2
HEURISTIC_CONFIDENCE = 0.3
RUBRIC_CONFIDENCE = 0.7
CODE_REVIEW_RUBRIC_CONFIDENCE = 0.4
BURST_CONFIDENCE = 0.8
CODE_CONFIDENCE = 0.9
DESIGN_COMPARISON_CONFIDENCE = 0.7

MCQ_CONFIDENCE_BY_DIFFICULTY = {
    "beginner": 0.6,
    "intermediate": 0.75,
    "advanced": 0.9,
}

QUALITY_BONUS_WEIGHT = 0.1

TECHNICAL_TERMS = re.compile(r"function|callback|async|array|object|variable|loop", re.IGNORECASE)

DESIGN_KEYWORDS = (
    "color", "contrast", "spacing", "alignment", "font", "typography",
    "hierarchy", "layout", "padding", "margin", "readable", "accessibility",
    "inconsistent", "cluttered", "improve",
)

REVIEW_TERMS = (
    "dependency", "array", "loop", "effect", "dom",
    "document", "onclick", "camelcase", "json", "parse",
)

CODE_EVALUATION_FAILED = "Code evaluation failed. Please check your syntax and try again."


def _skill_scores(step: AnyStep, score: float) -> dict[str, float]:
    return {skill_key: score for skill_key in step.skill_keys}


def _word_count(text: str) -> int:
    return len(text.split())


def _text(answer: Answer, key: str) -> str:
    value = answer.get(key)
    return value if isinstance(value, str) else ""


class StepGrader:
    """Dispatches an answer to the grader for its step kind.

    Args:
        rubric_grader: LLM-backed free-text grader, or None to always use
            heuristics
        code_runner: sandbox used for CODE steps, or None when not configured
    """

    def __init__(
        self,
        rubric_grader: RubricGrader | None = None,
        code_runner: CodeExecutionProvider | None = None,
    ):
        self.rubric_grader = rubric_grader
        self.code_runner = code_runner
        self._graders: dict[StepKind, Callable[[Any, Answer], Awaitable[GradeResult]]] = {
            StepKind.QUESTIONNAIRE: self.grade_questionnaire,
            StepKind.MCQ: self.grade_mcq,
            StepKind.MICRO_MCQ_BURST: self.grade_micro_mcq_burst,
            StepKind.SHORT_TEXT: self.grade_short_text,
            StepKind.CODE: self.grade_code,
            StepKind.CODE_REVIEW: self.grade_code_review,
            StepKind.DESIGN_COMPARISON: self.grade_design_comparison,
            StepKind.DESIGN_CRITIQUE: self.grade_design_critique,
            StepKind.SUMMARY: self.grade_summary,
        }

    async def grade(self, step: AnyStep, answer: Answer | None) -> GradeResult:
        """Grade an answer for any step kind; non-object answers grade as empty."""
        if not isinstance(answer, dict):
            answer = {}
        return await self._graders[step.kind](step, answer)

    # =========================================================================
    # Self report and multiple choice
    # =========================================================================

    async def grade_questionnaire(self, step: QuestionnaireStep, answer: Answer) -> GradeResult:
        skill_scores: dict[str, float] = {}

        for questionnaire_field in step.fields:
            mapping = questionnaire_field.skill_mapping
            value = answer.get(questionnaire_field.id)
            if mapping is None or value is None:
                continue

            table = mapping.value_to_confidence
            if table and str(value) in table:
                skill_scores[mapping.skill_key] = self_report_to_mastery(table[str(value)]).mastery
            elif isinstance(value, int | float) and not isinstance(value, bool):
                skill_scores[mapping.skill_key] = self_report_to_mastery(value).mastery

        return GradeResult(
            score=1.0,
            passed=True,
            skill_scores=skill_scores,
            confidence=SELF_REPORT_CONFIDENCE,
            details={"raw_answers": answer},
        )

    async def grade_mcq(self, step: McqStep, answer: Answer) -> GradeResult:
        selected_id = answer.get("selected_option_id")
        selected = next((o for o in step.options if o.id == selected_id), None)

        if selected is None:
            return GradeResult(score=0.0, passed=False, feedback="No answer selected")

        correct = step.correct_option
        score = 1.0 if selected.is_correct else 0.0

        if selected.is_correct:
            feedback = "Correct!"
        else:
            correct_text = correct.text if correct else ""
            feedback = (
                f'Incorrect. The correct answer was: "{correct_text}". {step.explanation or ""}'
            )

        return GradeResult(
            score=score,
            passed=selected.is_correct,
            feedback=feedback,
            skill_scores=_skill_scores(step, score),
            confidence=MCQ_CONFIDENCE_BY_DIFFICULTY[step.difficulty],
            details={
                "selected_option_id": selected.id,
                "correct_option_id": correct.id if correct else None,
                "explanation": step.explanation,
            },
        )

    async def grade_micro_mcq_burst(self, step: MicroMcqBurstStep, answer: Answer) -> GradeResult:
        answers = answer.get("answers")
        if not isinstance(answers, dict):
            answers = {}
        total = len(step.questions)

        question_results = []
        correct_count = 0
        for question in step.questions:
            selected = next(
                (o for o in question.options if o.id == answers.get(question.id)), None
            )
            is_correct = bool(selected and selected.is_correct)
            correct_count += is_correct
            question_results.append(
                {
                    "question_id": question.id,
                    "correct": is_correct,
                    "explanation": question.explanation,
                }
            )

        levels = step.level_mapping
        if correct_count >= levels.advanced:
            detected_level = "advanced"
        elif correct_count >= levels.intermediate:
            detected_level = "intermediate"
        else:
            detected_level = "beginner"

        if total and correct_count == total:
            feedback = (
                f"Excellent! You got all {total} questions correct. "
                "You seem to have a strong foundation."
            )
        elif correct_count >= total - 1 and correct_count > 0:
            feedback = f"Good job! You got {correct_count}/{total} correct. You have a solid understanding."
        elif correct_count > 0:
            feedback = f"You got {correct_count}/{total} correct. Let's build on your existing knowledge."
        else:
            feedback = "No worries! This assessment will help us find the right starting point for you."

        score = correct_count / total if total else 0.0

        return GradeResult(
            score=score,
            passed=True,
            feedback=feedback,
            skill_scores=_skill_scores(step, score),
            confidence=BURST_CONFIDENCE,
            details={
                "correct_count": correct_count,
                "total_questions": total,
                "detected_level": detected_level,
                "question_results": question_results,
            },
        )

    # =========================================================================
    # Free text
    # =========================================================================

    async def grade_short_text(self, step: ShortTextStep, answer: Answer) -> GradeResult:
        text = _text(answer, "text")

        if not text.strip():
            return GradeResult(score=0.0, passed=False, feedback="No answer provided")

        if step.min_length and len(text) < step.min_length:
            return GradeResult(
                score=0.1,
                passed=False,
                feedback=f"Answer is too short. Please provide at least {step.min_length} characters.",
            )

        if self.rubric_grader is not None:
            try:
                rubric = await self.rubric_grader.grade_text(
                    question=step.question,
                    answer=text,
                    rubric=step.rubric,
                    max_score=step.max_score,
                )
            except ProviderError as exc:
                logger.error(
                    "AI grading failed, using fallback",
                    extra={"step_id": step.id, "error_code": exc.code},
                )
            else:
                return GradeResult(
                    score=rubric.normalized,
                    passed=rubric.normalized >= 0.5,
                    feedback=rubric.feedback,
                    skill_scores=_skill_scores(step, rubric.normalized),
                    confidence=RUBRIC_CONFIDENCE,
                    details={"rubric_score": rubric.score, "max_score": step.max_score},
                )

        score = 0.3
        if _word_count(text) >= 20:
            score += 0.3
        if TECHNICAL_TERMS.search(text):
            score += 0.2

        return GradeResult(
            score=score,
            passed=score >= 0.5,
            feedback="Your answer has been recorded. (AI grading unavailable)",
            skill_scores=_skill_scores(step, score),
            confidence=HEURISTIC_CONFIDENCE,
        )

    async def grade_design_critique(self, step: DesignCritiqueStep, answer: Answer) -> GradeResult:
        critique = _text(answer, "critique")

        if not critique.strip():
            return GradeResult(score=0.0, passed=False, feedback="No critique provided")

        if self.rubric_grader is not None:
            try:
                rubric = await self.rubric_grader.grade_critique(
                    prompt=step.prompt,
                    design_description=step.design_description,
                    critique=critique,
                    rubric=step.rubric,
                    looking_for=list(step.looking_for),
                    max_score=step.max_score,
                )
            except ProviderError as exc:
                logger.error(
                    "AI critique grading failed, using fallback",
                    extra={"step_id": step.id, "error_code": exc.code},
                )
            else:
                return GradeResult(
                    score=rubric.normalized,
                    passed=rubric.normalized >= 0.5,
                    feedback=rubric.feedback,
                    skill_scores=_skill_scores(step, rubric.normalized),
                    confidence=RUBRIC_CONFIDENCE,
                    details={
                        "rubric_score": rubric.score,
                        "identified_points": rubric.identified_points,
                    },
                )

        lowered = critique.lower()
        matched = [k for k in DESIGN_KEYWORDS if k in lowered]

        score = 0.2
        if _word_count(critique) >= 30:
            score += 0.2
        if len(matched) >= 2:
            score += 0.2
        if len(matched) >= 4:
            score += 0.2

        return GradeResult(
            score=score,
            passed=score >= 0.5,
            feedback="Your critique has been recorded. (AI grading unavailable)",
            skill_scores=_skill_scores(step, score),
            confidence=HEURISTIC_CONFIDENCE,
        )

    async def grade_code_review(self, step: CodeReviewStep, answer: Answer) -> GradeResult:
        review = _text(answer, "critique")

        if not review.strip():
            return GradeResult(score=0.0, passed=False, feedback="No review provided")

        if self.rubric_grader is not None:
            try:
                rubric = await self.rubric_grader.grade_code_review(
                    prompt=step.prompt,
                    code=step.code,
                    review=review,
                    rubric=step.rubric,
                    looking_for=list(step.looking_for),
                    max_score=step.max_score,
                )
            except ProviderError as exc:
                logger.warning(
                    "AI code review grading failed, using fallback",
                    extra={"step_id": step.id, "error_code": exc.code},
                )
            else:
                return GradeResult(
                    score=rubric.normalized,
                    passed=rubric.normalized >= 0.5,
                    feedback=rubric.feedback,
                    skill_scores=_skill_scores(step, rubric.normalized),
                    confidence=CODE_REVIEW_RUBRIC_CONFIDENCE,
                    details={
                        "rubric_score": rubric.score,
                        "identified_points": rubric.identified_points,
                    },
                )

        lowered = review.lower()
        matched = [t for t in REVIEW_TERMS if t in lowered]

        score = 0.2
        if len(review) > 50:
            score += 0.2
        for threshold in (1, 3, 5):
            if len(matched) >= threshold:
                score += 0.2
        score = min(1.0, score)
        passed = score >= 0.6

        return GradeResult(
            score=score,
            passed=passed,
            feedback="Good catch on those issues!" if passed else "You missed some critical bugs.",
            skill_scores=_skill_scores(step, score),
            confidence=HEURISTIC_CONFIDENCE,
            details={"matched_terms": matched},
        )

    # =========================================================================
    # Code and design
    # =========================================================================

    async def grade_code(self, step: CodeStep, answer: Answer) -> GradeResult:
        code = _text(answer, "code")

        if not code.strip():
            return GradeResult(score=0.0, passed=False, feedback="No code submitted")

        if self.code_runner is None:
            logger.error("Code evaluation failed", extra={"step_id": step.id, "reason": "no runner"})
            return GradeResult(score=0.0, passed=False, feedback=CODE_EVALUATION_FAILED)

        try:
            evaluation = await evaluate_submission(
                self.code_runner, code, step.language, step.test_cases
            )
        except ProviderError as exc:
            logger.error(
                "Code evaluation failed",
                extra={"step_id": step.id, "error_code": exc.code},
            )
            return GradeResult(score=0.0, passed=False, feedback=CODE_EVALUATION_FAILED)

        base_score = evaluation.score / 100
        quality_bonus = 0.0
        quality_feedback = ""

        if evaluation.passed and self.rubric_grader is not None:
            try:
                quality = await self.rubric_grader.assess_code_quality(
                    code=code, problem_description=step.problem_description
                )
                quality_bonus = quality.bonus
                quality_feedback = quality.feedback
            except ProviderError as exc:
                logger.warning(
                    "Code quality assessment failed",
                    extra={"step_id": step.id, "error_code": exc.code},
                )

        final_score = min(1.0, base_score + quality_bonus * QUALITY_BONUS_WEIGHT)
        total = len(evaluation.results)

        if evaluation.passed:
            feedback = f"All {total} tests passed! {quality_feedback}".strip()
        else:
            feedback = (
                f"{evaluation.passed_count}/{total} tests passed. "
                "Check your logic and try again."
            )

        return GradeResult(
            score=final_score,
            passed=evaluation.passed,
            feedback=feedback,
            skill_scores=_skill_scores(step, final_score),
            confidence=CODE_CONFIDENCE,
            details={
                "test_results": [r.to_dict() for r in evaluation.results if not r.is_hidden],
                "passed_count": evaluation.passed_count,
                "total_count": total,
                "quality_bonus": quality_bonus,
            },
        )

    async def grade_design_comparison(
        self, step: DesignComparisonStep, answer: Answer
    ) -> GradeResult:
        selected = answer.get("selected_option")
        is_correct = selected == step.correct_option
        score = 1.0 if is_correct else 0.0
        prefix = "Correct!" if is_correct else "Not quite."

        return GradeResult(
            score=score,
            passed=is_correct,
            feedback=f"{prefix} {step.explanation}".strip(),
            skill_scores=_skill_scores(step, score),
            confidence=DESIGN_COMPARISON_CONFIDENCE,
            details={"selected_option": selected, "correct_option": step.correct_option},
        )

    async def grade_summary(self, step: SummaryStep, answer: Answer) -> GradeResult:
        return GradeResult(score=1.0, passed=True)
