"""LLM-backed rubric grading for free-text answers.

Each call asks the model for a small JSON object and validates it with
pydantic. Anything that cannot be parsed raises
ProviderMalformedResponseError so the step grader can fall back to its
heuristics.
"""

import re
from typing import TypeVar

from pydantic import BaseModel, Field, ValidationError

from intake_engine.domain.errors import ProviderMalformedResponseError
from intake_engine.domain.protocols.providers import (
    CodeQuality,
    LLMMessage,
    LLMProvider,
    RubricGrader,
    RubricScore,
)

T = TypeVar("T", bound=BaseModel)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

GRADER_TEMPERATURE = 0.3


# =============================================================================
# Response payloads
# =============================================================================


class _TextGradePayload(BaseModel):
    score: float
    feedback: str | None = None


class _CritiquePayload(BaseModel):
    score: float = 0
    feedback: str | None = None
    identified_points: list[str] = Field(default_factory=list, alias="identifiedPoints")


class _QualityPayload(BaseModel):
    quality_score: float = Field(default=0, alias="qualityScore")
    feedback: str | None = None


def _clamp(value: float, upper: float) -> float:
    return min(upper, max(0.0, value))


def _bullets(points: list[str]) -> str:
    return "\n".join(f"- {p}" for p in points)


class LLMRubricGrader:
    """RubricGrader built on any chat completion provider."""

    def __init__(self, llm: LLMProvider, temperature: float = GRADER_TEMPERATURE):
        self.llm = llm
        self.temperature = temperature

    async def _ask(
        self,
        operation: str,
        system: str,
        user: str,
        max_tokens: int,
        payload_type: type[T],
    ) -> T:
        response = await self.llm.chat(
            [
                LLMMessage(role="system", content=system),
                LLMMessage(role="user", content=user),
            ],
            temperature=self.temperature,
            max_tokens=max_tokens,
        )

        match = _JSON_OBJECT.search(response.content)
        if not match:
            raise ProviderMalformedResponseError(
                message="Grader response contained no JSON object",
                details={"content": response.content[:200]},
                provider=self.llm.provider_name,
                operation=operation,
            )

        try:
            return payload_type.model_validate_json(match.group(0))
        except ValidationError as e:
            raise ProviderMalformedResponseError(
                message="Grader response did not match the expected shape",
                details={"errors": e.errors(include_url=False)},
                provider=self.llm.provider_name,
                operation=operation,
            ) from e

    async def grade_text(
        self, question: str, answer: str, rubric: str, max_score: int
    ) -> RubricScore:
        system = (
            "You are an expert grader for a coding assessment. Grade the student's "
            "answer according to the rubric provided.\n\n"
            "Respond in JSON format ONLY with this structure:\n"
            "{\n"
            f'  "score": <number between 0 and {max_score}>,\n'
            '  "feedback": "<brief constructive feedback, 1-2 sentences>"\n'
            "}"
        )
        user = (
            f"Question: {question}\n\n"
            f"Student's Answer: {answer}\n\n"
            f"Rubric:\n{rubric}\n\n"
            "Grade this answer and provide brief feedback."
        )

        payload = await self._ask("grade_text", system, user, 300, _TextGradePayload)
        return RubricScore(
            score=_clamp(payload.score, max_score),
            max_score=max_score,
            feedback=payload.feedback or "No feedback provided",
        )

    async def grade_critique(
        self,
        prompt: str,
        design_description: str,
        critique: str,
        rubric: str,
        looking_for: list[str],
        max_score: int = 3,
    ) -> RubricScore:
        system = (
            "You are grading a design critique. The student is evaluating a UI design "
            "and suggesting improvements.\n\n"
            f"Key points we're looking for:\n{_bullets(looking_for)}\n\n"
            f"Rubric:\n{rubric}\n\n"
            "Respond in JSON format ONLY:\n"
            "{\n"
            f'  "score": <number 0-{max_score}>,\n'
            '  "identifiedPoints": [<list of key points the student correctly identified>],\n'
            '  "feedback": "<brief constructive feedback>"\n'
            "}"
        )
        user = (
            f"Prompt given to student: {prompt}\n\n"
            f"Design being critiqued: {design_description}\n\n"
            f"Student's critique:\n{critique}\n\n"
            "Grade this design critique."
        )

        payload = await self._ask("grade_critique", system, user, 400, _CritiquePayload)
        return RubricScore(
            score=_clamp(payload.score, max_score),
            max_score=max_score,
            feedback=payload.feedback or "",
            identified_points=payload.identified_points,
        )

    async def grade_code_review(
        self,
        prompt: str,
        code: str,
        review: str,
        rubric: str,
        looking_for: list[str],
        max_score: int = 3,
    ) -> RubricScore:
        system = (
            "You are grading a code review. The student read a code snippet and "
            "described the bugs and problems they found.\n\n"
            f"Issues we're looking for:\n{_bullets(looking_for)}\n\n"
            f"Rubric:\n{rubric}\n\n"
            "Respond in JSON format ONLY:\n"
            "{\n"
            f'  "score": <number 0-{max_score}>,\n'
            '  "identifiedPoints": [<list of issues the student correctly identified>],\n'
            '  "feedback": "<brief constructive feedback>"\n'
            "}"
        )
        user = (
            f"Prompt given to student: {prompt}\n\n"
            f"Code under review:\n```\n{code}\n```\n\n"
            f"Student's review:\n{review}\n\n"
            "Grade this code review."
        )

        payload = await self._ask("grade_code_review", system, user, 400, _CritiquePayload)
        return RubricScore(
            score=_clamp(payload.score, max_score),
            max_score=max_score,
            feedback=payload.feedback or "",
            identified_points=payload.identified_points,
        )

    async def assess_code_quality(self, code: str, problem_description: str) -> CodeQuality:
        system = (
            "You are a code reviewer. Evaluate the code quality on these criteria:\n"
            "- Clarity and readability\n"
            "- Appropriate naming\n"
            "- Efficient approach (not over-engineered, not overly complex)\n"
            "- Idiomatic JavaScript usage\n\n"
            "Respond in JSON format ONLY:\n"
            "{\n"
            '  "qualityScore": <number 0-3, where 3 is excellent>,\n'
            '  "feedback": "<brief positive note about code quality, max 1 sentence>"\n'
            "}"
        )
        user = (
            f"Problem: {problem_description}\n\n"
            f"Code:\n```javascript\n{code}\n```\n\n"
            "Evaluate the code quality."
        )

        payload = await self._ask("assess_code_quality", system, user, 200, _QualityPayload)
        return CodeQuality(
            quality_score=_clamp(payload.quality_score, 3),
            feedback=payload.feedback or "",
        )


# Protocol compliance
_: type[RubricGrader] = LLMRubricGrader  # type: ignore
