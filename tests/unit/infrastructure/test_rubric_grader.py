"""Tests for the LLM rubric grader."""

import pytest

from intake_engine.domain.errors import ProviderMalformedResponseError
from intake_engine.infrastructure.providers.llm import LLMRubricGrader
from tests.fakes import UNAVAILABLE, FakeLLMProvider


class TestLLMRubricGrader:
    """Test prompt dispatch and response parsing."""

    @pytest.mark.asyncio
    async def test_grade_text_parses_fenced_json(self):
        llm = FakeLLMProvider('```json\n{"score": 2, "feedback": "Clear"}\n```')

        result = await LLMRubricGrader(llm).grade_text("Q?", "A.", "rubric", max_score=3)

        assert result.score == 2
        assert result.normalized == pytest.approx(2 / 3)
        assert result.feedback == "Clear"
        request = llm.requests[0]
        assert request["temperature"] == 0.3
        assert request["max_tokens"] == 300
        assert request["messages"][0].role == "system"
        assert "Q?" in request["messages"][1].content

    @pytest.mark.asyncio
    async def test_score_is_clamped(self):
        llm = FakeLLMProvider('{"score": 7}')

        result = await LLMRubricGrader(llm).grade_text("Q?", "A.", "rubric", max_score=3)

        assert result.score == 3
        assert result.feedback == "No feedback provided"

    @pytest.mark.asyncio
    async def test_no_json(self):
        grader = LLMRubricGrader(FakeLLMProvider("I cannot grade this."))

        with pytest.raises(ProviderMalformedResponseError) as exc_info:
            await grader.grade_text("Q?", "A.", "rubric", max_score=3)

        assert exc_info.value.provider == "fake-llm"
        assert exc_info.value.operation == "grade_text"

    @pytest.mark.asyncio
    async def test_wrong_shape(self):
        grader = LLMRubricGrader(FakeLLMProvider('{"feedback": "no score"}'))

        with pytest.raises(ProviderMalformedResponseError):
            await grader.grade_text("Q?", "A.", "rubric", max_score=3)

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self):
        grader = LLMRubricGrader(FakeLLMProvider(error=UNAVAILABLE))

        with pytest.raises(type(UNAVAILABLE)):
            await grader.grade_text("Q?", "A.", "rubric", max_score=3)

    @pytest.mark.asyncio
    async def test_grade_critique(self):
        llm = FakeLLMProvider(
            '{"score": 2, "identifiedPoints": ["contrast", "spacing"], "feedback": "Good eye"}'
        )

        result = await LLMRubricGrader(llm).grade_critique(
            prompt="Critique this",
            design_description="A busy page",
            critique="Low contrast",
            rubric="rubric",
            looking_for=["contrast", "spacing"],
        )

        assert result.identified_points == ["contrast", "spacing"]
        assert result.max_score == 3
        assert "- contrast" in llm.requests[0]["messages"][0].content
        assert llm.requests[0]["max_tokens"] == 400

    @pytest.mark.asyncio
    async def test_grade_code_review(self):
        llm = FakeLLMProvider('{"score": 1, "identifiedPoints": []}')

        result = await LLMRubricGrader(llm).grade_code_review(
            prompt="Review",
            code="for (;;) {}",
            review="Infinite loop",
            rubric="rubric",
            looking_for=["loop"],
        )

        assert result.score == 1
        assert result.feedback == ""
        assert "for (;;) {}" in llm.requests[0]["messages"][1].content

    @pytest.mark.asyncio
    async def test_assess_code_quality(self):
        llm = FakeLLMProvider('{"qualityScore": 4.5, "feedback": "Tidy"}')

        quality = await LLMRubricGrader(llm).assess_code_quality("code", "problem")

        assert quality.quality_score == 3
        assert quality.bonus == 1.0
        assert quality.feedback == "Tidy"
        assert llm.requests[0]["max_tokens"] == 200
