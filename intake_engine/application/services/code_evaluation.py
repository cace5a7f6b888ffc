"""Run a code submission against weighted test cases."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from intake_engine.application.catalog.intake_steps import round_half_up
from intake_engine.domain.entities.steps import CodeTestCase
from intake_engine.domain.protocols import CodeExecutionProvider, ExecutionResult


@dataclass
class CaseResult:
    input: str
    expected_output: str
    actual_output: str
    passed: bool
    weight: float = 1.0
    is_hidden: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": self.input,
            "expected_output": self.expected_output,
            "actual_output": self.actual_output,
            "passed": self.passed,
            "error": self.error,
        }


@dataclass
class EvaluationResult:
    """Outcome of a full test run. ``score`` is 0-100."""

    passed: bool
    score: int
    results: list[CaseResult] = field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)


def normalize_output(output: str) -> str:
    text = output.strip().replace("\r\n", "\n")
    return "\n".join(line.rstrip() for line in text.split("\n"))


def validate_output(actual: str, expected: str) -> bool:
    """Compare program output ignoring line endings and trailing whitespace."""
    return normalize_output(actual) == normalize_output(expected)


def _judge(case: CodeTestCase, execution: ExecutionResult) -> CaseResult:
    return CaseResult(
        input=case.input,
        expected_output=case.expected_output,
        actual_output=execution.output,
        passed=execution.error is None and validate_output(execution.output, case.expected_output),
        weight=case.weight,
        is_hidden=case.is_hidden,
        error=execution.error,
    )


async def evaluate_submission(
    runner: CodeExecutionProvider,
    code: str,
    language: str,
    test_cases: Sequence[CodeTestCase],
) -> EvaluationResult:
    """Execute ``code`` once per test case, concurrently.

    Provider errors propagate; the caller decides how a failed run is graded.
    """
    executions = await asyncio.gather(
        *(runner.execute(code, language, stdin=case.input) for case in test_cases)
    )
    results = [_judge(case, execution) for case, execution in zip(test_cases, executions)]

    total_weight = sum(r.weight for r in results)
    passed_weight = sum(r.weight for r in results if r.passed)
    score = round_half_up(passed_weight / total_weight * 100) if total_weight > 0 else 0

    return EvaluationResult(passed=score == 100, score=score, results=results)
