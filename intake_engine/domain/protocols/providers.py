"""Provider protocols - abstract interfaces for external services."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID


@dataclass
class LLMMessage:
    """A message for LLM chat completion."""

    role: str  # 'system', 'user', 'assistant'
    content: str


@dataclass
class LLMResponse:
    """Response from LLM provider."""

    content: str
    model: str
    tokens_in: int
    tokens_out: int
    finish_reason: str | None = None


class LLMProvider(Protocol):
    """Abstract interface for chat completion providers."""

    @property
    def provider_name(self) -> str:
        """Get the provider name for logging."""
        ...

    async def chat(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Generate a chat completion."""
        ...


@dataclass
class RubricScore:
    """A rubric grade on the 0..max_score scale."""

    score: float
    max_score: int
    feedback: str
    identified_points: list[str] = field(default_factory=list)

    @property
    def normalized(self) -> float:
        return self.score / self.max_score if self.max_score else 0.0


@dataclass
class CodeQuality:
    quality_score: float  # 0-3
    feedback: str = ""

    @property
    def bonus(self) -> float:
        return self.quality_score / 3


class RubricGrader(Protocol):
    """Scores free-text answers against a rubric.

    Implementations raise ProviderError subclasses on failure; callers are
    expected to fall back to heuristics.
    """

    async def grade_text(
        self, question: str, answer: str, rubric: str, max_score: int
    ) -> RubricScore:
        """Grade a short written answer."""
        ...

    async def grade_critique(
        self,
        prompt: str,
        design_description: str,
        critique: str,
        rubric: str,
        looking_for: list[str],
        max_score: int = 3,
    ) -> RubricScore:
        """Grade a design critique, reporting which points were found."""
        ...

    async def grade_code_review(
        self,
        prompt: str,
        code: str,
        review: str,
        rubric: str,
        looking_for: list[str],
        max_score: int = 3,
    ) -> RubricScore:
        """Grade a written review of a code snippet."""
        ...

    async def assess_code_quality(self, code: str, problem_description: str) -> CodeQuality:
        """Rate passing code for readability and idiom."""
        ...


@dataclass
class ExecutionResult:
    """Output of running a program once."""

    output: str
    status_code: int | None = None
    cpu_time: str | None = None
    memory: str | None = None
    error: str | None = None


class CodeExecutionProvider(Protocol):
    """Runs submitted code in a remote sandbox."""

    @property
    def provider_name(self) -> str:
        ...

    async def execute(self, code: str, language: str, stdin: str = "") -> ExecutionResult:
        """Run code once with the given stdin."""
        ...


class TaskRunner(Protocol):
    """Fire-and-forget background job submission."""

    def submit(self, name: str, factory: Callable[[], Awaitable[object]]) -> None:
        """Schedule a coroutine; failures are logged, never raised to the caller."""
        ...


class ProfileExtractionScheduler(Protocol):
    """Consumer notified when an intake session completes."""

    def __call__(self, user_id: UUID, session_id: UUID) -> None:
        ...
