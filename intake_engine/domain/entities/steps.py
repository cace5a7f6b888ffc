"""Step definitions for the intake assessment.

Every step is an immutable dataclass with a closed ``kind`` discriminant.
Kind-specific payloads live on the subclasses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class StepKind(str, Enum):
    """Closed set of step kinds."""

    QUESTIONNAIRE = "QUESTIONNAIRE"
    MCQ = "MCQ"
    MICRO_MCQ_BURST = "MICRO_MCQ_BURST"
    SHORT_TEXT = "SHORT_TEXT"
    CODE = "CODE"
    DESIGN_COMPARISON = "DESIGN_COMPARISON"
    DESIGN_CRITIQUE = "DESIGN_CRITIQUE"
    CODE_REVIEW = "CODE_REVIEW"
    SUMMARY = "SUMMARY"


class SkipCondition(str, Enum):
    CORRECT = "CORRECT"
    SCORE_GT = "SCORE_GT"


Difficulty = Literal["beginner", "intermediate", "advanced"]
FieldType = Literal["text", "select", "slider", "multiselect", "url"]


@dataclass(frozen=True)
class SkipRule:
    """Bypass a step when an earlier step's grade satisfies a condition."""

    depends_on_step_id: str
    condition: SkipCondition
    value: float | None = None

    def __post_init__(self) -> None:
        if self.condition is SkipCondition.SCORE_GT and self.value is None:
            raise ValueError("SCORE_GT skip rules require a value")


@dataclass(frozen=True)
class StepConfig:
    """Fields shared by every step kind."""

    id: str
    title: str
    description: str
    order: int
    estimated_minutes: float
    skill_keys: tuple[str, ...] = ()
    skip_rules: SkipRule | None = None

    kind: StepKind = field(init=False, default=StepKind.SUMMARY)


# --- Questionnaire ---


@dataclass(frozen=True)
class SkillMapping:
    """Routes a questionnaire value into a self-reported skill level (1-5)."""

    skill_key: str
    value_to_confidence: dict[str, int] | None = None


@dataclass(frozen=True)
class FieldOption:
    value: str
    label: str


@dataclass(frozen=True)
class QuestionnaireField:
    id: str
    type: FieldType
    label: str
    required: bool = False
    description: str | None = None
    options: tuple[FieldOption, ...] = ()
    min: int | None = None
    max: int | None = None
    placeholder: str | None = None
    skill_mapping: SkillMapping | None = None


@dataclass(frozen=True)
class QuestionnaireStep(StepConfig):
    fields: tuple[QuestionnaireField, ...] = ()

    kind: StepKind = field(init=False, default=StepKind.QUESTIONNAIRE)


# --- Multiple choice ---


@dataclass(frozen=True)
class McqOption:
    id: str
    text: str
    is_correct: bool = False


@dataclass(frozen=True)
class McqStep(StepConfig):
    question: str = ""
    options: tuple[McqOption, ...] = ()
    difficulty: Difficulty = "beginner"
    explanation: str | None = None

    kind: StepKind = field(init=False, default=StepKind.MCQ)

    @property
    def correct_option(self) -> McqOption | None:
        return next((o for o in self.options if o.is_correct), None)


@dataclass(frozen=True)
class MicroMcqQuestion:
    id: str
    question: str
    options: tuple[McqOption, ...]
    explanation: str | None = None


@dataclass(frozen=True)
class LevelMapping:
    """Minimum correct answers needed for each detected level."""

    beginner: int
    intermediate: int
    advanced: int


@dataclass(frozen=True)
class MicroMcqBurstStep(StepConfig):
    instructions: str = ""
    questions: tuple[MicroMcqQuestion, ...] = ()
    level_mapping: LevelMapping = LevelMapping(beginner=1, intermediate=2, advanced=3)

    kind: StepKind = field(init=False, default=StepKind.MICRO_MCQ_BURST)


# --- Free text ---


@dataclass(frozen=True)
class ShortTextStep(StepConfig):
    question: str = ""
    rubric: str = ""
    max_score: int = 3
    min_length: int | None = None
    max_length: int | None = None
    placeholder: str | None = None

    kind: StepKind = field(init=False, default=StepKind.SHORT_TEXT)


# --- Code ---


@dataclass(frozen=True)
class CodeTestCase:
    input: str
    expected_output: str
    is_hidden: bool = False
    weight: float = 1.0


@dataclass(frozen=True)
class CodeStep(StepConfig):
    problem_description: str = ""
    starter_code: str = ""
    language: str = "javascript"
    test_cases: tuple[CodeTestCase, ...] = ()
    hints: tuple[str, ...] = ()

    kind: StepKind = field(init=False, default=StepKind.CODE)


@dataclass(frozen=True)
class CodeReviewStep(StepConfig):
    prompt: str = ""
    code: str = ""
    language: str = "javascript"
    rubric: str = ""
    max_score: int = 3
    looking_for: tuple[str, ...] = ()

    kind: StepKind = field(init=False, default=StepKind.CODE_REVIEW)


# --- Design ---


@dataclass(frozen=True)
class DesignOption:
    description: str
    image_url: str | None = None
    inline_html: str | None = None


@dataclass(frozen=True)
class DesignComparisonStep(StepConfig):
    prompt: str = ""
    option_a: DesignOption = DesignOption(description="")
    option_b: DesignOption = DesignOption(description="")
    correct_option: Literal["A", "B"] = "A"
    explanation: str = ""

    kind: StepKind = field(init=False, default=StepKind.DESIGN_COMPARISON)


@dataclass(frozen=True)
class DesignCritiqueStep(StepConfig):
    prompt: str = ""
    design_description: str = ""
    rubric: str = ""
    max_score: int = 3
    looking_for: tuple[str, ...] = ()
    image_url: str | None = None
    inline_html: str | None = None

    kind: StepKind = field(init=False, default=StepKind.DESIGN_CRITIQUE)


# --- Summary ---


@dataclass(frozen=True)
class SummaryStep(StepConfig):
    show_roadmap_generation: bool = False

    kind: StepKind = field(init=False, default=StepKind.SUMMARY)


AnyStep = (
    QuestionnaireStep
    | McqStep
    | MicroMcqBurstStep
    | ShortTextStep
    | CodeStep
    | CodeReviewStep
    | DesignComparisonStep
    | DesignCritiqueStep
    | SummaryStep
)
