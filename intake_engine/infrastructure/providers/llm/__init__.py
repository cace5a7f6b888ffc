"""LLM providers and the rubric grader built on them."""

from intake_engine.infrastructure.providers.llm.groq import GroqProvider
from intake_engine.infrastructure.providers.llm.rubric_grader import LLMRubricGrader

__all__ = ["GroqProvider", "LLMRubricGrader"]
