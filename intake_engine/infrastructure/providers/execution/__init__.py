"""Remote code execution providers."""

from intake_engine.infrastructure.providers.execution.jdoodle import JDoodleCodeRunner

__all__ = ["JDoodleCodeRunner"]
