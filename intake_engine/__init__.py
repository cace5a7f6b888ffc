"""Adaptive intake assessment and skill mastery engine."""

__version__ = "0.1.0"
