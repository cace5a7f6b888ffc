"""Static catalogs: skill taxonomy, intake steps and project templates."""

from intake_engine.application.catalog.intake_steps import (
    DEFAULT_CATALOG,
    INTAKE_STEPS,
    StepCatalog,
)
from intake_engine.application.catalog.project_templates import PROJECT_TEMPLATES
from intake_engine.application.catalog.skill_taxonomy import DIMENSIONS, SKILL_TAGS

__all__ = [
    "DEFAULT_CATALOG",
    "INTAKE_STEPS",
    "StepCatalog",
    "PROJECT_TEMPLATES",
    "DIMENSIONS",
    "SKILL_TAGS",
]
