"""Tests for the static step catalog and skill taxonomy."""

import pytest

from intake_engine.application.catalog import DEFAULT_CATALOG, SKILL_TAGS, StepCatalog
from intake_engine.application.catalog.intake_steps import round_half_up
from intake_engine.application.catalog.skill_taxonomy import (
    get_all_skill_keys,
    get_dimension_by_key,
    get_skill_by_key,
    get_skills_by_dimension,
    map_tags_to_skill_keys,
    require_dimension,
    require_skill,
)
from intake_engine.domain.entities import StepKind
from intake_engine.domain.entities.steps import SummaryStep
from intake_engine.domain.errors import DimensionNotFoundError, SkillNotFoundError


def _summary(step_id: str, order: int) -> SummaryStep:
    return SummaryStep(id=step_id, title=step_id, description="", order=order, estimated_minutes=1)


class TestStepCatalog:
    """Test navigation over the default intake catalog."""

    def test_steps_are_in_order(self):
        orders = [step.order for step in DEFAULT_CATALOG.get_ordered_steps()]
        assert orders == sorted(orders)
        assert len(set(orders)) == len(orders)

    def test_first_and_last_steps(self):
        steps = DEFAULT_CATALOG.get_ordered_steps()

        assert DEFAULT_CATALOG.get_first_step().id == "level_self_prediction"
        assert steps[-1].id == "summary"
        assert steps[-1].kind == StepKind.SUMMARY
        assert DEFAULT_CATALOG.is_last_step("summary")

    def test_total_steps(self):
        assert DEFAULT_CATALOG.get_total_steps() == 30

    def test_next_and_previous(self):
        assert DEFAULT_CATALOG.get_next_step("quick_skill_probe").id == "questionnaire_background"
        assert DEFAULT_CATALOG.get_previous_step("quick_skill_probe").id == "level_self_prediction"
        assert DEFAULT_CATALOG.get_previous_step("level_self_prediction") is None
        assert DEFAULT_CATALOG.get_next_step("summary") is None

    def test_unknown_step_lookups(self):
        assert DEFAULT_CATALOG.get_step_by_id("nope") is None
        assert DEFAULT_CATALOG.get_next_step("nope") is None
        assert DEFAULT_CATALOG.get_step_progress("nope") == 0
        assert DEFAULT_CATALOG.index_of("nope") == -1

    def test_progress(self):
        assert DEFAULT_CATALOG.get_step_progress("level_self_prediction") == 3
        assert DEFAULT_CATALOG.get_step_progress("summary") == 100

    def test_steps_by_kind(self):
        code_steps = DEFAULT_CATALOG.get_steps_by_kind(StepKind.CODE)
        assert [s.id for s in code_steps] == [
            "code_unique_sorted",
            "code_count_words",
            "code_reverse_words",
        ]

    def test_step_skill_keys_exist_in_taxonomy(self):
        known = {tag.key for tag in SKILL_TAGS}
        for step in DEFAULT_CATALOG.get_ordered_steps():
            assert set(step.skill_keys) <= known, step.id

    def test_custom_catalog_sorts_by_order(self):
        catalog = StepCatalog([_summary("b", 2), _summary("a", 1)])
        assert [s.id for s in catalog.get_ordered_steps()] == ["a", "b"]

    def test_rejects_duplicate_ids(self):
        with pytest.raises(ValueError, match="unique"):
            StepCatalog([_summary("a", 1), _summary("a", 2)])

    def test_rejects_empty_catalog(self):
        with pytest.raises(ValueError):
            StepCatalog([])


class TestRoundHalfUp:
    """Test progress rounding."""

    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2


class TestSkillTaxonomy:
    """Test taxonomy lookups."""

    def test_dimension_skills(self):
        keys = [tag.key for tag in get_skills_by_dimension("programming_fundamentals")]

        assert len(keys) == 8
        assert keys[0] == "prog_variables"

    def test_skill_keys_are_unique(self):
        keys = [tag.key for tag in SKILL_TAGS]
        assert len(keys) == len(set(keys))

    def test_require_unknown_skill(self):
        with pytest.raises(SkillNotFoundError):
            require_skill("basket_weaving")

    def test_require_unknown_dimension(self):
        with pytest.raises(DimensionNotFoundError):
            require_dimension("cooking")

    def test_map_tags_to_skill_keys(self):
        keys = map_tags_to_skill_keys(["Arrays", "js_async", "promises", "unknown"])
        assert keys == ["prog_arrays", "js_array_methods", "js_async"]

    def test_optional_lookups(self):
        assert get_skill_by_key("js_async").dimension == "javascript"
        assert get_skill_by_key("basket_weaving") is None
        assert get_dimension_by_key("programming_fundamentals").order == 1
        assert get_dimension_by_key("cooking") is None
        assert get_all_skill_keys() == frozenset(tag.key for tag in SKILL_TAGS)
