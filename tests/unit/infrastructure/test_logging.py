"""Tests for structured logging."""

import json
import logging

import pytest

from intake_engine.infrastructure.telemetry import (
    StructuredFormatter,
    TextFormatter,
    clear_request_context,
    get_logger,
    set_request_context,
)


def _record(**extra) -> logging.LogRecord:
    return logging.getLogger("intake_engine.test").makeRecord(
        "intake_engine.test",
        logging.INFO,
        "test.py",
        1,
        "Graded %s",
        ("mcq_async",),
        None,
        extra=extra,
    )


@pytest.fixture(autouse=True)
def _reset_context():
    clear_request_context()
    yield
    clear_request_context()


class TestStructuredFormatter:
    """Test JSON output."""

    def test_includes_extra_fields(self):
        output = json.loads(StructuredFormatter(service_name="intake-engine").format(
            _record(skill_key="js_async", score=0.5)
        ))

        assert output["message"] == "Graded mcq_async"
        assert output["level"] == "info"
        assert output["service"] == "intake-engine"
        assert output["skill_key"] == "js_async"
        assert output["score"] == 0.5

    def test_injects_request_context(self):
        set_request_context(request_id="req-123", session_id="sess-1")

        output = json.loads(StructuredFormatter().format(_record()))

        assert output["request_id"] == "req-123"
        assert output["session_id"] == "sess-1"
        assert "user_id" not in output

    def test_context_cleared(self):
        set_request_context(request_id="req-123")
        clear_request_context()

        output = json.loads(StructuredFormatter().format(_record()))

        assert "request_id" not in output


class TestTextFormatter:
    """Test human-readable output."""

    def test_format(self):
        set_request_context(request_id="abcdef123456")

        line = TextFormatter().format(_record(step_id="mcq_async"))

        assert "| INFO     |" in line
        assert "[req=abcdef12]" in line
        assert line.endswith("| step_id=mcq_async")


class TestContextLogger:
    """Test bound logger fields."""

    def test_bound_fields_merge_with_extra(self):
        logger = get_logger("intake_engine.test", component="grader")

        _, kwargs = logger.process("msg", {"extra": {"step_id": "x"}})

        assert kwargs["extra"] == {"component": "grader", "step_id": "x"}
