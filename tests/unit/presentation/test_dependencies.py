"""Tests for dependency wiring that is not replaced in router tests."""

from uuid import uuid4

import pytest
from fastapi import BackgroundTasks

from intake_engine.infrastructure.telemetry import clear_request_context, session_id_var
from intake_engine.presentation.http.dependencies import (
    bind_session_id,
    get_profile_extraction_scheduler,
)
from tests.fakes import ImmediateTaskRunner


class TestBindSessionId:
    @pytest.mark.asyncio
    async def test_binds_logging_context(self):
        session_id = uuid4()
        try:
            assert await bind_session_id(session_id) == session_id
            assert session_id_var.get() == str(session_id)
        finally:
            clear_request_context()


class TestProfileExtractionScheduler:
    """Extraction is handed to the runner only once the response is sent."""

    @pytest.mark.asyncio
    async def test_submits_after_response(self):
        background = BackgroundTasks()
        runner = ImmediateTaskRunner()
        schedule = get_profile_extraction_scheduler(background, runner)
        session_id = uuid4()

        schedule(uuid4(), session_id)
        assert runner.submitted == []

        await background()

        assert [name for name, _ in runner.submitted] == [f"profile-extraction-{session_id}"]
