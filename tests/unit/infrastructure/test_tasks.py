"""Tests for the background task runner."""

import asyncio
import logging

import pytest

from intake_engine.infrastructure.tasks import BackgroundTaskRunner


class TestBackgroundTaskRunner:
    """Test submission, draining and failure logging."""

    @pytest.mark.asyncio
    async def test_submit_and_drain(self):
        runner = BackgroundTaskRunner()
        done = []

        async def job():
            await asyncio.sleep(0)
            done.append("job")

        runner.submit("job", job)
        assert runner.pending == 1

        await runner.drain()

        assert done == ["job"]
        assert runner.pending == 0

    @pytest.mark.asyncio
    async def test_drain_without_tasks(self):
        await BackgroundTaskRunner().drain()

    @pytest.mark.asyncio
    async def test_failures_are_logged_not_raised(self, caplog):
        runner = BackgroundTaskRunner()

        async def boom():
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR, logger="intake_engine.infrastructure.tasks"):
            runner.submit("profile-extraction-1", boom)
            await runner.drain()
            await asyncio.sleep(0)

        failures = [r for r in caplog.records if r.getMessage() == "Background task failed"]
        assert len(failures) == 1
        assert failures[0].task_name == "profile-extraction-1"
        assert failures[0].error == "boom"
        assert runner.pending == 0
