"""In-process background task runner.

Tasks are tracked so they are not garbage collected mid-flight and so
shutdown can wait for them.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable

from intake_engine.domain.protocols.providers import TaskRunner
from intake_engine.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)


class BackgroundTaskRunner:
    """Fire-and-forget asyncio tasks with failure logging."""

    def __init__(self) -> None:
        self._in_flight: set[asyncio.Task[object]] = set()

    @property
    def pending(self) -> int:
        return len(self._in_flight)

    def submit(self, name: str, factory: Callable[[], Awaitable[object]]) -> None:
        async def _run() -> object:
            return await factory()

        task: asyncio.Task[object] = asyncio.create_task(_run(), name=name)
        self._in_flight.add(task)

        def _done(t: asyncio.Task[object]) -> None:
            self._in_flight.discard(t)
            with contextlib.suppress(asyncio.CancelledError):
                exc = t.exception()
                if exc is not None:
                    logger.error(
                        "Background task failed",
                        extra={"task_name": t.get_name(), "error": str(exc)},
                        exc_info=exc,
                    )

        task.add_done_callback(_done)

    async def drain(self) -> None:
        """Await every task still in flight."""
        if not self._in_flight:
            return

        pending = list(self._in_flight)
        logger.info("Waiting for background tasks", extra={"task_count": len(pending)})
        try:
            await asyncio.gather(*pending, return_exceptions=True)
        finally:
            for task in pending:
                self._in_flight.discard(task)


# Protocol compliance
_: type[TaskRunner] = BackgroundTaskRunner  # type: ignore
