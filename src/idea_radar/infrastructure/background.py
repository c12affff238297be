"""Fire-and-forget Tasks mit starker Referenz und geloggtem Fehlerkanal."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundJobs:
    """Haelt gespawnte Tasks bis zum Ende fest und loggt deren Fehler."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str = "job") -> asyncio.Task[Any]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logger.info("Background job started: %s", name)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.info("Background job cancelled: %s", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Background job failed: %s", task.get_name(), exc_info=exc
            )
        else:
            logger.info("Background job finished: %s", task.get_name())

    async def shutdown(self) -> None:
        """Offene Tasks abbrechen und auf ihr Ende warten."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Background jobs cancelled on shutdown: %d", len(tasks))
