# blog_search/core/background.py
"""
Tracking for fire-and-forget background work.

Request handlers detach auxiliary work (search history writes) with
``asyncio.create_task``. The event loop only keeps weak references to
tasks, so the tracker holds them until they finish, logs anything that
escaped the task body, and lets shutdown (and tests) wait for in-flight work.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackgroundTaskTracker:
    """Owns detached asyncio tasks until they complete."""

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, T], *, name: str | None = None) -> asyncio.Task[T]:
        """Schedule ``coro`` on the running loop without awaiting it."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug(f"Background task {task.get_name()} was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Background task {task.get_name()} failed: {exc}", exc_info=exc)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for every task spawned so far (and any they spawn) to finish."""
        while self._tasks:
            pending = list(self._tasks)
            _done, not_done = await asyncio.wait(pending, timeout=timeout)
            if not_done:
                logger.warning(f"{len(not_done)} background task(s) still running after {timeout}s")
                return


background_tasks = BackgroundTaskTracker()
