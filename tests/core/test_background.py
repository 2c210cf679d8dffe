import asyncio
import logging

import pytest

from blog_search.core.background import BackgroundTaskTracker


@pytest.mark.asyncio
async def test_spawned_task_is_tracked_until_done():
    tracker = BackgroundTaskTracker()
    release = asyncio.Event()

    async def work():
        await release.wait()
        return "ok"

    task = tracker.spawn(work(), name="work")
    await asyncio.sleep(0)
    assert tracker.pending == 1

    release.set()
    await tracker.drain()

    assert tracker.pending == 0
    assert task.result() == "ok"


@pytest.mark.asyncio
async def test_escaped_exception_is_logged(caplog):
    tracker = BackgroundTaskTracker()

    async def boom():
        raise RuntimeError("lost write")

    with caplog.at_level(logging.ERROR, logger="blog_search.core.background"):
        tracker.spawn(boom(), name="boom")
        await tracker.drain()

    assert tracker.pending == 0
    assert "Background task boom failed" in caplog.text


@pytest.mark.asyncio
async def test_drain_gives_up_after_timeout(caplog):
    tracker = BackgroundTaskTracker()
    task = tracker.spawn(asyncio.sleep(10), name="slow")

    with caplog.at_level(logging.WARNING, logger="blog_search.core.background"):
        await tracker.drain(timeout=0.05)

    assert tracker.pending == 1
    assert "still running" in caplog.text
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
