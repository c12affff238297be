"""Unit-Tests fuer BackgroundJobs."""

import asyncio
import logging

from idea_radar.infrastructure.background import BackgroundJobs


async def test_completed_job_released():
    jobs = BackgroundJobs()
    task = jobs.spawn(asyncio.sleep(0, result=42), name="quick")
    assert jobs.pending == 1
    assert await task == 42
    await asyncio.sleep(0)
    assert jobs.pending == 0


async def test_failure_logged_not_raised(caplog, monkeypatch):
    async def boom() -> None:
        raise RuntimeError("collector down")

    jobs = BackgroundJobs()
    # create_app() schaltet propagate ab; caplog braucht es
    monkeypatch.setattr(logging.getLogger("idea_radar"), "propagate", True)
    with caplog.at_level(logging.ERROR, logger="idea_radar.infrastructure.background"):
        task = jobs.spawn(boom(), name="failing")
        await asyncio.gather(task, return_exceptions=True)
        await asyncio.sleep(0)
    assert jobs.pending == 0
    assert "Background job failed: failing" in caplog.text


async def test_shutdown_cancels_pending():
    jobs = BackgroundJobs()
    task = jobs.spawn(asyncio.sleep(60), name="slow")
    await jobs.shutdown()
    assert task.cancelled()
    assert jobs.pending == 0
