import asyncio

import pytest

from personal_wiki_ui.ui.scheduler import AsyncioScheduler, ManualScheduler


def test_manual_scheduler_fires_in_due_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.schedule("b", 2.0, lambda: fired.append("b"))
    scheduler.schedule("a", 1.0, lambda: fired.append("a"))

    assert scheduler.advance(0.5) == 0
    assert scheduler.advance(2.0) == 2
    assert fired == ["a", "b"]
    assert scheduler.pending() == []


def test_manual_scheduler_reschedule_replaces_task():
    scheduler = ManualScheduler()
    fired = []
    scheduler.schedule("k", 2.0, lambda: fired.append("first"))
    scheduler.advance(1.0)
    scheduler.schedule("k", 2.0, lambda: fired.append("second"))

    scheduler.advance(1.5)
    assert fired == []
    scheduler.advance(0.5)
    assert fired == ["second"]


def test_manual_scheduler_cancel():
    scheduler = ManualScheduler()
    scheduler.schedule("k", 1.0, lambda: pytest.fail("cancelled task ran"))

    assert scheduler.cancel("k") is True
    assert scheduler.cancel("k") is False
    scheduler.advance(5.0)


@pytest.mark.asyncio
async def test_asyncio_scheduler_runs_on_loop():
    scheduler = AsyncioScheduler()
    done = asyncio.Event()

    scheduler.schedule("k", 0.01, done.set)
    assert scheduler.pending() == ["k"]

    await asyncio.wait_for(done.wait(), timeout=1.0)
    assert scheduler.pending() == []


@pytest.mark.asyncio
async def test_asyncio_scheduler_reschedule_cancels_previous():
    scheduler = AsyncioScheduler()
    fired = []

    scheduler.schedule("k", 0.01, lambda: fired.append("first"))
    scheduler.schedule("k", 0.02, lambda: fired.append("second"))
    await asyncio.sleep(0.05)

    assert fired == ["second"]


@pytest.mark.asyncio
async def test_asyncio_scheduler_survives_failing_callback():
    scheduler = AsyncioScheduler()
    fired = []

    def boom():
        raise RuntimeError("boom")

    scheduler.schedule("a", 0.01, boom)
    scheduler.schedule("b", 0.02, lambda: fired.append("b"))
    await asyncio.sleep(0.05)

    assert fired == ["b"]


def test_asyncio_scheduler_with_explicit_loop_outside_running_loop():
    loop = asyncio.new_event_loop()
    try:
        scheduler = AsyncioScheduler(loop=loop)
        fired = []

        scheduler.schedule("k", 0.01, lambda: fired.append("k"))
        loop.run_until_complete(asyncio.sleep(0.05))

        assert fired == ["k"]
    finally:
        loop.close()


def test_asyncio_scheduler_without_any_loop_raises():
    scheduler = AsyncioScheduler()

    with pytest.raises(RuntimeError, match="running event loop"):
        scheduler.schedule("k", 1.0, lambda: None)


@pytest.mark.asyncio
async def test_asyncio_scheduler_binds_loop_at_construction():
    scheduler = AsyncioScheduler()
    assert scheduler._loop is asyncio.get_running_loop()
