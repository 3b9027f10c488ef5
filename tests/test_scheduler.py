"""Tests for one-shot schedulers."""

import asyncio

import pytest

from moodlight.core.scheduler import AsyncioScheduler, ManualScheduler


def test_manual_fires_in_due_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.call_later(0.5, lambda: fired.append("b"))
    scheduler.call_later(0.25, lambda: fired.append("a"))
    scheduler.call_later(0.5, lambda: fired.append("c"))

    assert scheduler.advance(0.375) == 1
    assert fired == ["a"]
    assert scheduler.advance(0.125) == 2
    assert fired == ["a", "b", "c"]
    assert scheduler.now == 0.5


def test_manual_cancel():
    scheduler = ManualScheduler()
    fired = []
    handle = scheduler.call_later(0.1, lambda: fired.append(1))
    handle.cancel()

    assert handle.cancelled
    assert scheduler.pending == 0
    assert scheduler.advance(1.0) == 0
    assert fired == []


def test_asyncio_scheduler_runs_and_cancels():
    async def scenario():
        scheduler = AsyncioScheduler()
        fired = []
        scheduler.call_later(0.01, lambda: fired.append("kept"))
        dropped = scheduler.call_later(0.01, lambda: fired.append("dropped"))
        dropped.cancel()
        await asyncio.sleep(0.05)
        return fired, dropped.cancelled

    fired, cancelled = asyncio.run(scenario())
    assert fired == ["kept"]
    assert cancelled


def test_asyncio_scheduler_binds_loop_at_construction():
    with pytest.raises(RuntimeError):
        AsyncioScheduler()

    loop = asyncio.new_event_loop()
    try:
        scheduler = AsyncioScheduler(loop)
        fired = []
        scheduler.call_later(0.0, lambda: fired.append(1))
        loop.run_until_complete(asyncio.sleep(0.01))
        assert fired == [1]
    finally:
        loop.close()
