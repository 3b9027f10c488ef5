"""
One-shot deferred callbacks.

The flash restore is the only deferred action in the core. It runs on
the same cooperative queue as the frame tick, so the two never overlap.
"""

from abc import ABC, abstractmethod
from typing import Callable
import asyncio
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class ScheduledCall(ABC):
    """Handle to a pending one-shot callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call twice."""
        ...

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Schedules callbacks to run once after a delay in seconds."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        ...


class _AsyncioCall(ScheduledCall):
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """
    Schedules on an asyncio event loop via loop.call_later.

    The loop is bound at construction; without an explicit loop this must
    be built inside a running one.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        return _AsyncioCall(self._loop.call_later(max(0.0, delay), callback))


class _ManualCall(ScheduledCall):
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Deterministic scheduler driven by an explicit virtual clock.

    Callbacks fire from advance() once the clock reaches their due time,
    in due-time order (ties keep scheduling order).
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, _ManualCall]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run everything that came due.

        Returns:
            Number of callbacks that ran
        """
        target = self._now + max(0.0, seconds)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if call.cancelled:
                continue
            call.callback()
            fired += 1
        self._now = target
        return fired
