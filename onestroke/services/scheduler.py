import asyncio
import heapq
import itertools
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """ Runs a callback once after a delay in seconds. The returned handle can cancel it"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


class ManualCall:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler driven by advance().
    Used by tests and by hosts that poll on their own frame clock.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: list[tuple[float, int, ManualCall]] = []
        self._counter = itertools.count() # keeps insertion order for equal due times

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        call = ManualCall(self.now + delay, callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """ Move the clock forward and run every call that became due. Returns how many ran"""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self.now = due
            if call.cancelled:
                continue
            call.callback()
            fired += 1
        self.now = target
        return fired


class AsyncioScheduler:
    """ Schedules on the running event loop, for hosts living inside asyncio (FastAPI)"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Scheduling %s in %.2fs", getattr(callback, "__name__", callback), delay)
        return loop.call_later(delay, callback)
