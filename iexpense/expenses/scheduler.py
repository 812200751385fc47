"""Mini README: Cancellable delayed callbacks used for highlight expiry.

Structure:
    * DelayedTask - handle returned for every scheduled callback.
    * Scheduler - abstract ``schedule(delay, callback)`` interface.
    * ManualScheduler - virtual clock advanced explicitly by the caller.
    * AsyncioScheduler - runs callbacks on an asyncio event loop.

Callbacks must run in the same context that mutates the expense store. The
manual scheduler fires on the thread calling ``advance``; the asyncio
scheduler fires on the loop that served the scheduling request.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Callback = Callable[[], None]


class DelayedTask:
    """Handle for a pending callback that can be cancelled before it fires."""

    def __init__(self, deadline: float, callback: Callback) -> None:
        self.deadline = deadline
        self._callback = callback
        self._cancelled = False
        self._done = False
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        """True once the task has either fired or been cancelled."""

        return self._done

    def cancel(self) -> None:
        if self._done:
            return
        self._cancelled = True
        self._done = True
        if self._timer is not None:
            self._timer.cancel()

    def bind_timer(self, timer: asyncio.TimerHandle) -> None:
        self._timer = timer

    def run(self) -> None:
        if self._done:
            return
        self._done = True
        self._callback()


class SchedulerUnavailable(RuntimeError):
    """No event loop is available to run a delayed callback."""


class Scheduler(ABC):
    """Interface for components able to run a callback after a delay."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callback) -> DelayedTask:
        """Run ``callback`` once ``delay`` seconds have elapsed."""


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by explicit calls to ``advance``."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._queue: List[Tuple[float, int, DelayedTask]] = []
        self._counter = itertools.count()

    def schedule(self, delay: float, callback: Callback) -> DelayedTask:
        task = DelayedTask(self.now + max(delay, 0.0), callback)
        heapq.heappush(self._queue, (task.deadline, next(self._counter), task))
        return task

    @property
    def pending(self) -> int:
        """Number of scheduled tasks that have not fired or been cancelled."""

        return sum(1 for _, _, task in self._queue if not task.done)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every task now due, in deadline order."""

        self.now += seconds
        fired = 0
        while self._queue and self._queue[0][0] <= self.now:
            _, _, task = heapq.heappop(self._queue)
            if task.done:
                continue
            task.run()
            fired += 1
        return fired


class AsyncioScheduler(Scheduler):
    """Scheduler backed by ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def schedule(self, delay: float, callback: Callback) -> DelayedTask:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as error:
                raise SchedulerUnavailable("No running event loop to schedule on") from error
        task = DelayedTask(loop.time() + delay, callback)
        task.bind_timer(loop.call_later(delay, task.run))
        LOGGER.debug("Scheduled callback in %.2fs", delay)
        return task
