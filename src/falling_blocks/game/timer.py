"""Cancellable repeating tasks for the fall timer.

``ManualScheduler`` keeps its own millisecond clock which the driver moves
forward with :meth:`ManualScheduler.advance`, e.g. with the value returned
by ``pygame.time.Clock.tick``. Everything runs on the caller's thread.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    def __init__(self, scheduler: "ManualScheduler", interval_ms: int, callback: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self.interval_ms = interval_ms
        self.callback = callback
        self.due_ms = scheduler.now_ms + interval_ms
        self.active = True

    def cancel(self) -> None:
        """Stop the task. It will not fire again, even mid-``advance``."""
        self.active = False
        self._scheduler._discard(self)


class ManualScheduler:
    def __init__(self) -> None:
        self.now_ms = 0
        self._tasks: List[ScheduledTask] = []

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        task = ScheduledTask(self, int(interval_ms), callback)
        self._tasks.append(task)
        logger.debug("armed task every %d ms (due at %d)", task.interval_ms, task.due_ms)
        return task

    def _discard(self, task: ScheduledTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    def _next_due(self, until_ms: int) -> Optional[ScheduledTask]:
        due = [t for t in self._tasks if t.active and t.due_ms <= until_ms]
        if not due:
            return None
        return min(due, key=lambda t: t.due_ms)

    def advance(self, elapsed_ms: int) -> int:
        """Move the clock forward and fire every task that comes due.

        Returns the number of callbacks run.
        """
        if elapsed_ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self.now_ms + int(elapsed_ms)
        fired = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self.now_ms = task.due_ms
            task.due_ms += task.interval_ms
            task.callback()
            fired += 1
        self.now_ms = target
        return fired

    @property
    def pending(self) -> int:
        return len(self._tasks)
