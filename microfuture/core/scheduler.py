"""
Task Queues

Deferred-call primitives that futures schedule their settlement onto.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Optional

from ..config import Settings
from ..exceptions import SchedulerError, SchedulerOverflow

logger = logging.getLogger(__name__)

Task = Callable[[], None]


class Scheduler(ABC):
    """
    FIFO deferred-call facility.

    ``schedule`` must never run the callback before the calling stack frame
    returns, and must run callbacks in the order they were scheduled.
    """

    @abstractmethod
    def schedule(self, callback: Task) -> None:
        """Queue a zero-argument callback."""


class MicrotaskQueue(Scheduler):
    """
    Explicit FIFO queue drained by the caller.

    Nothing runs until ``run_once`` or ``run_until_idle`` is called, which
    makes ordering fully observable in tests.

    Example:
        queue = MicrotaskQueue()
        f = Future.resolve(1, scheduler=queue)
        queue.run_until_idle()
        assert f.get() == 1
    """

    def __init__(self, max_tasks_per_drain: Optional[int] = None):
        """
        Create an empty queue.

        Args:
            max_tasks_per_drain: Limit for one ``run_until_idle`` call
                (defaults to ``Settings.from_env()``)
        """
        if max_tasks_per_drain is None:
            max_tasks_per_drain = Settings.from_env().max_tasks_per_drain
        self.max_tasks_per_drain = max_tasks_per_drain
        self._tasks: Deque[Task] = deque()
        self._draining = False

    def schedule(self, callback: Task) -> None:
        self._tasks.append(callback)

    def __len__(self) -> int:
        return len(self._tasks)

    def clear(self) -> None:
        """Drop every queued task without running it."""
        self._tasks.clear()

    def run_once(self) -> bool:
        """
        Run the oldest queued task.

        Returns:
            True if a task ran, False if the queue was empty
        """
        if not self._tasks:
            return False
        task = self._tasks.popleft()
        try:
            task()
        except Exception:
            logger.exception(f"Scheduled task {task!r} raised")
        return True

    def run_until_idle(self) -> int:
        """
        Run tasks until the queue is empty, including tasks queued meanwhile.

        Returns:
            Number of tasks run

        Raises:
            SchedulerError: if called from inside a running task
            SchedulerOverflow: if more than ``max_tasks_per_drain`` tasks ran
        """
        if self._draining:
            raise SchedulerError("run_until_idle() called re-entrantly")

        self._draining = True
        count = 0
        try:
            while self._tasks:
                if count >= self.max_tasks_per_drain:
                    raise SchedulerOverflow(
                        f"Drain exceeded {self.max_tasks_per_drain} tasks "
                        f"({len(self._tasks)} still queued)"
                    )
                self.run_once()
                count += 1
        finally:
            self._draining = False

        logger.debug(f"Drained {count} tasks")
        return count


class AsyncioScheduler(Scheduler):
    """
    Schedules onto an asyncio event loop with ``call_soon``.

    ``call_soon`` callbacks run FIFO on the next loop iteration, ahead of
    any timer that has not yet expired.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Args:
            loop: Loop to schedule onto (None = the running loop at each call)
        """
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            raise SchedulerError("AsyncioScheduler used outside a running event loop") from None

    def schedule(self, callback: Task) -> None:
        self.loop.call_soon(callback)
