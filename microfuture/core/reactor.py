"""
Default Scheduler Control

Manages the process-wide scheduler that futures use when none is given.
"""

import asyncio
from typing import Optional

from ..exceptions import SchedulerError
from .scheduler import AsyncioScheduler, MicrotaskQueue, Scheduler


class Reactor:
    """
    Process-wide default scheduler.

    Futures capture the default at construction time, so installing a new
    scheduler does not move futures that already exist.
    """

    _scheduler: Optional[Scheduler] = None

    @classmethod
    def scheduler(cls) -> Scheduler:
        """Get the default scheduler, creating a MicrotaskQueue on first use."""
        if cls._scheduler is None:
            cls._scheduler = MicrotaskQueue()
        return cls._scheduler

    @classmethod
    def install(cls, scheduler: Scheduler) -> Scheduler:
        """
        Replace the default scheduler.

        Args:
            scheduler: New default

        Returns:
            The installed scheduler
        """
        cls._scheduler = scheduler
        return scheduler

    @classmethod
    def use_asyncio(cls, loop: Optional[asyncio.AbstractEventLoop] = None) -> AsyncioScheduler:
        """Install an AsyncioScheduler bound to ``loop`` (or the running loop)."""
        scheduler = AsyncioScheduler(loop)
        cls.install(scheduler)
        return scheduler

    @classmethod
    def run_until_idle(cls) -> int:
        """Drain the default scheduler if it is a MicrotaskQueue."""
        scheduler = cls.scheduler()
        if not isinstance(scheduler, MicrotaskQueue):
            raise SchedulerError(
                f"{type(scheduler).__name__} is driven by its host and cannot be drained"
            )
        return scheduler.run_until_idle()

    @classmethod
    def reset(cls) -> None:
        """Forget the default scheduler."""
        cls._scheduler = None
