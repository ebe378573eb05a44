"""
microfuture - Deferred Futures for Python

A one-shot future primitive with Promise-style semantics:

- Settlement deferred onto an injectable FIFO task queue
- .then() / .catch() / .finally_() chaining with future adoption
- all / all_settled / race / any aggregate combinators
- asyncio bridging (await a Future)
"""

from .config import Settings, configure_logging
from .core import (
    Future, FutureStatus, SettledOutcome, is_future_like,
    all_, all_settled, race, any_,
    Reactor, Scheduler, MicrotaskQueue, AsyncioScheduler,
)
from .exceptions import (
    FutureError, Rejection, AggregateError, FutureNotReady,
    ChainingCycleError, SchedulerError, SchedulerOverflow,
)

__version__ = "0.1.0"

__all__ = [
    "Future", "FutureStatus", "SettledOutcome", "is_future_like",
    "all_", "all_settled", "race", "any_",
    "Reactor", "Scheduler", "MicrotaskQueue", "AsyncioScheduler",
    "Settings", "configure_logging",
    "FutureError", "Rejection", "AggregateError", "FutureNotReady",
    "ChainingCycleError", "SchedulerError", "SchedulerOverflow",
]
