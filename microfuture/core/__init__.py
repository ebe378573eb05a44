"""
microfuture Core

Deferred futures, their aggregate combinators, and the task queues they
settle on.
"""

from .future import Future, is_future_like
from .combinators import all_, all_settled, race, any_
from .reactor import Reactor
from .scheduler import Scheduler, MicrotaskQueue, AsyncioScheduler
from .types import FutureStatus, SettledOutcome

__all__ = [
    'Future',
    'is_future_like',
    'all_',
    'all_settled',
    'race',
    'any_',
    'Reactor',
    'Scheduler',
    'MicrotaskQueue',
    'AsyncioScheduler',
    'FutureStatus',
    'SettledOutcome',
]
