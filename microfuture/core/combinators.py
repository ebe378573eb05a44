"""
Aggregate Combinators

Compose an ordered collection of futures into one future. Built entirely on
construction and .then(); no access to future internals.
"""

import logging
from typing import Any, Iterable, List, Optional

from ..exceptions import AggregateError
from .future import Future
from .reactor import Reactor
from .scheduler import Scheduler
from .types import FutureStatus, SettledOutcome

logger = logging.getLogger(__name__)


def _scheduler_for(inputs: List[Any]) -> Scheduler:
    for item in inputs:
        if isinstance(item, Future):
            return item.scheduler
    return Reactor.scheduler()


def _as_future(item: Any, scheduler: Scheduler) -> Future:
    if isinstance(item, Future):
        return item
    return Future.resolve(item, scheduler)


def all_(futures: Iterable[Any], scheduler: Optional[Scheduler] = None) -> Future[list]:
    """
    Wait for every future to fulfill.

    Args:
        futures: Futures (plain values are treated as already fulfilled)
        scheduler: Scheduler for the result (default: first input's)

    Returns:
        Future of the values in input order, rejected with the first
        reason any input rejects with

    Example:
        Future.all([fetch_user(), fetch_orders()]).then(render)
    """
    inputs = list(futures)
    if scheduler is None:
        scheduler = _scheduler_for(inputs)

    def executor(resolve, reject):
        results: List[Any] = [None] * len(inputs)
        remaining = len(inputs)

        if remaining == 0:
            resolve(results)
            return

        def on_value(index):
            def handler(value):
                nonlocal remaining
                results[index] = value
                remaining -= 1
                if remaining == 0:
                    resolve(results)
            return handler

        for index, item in enumerate(inputs):
            _as_future(item, scheduler).then(on_value(index), reject)

    return Future(executor, scheduler)


def all_settled(futures: Iterable[Any], scheduler: Optional[Scheduler] = None) -> Future[list]:
    """
    Wait for every future to settle, either way.

    Returns:
        Future of SettledOutcome records in input order; never rejects
    """
    inputs = list(futures)
    if scheduler is None:
        scheduler = _scheduler_for(inputs)

    def executor(resolve, reject):
        outcomes: List[Optional[SettledOutcome]] = [None] * len(inputs)
        remaining = len(inputs)

        if remaining == 0:
            resolve(outcomes)
            return

        def record(index, status):
            def handler(result):
                nonlocal remaining
                outcomes[index] = SettledOutcome(status=status, value=result)
                remaining -= 1
                if remaining == 0:
                    resolve(outcomes)
            return handler

        for index, item in enumerate(inputs):
            _as_future(item, scheduler).then(
                record(index, FutureStatus.FULFILLED),
                record(index, FutureStatus.REJECTED),
            )

    return Future(executor, scheduler)


def race(futures: Iterable[Any], scheduler: Optional[Scheduler] = None) -> Future:
    """
    Adopt whichever input settles first.

    An empty collection never settles.
    """
    inputs = list(futures)
    if scheduler is None:
        scheduler = _scheduler_for(inputs)

    def executor(resolve, reject):
        for item in inputs:
            _as_future(item, scheduler).then(resolve, reject)

    return Future(executor, scheduler)


def any_(futures: Iterable[Any], scheduler: Optional[Scheduler] = None) -> Future:
    """
    Wait for the first future to fulfill.

    Returns:
        Future of the first fulfillment value. If every input rejects (or
        there are none), rejects with an AggregateError whose ``errors``
        hold each reason in input order.

    Example:
        Future.any([mirror_a(), mirror_b()]).catch(lambda e: e.errors)
    """
    inputs = list(futures)
    if scheduler is None:
        scheduler = _scheduler_for(inputs)

    def executor(resolve, reject):
        reasons: List[Any] = [None] * len(inputs)
        remaining = len(inputs)

        if remaining == 0:
            reject(AggregateError([], "No futures to wait for"))
            return

        def on_reason(index):
            def handler(reason):
                nonlocal remaining
                reasons[index] = reason
                remaining -= 1
                if remaining == 0:
                    logger.debug(f"All {len(reasons)} futures rejected")
                    reject(AggregateError(reasons))
            return handler

        for index, item in enumerate(inputs):
            _as_future(item, scheduler).then(resolve, on_reason(index))

    return Future(executor, scheduler)
