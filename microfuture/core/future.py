"""
Deferred-Settlement Future

A one-shot container for the eventual value (or rejection reason) of an
asynchronous operation, with .then() chaining and asyncio bridging.
"""

import asyncio
import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from ..exceptions import ChainingCycleError, FutureNotReady, Rejection
from .reactor import Reactor
from .scheduler import Scheduler
from .types import FutureStatus

logger = logging.getLogger(__name__)

T = TypeVar('T')

Hook = Callable[..., None]
Executor = Callable[[Hook, Hook], Any]


def _identity(value):
    return value


def _reraise(reason):
    raise Rejection(reason)


def _then_of(value: Any) -> Optional[Callable]:
    # May raise: ``then`` can be a property or come from __getattr__
    if isinstance(value, type):
        return None
    then = getattr(value, 'then', None)
    return then if callable(then) else None


def is_future_like(value: Any) -> bool:
    """True for anything exposing a callable ``then`` (classes excluded)."""
    try:
        return _then_of(value) is not None
    except Exception:
        return False


def _as_exception(reason: Any) -> BaseException:
    if isinstance(reason, BaseException):
        return reason
    return Rejection(reason)


def _invoke_guarded(handler: Callable, argument: Any, resolve: Hook, reject: Hook) -> None:
    """Run a handler, routing its return value to resolve and its error to reject."""
    try:
        result = handler(argument)
    except Rejection as e:
        reject(e.reason)
    except Exception as e:
        reject(e)
    else:
        resolve(result)


class Future(Generic[T]):
    """
    Deferred future with Promise-style chaining.

    Settlement is always deferred onto the future's scheduler, so callbacks
    never run inside the call that settled the future.

    Examples:
        # Executor style
        f = Future(lambda resolve, reject: resolve(21))

        # Chaining
        f.then(lambda x: x * 2).then(print)

        # Async/await (with an asyncio-driven scheduler)
        result = await f
    """

    def __init__(self, executor: Executor, scheduler: Optional[Scheduler] = None):
        """
        Create a future and run its executor synchronously.

        Args:
            executor: Called as ``executor(resolve, reject)``; raising is
                equivalent to calling ``reject`` with the error
            scheduler: Where settlement is deferred to (default: Reactor's)
        """
        self._scheduler = scheduler if scheduler is not None else Reactor.scheduler()
        self._status = FutureStatus.PENDING
        self._value: Optional[T] = None
        self._reason: Any = None
        self._on_fulfilled: List[Callable[[Any], None]] = []
        self._on_rejected: List[Callable[[Any], None]] = []
        # Locked onto a future-like value; direct transitions are ignored
        self._adopting = False

        resolve, reject = self._hooks()
        try:
            executor(resolve, reject)
        except Rejection as e:
            reject(e.reason)
        except Exception as e:
            reject(e)

    def _hooks(self):
        def resolve(value: Any = None) -> None:
            self._scheduler.schedule(lambda: self._transition(FutureStatus.FULFILLED, value))

        def reject(reason: Any = None) -> None:
            self._scheduler.schedule(lambda: self._transition(FutureStatus.REJECTED, reason))

        return resolve, reject

    def _transition(self, status: FutureStatus, result: Any) -> None:
        # Pending gate is checked here, when the deferred task runs
        if self._status is not FutureStatus.PENDING or self._adopting:
            logger.debug(f"Ignoring {status.value} settlement of {self!r}")
            return

        if status is FutureStatus.FULFILLED:
            try:
                then = _then_of(result)
            except Exception as e:
                self._settle(FutureStatus.REJECTED, e)
                return
            if then is not None:
                self._adopt(result, then)
                return

        self._settle(status, result)

    def _settle(self, status: FutureStatus, result: Any) -> None:
        self._status = status
        if status is FutureStatus.FULFILLED:
            self._value = result
            callbacks = self._on_fulfilled
        else:
            self._reason = result
            callbacks = self._on_rejected

        # No replay: both lists are dropped once settled
        self._on_fulfilled = []
        self._on_rejected = []

        logger.debug(f"{self!r} settled, dispatching {len(callbacks)} callbacks")
        for callback in callbacks:
            callback(result)

    def _adopt(self, thenable: Any, then: Callable) -> None:
        if thenable is self:
            self._settle(FutureStatus.REJECTED, ChainingCycleError("Future resolved with itself"))
            return

        logger.debug(f"{self!r} adopting {thenable!r}")
        self._adopting = True
        delivered = False

        def finish(status, result):
            self._adopting = False
            if status is FutureStatus.FULFILLED:
                self._transition(status, result)
            else:
                self._settle(status, result)

        # Each delivery is its own task, so adoption chains never nest on the stack
        def adopt_value(value):
            nonlocal delivered
            if delivered:
                return
            delivered = True
            self._scheduler.schedule(lambda: finish(FutureStatus.FULFILLED, value))

        def adopt_reason(reason):
            nonlocal delivered
            if delivered:
                return
            delivered = True
            self._scheduler.schedule(lambda: finish(FutureStatus.REJECTED, reason))

        try:
            then(adopt_value, adopt_reason)
        except Rejection as e:
            adopt_reason(e.reason)
        except Exception as e:
            adopt_reason(e)

    def then(
        self,
        on_fulfilled: Optional[Callable[[T], Any]] = None,
        on_rejected: Optional[Callable[[Any], Any]] = None,
    ) -> 'Future':
        """
        Chain a continuation.

        Args:
            on_fulfilled: Receives the value (omitted = pass value through)
            on_rejected: Receives the reason (omitted = re-raise it unchanged)

        Returns:
            New future settled by the handler's return value, the reason of
            an error it raised, or the outcome of a future it returned

        Example:
            future.then(lambda x: x * 2).then(lambda y: str(y))
        """
        if on_fulfilled is None:
            on_fulfilled = _identity
        if on_rejected is None:
            on_rejected = _reraise

        def executor(resolve, reject):
            if self._status is FutureStatus.FULFILLED:
                # Fast path: already settled, run the handler now
                _invoke_guarded(on_fulfilled, self._value, resolve, reject)
            elif self._status is FutureStatus.REJECTED:
                _invoke_guarded(on_rejected, self._reason, resolve, reject)
            else:
                self._on_fulfilled.append(
                    lambda value: _invoke_guarded(on_fulfilled, value, resolve, reject)
                )
                self._on_rejected.append(
                    lambda reason: _invoke_guarded(on_rejected, reason, resolve, reject)
                )

        return Future(executor, self._scheduler)

    def catch(self, on_rejected: Callable[[Any], Any]) -> 'Future':
        """Handle a rejection; fulfillment passes through unchanged."""
        return self.then(_identity, on_rejected)

    def finally_(self, on_finally: Callable[[Any], Any]) -> 'Future[T]':
        """
        Observe settlement either way.

        ``on_finally`` receives the value or the reason. Its return value is
        ignored, though a returned future is waited for before the original
        outcome is passed on.

        Returns:
            Future settling with this future's outcome, or with the error
            ``on_finally`` raised
        """
        scheduler = self._scheduler

        def run(result, restore):
            returned = on_finally(result)
            if is_future_like(returned):
                return Future.resolve(returned, scheduler).then(lambda _: restore(result))
            return restore(result)

        return self.then(
            lambda value: run(value, _identity),
            lambda reason: run(reason, _reraise),
        )

    @property
    def status(self) -> FutureStatus:
        return self._status

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def reason(self) -> Any:
        return self._reason

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    def is_ready(self) -> bool:
        """Check if future has settled, either way."""
        return self._status is not FutureStatus.PENDING

    def failed(self) -> bool:
        """Check if future was rejected."""
        return self._status is FutureStatus.REJECTED

    def get(self) -> T:
        """
        Get the value without waiting.

        Returns:
            The fulfillment value

        Raises:
            The rejection reason (wrapped in Rejection if not an exception),
            or FutureNotReady while pending
        """
        if self._status is FutureStatus.FULFILLED:
            return self._value
        if self._status is FutureStatus.REJECTED:
            raise _as_exception(self._reason)
        raise FutureNotReady("Future not ready")

    def __await__(self):
        """
        Make future awaitable.

        Settlement callbacks must be driven by the running loop, e.g. with
        ``Reactor.use_asyncio()``.
        """
        async def _await_impl():
            if self._status is FutureStatus.FULFILLED:
                return self._value
            if self._status is FutureStatus.REJECTED:
                raise _as_exception(self._reason)

            loop = asyncio.get_running_loop()
            py_future = loop.create_future()

            def on_value(value):
                if not py_future.done():
                    py_future.set_result(value)

            def on_reason(reason):
                if not py_future.done():
                    py_future.set_exception(_as_exception(reason))

            self.then(on_value, on_reason)
            return await py_future

        return _await_impl().__await__()

    def __repr__(self) -> str:
        if self._status is FutureStatus.FULFILLED:
            return f"<Future fulfilled value={self._value!r}>"
        if self._status is FutureStatus.REJECTED:
            return f"<Future rejected reason={self._reason!r}>"
        return "<Future pending>"

    @staticmethod
    def resolve(value: Any = None, scheduler: Optional[Scheduler] = None) -> 'Future':
        """Create a future that fulfills with ``value`` (adopting it if future-like)."""
        return Future(lambda resolve, reject: resolve(value), scheduler)

    @staticmethod
    def reject(reason: Any = None, scheduler: Optional[Scheduler] = None) -> 'Future':
        """Create a future that rejects with ``reason``."""
        return Future(lambda resolve, reject: reject(reason), scheduler)

    @staticmethod
    def all(futures: Iterable[Any]) -> 'Future[list]':
        """Fulfill with every value in input order; reject on the first reason."""
        from .combinators import all_
        return all_(futures)

    @staticmethod
    def all_settled(futures: Iterable[Any]) -> 'Future[list]':
        """Fulfill with a SettledOutcome per input once every input settled."""
        from .combinators import all_settled
        return all_settled(futures)

    @staticmethod
    def race(futures: Iterable[Any]) -> 'Future':
        """Adopt the first settlement among the inputs."""
        from .combinators import race
        return race(futures)

    @staticmethod
    def any(futures: Iterable[Any]) -> 'Future':
        """Fulfill with the first value; reject with AggregateError if all reject."""
        from .combinators import any_
        return any_(futures)
