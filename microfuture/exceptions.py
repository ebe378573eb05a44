"""Future exception hierarchy."""

from typing import Any, List, Optional


class FutureError(Exception):
    """Base exception for all future operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Rejection(FutureError):
    """Carries an arbitrary rejection reason through a raise.

    Raising ``Rejection(reason)`` from a handler rejects the derived future
    with ``reason`` itself, not with the wrapper.
    """

    def __init__(self, reason: Any):
        self.reason = reason
        super().__init__(f"Future rejected: {reason!r}")


class AggregateError(FutureError):
    """Every input of ``any`` rejected."""

    def __init__(self, errors: List[Any], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or f"All {len(self.errors)} futures were rejected")


class FutureNotReady(FutureError):
    """Value requested from a future that is still pending."""
    pass


class ChainingCycleError(FutureError, TypeError):
    """A future was resolved with itself."""
    pass


class SchedulerError(FutureError):
    """Scheduler misuse (re-entrant drain, unsupported operation)."""
    pass


class SchedulerOverflow(SchedulerError):
    """A single drain exceeded its task limit."""
    pass
