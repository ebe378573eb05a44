"""pytest configuration and fixtures for future tests."""

from typing import Any, Callable, Dict, Tuple

import pytest

from microfuture import Future, MicrotaskQueue, Reactor


@pytest.fixture(autouse=True)
def _reset_reactor():
    """Give every test a fresh default scheduler."""
    Reactor.reset()
    yield
    Reactor.reset()


@pytest.fixture
def queue() -> MicrotaskQueue:
    """Manually drained queue installed as the default scheduler."""
    return Reactor.install(MicrotaskQueue())


@pytest.fixture
def deferred() -> Callable[[], Tuple[Future, Callable, Callable]]:
    """Factory for a pending future plus its captured resolve/reject hooks.

    Returns:
        Callable producing (future, resolve, reject).
    """
    def make() -> Tuple[Future, Callable, Callable]:
        hooks: Dict[str, Any] = {}

        def executor(resolve, reject):
            hooks["resolve"] = resolve
            hooks["reject"] = reject

        future = Future(executor)
        return future, hooks["resolve"], hooks["reject"]

    return make
