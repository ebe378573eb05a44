"""
Tests for awaiting futures on an asyncio event loop.
"""

import asyncio

import pytest

from microfuture import (
    AggregateError,
    Future,
    MicrotaskQueue,
    Reactor,
    Rejection,
)


class TestAwait:
    """Test Future.__await__ with an AsyncioScheduler."""

    @pytest.mark.asyncio
    async def test_await_resolved(self):
        """Test awaiting a future resolved by its executor."""
        Reactor.use_asyncio()
        result = await Future(lambda resolve, reject: resolve(5))
        assert result == 5

    @pytest.mark.asyncio
    async def test_await_chain(self):
        """Test awaiting the end of a chain."""
        Reactor.use_asyncio()
        result = await Future.resolve(10).then(lambda x: x * 2).then(str)
        assert result == "20"

    @pytest.mark.asyncio
    async def test_await_rejected_exception(self):
        """Test an exception reason is raised as-is."""
        Reactor.use_asyncio()
        with pytest.raises(ValueError, match="bad"):
            await Future.reject(ValueError("bad"))

    @pytest.mark.asyncio
    async def test_await_rejected_plain_reason(self):
        """Test a plain reason is raised wrapped in Rejection."""
        Reactor.use_asyncio()
        with pytest.raises(Rejection) as exc_info:
            await Future.reject("bad")
        assert exc_info.value.reason == "bad"

    @pytest.mark.asyncio
    async def test_await_timer_driven(self):
        """Test a future settled from a loop timer."""
        Reactor.use_asyncio()
        loop = asyncio.get_running_loop()
        f = Future(lambda resolve, reject: loop.call_later(0.01, resolve, "late"))
        assert await f == "late"

    @pytest.mark.asyncio
    async def test_await_settled_fast_path(self):
        """Test an already-settled future needs no loop scheduling."""
        queue = MicrotaskQueue()
        f = Future.resolve(1, scheduler=queue)
        queue.run_until_idle()
        assert await f == 1

    @pytest.mark.asyncio
    async def test_gather(self):
        """Test futures work with asyncio.gather."""
        Reactor.use_asyncio()
        results = await asyncio.gather(Future.resolve(1), Future.resolve(2), Future.resolve(3))
        assert results == [1, 2, 3]


class TestTimerDrivenCombinators:
    """Test combinators with inputs settled by loop timers."""

    @pytest.mark.asyncio
    async def test_any_all_rejected(self):
        """Test any_ aggregates timer-driven rejections in input order."""
        Reactor.use_asyncio()
        loop = asyncio.get_running_loop()

        def rejecting_after(delay, reason):
            return Future(lambda resolve, reject: loop.call_later(delay, reject, reason))

        futures = [rejecting_after(0.03, 111), rejecting_after(0.01, 222), rejecting_after(0.02, 333)]
        with pytest.raises(AggregateError) as exc_info:
            await Future.any(futures)
        assert exc_info.value.errors == [111, 222, 333]

    @pytest.mark.asyncio
    async def test_race_timers(self):
        """Test race resolves with the shortest timer."""
        Reactor.use_asyncio()
        loop = asyncio.get_running_loop()

        def resolving_after(delay, value):
            return Future(lambda resolve, reject: loop.call_later(delay, resolve, value))

        result = await Future.race([resolving_after(0.05, "slow"), resolving_after(0.01, "fast")])
        assert result == "fast"

    @pytest.mark.asyncio
    async def test_settlement_before_timers(self):
        """Test call_soon settlement runs ahead of a zero-delay timer."""
        Reactor.use_asyncio()
        loop = asyncio.get_running_loop()
        order = []

        loop.call_later(0, order.append, "timer")
        Future.resolve("future").then(order.append)

        await asyncio.sleep(0.01)
        assert order == ["future", "timer"]
