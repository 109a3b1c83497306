"""
Tests for the bounded-concurrency executor.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from rift_rewind.core.riot_api.backoff import BackoffPolicy
from rift_rewind.core.riot_api.errors import NotFoundError, ServerError
from rift_rewind.core.riot_api.executor import ExecutorClosedError, RateLimitedExecutor


def make_executor(max_concurrent: int, max_retries: int = 3) -> RateLimitedExecutor:
    return RateLimitedExecutor(
        max_concurrent=max_concurrent,
        backoff=BackoffPolicy(max_retries=max_retries, sleep=AsyncMock()),
    )


class ConcurrencyProbe:
    """Operations that record how many of them run at the same time."""

    def __init__(self) -> None:
        self.running = 0
        self.max_running = 0
        self.started: list[int] = []

    def operation(self, index: int, delay: float = 0.01):
        async def _run():
            self.started.append(index)
            self.running += 1
            self.max_running = max(self.max_running, self.running)
            try:
                await asyncio.sleep(delay)
                return index
            finally:
                self.running -= 1

        return _run


class TestRateLimitedExecutor:
    """Test cases for RateLimitedExecutor."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cap,tasks", [(1, 5), (3, 25), (10, 40), (10, 3)])
    async def test_never_exceeds_cap(self, cap, tasks):
        """No more than max_concurrent operations run at once."""
        probe = ConcurrencyProbe()
        async with make_executor(cap) as executor:
            futures = [executor.submit(probe.operation(i)) for i in range(tasks)]
            results = await asyncio.gather(*futures)

        assert results == list(range(tasks))
        assert probe.max_running <= cap
        assert executor.peak_in_flight <= cap
        assert executor.peak_in_flight == min(cap, tasks)
        assert executor.in_flight == 0

    @pytest.mark.asyncio
    async def test_admission_is_fifo(self):
        """Queued operations start in submission order."""
        probe = ConcurrencyProbe()
        async with make_executor(2) as executor:
            futures = [executor.submit(probe.operation(i)) for i in range(8)]
            await asyncio.gather(*futures)

        assert probe.started == list(range(8))

    @pytest.mark.asyncio
    async def test_completion_order_not_tied_to_admission(self):
        """A slow first task does not hold back a fast second one."""
        finished: list[str] = []

        async def slow():
            await asyncio.sleep(0.05)
            finished.append("slow")

        async def fast():
            finished.append("fast")

        async with make_executor(2) as executor:
            await asyncio.gather(executor.submit(slow), executor.submit(fast))

        assert finished == ["fast", "slow"]

    @pytest.mark.asyncio
    async def test_failure_only_affects_its_own_caller(self):
        """One failing task leaves siblings untouched."""
        async def ok():
            return "ok"

        async def missing():
            raise NotFoundError("missing", status_code=404)

        async with make_executor(1) as executor:
            first = executor.submit(ok)
            failing = executor.submit(missing)
            last = executor.submit(ok)

            assert await first == "ok"
            with pytest.raises(NotFoundError):
                await failing
            assert await last == "ok"

    @pytest.mark.asyncio
    async def test_operations_run_through_backoff(self):
        """Transient failures are retried inside the executor."""
        operation = AsyncMock(side_effect=[ServerError("boom", status_code=500), "ok"])

        async with make_executor(2) as executor:
            assert await executor.run(operation) == "ok"

        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_queue_depth_is_observable(self):
        """Work beyond the cap waits in the queue."""
        gate = asyncio.Event()

        async def blocked():
            await gate.wait()
            return True

        async with make_executor(2) as executor:
            futures = [executor.submit(blocked) for _ in range(5)]
            await asyncio.sleep(0)
            await asyncio.sleep(0)

            assert executor.in_flight == 2
            assert executor.queued == 3

            gate.set()
            assert all(await asyncio.gather(*futures))

    @pytest.mark.asyncio
    async def test_close_fails_queued_tasks(self):
        """Tasks still queued at close get ExecutorClosedError."""
        gate = asyncio.Event()

        async def blocked():
            await gate.wait()

        executor = make_executor(1)
        executor.submit(blocked)
        waiting = executor.submit(blocked)
        await asyncio.sleep(0)

        await executor.close()

        with pytest.raises(ExecutorClosedError):
            await waiting

    @pytest.mark.asyncio
    async def test_submit_after_close_rejected(self):
        executor = make_executor(1)
        await executor.close()

        async def noop():
            return None

        with pytest.raises(ExecutorClosedError):
            executor.submit(noop)

    def test_invalid_cap_rejected(self):
        with pytest.raises(ValueError):
            RateLimitedExecutor(max_concurrent=0)
