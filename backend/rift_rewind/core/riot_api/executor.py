"""
Bounded-concurrency executor for outbound Riot API calls.

A fixed pool of workers pulls queued operations from a FIFO queue and runs each
one through the backoff policy, so at most ``max_concurrent`` requests are in
flight per executor.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional

import structlog

from .backoff import BackoffPolicy

logger = structlog.get_logger(__name__)


class ExecutorClosedError(RuntimeError):
    """Raised for operations submitted to, or still queued in, a closed executor."""


class TaskState(Enum):
    """Queued task lifecycle."""

    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class QueuedTask:
    """An outbound call waiting for a worker."""

    operation: Callable[[], Awaitable[Any]]
    future: asyncio.Future
    state: TaskState = field(default=TaskState.QUEUED)


class RateLimitedExecutor:
    """FIFO worker pool that caps concurrent upstream requests."""

    def __init__(
        self,
        max_concurrent: int = 10,
        backoff: Optional[BackoffPolicy] = None,
    ):
        """
        Initialize executor.

        Args:
            max_concurrent: Maximum number of operations running at once
            backoff: Retry policy wrapped around every operation
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self.max_concurrent = max_concurrent
        self.backoff = backoff or BackoffPolicy()

        self._queue: Optional[asyncio.Queue] = None
        self._workers: List[asyncio.Task] = []
        self._closed = False

        self.in_flight = 0
        self.peak_in_flight = 0

    async def __aenter__(self) -> "RateLimitedExecutor":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def queued(self) -> int:
        """Number of operations waiting for a worker."""
        return self._queue.qsize() if self._queue is not None else 0

    def _ensure_workers(self) -> asyncio.Queue:
        if self._queue is None:
            self._queue = asyncio.Queue()
            self._workers = [
                asyncio.create_task(self._worker(f"riot-worker-{i}"))
                for i in range(self.max_concurrent)
            ]
            logger.debug("Executor workers started", workers=self.max_concurrent)
        return self._queue

    def submit(self, operation: Callable[[], Awaitable[Any]]) -> asyncio.Future:
        """Queue ``operation`` and return a future settled with its outcome.

        Must be called from a running event loop.
        """
        if self._closed:
            raise ExecutorClosedError("Executor is closed")

        queue = self._ensure_workers()
        future = asyncio.get_running_loop().create_future()
        queue.put_nowait(QueuedTask(operation=operation, future=future))
        return future

    async def run(self, operation: Callable[[], Awaitable[Any]]) -> Any:
        """Submit ``operation`` and wait for its result."""
        return await self.submit(operation)

    async def _worker(self, name: str) -> None:
        assert self._queue is not None
        while True:
            task: QueuedTask = await self._queue.get()
            try:
                if task.future.done():
                    # caller gave up while the task was queued
                    continue
                await self._run_task(task)
            finally:
                self._queue.task_done()

    async def _run_task(self, task: QueuedTask) -> None:
        task.state = TaskState.RUNNING
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            result = await self.backoff.execute(task.operation)
        except asyncio.CancelledError:
            if not task.future.done():
                task.future.cancel()
            raise
        except Exception as error:
            task.state = TaskState.FAILED
            if not task.future.done():
                task.future.set_exception(error)
        else:
            task.state = TaskState.SUCCEEDED
            if not task.future.done():
                task.future.set_result(result)
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        """Stop the workers and fail anything still waiting in the queue."""
        if self._closed:
            return
        self._closed = True

        for worker in self._workers:
            worker.cancel()
        if self._workers:
            await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []

        if self._queue is not None:
            while not self._queue.empty():
                task = self._queue.get_nowait()
                if not task.future.done():
                    task.future.set_exception(
                        ExecutorClosedError("Executor closed before task ran")
                    )
            logger.debug("Executor closed")
