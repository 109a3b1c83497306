"""
Hand-off of stored matches to the next pipeline stage.

Publishing is fire-and-forget: ``publish`` returns once the message has been
accepted, never after the downstream stage has processed it. Delivery is
at-most-once; a lost message is recovered by reprocessing the stored artifact.
"""

import asyncio
from collections import defaultdict
from typing import Awaitable, Callable, Dict, Protocol

import structlog

from .schemas import ProcessingMessage

logger = structlog.get_logger(__name__)

AsyncInvoker = Callable[[str, bytes], Awaitable[None]]

DEFAULT_QUEUE_SIZE = 1000


class StagePublisher(Protocol):
    """Publishes one message to a named downstream stage."""

    async def publish(self, stage_name: str, message: ProcessingMessage) -> None:
        ...


class InMemoryStagePublisher:
    """One bounded ``asyncio.Queue`` per stage; consumers drain with ``get``.

    When a stage's queue is full the message is dropped and logged.
    """

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self.maxsize = maxsize
        self.dropped = 0
        self.queues: Dict[str, asyncio.Queue] = defaultdict(
            lambda: asyncio.Queue(maxsize=self.maxsize)
        )

    async def publish(self, stage_name: str, message: ProcessingMessage) -> None:
        try:
            self.queues[stage_name].put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "Processing queue full, message dropped",
                stage=stage_name,
                match_id=message.match_id,
                maxsize=self.maxsize,
            )

    def pending(self, stage_name: str) -> int:
        return self.queues[stage_name].qsize() if stage_name in self.queues else 0

    async def get(self, stage_name: str) -> ProcessingMessage:
        return await self.queues[stage_name].get()


class LoggingStagePublisher:
    """Records each hand-off in the log and keeps nothing.

    Used when no downstream stage runs alongside the service; the stored
    artifacts remain the source for later processing.
    """

    async def publish(self, stage_name: str, message: ProcessingMessage) -> None:
        logger.info(
            "Processing message handed off",
            stage=stage_name,
            match_id=message.match_id,
            puuid=message.puuid,
            region=message.region,
        )


class InvokerStagePublisher:
    """Publishes through an asynchronous invoke-by-name call.

    ``invoker(stage_name, payload)`` must only enqueue the invocation (an
    "Event" style invoke) and return; its exceptions mean the message was not
    accepted.
    """

    def __init__(self, invoker: AsyncInvoker):
        self._invoker = invoker

    async def publish(self, stage_name: str, message: ProcessingMessage) -> None:
        payload = message.model_dump_json(by_alias=True).encode("utf-8")
        await self._invoker(stage_name, payload)
        logger.debug(
            "Processing stage invoked",
            stage=stage_name,
            match_id=message.match_id,
        )
