"""
Tests for downstream stage publishers.
"""

import json

import pytest
from unittest.mock import AsyncMock

from rift_rewind.features.ingestion import (
    InMemoryStagePublisher,
    InvokerStagePublisher,
    LoggingStagePublisher,
    ProcessingMessage,
)


@pytest.fixture
def message():
    return ProcessingMessage(puuid="puuid-1", match_id="NA1_42", region="NA1")


@pytest.mark.asyncio
async def test_in_memory_publisher_queues_per_stage(message):
    publisher = InMemoryStagePublisher()

    await publisher.publish("processing", message)

    assert publisher.pending("processing") == 1
    assert publisher.pending("other") == 0
    assert await publisher.get("processing") == message
    assert publisher.pending("processing") == 0


@pytest.mark.asyncio
async def test_invoker_publisher_sends_camel_case_payload(message):
    invoker = AsyncMock()
    publisher = InvokerStagePublisher(invoker)

    await publisher.publish("rift-rewind-processing", message)

    stage_name, payload = invoker.await_args.args
    assert stage_name == "rift-rewind-processing"
    assert json.loads(payload) == {
        "puuid": "puuid-1",
        "matchId": "NA1_42",
        "region": "NA1",
    }


@pytest.mark.asyncio
async def test_invoker_failure_propagates(message):
    publisher = InvokerStagePublisher(AsyncMock(side_effect=ConnectionError("refused")))

    with pytest.raises(ConnectionError):
        await publisher.publish("rift-rewind-processing", message)


@pytest.mark.asyncio
async def test_in_memory_publisher_drops_when_full(message):
    """Without a consumer the queue stops growing at its bound."""
    publisher = InMemoryStagePublisher(maxsize=100)

    for _ in range(300):
        await publisher.publish("processing", message)

    assert publisher.pending("processing") == 100
    assert publisher.dropped == 200


def test_in_memory_publisher_requires_positive_bound():
    with pytest.raises(ValueError):
        InMemoryStagePublisher(maxsize=0)


@pytest.mark.asyncio
async def test_logging_publisher_keeps_nothing(message):
    publisher = LoggingStagePublisher()

    for _ in range(300):
        await publisher.publish("processing", message)

    assert vars(publisher) == {}
