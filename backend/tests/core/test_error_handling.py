"""
Tests for the per-item error handling decorator.
"""

from unittest.mock import MagicMock

import pytest

from rift_rewind.core import error_handling
from rift_rewind.core.error_handling import handle_item_errors
from rift_rewind.core.riot_api.errors import ServerError


class MatchWorker:
    def __init__(self, error=None):
        self.error = error

    @handle_item_errors(
        operation="fetch match",
        log_context=lambda self, match_id: {"match_id": match_id},
    )
    async def fetch(self, match_id: str) -> str:
        if self.error:
            raise self.error
        return match_id

    @handle_item_errors(operation="list matches", critical=True)
    async def list_matches(self) -> list:
        raise self.error


@pytest.mark.asyncio
async def test_success_passes_result_through():
    assert await MatchWorker().fetch("NA1_1") == "NA1_1"


@pytest.mark.asyncio
async def test_non_critical_failure_returns_none_and_logs(monkeypatch):
    logger = MagicMock()
    monkeypatch.setattr(error_handling, "logger", logger)
    worker = MatchWorker(error=ServerError("boom", status_code=500))

    assert await worker.fetch("NA1_2") is None

    logger.error.assert_called_once()
    args, kwargs = logger.error.call_args
    assert args == ("Failed to fetch match",)
    assert kwargs["match_id"] == "NA1_2"
    assert kwargs["status_code"] == 500
    assert kwargs["error_type"] == "ServerError"


@pytest.mark.asyncio
async def test_critical_failure_is_reraised():
    worker = MatchWorker(error=ValueError("bad"))

    with pytest.raises(ValueError):
        await worker.list_matches()


def test_sync_functions_rejected():
    with pytest.raises(TypeError):

        @handle_item_errors(operation="sync")
        def not_async():
            return None
