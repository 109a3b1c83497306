"""Per-run wiring of the Riot client, resolver and ingestion service."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
import structlog

from rift_rewind.core.config import Settings
from rift_rewind.core.riot_api.client import RiotAPIClient
from rift_rewind.core.riot_api.credentials import CachedCredentialProvider
from rift_rewind.core.storage import ObjectStore, RecordStore
from rift_rewind.features.players.resolver import RiotIdResolver

from .publisher import StagePublisher
from .schemas import IngestionRequest, IngestionResult
from .service import IngestionService

logger = structlog.get_logger(__name__)


class IngestionRunner:
    """Long-lived collaborators plus a fresh client and executor per run."""

    def __init__(
        self,
        settings: Settings,
        credentials: CachedCredentialProvider,
        object_store: ObjectStore,
        record_store: RecordStore,
        publisher: StagePublisher,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.credentials = credentials
        self.object_store = object_store
        self.record_store = record_store
        self.publisher = publisher
        self._transport = transport

    @asynccontextmanager
    async def service_for(self, region: str) -> AsyncIterator[IngestionService]:
        """Yield a service bound to a new client for ``region``; the client is closed afterwards."""
        client = RiotAPIClient.from_settings(
            self.settings, self.credentials, platform=region, transport=self._transport
        )
        try:
            yield IngestionService.from_settings(
                self.settings,
                client=client,
                resolver=RiotIdResolver(client),
                object_store=self.object_store,
                record_store=self.record_store,
                publisher=self.publisher,
            )
        finally:
            await client.close()

    async def run(self, request: IngestionRequest) -> IngestionResult:
        """Ingest ``request`` end to end."""
        async with self.service_for(request.region) as service:
            return await service.ingest(request)
