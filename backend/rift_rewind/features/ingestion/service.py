"""Ingestion service - pulls a player's recent matches into raw storage.

One run:
1. Resolve the Riot ID to a PUUID
2. Upsert the player record
3. List recent match ids
4. Fetch and store each match (a failing match is skipped)
5. Publish one processing message per stored match (a failing publish is skipped)

Steps 1-3 are fatal when they fail. Raw matches are stored before any message
is published so a lost message can always be replayed from storage.
"""

from __future__ import annotations

import asyncio
import uuid
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, TypeVar

import structlog
from structlog import contextvars as structlog_contextvars

from rift_rewind.core.error_handling import handle_item_errors
from rift_rewind.core.exceptions import (
    IngestionError,
    PlayerNotFoundError,
    RiotIdNotFoundError,
)
from rift_rewind.core.riot_api.constants import MAX_MATCH_IDS_PER_CALL
from rift_rewind.core.storage import ObjectStore, RecordStore
from rift_rewind.features.matches.artifacts import ARTIFACT_CONTENT_TYPE, MatchArtifact
from rift_rewind.features.players.models import PlayerIdentity, PlayerRecord

from .publisher import StagePublisher
from .schemas import IngestionRequest, IngestionResult, ProcessingMessage

if TYPE_CHECKING:
    from rift_rewind.core.config import Settings
    from rift_rewind.core.riot_api.client import RiotAPIClient
    from rift_rewind.features.players.resolver import RiotIdResolver

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class IngestionStage(str, Enum):
    """Where an ingestion run currently is."""

    START = "start"
    RESOLVING_IDENTITY = "resolving_identity"
    PERSISTING_PLAYER = "persisting_player"
    LISTING_MATCHES = "listing_matches"
    FETCHING_MATCHES = "fetching_matches"
    NOTIFYING_DOWNSTREAM = "notifying_downstream"
    DONE = "done"
    ERROR = "error"


# Errors the caller can act on directly; they are not wrapped.
_USER_FACING_ERRORS = (PlayerNotFoundError, RiotIdNotFoundError)


class IngestionService:
    """Runs one ingestion per ``ingest`` call."""

    def __init__(
        self,
        client: "RiotAPIClient",
        resolver: "RiotIdResolver",
        object_store: ObjectStore,
        record_store: RecordStore,
        publisher: StagePublisher,
        processing_stage: str = "rift-rewind-processing",
        fetch_pause: float = 0.1,
        max_ids_per_call: int = MAX_MATCH_IDS_PER_CALL,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        """
        Initialize ingestion service.

        :param client: Riot API client, shared by the resolver
        :param resolver: Riot ID resolver
        :param object_store: Raw match storage
        :param record_store: Player record storage
        :param publisher: Downstream stage publisher
        :param processing_stage: Name of the stage receiving stored matches
        :param fetch_pause: Seconds between successive match fetches
        :param max_ids_per_call: Cap on the match id listing size
        :param sleep: Awaitable sleep, injectable for tests
        """
        self.client = client
        self.resolver = resolver
        self.object_store = object_store
        self.record_store = record_store
        self.publisher = publisher
        self.processing_stage = processing_stage
        self.fetch_pause = fetch_pause
        self.max_ids_per_call = max_ids_per_call
        self._sleep = sleep or asyncio.sleep
        self.stage = IngestionStage.START

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        client: "RiotAPIClient",
        resolver: "RiotIdResolver",
        object_store: ObjectStore,
        record_store: RecordStore,
        publisher: StagePublisher,
    ) -> "IngestionService":
        """Build a service using the configured stage name and pacing."""
        return cls(
            client=client,
            resolver=resolver,
            object_store=object_store,
            record_store=record_store,
            publisher=publisher,
            processing_stage=settings.processing_stage,
            fetch_pause=settings.match_fetch_pause,
            max_ids_per_call=settings.max_matches_per_request,
        )

    async def ingest(self, request: IngestionRequest) -> IngestionResult:
        """
        Run a full ingestion for ``request``.

        :raises PlayerNotFoundError: bare game name matched no common tag line
        :raises RiotIdNotFoundError: explicit Riot ID does not exist
        :raises IngestionError: identity, player record or match listing failed
        """
        run_id = uuid.uuid4().hex[:12]
        with structlog_contextvars.bound_contextvars(
            run_id=run_id, region=request.region
        ):
            logger.info(
                "Starting ingestion",
                summoner_name=request.summoner_name,
                max_matches=request.max_matches,
            )

            identity = await self._fatal(
                IngestionStage.RESOLVING_IDENTITY,
                lambda: self.resolver.resolve(request.summoner_name, request.region),
            )
            await self._fatal(
                IngestionStage.PERSISTING_PLAYER,
                lambda: self._save_player(identity, request.region),
            )
            match_ids = await self._fatal(
                IngestionStage.LISTING_MATCHES,
                lambda: self._list_match_ids(identity, request.max_matches),
            )

            self.stage = IngestionStage.FETCHING_MATCHES
            stored = await self._fetch_matches(
                identity, request.region, match_ids[: request.max_matches]
            )

            self.stage = IngestionStage.NOTIFYING_DOWNSTREAM
            await self._notify_downstream(identity, request.region, stored)

            self.stage = IngestionStage.DONE
            result = IngestionResult(
                puuid=identity.puuid,
                riot_id=identity.riot_id,
                region=request.region,
                matches_fetched=len(stored),
                total_matches_available=len(match_ids),
            )
            logger.info(
                "Ingestion completed",
                puuid=identity.puuid,
                riot_id=identity.riot_id,
                matches_fetched=result.matches_fetched,
                total_matches=result.total_matches_available,
            )
            return result

    async def _fatal(
        self, stage: IngestionStage, step: Callable[[], Awaitable[T]]
    ) -> T:
        """Run a step whose failure aborts the whole run."""
        self.stage = stage
        try:
            return await step()
        except _USER_FACING_ERRORS:
            self.stage = IngestionStage.ERROR
            raise
        except Exception as e:
            self.stage = IngestionStage.ERROR
            logger.error(
                "Ingestion aborted",
                stage=stage.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise IngestionError(
                f"Ingestion failed while {stage.value.replace('_', ' ')}: {e}",
                stage=stage.value,
                original_error=e,
            ) from e

    async def _save_player(self, identity: PlayerIdentity, region: str) -> PlayerRecord:
        record = PlayerRecord.for_identity(identity, region)
        await self.record_store.put(record.to_item())
        logger.info(
            "Player saved",
            player_id=record.player_id,
            puuid=identity.puuid,
            riot_id=identity.riot_id,
        )
        return record

    async def _list_match_ids(
        self, identity: PlayerIdentity, max_matches: int
    ) -> List[str]:
        count = min(max_matches, self.max_ids_per_call)
        match_list = await self.client.get_match_ids(identity.puuid, start=0, count=count)
        logger.info("Found matches", count=len(match_list.match_ids))
        return list(match_list.match_ids)

    async def _fetch_matches(
        self, identity: PlayerIdentity, region: str, match_ids: List[str]
    ) -> List[str]:
        """Fetch and store matches one at a time, in listing order."""
        stored: List[str] = []
        total = len(match_ids)

        for index, match_id in enumerate(match_ids):
            logger.debug(
                "Fetching match", match_id=match_id, position=index + 1, total=total
            )
            key = await self._fetch_and_store(identity, region, match_id)
            if key is not None:
                stored.append(match_id)

            if index < total - 1:
                await self._sleep(self.fetch_pause)

        logger.info(
            "Stored matches", stored=len(stored), failed=total - len(stored)
        )
        return stored

    @handle_item_errors(
        operation="fetch match",
        log_context=lambda self, identity, region, match_id: {"match_id": match_id},
    )
    async def _fetch_and_store(
        self, identity: PlayerIdentity, region: str, match_id: str
    ) -> str:
        payload = await self.client.get_match(match_id)
        artifact = MatchArtifact(
            region=region, puuid=identity.puuid, match_id=match_id, payload=payload
        )
        await self.object_store.put(
            artifact.key, artifact.to_bytes(), content_type=ARTIFACT_CONTENT_TYPE
        )
        logger.debug("Stored match", match_id=match_id, key=artifact.key)
        return artifact.key

    async def _notify_downstream(
        self, identity: PlayerIdentity, region: str, match_ids: List[str]
    ) -> int:
        if not match_ids:
            return 0

        logger.info(
            "Triggering processing",
            stage=self.processing_stage,
            matches=len(match_ids),
        )
        published = 0
        for match_id in match_ids:
            if await self._publish(identity, region, match_id):
                published += 1
        return published

    @handle_item_errors(
        operation="trigger processing",
        log_context=lambda self, identity, region, match_id: {"match_id": match_id},
    )
    async def _publish(self, identity: PlayerIdentity, region: str, match_id: str) -> bool:
        message = ProcessingMessage(puuid=identity.puuid, match_id=match_id, region=region)
        await self.publisher.publish(self.processing_stage, message)
        return True
