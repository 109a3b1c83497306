"""Riot API HTTP client with bounded concurrency, retries, and key handling."""

import asyncio
from typing import Any, Dict, Optional

import httpx
import structlog

from .backoff import BackoffPolicy
from .constants import MAX_MATCH_IDS_PER_CALL
from .credentials import CachedCredentialProvider
from .endpoints import RiotAPIEndpoints
from .errors import NetworkError, RiotAPIError, ServerError, error_for_status
from .executor import RateLimitedExecutor
from .models import AccountDTO, MatchListDTO

logger = structlog.get_logger(__name__)


class RiotAPIClient:
    """Riot API client for account lookup and match-v5 history."""

    def __init__(
        self,
        credentials: CachedCredentialProvider,
        platform: str,
        executor: Optional[RateLimitedExecutor] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            credentials: Provider of the X-Riot-Token value
            platform: Player platform (e.g. "NA1"), selects the regional cluster
            executor: Concurrency-capped executor every request goes through
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (mock transports in tests)
        """
        self.credentials = credentials
        self.endpoints = RiotAPIEndpoints(platform)
        self.platform = self.endpoints.platform
        self.executor = executor or RateLimitedExecutor()
        self.timeout = timeout
        self._transport = transport

        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        credentials: CachedCredentialProvider,
        platform: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RiotAPIClient":
        """Build a client whose executor and retry policy follow ``settings``."""
        backoff = BackoffPolicy(
            max_retries=settings.riot_max_retries,
            base_delay=settings.riot_retry_base_delay,
        )
        executor = RateLimitedExecutor(
            max_concurrent=settings.riot_max_concurrent_requests, backoff=backoff
        )
        return cls(
            credentials=credentials,
            platform=platform,
            executor=executor,
            timeout=settings.riot_request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RiotAPIClient":
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    self.session = httpx.AsyncClient(
                        headers={
                            "Content-Type": "application/json",
                            "User-Agent": "RiftRewind-Ingestion/1.0",
                        },
                        timeout=httpx.Timeout(self.timeout),
                        transport=self._transport,
                    )
                    logger.info(
                        "Riot API client session started",
                        platform=self.platform,
                        region=self.endpoints.region.value,
                    )

    async def close(self) -> None:
        """Close the executor and the httpx session."""
        await self.executor.close()
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    async def _send_once(
        self, url: str, params: Optional[Dict[str, Any]], api_key: str
    ) -> httpx.Response:
        if self.session is None:
            raise RiotAPIError("Session not initialized")
        try:
            return await self.session.get(
                url, params=params, headers={"X-Riot-Token": api_key}
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {url}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request failed: {str(e)}") from e

    @staticmethod
    def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    async def _send(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """One logical request: a single HTTP call, plus one re-auth on 401/403."""
        api_key = await self.credentials.get()
        response = await self._send_once(url, params, api_key)

        if response.status_code in (401, 403):
            logger.warning(
                "Riot API rejected key, reloading credentials",
                status_code=response.status_code,
            )
            self.credentials.invalidate()
            api_key = await self.credentials.get()
            response = await self._send_once(url, params, api_key)

        if response.status_code != 200:
            raise error_for_status(
                response.status_code,
                response.headers,
                self._json_or_empty(response),
            )

        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                "Malformed response body", status_code=response.status_code
            ) from e

    async def _make_request(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make a GET request through the executor.

        Raises:
            RiotAPIError: For API errors that survive the retry policy
        """
        await self.start_session()
        return await self.executor.run(lambda: self._send(url, params))

    # Account endpoints
    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> AccountDTO:
        """Get account by Riot ID (gameName#tagLine)."""
        url = self.endpoints.account_by_riot_id(game_name, tag_line)
        response = await self._make_request(url)
        return AccountDTO(**response)

    # Match endpoints
    async def get_match_ids(
        self, puuid: str, start: int = 0, count: int = MAX_MATCH_IDS_PER_CALL
    ) -> MatchListDTO:
        """Get one page of match ids for a player, newest first."""
        count = max(0, min(count, MAX_MATCH_IDS_PER_CALL))
        url = self.endpoints.match_ids_by_puuid(puuid)
        response = await self._make_request(url, {"start": start, "count": count})

        if isinstance(response, list):
            match_ids = response
        else:
            match_ids = response.get("matchIds", [])

        return MatchListDTO(match_ids=match_ids, start=start, count=count, puuid=puuid)

    async def get_match(self, match_id: str) -> Dict[str, Any]:
        """Get the full match payload, unmodified."""
        url = self.endpoints.match_by_id(match_id)
        return await self._make_request(url)
