"""Riot API key provider with in-memory memoization."""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)

KeyLoader = Callable[[], Awaitable[str]]


class CredentialError(RuntimeError):
    """The API key could not be loaded."""


class CachedCredentialProvider:
    """Load the API key once and reuse it until invalidated.

    The loader is whatever fetches the secret (environment, secrets manager,
    settings table); this class only owns the caching.
    """

    def __init__(self, loader: KeyLoader):
        self._loader = loader
        self._value: Optional[str] = None
        self._lock = asyncio.Lock()

    async def get(self) -> str:
        """Return the cached key, loading it on first use."""
        if self._value is None:
            async with self._lock:
                if self._value is None:
                    try:
                        value = await self._loader()
                    except CredentialError:
                        raise
                    except Exception as e:
                        logger.error("Failed to load Riot API key", error=str(e))
                        raise CredentialError("Failed to load Riot API key") from e
                    if not value:
                        raise CredentialError("Riot API key is empty")
                    self._value = value
                    logger.info("Riot API key loaded", api_key_prefix="[REDACTED]")
        return self._value

    def invalidate(self) -> None:
        """Drop the cached key so the next ``get`` reloads it."""
        if self._value is not None:
            logger.info("Riot API key invalidated")
        self._value = None


def static_credentials(api_key: str) -> CachedCredentialProvider:
    """Provider for a key that is already known (settings, tests)."""

    async def _load() -> str:
        if not api_key:
            raise CredentialError(
                "Riot API key not configured! Set RIOT_API_KEY in the environment or .env file."
            )
        return api_key

    return CachedCredentialProvider(_load)
