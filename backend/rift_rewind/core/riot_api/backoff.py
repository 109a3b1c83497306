"""Retry with exponential backoff for Riot API requests."""

import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from .credentials import CredentialError
from .errors import ExhaustedRetriesError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
Sleep = Callable[[float], Awaitable[Any]]


def _status_of(error: BaseException) -> Optional[int]:
    """HTTP status carried by an error, None for transport failures."""
    return getattr(error, "status_code", None)


class BackoffPolicy:
    """Classify request failures and retry the transient ones.

    * 4xx other than 429 is the caller's fault and is raised at once.
    * 429 waits for ``Retry-After`` (or the exponential delay) and tries again.
      On the last attempt the loop ends and ``ExhaustedRetriesError`` is raised.
    * 5xx and errors without a status (network, timeout) are retried with
      ``base_delay * 2 ** attempt`` until ``max_retries`` is used up, then the
      original error is raised.
    * A missing or unloadable API key (CredentialError) is never retried.
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        sleep: Optional[Sleep] = None,
    ):
        """
        Initialize backoff policy.

        Args:
            max_retries: Retries after the first attempt
            base_delay: Seconds to wait before the first retry, doubled each attempt
            sleep: Awaitable sleep, injectable for tests
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep or asyncio.sleep

    def delay_for(self, attempt: int) -> float:
        """Exponential delay for a zero-based attempt index."""
        return self.base_delay * (2**attempt)

    async def execute(self, operation: Operation[T]) -> T:
        """Run ``operation`` until it succeeds or a terminal failure is reached."""
        last_error: Optional[BaseException] = None

        for attempt in range(self.max_retries + 1):
            try:
                return await operation()
            except CredentialError:
                raise
            except Exception as error:
                last_error = error
                status = _status_of(error)

                if status == 429:
                    retry_after = getattr(error, "retry_after", None)
                    delay = (
                        float(retry_after)
                        if retry_after is not None
                        else self.delay_for(attempt)
                    )
                    if attempt >= self.max_retries:
                        # nothing left to wait for
                        break
                    logger.warning(
                        "Rate limited, retrying",
                        attempt=attempt + 1,
                        max_attempts=self.max_retries + 1,
                        delay=delay,
                        retry_after=retry_after,
                    )
                    await self._sleep(delay)
                    continue

                if status is not None and 400 <= status < 500:
                    raise

                if attempt >= self.max_retries:
                    raise

                delay = self.delay_for(attempt)
                logger.warning(
                    "Request failed, retrying",
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1,
                    delay=delay,
                    status_code=status,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                await self._sleep(delay)

        logger.error(
            "Retry budget exhausted",
            attempts=self.max_retries + 1,
            error=str(last_error),
        )
        raise ExhaustedRetriesError(
            attempts=self.max_retries + 1, last_error=last_error
        )
