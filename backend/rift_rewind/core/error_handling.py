"""Error handling utilities for per-item work inside an ingestion run.

Provides a decorator that keeps one failing item (a match fetch, a downstream
publish) from aborting the loop it runs in.

Error Handling Strategy:
- critical=True: log with context and re-raise
- critical=False: log with context and return None
"""

import inspect
from functools import wraps
from typing import Any, Callable, Optional, ParamSpec, TypeVar

import structlog

from .riot_api.errors import RiotAPIError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def handle_item_errors(
    *,
    operation: str,
    critical: bool = False,
    log_context: Optional[Callable[..., dict[str, Any]]] = None,
):
    """Decorator giving async item handlers consistent failure logging.

    :param operation: Description of the operation (e.g., "fetch match").
    :param critical: If True, re-raise all exceptions. If False, log and return None.
    :param log_context: Optional function extracting context from args for logging.
                        Example: lambda self, match_id: {"match_id": match_id}

    Usage example::

        @handle_item_errors(
            operation="store match",
            log_context=lambda self, match_id: {"match_id": match_id},
        )
        async def _store_match(self, match_id: str) -> str:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError("handle_item_errors only wraps coroutine functions")

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            context = _extract_log_context(log_context, args, kwargs, func.__name__)
            try:
                return await func(*args, **kwargs)
            except Exception as error:
                _handle_error(error, operation, critical, context)
                return None  # For non-critical errors that don't re-raise

        return async_wrapper

    return decorator


def _extract_log_context(
    log_context: Optional[Callable], args: tuple, kwargs: dict, func_name: str
) -> dict:
    """Extract logging context from function arguments."""
    if not log_context:
        return {}

    try:
        return log_context(*args, **kwargs)
    except Exception as e:
        logger.warning(
            "Failed to extract log context",
            error=str(e),
            function=func_name,
        )
        return {}


def _handle_error(
    error: Exception, operation: str, critical: bool, context: dict
) -> None:
    """Log a failure with consistent fields and re-raise when critical."""
    logger.error(
        f"Failed to {operation}",
        error=str(error),
        error_type=type(error).__name__,
        status_code=error.status_code if isinstance(error, RiotAPIError) else None,
        **context,
    )
    if critical:
        raise error
