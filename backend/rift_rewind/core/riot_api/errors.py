"""Custom error classes for Riot API client."""

from typing import Optional, Dict, Any, Mapping


class RiotAPIError(Exception):
    """Base exception for Riot API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        """
        Initialize RiotAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 401, 403, 404, 429, 503, etc.)
            response_data: Raw response data from API
            retry_after: Seconds to wait before retry (for 429 errors)
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.response_data: Dict[str, Any] = response_data or {}
        self.retry_after: Optional[float] = retry_after
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code == 429 and self.retry_after:
            return f"Rate Limit Error {self.status_code}: {self.message} (Retry after: {self.retry_after}s)"
        if self.status_code:
            return f"Riot API Error {self.status_code}: {self.message}"
        return f"Riot API Error: {self.message}"


class ClientError(RiotAPIError):
    """Client error (4xx other than 429) - the request itself is wrong, never retried."""

    pass


class BadRequestError(ClientError):
    """Bad request (400) - invalid parameters."""

    pass


class AuthenticationError(ClientError):
    """Authentication error (401) - invalid or expired API key."""

    pass


class ForbiddenError(ClientError):
    """Forbidden error (403) - insufficient permissions or revoked key."""

    pass


class NotFoundError(ClientError):
    """Not found error (404) - resource doesn't exist."""

    pass


class RateLimitError(RiotAPIError):
    """Rate limit error (429) - can be retried after cooldown."""

    pass


class ServerError(RiotAPIError):
    """Server error (5xx) - transient, retried with backoff."""

    pass


class ServiceUnavailableError(ServerError):
    """Service unavailable (503) - Riot servers down."""

    pass


class NetworkError(RiotAPIError):
    """Transport failure or timeout - no HTTP status was received."""

    pass


class ExhaustedRetriesError(RiotAPIError):
    """Retry budget consumed without a successful response."""

    def __init__(
        self,
        message: str = "Max retries exceeded",
        attempts: int = 0,
        last_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


_CLIENT_ERRORS = {
    400: (BadRequestError, "Invalid request parameters"),
    401: (AuthenticationError, "Invalid API key"),
    403: (ForbiddenError, "Access forbidden"),
    404: (NotFoundError, "Resource not found"),
}


def parse_retry_after(headers: Mapping[str, str]) -> Optional[float]:
    """Read the Retry-After header (seconds), ignoring malformed values."""
    value = headers.get("Retry-After") or headers.get("retry-after")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def error_for_status(
    status: int,
    headers: Optional[Mapping[str, str]] = None,
    response_data: Optional[Dict[str, Any]] = None,
) -> RiotAPIError:
    """Build the RiotAPIError subclass matching an HTTP error status."""
    headers = headers or {}

    if status in _CLIENT_ERRORS:
        error_cls, message = _CLIENT_ERRORS[status]
        return error_cls(message, status_code=status, response_data=response_data)

    if status == 429:
        return RateLimitError(
            "Rate limit exceeded",
            status_code=status,
            response_data=response_data,
            retry_after=parse_retry_after(headers),
        )

    if 400 <= status < 500:
        return ClientError(
            f"Client error {status}", status_code=status, response_data=response_data
        )

    if status == 503:
        return ServiceUnavailableError(
            "Service unavailable", status_code=status, response_data=response_data
        )

    return ServerError(
        f"Server error {status}", status_code=status, response_data=response_data
    )
