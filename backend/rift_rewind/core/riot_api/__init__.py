"""
Riot API client package for League of Legends match-history ingestion.

This package provides the HTTP client for the Riot API together with the
bounded-concurrency executor, retry policy, error taxonomy, and API key provider.
"""

from .backoff import BackoffPolicy
from .client import RiotAPIClient
from .credentials import CachedCredentialProvider, CredentialError, static_credentials
from .endpoints import RiotAPIEndpoints
from .errors import (
    RiotAPIError,
    ClientError,
    BadRequestError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    NetworkError,
    ExhaustedRetriesError,
    error_for_status,
)
from .executor import ExecutorClosedError, RateLimitedExecutor
from .models import AccountDTO, MatchListDTO

__all__ = [
    "BackoffPolicy",
    "RiotAPIClient",
    "CachedCredentialProvider",
    "CredentialError",
    "static_credentials",
    "RiotAPIEndpoints",
    "RiotAPIError",
    "ClientError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "NetworkError",
    "ExhaustedRetriesError",
    "error_for_status",
    "ExecutorClosedError",
    "RateLimitedExecutor",
    "AccountDTO",
    "MatchListDTO",
]
