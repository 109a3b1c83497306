"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .exceptions import (
    ServiceException,
    IngestionError,
    PlayerNotFoundError,
    RiotIdNotFoundError,
)
from .storage import (
    ObjectStore,
    RecordStore,
    InMemoryObjectStore,
    InMemoryRecordStore,
    LocalDirectoryObjectStore,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Exceptions
    "ServiceException",
    "IngestionError",
    "PlayerNotFoundError",
    "RiotIdNotFoundError",
    # Storage
    "ObjectStore",
    "RecordStore",
    "InMemoryObjectStore",
    "InMemoryRecordStore",
    "LocalDirectoryObjectStore",
]
