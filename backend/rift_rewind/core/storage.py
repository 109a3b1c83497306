"""Persistence collaborators used by the ingestion run.

The deployed service writes raw matches to an object store and player records
to a key-value table. Only the narrow interface lives here, plus in-process
implementations for tests and local runs.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import structlog

logger = structlog.get_logger(__name__)


class ObjectStore(Protocol):
    """Write-only blob store (raw match artifacts)."""

    async def put(
        self, key: str, data: bytes, content_type: str = "application/json"
    ) -> None:
        """Store ``data`` under ``key``, replacing any previous object."""
        ...


class RecordStore(Protocol):
    """Key-value item store (player records)."""

    async def put(self, item: Dict[str, Any]) -> None:
        """Upsert ``item``; the store knows which attribute is the key."""
        ...


class InMemoryObjectStore:
    """Dict-backed object store."""

    def __init__(self) -> None:
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}

    async def put(
        self, key: str, data: bytes, content_type: str = "application/json"
    ) -> None:
        self.objects[key] = data
        self.content_types[key] = content_type

    def get(self, key: str) -> Optional[bytes]:
        return self.objects.get(key)


class LocalDirectoryObjectStore:
    """Object store writing one file per key below ``root``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Object key escapes store root: {key}")
        return path

    async def put(
        self, key: str, data: bytes, content_type: str = "application/json"
    ) -> None:
        path = self._path_for(key)
        await asyncio.to_thread(self._write, path, data)
        logger.debug("Object written", key=key, path=str(path), size=len(data))

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_bytes(data)
        tmp.replace(path)


class InMemoryRecordStore:
    """Dict-backed record store keyed by one attribute of each item."""

    def __init__(self, key_attribute: str = "playerId") -> None:
        self.key_attribute = key_attribute
        self.items: Dict[str, Dict[str, Any]] = {}

    async def put(self, item: Dict[str, Any]) -> None:
        try:
            key = item[self.key_attribute]
        except KeyError:
            raise ValueError(f"Item is missing key attribute {self.key_attribute!r}")
        self.items[key] = dict(item)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        return self.items.get(key)
