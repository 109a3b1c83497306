"""Raw match artifacts as stored in the object store."""

import json
from typing import Any, Dict

from pydantic import BaseModel

ARTIFACT_CONTENT_TYPE = "application/json"


def artifact_key(region: str, puuid: str, match_id: str) -> str:
    """Object key for one player's copy of a match."""
    return f"{region}/{puuid}/{match_id}.json"


class MatchArtifact(BaseModel):
    """Full match payload exactly as Riot returned it."""

    region: str
    puuid: str
    match_id: str
    payload: Dict[str, Any]

    @property
    def key(self) -> str:
        return artifact_key(self.region, self.puuid, self.match_id)

    def to_bytes(self) -> bytes:
        return json.dumps(self.payload).encode("utf-8")
