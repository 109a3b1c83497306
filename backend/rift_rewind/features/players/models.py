"""Player domain models for ingestion."""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from rift_rewind.core.riot_api.constants import RIOT_ID_SEPARATOR

# Player records are keyed by region plus this many leading PUUID characters.
PLAYER_ID_PUUID_PREFIX = 8


class PlayerIdentity(BaseModel):
    """A resolved Riot account.

    ``puuid`` never changes once resolved; ``game_name`` and ``tag_line`` hold
    the canonical casing returned by Riot, not what the user typed.
    """

    puuid: str
    game_name: str
    tag_line: str

    model_config = ConfigDict(frozen=True)

    @property
    def riot_id(self) -> str:
        """Riot ID in ``name#tag`` form."""
        return f"{self.game_name}{RIOT_ID_SEPARATOR}{self.tag_line}"


def build_player_id(region: str, puuid: str) -> str:
    """Record key for a player; a lossy prefix, so collisions are possible."""
    return f"{region}_{puuid[:PLAYER_ID_PUUID_PREFIX]}"


class PlayerRecord(BaseModel):
    """Player item written to the players table on every ingestion run."""

    player_id: str = Field(..., alias="playerId")
    puuid: str
    summoner_name: str = Field(..., alias="summonerName")
    region: str
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="lastUpdated"
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def for_identity(cls, identity: PlayerIdentity, region: str) -> "PlayerRecord":
        """Build the record for a freshly resolved identity."""
        return cls(
            player_id=build_player_id(region, identity.puuid),
            puuid=identity.puuid,
            summoner_name=identity.riot_id,
            region=region,
        )

    def to_item(self) -> Dict[str, Any]:
        """Item representation for the record store."""
        item = self.model_dump(by_alias=True)
        item["lastUpdated"] = self.last_updated.isoformat()
        return item
