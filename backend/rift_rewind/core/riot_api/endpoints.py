"""Riot API endpoint definitions and routing information."""

from typing import Optional
from urllib.parse import quote

from .constants import Region, routing_for_platform


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(self, platform: str):
        """
        Initialize endpoint configuration.

        Args:
            platform: Platform the player belongs to (e.g. "NA1"); selects the regional cluster
        """
        self.platform = platform.upper()
        self.region = routing_for_platform(self.platform)

    def get_base_url(self, region: Optional[Region] = None) -> str:
        """Get base URL for regional endpoints."""
        region = region or self.region
        region_str = region.value if isinstance(region, Region) else region
        return f"https://{region_str}.api.riotgames.com"

    # Account endpoints (Regional)
    def account_by_riot_id(self, game_name: str, tag_line: str) -> str:
        """Get account by Riot ID endpoint."""
        return (
            f"{self.get_base_url()}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )

    # Match endpoints (Regional)
    def match_ids_by_puuid(self, puuid: str) -> str:
        """Get match ids by PUUID endpoint; paging goes in the query string."""
        return f"{self.get_base_url()}/lol/match/v5/matches/by-puuid/{puuid}/ids"

    def match_by_id(self, match_id: str) -> str:
        """Get match details endpoint."""
        return f"{self.get_base_url()}/lol/match/v5/matches/{match_id}"
