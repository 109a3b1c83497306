"""Player identity feature."""

from .models import PlayerIdentity, PlayerRecord, build_player_id
from .resolver import RiotIdResolver, candidate_tag_lines, split_riot_id

__all__ = [
    "PlayerIdentity",
    "PlayerRecord",
    "build_player_id",
    "RiotIdResolver",
    "candidate_tag_lines",
    "split_riot_id",
]
