"""
Riot ID resolution.

Game names are not unique, Riot IDs (``name#tag``) are. When the user types
only a game name, the tag lines players most commonly keep for the region are
tried in order. Guessing is a convenience: the first tag that Riot does not
answer with 404 decides the outcome.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

import structlog

from rift_rewind.core.exceptions import PlayerNotFoundError, RiotIdNotFoundError
from rift_rewind.core.riot_api.constants import COMMON_TAG_LINES, RIOT_ID_SEPARATOR
from rift_rewind.core.riot_api.errors import NotFoundError

from .models import PlayerIdentity

if TYPE_CHECKING:
    from rift_rewind.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)

_TRAILING_DIGIT = re.compile(r"\d$")


def candidate_tag_lines(
    region: str, tag_table: Optional[Mapping[str, List[str]]] = None
) -> List[str]:
    """Tag lines to try for a bare game name, most likely first.

    Known regions use the table; anything else falls back to the region code
    itself and the region code without its trailing digit.
    """
    table = COMMON_TAG_LINES if tag_table is None else tag_table
    known = table.get(region.upper())
    if known:
        return list(known)

    fallback = [region, _TRAILING_DIGIT.sub("", region)]
    return list(dict.fromkeys(tag for tag in fallback if tag))


def split_riot_id(raw_name: str) -> tuple[str, Optional[str]]:
    """Split user input into ``(game_name, tag_line)``; tag is None when absent."""
    if RIOT_ID_SEPARATOR not in raw_name:
        return raw_name.strip(), None
    game_name, _, tag_line = raw_name.partition(RIOT_ID_SEPARATOR)
    return game_name.strip(), tag_line.strip()


class RiotIdResolver:
    """Turns user-typed names into resolved Riot accounts."""

    def __init__(
        self,
        client: "RiotAPIClient",
        tag_table: Optional[Dict[str, List[str]]] = None,
    ):
        """
        Initialize resolver.

        :param client: Riot API client used for account lookups
        :param tag_table: Region → common tag lines; defaults to COMMON_TAG_LINES
        """
        self._client = client
        self._tag_table = tag_table

    async def resolve(self, raw_name: str, region: str) -> PlayerIdentity:
        """
        Resolve ``raw_name`` (``name`` or ``name#tag``) to a PlayerIdentity.

        :raises RiotIdNotFoundError: explicit ``name#tag`` does not exist
        :raises PlayerNotFoundError: no guessed tag line matched
        :raises RiotAPIError: any other upstream failure, never swallowed
        """
        game_name, tag_line = split_riot_id(raw_name)

        if tag_line:
            return await self._resolve_explicit(game_name, tag_line)

        return await self._resolve_guessed(game_name, region)

    async def _lookup(self, game_name: str, tag_line: str) -> PlayerIdentity:
        account = await self._client.get_account_by_riot_id(game_name, tag_line)
        return PlayerIdentity(
            puuid=account.puuid,
            game_name=account.game_name,
            tag_line=account.tag_line,
        )

    async def _resolve_explicit(self, game_name: str, tag_line: str) -> PlayerIdentity:
        try:
            identity = await self._lookup(game_name, tag_line)
        except NotFoundError:
            logger.info(
                "Riot ID not found", game_name=game_name, tag_line=tag_line
            )
            raise RiotIdNotFoundError(game_name, tag_line)

        logger.info("Found player", riot_id=identity.riot_id, puuid=identity.puuid)
        return identity

    async def _resolve_guessed(self, game_name: str, region: str) -> PlayerIdentity:
        tried: List[str] = []

        for tag_line in candidate_tag_lines(region, self._tag_table):
            riot_id = f"{game_name}{RIOT_ID_SEPARATOR}{tag_line}"
            tried.append(riot_id)
            logger.debug("Trying Riot ID", riot_id=riot_id)
            try:
                identity = await self._lookup(game_name, tag_line)
            except NotFoundError:
                continue

            logger.info(
                "Found player",
                riot_id=identity.riot_id,
                puuid=identity.puuid,
                guessed_tag=tag_line,
                attempts=len(tried),
            )
            return identity

        logger.info(
            "Player not found with any common tag line",
            game_name=game_name,
            region=region,
            tried=tried,
        )
        raise PlayerNotFoundError(game_name, region, suggested_formats=tried)
