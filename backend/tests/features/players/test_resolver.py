"""
Tests for Riot ID resolution.
"""

import pytest
from unittest.mock import AsyncMock

from rift_rewind.core.exceptions import PlayerNotFoundError, RiotIdNotFoundError
from rift_rewind.core.riot_api.errors import NotFoundError, ServerError
from rift_rewind.core.riot_api.models import AccountDTO
from rift_rewind.features.players.resolver import (
    RiotIdResolver,
    candidate_tag_lines,
    split_riot_id,
)


def account(game_name: str, tag_line: str, puuid: str = "puuid-ashe-0001") -> AccountDTO:
    return AccountDTO(puuid=puuid, game_name=game_name, tag_line=tag_line)


def not_found() -> NotFoundError:
    return NotFoundError("Data not found", status_code=404)


@pytest.fixture
def mock_client():
    client = AsyncMock()
    client.get_account_by_riot_id = AsyncMock()
    return client


@pytest.fixture
def resolver(mock_client):
    return RiotIdResolver(mock_client)


def tried_tags(mock_client) -> list[str]:
    return [call.args[1] for call in mock_client.get_account_by_riot_id.await_args_list]


class TestSplitRiotId:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Ashe", ("Ashe", None)),
            ("Ashe#NA1", ("Ashe", "NA1")),
            (" Hide on bush # KR1 ", ("Hide on bush", "KR1")),
            ("Ashe#", ("Ashe", "")),
        ],
    )
    def test_split(self, raw, expected):
        assert split_riot_id(raw) == expected


class TestCandidateTagLines:
    def test_known_region(self):
        assert candidate_tag_lines("NA1") == ["NA1", "NA", "na1"]

    def test_lowercase_region_uses_table(self):
        assert candidate_tag_lines("euw1") == ["EUW", "EUW1", "euw"]

    @pytest.mark.parametrize(
        "region,expected",
        [("PH2", ["PH2", "PH"]), ("XX", ["XX"]), ("SG2", ["SG2", "SG"])],
    )
    def test_unknown_region_fallback(self, region, expected):
        assert candidate_tag_lines(region) == expected

    def test_custom_table(self):
        assert candidate_tag_lines("NA1", {"NA1": ["ONLY"]}) == ["ONLY"]


class TestRiotIdResolver:
    @pytest.mark.asyncio
    async def test_explicit_riot_id(self, resolver, mock_client):
        mock_client.get_account_by_riot_id.return_value = account("Ashe", "NA1")

        identity = await resolver.resolve("Ashe#NA1", "NA1")

        assert identity.puuid == "puuid-ashe-0001"
        assert identity.riot_id == "Ashe#NA1"
        mock_client.get_account_by_riot_id.assert_awaited_once_with("Ashe", "NA1")

    @pytest.mark.asyncio
    async def test_explicit_riot_id_not_found_fails_fast(self, resolver, mock_client):
        """A missing explicit Riot ID is not retried with guessed tags."""
        mock_client.get_account_by_riot_id.side_effect = not_found()

        with pytest.raises(RiotIdNotFoundError) as exc_info:
            await resolver.resolve("Ashe#XYZ", "NA1")

        assert exc_info.value.game_name == "Ashe"
        assert exc_info.value.tag_line == "XYZ"
        assert mock_client.get_account_by_riot_id.await_count == 1

    @pytest.mark.asyncio
    async def test_explicit_riot_id_upstream_error_propagates(self, resolver, mock_client):
        mock_client.get_account_by_riot_id.side_effect = ServerError("boom", status_code=500)

        with pytest.raises(ServerError):
            await resolver.resolve("Ashe#NA1", "NA1")

    @pytest.mark.asyncio
    async def test_guessed_tag_uses_canonical_names(self, resolver, mock_client):
        """The second candidate matches; Riot's casing wins over the input."""
        mock_client.get_account_by_riot_id.side_effect = [
            not_found(),
            account("Ashe", "NA"),
        ]

        identity = await resolver.resolve("ashe", "NA1")

        assert identity.riot_id == "Ashe#NA"
        assert tried_tags(mock_client) == ["NA1", "NA"]

    @pytest.mark.asyncio
    async def test_all_guesses_fail(self, resolver, mock_client):
        mock_client.get_account_by_riot_id.side_effect = not_found()

        with pytest.raises(PlayerNotFoundError) as exc_info:
            await resolver.resolve("Ashe", "NA1")

        assert exc_info.value.suggested_formats == ["Ashe#NA1", "Ashe#NA", "Ashe#na1"]
        assert exc_info.value.region == "NA1"
        assert "Name#TAG" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_404_error_stops_guessing(self, resolver, mock_client):
        """Only 404 moves on to the next candidate."""
        mock_client.get_account_by_riot_id.side_effect = [
            not_found(),
            ServerError("boom", status_code=503),
            account("Ashe", "na1"),
        ]

        with pytest.raises(ServerError):
            await resolver.resolve("Ashe", "NA1")

        assert tried_tags(mock_client) == ["NA1", "NA"]

    @pytest.mark.asyncio
    async def test_unknown_region_guesses_region_codes(self, resolver, mock_client):
        mock_client.get_account_by_riot_id.side_effect = not_found()

        with pytest.raises(PlayerNotFoundError) as exc_info:
            await resolver.resolve("Ashe", "PH2")

        assert exc_info.value.suggested_formats == ["Ashe#PH2", "Ashe#PH"]

    @pytest.mark.asyncio
    async def test_empty_tag_line_is_guessed(self, resolver, mock_client):
        """A trailing "#" never produces a lookup with an empty tag line."""
        mock_client.get_account_by_riot_id.return_value = account("Ashe", "NA1")

        identity = await resolver.resolve("Ashe#", "NA1")

        assert identity.riot_id == "Ashe#NA1"
        assert "" not in tried_tags(mock_client)
