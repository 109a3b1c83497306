"""Pydantic models for Riot API response data."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)


class MatchListDTO(BaseModel):
    """Match id page, newest first."""

    match_ids: List[str] = Field(default_factory=list, alias="matchIds")
    start: int
    count: int
    puuid: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
