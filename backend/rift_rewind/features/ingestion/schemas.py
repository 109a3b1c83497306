"""Pydantic schemas for ingestion requests, results and downstream messages."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rift_rewind.core.riot_api.constants import RIOT_ID_SEPARATOR


class IngestionRequest(BaseModel):
    """Ask to ingest recent matches for one player."""

    summoner_name: str = Field(
        ...,
        alias="summonerName",
        min_length=1,
        description='Game name, optionally with tag line ("Faker" or "Faker#KR1")',
    )
    region: str = Field(..., min_length=1, description="Platform code, e.g. NA1")
    max_matches: int = Field(
        default=50,
        alias="maxMatches",
        ge=1,
        description="Most recent matches to ingest; at most 100 ids are listed",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("summoner_name")
    @classmethod
    def validate_summoner_name(cls, v: str) -> str:
        """Reject input with an empty game name or an empty tag line after "#"."""
        v = v.strip()
        game_name, separator, tag_line = v.partition(RIOT_ID_SEPARATOR)
        if not game_name.strip():
            raise ValueError("Game name must not be empty")
        if separator and not tag_line.strip():
            raise ValueError('Tag line after "#" must not be empty')
        return v

    @field_validator("region")
    @classmethod
    def normalize_region(cls, v: str) -> str:
        """Platform codes are upper case."""
        return v.strip().upper()


class IngestionResult(BaseModel):
    """Summary of one ingestion run."""

    puuid: str
    riot_id: str = Field(..., alias="summonerName")
    region: str
    matches_fetched: int = Field(..., alias="matchesFetched")
    total_matches_available: int = Field(..., alias="totalMatches")
    message: str = "Ingestion completed successfully"

    model_config = ConfigDict(populate_by_name=True)


class ProcessingMessage(BaseModel):
    """Hand-off to the processing stage for one stored match."""

    puuid: str
    match_id: str = Field(..., alias="matchId")
    region: str

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error body returned by the ingestion endpoint."""

    error: str
    message: str
    suggested_formats: Optional[List[str]] = Field(None, alias="suggestedFormats")

    model_config = ConfigDict(populate_by_name=True)
