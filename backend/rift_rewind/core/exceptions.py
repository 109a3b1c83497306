"""
Service layer custom exceptions.

These carry enough context for the caller to act on a failed ingestion run,
for example which Riot IDs were tried before giving up.
"""

from typing import Any, Dict, List, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class IngestionError(ServiceException):
    """A fatal stage of an ingestion run failed."""

    def __init__(
        self,
        message: str,
        stage: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="IngestionService",
            operation=stage,
            context=context,
            original_error=original_error,
        )
        self.stage = stage


class PlayerNotFoundError(ServiceException):
    """No Riot ID could be resolved from a bare game name.

    ``suggested_formats`` lists every ``name#tag`` combination tried, so the
    user can retry with an explicit tag line.
    """

    def __init__(
        self,
        game_name: str,
        region: str,
        suggested_formats: Optional[List[str]] = None,
    ):
        super().__init__(
            message=(
                f'Summoner "{game_name}" not found in region {region}. '
                'Please use the full Riot ID format: "Name#TAG" '
                '(e.g., "Chovy#KR1", "Faker#KR1", "Doublelift#NA1"). '
                "You can find your Riot ID in the League client."
            ),
            service="RiotIdResolver",
            operation="resolve",
            context={"game_name": game_name, "region": region},
        )
        self.game_name = game_name
        self.region = region
        self.suggested_formats = suggested_formats or []


class RiotIdNotFoundError(ServiceException):
    """An explicit ``name#tag`` Riot ID does not exist."""

    def __init__(self, game_name: str, tag_line: str):
        super().__init__(
            message=(
                f'Summoner "{game_name}#{tag_line}" not found. '
                "Please verify the Riot ID is correct. You can find your Riot ID "
                'in the League client (it\'s displayed as "Name#TAG").'
            ),
            service="RiotIdResolver",
            operation="resolve",
            context={"game_name": game_name, "tag_line": tag_line},
        )
        self.game_name = game_name
        self.tag_line = tag_line
