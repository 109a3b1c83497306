from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from rift_rewind.core.exceptions import (
    IngestionError,
    PlayerNotFoundError,
    RiotIdNotFoundError,
)
from rift_rewind.core.riot_api.credentials import CredentialError
from rift_rewind.features.ingestion.dependencies import IngestionRunnerDep
from rift_rewind.features.ingestion.schemas import (
    ErrorResponse,
    IngestionRequest,
    IngestionResult,
)

router = APIRouter(prefix="/ingestion", tags=["ingestion"])


def _not_found(message: str, suggested_formats: list[str] | None = None) -> JSONResponse:
    body = ErrorResponse(
        error="Player not found",
        message=message,
        suggested_formats=suggested_formats,
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.post(
    "",
    response_model=IngestionResult,
    responses={404: {"model": ErrorResponse}},
)
async def ingest_player(request: IngestionRequest, runner: IngestionRunnerDep):
    """Fetch a player's recent matches into raw storage"""
    try:
        return await runner.run(request)
    except RiotIdNotFoundError as e:
        return _not_found(e.message)
    except PlayerNotFoundError as e:
        return _not_found(e.message, e.suggested_formats)
    except IngestionError as e:
        if isinstance(e.original_error, CredentialError):
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Riot API key unavailable: {str(e.original_error)}",
            )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message,
        )
