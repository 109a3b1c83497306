"""Dependencies for the ingestion feature."""

from typing import Annotated

from fastapi import Depends, Request

from .runner import IngestionRunner


async def get_ingestion_runner(request: Request) -> IngestionRunner:
    """Get the ingestion runner created at application startup.

    :param request: Incoming request (gives access to ``app.state``)
    :returns: Shared ingestion runner
    """
    return request.app.state.ingestion_runner


# Type aliases for cleaner dependency injection
IngestionRunnerDep = Annotated[IngestionRunner, Depends(get_ingestion_runner)]

__all__ = ["get_ingestion_runner", "IngestionRunnerDep"]
