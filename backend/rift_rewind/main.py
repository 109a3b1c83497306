"""Main FastAPI application for the Rift Rewind ingestion service."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rift_rewind.core import (
    InMemoryRecordStore,
    LocalDirectoryObjectStore,
    Settings,
    get_global_settings,
)
from rift_rewind.core.logging import setup_logging
from rift_rewind.core.riot_api.credentials import static_credentials
from rift_rewind.features.ingestion import (
    IngestionRunner,
    LoggingStagePublisher,
    ingestion_router,
)

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration() -> None:
    """Log Riot API key configuration status."""
    api_key = settings.riot_api_key
    if not api_key:
        logger.warning(
            "RIOT_API_KEY not configured! Set it in the environment or .env file.",
            hint="Get your key from https://developer.riotgames.com",
        )
    elif api_key.startswith("RGAPI-"):
        logger.info("Riot API key configured (development key detected)")
        logger.warning(
            "Development API keys expire every 24 hours!",
            hint="A rejected key is reloaded once before the request fails",
        )
    else:
        logger.info("Riot API key configured")


def build_ingestion_runner(settings: Settings) -> IngestionRunner:
    """Wire the runner used by the HTTP app; nothing in it holds messages."""
    return IngestionRunner(
        settings=settings,
        credentials=static_credentials(settings.riot_api_key),
        object_store=LocalDirectoryObjectStore(settings.local_data_dir),
        record_store=InMemoryRecordStore(),
        publisher=LoggingStagePublisher(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Rift Rewind ingestion service")
    _validate_api_key_configuration()
    if not hasattr(app.state, "ingestion_runner"):
        app.state.ingestion_runner = build_ingestion_runner(settings)
    yield
    logger.info("Shutting down Rift Rewind ingestion service")


app = FastAPI(
    title="Rift Rewind - Match Ingestion Service",
    description="Ingests League of Legends match history from the Riot API into raw storage.",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(ingestion_router, prefix="/api/v1")


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """Liveness probe"""
    return {"status": "healthy", "service": "rift-rewind-ingestion"}
