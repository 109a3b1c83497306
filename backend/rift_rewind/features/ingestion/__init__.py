"""Match-history ingestion feature."""

from .publisher import (
    InMemoryStagePublisher,
    InvokerStagePublisher,
    LoggingStagePublisher,
    StagePublisher,
)
from .router import router as ingestion_router
from .runner import IngestionRunner
from .schemas import IngestionRequest, IngestionResult, ProcessingMessage
from .service import IngestionService, IngestionStage

__all__ = [
    "InMemoryStagePublisher",
    "InvokerStagePublisher",
    "LoggingStagePublisher",
    "StagePublisher",
    "ingestion_router",
    "IngestionRunner",
    "IngestionRequest",
    "IngestionResult",
    "ProcessingMessage",
    "IngestionService",
    "IngestionStage",
]
