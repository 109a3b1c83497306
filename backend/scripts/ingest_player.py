#!/usr/bin/env python3
"""
Run one ingestion from the command line and keep raw matches on disk.

Usage:
    python scripts/ingest_player.py "Faker#KR1" KR [max_matches]

Raw matches land under LOCAL_DATA_DIR (default data/raw); processing messages
are counted but not delivered anywhere.
"""

import asyncio
import json
import sys

import structlog

from rift_rewind.core import (
    IngestionError,
    InMemoryRecordStore,
    LocalDirectoryObjectStore,
    PlayerNotFoundError,
    RiotIdNotFoundError,
    get_global_settings,
)
from rift_rewind.core.logging import setup_logging
from rift_rewind.core.riot_api.credentials import static_credentials
from rift_rewind.features.ingestion import (
    IngestionRequest,
    IngestionRunner,
    InMemoryStagePublisher,
)

logger = structlog.get_logger(__name__)


def parse_args(argv: list[str]) -> IngestionRequest:
    """Build the request from positional arguments."""
    if len(argv) < 2:
        print(__doc__)
        sys.exit(2)

    summoner_name, region = argv[0], argv[1]
    max_matches = int(argv[2]) if len(argv) > 2 else get_global_settings().default_max_matches
    return IngestionRequest(
        summoner_name=summoner_name, region=region, max_matches=max_matches
    )


async def ingest(request: IngestionRequest) -> int:
    """Run the ingestion and print the result; returns the exit code."""
    settings = get_global_settings()
    publisher = InMemoryStagePublisher()
    runner = IngestionRunner(
        settings=settings,
        credentials=static_credentials(settings.riot_api_key),
        object_store=LocalDirectoryObjectStore(settings.local_data_dir),
        record_store=InMemoryRecordStore(),
        publisher=publisher,
    )

    try:
        result = await runner.run(request)
    except (RiotIdNotFoundError, PlayerNotFoundError) as e:
        print(f"\nError: {e.message}")
        for suggestion in getattr(e, "suggested_formats", []):
            print(f"   tried: {suggestion}")
        return 1
    except IngestionError as e:
        print(f"\nError: {e}")
        return 1

    print(json.dumps(result.model_dump(by_alias=True), indent=2))
    logger.info(
        "Processing messages queued",
        pending=publisher.pending(settings.processing_stage),
    )
    return 0


def main() -> None:
    """Main entry point."""
    settings = get_global_settings()
    setup_logging(settings.log_level)
    request = parse_args(sys.argv[1:])
    try:
        sys.exit(asyncio.run(ingest(request)))
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
