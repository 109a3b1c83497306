"""Configuration settings for the ingestion service."""

from __future__ import annotations

from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    # Riot API Configuration
    riot_api_key: str = Field(default="", description="Riot API key (X-Riot-Token)")
    riot_max_concurrent_requests: int = Field(default=10, ge=1)
    riot_max_retries: int = Field(default=3, ge=0)
    riot_retry_base_delay: float = Field(
        default=1.0, ge=0, description="Seconds before the first retry, doubled per attempt"
    )
    riot_request_timeout: float = Field(default=10.0, gt=0)

    # Ingestion Configuration
    raw_bucket: str = Field(default="rift-rewind-raw")
    players_table: str = Field(default="rift-rewind-players")
    processing_stage: str = Field(default="rift-rewind-processing")
    match_fetch_pause: float = Field(
        default=0.1, ge=0, description="Seconds between successive match fetches"
    )
    max_matches_per_request: int = Field(default=100, ge=1, le=100)
    default_max_matches: int = Field(default=50, ge=1)
    local_data_dir: str = Field(default="data/raw")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="forbid",  # Forbid extra fields for better type safety
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
