"""Application configuration using Pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Deployment-level knobs only. Per-analysis thresholds travel with each
    request as an AnalysisConfig.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_PEAKS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/chat_peaks.db",
        description="Async SQLAlchemy connection URL for stored analyses",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")

    # Content source
    chat_log_dir: Path = Field(
        default=Path("./data/chat_logs"),
        description="Directory of <recording_id>.json chat replay exports",
    )
    known_emotes: list[str] = Field(
        default_factory=lambda: [
            "Kappa",
            "PogChamp",
            "Pog",
            "LUL",
            "KEKW",
            "monkaS",
            "EZ",
            "Clap",
            "PepeHands",
            "5Head",
        ],
        description="Emote names recognized in message text",
    )

    # Engine
    engine_max_workers: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Threads used for per-width timeline and detection work",
    )

    # API
    api_prefix: str = Field(default="/api/v1", description="API route prefix")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")

    # Logfire
    logfire_enabled: bool = Field(default=False, description="Export traces to Logfire")
    logfire_service_name: str = Field(
        default="chat-peaks", description="Service name reported to Logfire"
    )
    logfire_token: Optional[str] = Field(default=None, description="Logfire write token")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
