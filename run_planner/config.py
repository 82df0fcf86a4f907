"""Application configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "1.0.0"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

MIN_TRAINING_DAYS = 3
MAX_TRAINING_DAYS = 6


class Settings(BaseSettings):
    """Settings derived from RUN_PLANNER_* environment variables or a .env file."""

    log_level: str = Field(default="INFO")
    log_dir: Optional[Path] = Field(
        default=None,
        description="Directory for the log file (console logging only when unset).",
    )
    default_training_days: int = Field(
        default=5, ge=MIN_TRAINING_DAYS, le=MAX_TRAINING_DAYS
    )
    export_dir: Path = Field(default=Path("plans"))

    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",  # React dev server
            "http://localhost:5173",  # Vite dev server
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )

    model_config = SettingsConfigDict(
        env_prefix="RUN_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return upper


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    return Settings()
