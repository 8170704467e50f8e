"""Settings read from the environment (SCRAPBOOK_*) and an optional .env file."""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging levels accepted for diagnostics."""

    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


class ScrapbookSettings(BaseSettings):
    """Defaults for command line options.

    Examples:
        # SCRAPBOOK_DOCKER_BINARY=podman SCRAPBOOK_TIMEOUT=30
        settings = ScrapbookSettings()
        settings.docker_binary  # "podman"
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRAPBOOK_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    docker_binary: str = Field(
        default="docker",
        min_length=1,
        description="Executable used to list local images.",
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds allowed for each image listing (unset: no limit).",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level for diagnostics written to stderr.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
