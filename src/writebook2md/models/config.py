"""Application configuration with Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import __version__


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WritebookConfig(BaseSettings):
    """Application configuration with environment variable support.

    Configuration can be set via:
    1. Environment variables (prefixed with WRITEBOOK_)
    2. .env file
    3. Direct instantiation

    Example:
        export WRITEBOOK_OUTPUT_DIR=/path/to/books
        export WRITEBOOK_LOG_LEVEL=DEBUG

        config = WritebookConfig()
        print(config.output_dir)  # /path/to/books
    """

    model_config = SettingsConfigDict(
        env_prefix="WRITEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Paths
    output_dir: Path = Field(
        default=Path("./output"), description="Root directory for converted books"
    )

    # HTTP settings
    timeout: int = Field(default=30, ge=1, le=300, description="HTTP request timeout in seconds")
    max_retries: int = Field(
        default=3, ge=0, le=10, description="Retry attempts on connection errors and timeouts"
    )
    user_agent: str = Field(default=f"writebook2md/{__version__}", description="User-Agent header")

    # Pipeline
    on_chapter_error: Literal["skip", "abort"] = Field(
        default="skip", description="What to do when a chapter page cannot be fetched"
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level and reject unknown names."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    def book_dir(self, book_slug: str) -> Path:
        """Directory a book with ``book_slug`` is written to."""
        return self.output_dir / book_slug
