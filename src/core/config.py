"""Application settings using Pydantic Settings.

Values are read from environment variables prefixed with ``CHESS_`` (for example
``CHESS_DATABASE_URL`` or ``CHESS_DEBUG_INSPECT``), falling back to the defaults below.

Example:
    >>> from src.core.config import get_settings
    >>> get_settings().token_bytes
    32
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the game session service.

    Attributes:
        token_bytes: Number of random bytes behind every seat secret.
        database_url: SQLAlchemy URL. None keeps every game in process memory.
        database_echo: Let SQLAlchemy echo its SQL statements.
        list_limit_max: Largest page size accepted when listing recent games.
        pgn_event: Event name written in exported game records (followed by the game id).
        debug_inspect: Enables the debug accessor exposing seat occupants and token hashes.
        log_level: Level for the ``src`` logger tree.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHESS_",
        extra="ignore",
    )

    token_bytes: int = Field(default=32, ge=16)
    database_url: Optional[str] = None
    database_echo: bool = False
    list_limit_max: int = Field(default=100, ge=1)
    pgn_event: str = "Chess Game"
    debug_inspect: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, built from the environment on first use."""
    return Settings()
