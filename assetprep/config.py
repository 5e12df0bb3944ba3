"""Preparation settings with environment variable support."""

import os
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from assetprep.files.strategy import Strategy, parse_strategies


def _default_hash_workers() -> int:
    """Return a sensible default for hash workers."""
    cpu_count = os.cpu_count() or 1
    return max(1, min(32, cpu_count))


class Settings(BaseSettings):
    """Preparation settings loaded from environment variables.

    Loads from environment (ASSETPREP_*), .env file, or defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASSETPREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Strategies
    strategies: Annotated[list[Strategy], NoDecode] = Field(default_factory=lambda: [Strategy.CLONE])
    gzip_level: int = Field(default=9, ge=1, le=9)
    staging_dir: Path | None = None

    # Discovery
    include_hidden: bool = False

    # Planning
    delete_orphans: bool = False

    # Performance
    max_hash_workers: int = Field(default_factory=_default_hash_workers, ge=1)
    max_stat_concurrency: int = Field(default=100, ge=1)
    chunk_size: int = Field(default=64 * 1024, ge=1)

    @field_validator("strategies", mode="before")
    @classmethod
    def parse_strategy_list(cls, v):
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        try:
            return parse_strategies(v)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("staging_dir", mode="after")
    @classmethod
    def create_staging_dir(cls, v: Path | None) -> Path | None:
        """Create the staging directory if it doesn't exist."""
        if v is None:
            return v
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()
