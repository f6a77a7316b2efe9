"""
Settings for deckscan.

Values come from DECKSCAN_* environment variables or a local .env file;
command line flags override them.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DECKSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Images
    IMAGE_DIR: Path = Path("images")
    IMAGE_NAMING: Literal["basename", "sha256"] = "basename"
    IMAGE_PREFIX: str = ""

    # Classification
    TITLE_MAX_LENGTH: int = 50

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

    @field_validator("TITLE_MAX_LENGTH")
    @classmethod
    def _positive_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError("TITLE_MAX_LENGTH must be >= 1")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
