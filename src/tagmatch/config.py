"""Library settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogProfile = Literal["default", "pretty"]


class TagMatchSettings(BaseSettings):
    """Settings read from ``TAGMATCH_*`` environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TAGMATCH_",
        case_sensitive=False,
        extra="ignore",
    )

    log_filter: str = Field(default="warning")
    log_profile: LogProfile = Field(default="default")
    cache_lineage: bool = Field(default=True)


def load_settings() -> TagMatchSettings:
    return TagMatchSettings()
