from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constraint import DEFAULT_CONFIG_PATH, ENV_PREFIX


class Settings(BaseSettings):
    """Process settings sourced from environment variables (and ``.env``)."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    config_path: Path = DEFAULT_CONFIG_PATH
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices(f"{ENV_PREFIX}GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    log_level: str = "INFO"

    @field_validator("github_token")
    @classmethod
    def _blank_token_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
