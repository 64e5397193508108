from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from yamlcat.types import Strategy


class Settings(BaseSettings):
    """Tool configuration loaded from environment/.env."""

    strategy: Strategy = Field(default=Strategy.RESERIALIZE)
    encoding: str = Field(default="utf-8")
    sort_keys: bool = Field(default=False)
    log_level: str = Field(default="WARNING")

    model_config = SettingsConfigDict(
        env_prefix="YAMLCAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
