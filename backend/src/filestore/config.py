from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

AppMode = Literal["debug", "release", "test"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Pydantic Settings reads env vars matching field names (case-insensitive),
    plus a .env file in development. Loaded once at startup and treated as
    read-only afterwards.
    """

    # Execution mode. "release" hides underlying error text from clients.
    app_mode: AppMode = Field(default="debug", alias="APP_MODE")

    version: str = "3.0.0"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_release(self) -> bool:
        return self.app_mode == "release"


@lru_cache
def get_settings() -> Settings:
    return Settings()
