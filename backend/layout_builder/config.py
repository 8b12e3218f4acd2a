"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    cors_origins: list[str] = ["*"]

    # Storage
    storage_path: str = "./storage"

    # Field catalog (defaults to the packaged data/nodes.json)
    catalog_path: str | None = None

    # Base URL used by the HTTP layout client
    api_base_url: str = "http://localhost:8000/api/v1"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
