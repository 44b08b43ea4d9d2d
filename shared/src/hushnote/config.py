"""Application configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./hushnote.db",
        alias="DATABASE_URL",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Document stores
    app_data_dir: Path = Field(default=Path("./data"), alias="APP_DATA_DIR")
    onboarding_store_name: str = Field(
        default="onboarding-status.json", alias="ONBOARDING_STORE_NAME"
    )

    # API
    cors_origins: list[str] = Field(
        default=["tauri://localhost", "http://localhost:3118"],
        alias="CORS_ORIGINS",
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (useful in tests)."""
    get_settings.cache_clear()
