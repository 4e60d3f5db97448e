"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote store; unset means offline (local) mode
    database_url: str | None = None

    # Local store
    local_store_dir: str = ".tripflow"
    storage_key_prefix: str = "tf_"

    # AI itinerary generation; unset key disables the feature
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"

    # Logging
    log_level: str = "INFO"

    # UI
    api_url: str = "http://localhost:8000"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
