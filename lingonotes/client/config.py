"""Client configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings, read from ``LINGONOTES_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="LINGONOTES_", env_file=".env", extra="ignore")

    API_URL: str = "http://localhost:3000"
    REQUEST_TIMEOUT: float = 30.0
    STORAGE_DIR: Path = Path.home() / ".lingonotes"
    # Seconds to coalesce store writes; 0 writes on every mutation
    PERSIST_DEBOUNCE: float = 0.0


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings instance."""
    return ClientSettings()
