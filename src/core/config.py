"""
Pothole Reporter - Configuration Management
Centralized configuration using pydantic-settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Report namespace
    app_id: str = "MandaTuHoyoApp-Dev"
    collection_name: str = "reportes"

    # Storage: "local" (in-process) or "remote" (database + blob upload)
    storage_mode: str = "local"
    seed_file: Optional[str] = None
    anonymous_user_id: str = "anon_user"

    # Document store
    database_url: Optional[str] = None

    # Blob store
    blob_base_url: Optional[str] = None
    blob_public_url: Optional[str] = None
    blob_bucket: str = "mandatuhoyo-523f0.appspot.com"
    blob_api_token: Optional[str] = None
    upload_timeout_seconds: float = 30.0
    photo_key_prefix: str = "reportes_hoyos"

    # Directory the device camera writes captures to; photo references
    # are only read from inside it
    capture_dir: Optional[str] = None

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def is_remote(self) -> bool:
        return self.storage_mode.lower() == "remote"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
