"""
Configuration management for keymix
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_storage_path() -> str:
    """Get default location of the saved mixes file."""
    return str(Path.home() / ".keymix" / "mixes.json")


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Storage - JSON file holding every saved mix
    storage_path: str = get_default_storage_path()

    # Timeline
    default_start_key: str = "8m"  # Seed key for empty timelines

    # Sharing
    share_base_url: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="KEYMIX_",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
