"""
Application configuration using Pydantic Settings.

This module manages all configuration from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Source Configuration
    REGISTRY_URL: str = "https://www.ksh.hu/docs/helysegnevtar/hnt_letoltes_2022.xlsx"
    POSTAL_CODES_URL: str = "https://www.posta.hu/static/internet/download/Iranyitoszam-Internet_uj.xlsx"
    REGISTRY_SHEET_NAME: str = "Helységek 2022.01.01."

    # Download Configuration
    DOWNLOAD_TIMEOUT: float = 60.0
    DOWNLOAD_DIR: Optional[str] = None  # Optional: defaults to the system temp dir

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "settlement_catalog.log"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()
