"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./dev.db"

    # App settings
    app_name: str = "Cliquéalo Simulador de Crédito"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Credit business rules
    allowed_terms: List[int] = [12, 24, 36, 48, 60]
    min_down_payment_percent: float = 10.0
    max_down_payment_percent: float = 60.0

    # Amortization: last-payment drift absorbed, in currency units (MXN)
    final_payment_tolerance: float = 1.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
