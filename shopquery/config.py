"""Application configuration settings."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file lives)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuration values for ShopQuery sources and scripts."""

    app_name: str = "ShopQuery"
    environment: str = "development"

    # Database backing the SQL sources
    database_url: str = Field(
        default="sqlite:///shopquery.db",
        description="SQLAlchemy URL the SQL sources read from",
    )
    database_echo: bool = Field(default=False, description="Echo emitted SQL")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level for scripts")

    # Synthetic dataset
    seed_customers: int = Field(default=20, ge=0)
    seed_products: int = Field(default=30, ge=0)
    seed_orders: int = Field(default=50, ge=0)
    seed_random_seed: int = Field(
        default=2021, description="Seed for Faker and random so datasets repeat"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts; library code only emits records."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
