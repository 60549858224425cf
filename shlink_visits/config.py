"""
Configuration management using environment variables
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Rows fetched per round-trip while sweeping the visits table
DEFAULT_BLOCK_SIZE = 100


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Database
    database_url: str

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Bulk iteration
    visits_block_size: int = Field(default=DEFAULT_BLOCK_SIZE, ge=1)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings(**{})


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings"""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
