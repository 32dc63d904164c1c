"""Application configuration management."""
from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Ticket-Tally"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Database
    database_url: str = "sqlite+aiosqlite:///./ticket_tally.db"

    # Seed default IT staff and sample projects on startup
    seed_demo_data: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "TALLY_"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
