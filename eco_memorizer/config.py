"""Configuration settings for the ECO memorizer service."""

from functools import lru_cache

from pydantic_settings import BaseSettings


ECO_HELP_URL = "https://www.chessgames.com/chessecohelp.html"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Upstream ECO table
    eco_table_url: str = ECO_HELP_URL
    fetch_timeout_seconds: float = 30.0

    # Move index cache
    cache_ttl_seconds: float = 180.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
