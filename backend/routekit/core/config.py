"""
Client configuration settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

from routekit import __version__


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # GraphHopper
    GRAPHHOPPER_API_KEY: Optional[str] = None
    GRAPHHOPPER_URL: str = "https://graphhopper.com/api/1"

    # Shared HTTP client
    ROUTING_TIMEOUT_MS: int = 30000
    ROUTING_RETRY_TIMEOUT_MS: int = 30000  # upper bound for a single 429 back-off
    ROUTING_USER_AGENT: str = f"routekit/{__version__}"
    ROUTING_MAX_RETRIES: int = 5
    ROUTING_RETRY_OVER_QUERY_LIMIT: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
