"""Configuration management using pydantic-settings.

Loads from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .models import CachingPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Attributes:
        fetch_timeout: HTTP timeout for image fetching in seconds.
        follow_redirects: Follow HTTP redirects before checking the status code.
        user_agent: User-Agent header sent with image requests.
        default_caching_policy: Policy used when a caller does not pass one.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Output logs in JSON format for production.

    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Network
    fetch_timeout: float = 30.0
    follow_redirects: bool = True
    user_agent: str = f"async-image/{__version__}"

    # Caching
    default_caching_policy: CachingPolicy = CachingPolicy.SESSION_SCOPED

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


# Global settings instance
settings = Settings()
