"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, with no scattered magic strings.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: "development" or "production". Controls error
            verbosity, security headers (HSTS/CSP) and log detail.
        debug: Enable interactive docs. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        mongodb_uri: MongoDB connection string. Required.
        mongodb_db: Database name; None uses the database named in the URI.
        mongodb_max_pool_size: Maximum connections in the driver pool.
        mongodb_server_selection_timeout_ms: Connection attempt timeout.
        mongodb_socket_timeout_ms: Idle socket timeout.
        rate_limit: Per-client limit for /api paths, in limits notation.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "SharedBudget"
    version: str = "0.1.0"
    environment: Literal["development", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    mongodb_uri: str
    mongodb_db: str | None = None
    mongodb_max_pool_size: int = 10
    mongodb_server_selection_timeout_ms: int = 5000
    mongodb_socket_timeout_ms: int = 45000

    rate_limit: str = "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
