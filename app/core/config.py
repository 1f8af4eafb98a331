"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here. No scattered magic strings.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "production", "test"]


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: Execution mode. Drives error redaction and stack traces.
        debug: Expose the interactive docs. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_enabled: Turn the per-client rate limiter on or off.
        rate_limit_default: Default rate limit applied to every endpoint.
        large_page_size_warning: Page sizes above this value are logged.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Workshop Manager"
    version: str = "1.0.0"
    environment: Environment = "development"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_enabled: bool = True
    rate_limit_default: str = "100/15minutes"
    large_page_size_warning: int = 100

    @property
    def is_production(self) -> bool:
        """Return True when running in production mode."""
        return self.environment == "production"


settings = Settings()
