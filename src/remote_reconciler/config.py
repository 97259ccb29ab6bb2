"""
Configuration settings for the Remote State Reconciler.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Remote State Reconciler"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Remote API ===
    API_BASE_URL: str = "https://api.pagerduty.com"
    API_TOKEN: str = ""
    HTTP_TIMEOUT: float = 30.0  # seconds
    HTTP_MAX_CONNECTIONS: int = 10
    USER_AGENT: str = "remote-reconciler/0.1.0"

    # === Retry windows (wall-clock bound, not attempt count) ===
    READ_RETRY_WINDOW_SECONDS: float = 120.0
    CREATE_RETRY_WINDOW_SECONDS: float = 60.0
    LOOKUP_RETRY_WINDOW_SECONDS: float = 120.0

    # === Retry delays (fixed, no jitter) ===
    RETRY_DELAY_SECONDS: float = 2.0
    RATE_LIMIT_DELAY_SECONDS: float = 30.0  # Minimum safe interval after HTTP 429

    # === Import ===
    IMPORT_ID_DELIMITER: str = "."


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance (cached)."""
    return Settings()
