"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Addon settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    # Request pipeline
    LOG_REQUESTS: bool = True  # One access log record per handled request
    PRINT_RECOVERY_STACK: bool = True  # Tracebacks of recovered faults go to the log, never to clients

    # Cache-Control max-age for handler responses (seconds, 0 disables the header)
    CACHE_AGE_CATALOGS: int = 0
    CACHE_AGE_META: int = 0
    CACHE_AGE_STREAMS: int = 0
    CACHE_PUBLICLY: bool = False

    # Development
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
