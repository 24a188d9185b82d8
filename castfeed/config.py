"""Configuration management for castfeed."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CASTFEED_", extra="ignore"
    )

    # Cache storage
    cache_backend: str = Field(default="file", pattern="^(file|redis)$")
    cache_dir: str = Field(default="./.castfeed-cache")
    redis_url: str = "redis://localhost:6379/0"
    cache_key_prefix: str = "castfeed:cache:"

    # Output
    output_dir: str = Field(default="./Output")

    # Rendering
    render_concurrency: int = Field(default=8, ge=1)

    # Logging
    log_level: str = Field(
        default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$"
    )

    # Environment
    env: str = Field(default="dev", pattern="^(dev|prod)$")


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
