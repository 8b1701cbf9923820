"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "quake-stats"
    log_level: str = "WARNING"

    # USGS FDSN event service
    api_base_url: str = "https://earthquake.usgs.gov/fdsnws/event/1/query"
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0

    # Retry policy for transient network failures (linear backoff)
    retry_attempts: int = 5
    retry_backoff_seconds: float = 1.0

    # Response conversion
    supported_api_prefix: str = "1."
    magnitude_type_prefix: str = "mw"

    # Interactive shell
    prompt_attempts: int = 5

    model_config = {"env_prefix": "QUAKE_STATS_"}


settings = Settings()
