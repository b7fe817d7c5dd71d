"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All configuration is driven by ``SWITCH_*`` environment variables."""

    # Switch connection
    host: str = "192.168.1.2"
    port: int = 22
    username: str = "admin"
    password: str = ""
    enable_secret: str = ""
    connect_timeout: float = 15.0
    connect_retries: int = 3
    connect_retry_delay: float = 2.0

    # Shell transaction timing (seconds)
    settle_delay: float = 1.0
    window: float = 2.0
    long_window: float = 5.0

    # Session
    idle_timeout_seconds: int = 60

    # API key
    api_key: str = ""

    # Maintenance mode widens the exec allowlist
    maintenance_mode: bool = False

    # CSV exports
    export_dir: str = Field(default="exports")

    model_config = SettingsConfigDict(
        env_prefix="SWITCH_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


# Singleton – import this from anywhere
settings = Settings()
