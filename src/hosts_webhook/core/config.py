"""Centralized configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Record store
    hosts_file: str = "/etc/hosts"
    atomic_write: bool = True  # False overwrites in place (bind-mounted files)

    # HTTP server
    listen_address: str = "127.0.0.1"
    port: int = 8888

    # Logging
    log_level: str = "info"

    # Sentry configuration (optional)
    sentry_dsn: Optional[str] = None
    sentry_environment: str = "production"
    sentry_traces_sample_rate: float = 1.0

    @property
    def log_level_name(self) -> str:
        """Return the log level in the form the logging module expects."""
        return self.log_level.strip().upper()

    @property
    def listen_url(self) -> str:
        """Return the address the server binds to, for display."""
        return f"http://{self.listen_address}:{self.port}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
