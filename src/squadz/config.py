"""Application configuration."""

import os
import secrets
import string

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_DASHBOARD_PASSWORD_ALPHABET = string.digits + string.ascii_lowercase


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    location_ttl_secs: int = 300
    max_squad_size: int = 50
    session_ttl_secs: int = 3600
    cleanup_interval_secs: int = 60
    dashboard_password: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_dashboard_password(configured: str | None) -> tuple[str, bool]:
    """Return the dashboard password and whether it was generated."""
    if configured and configured.strip():
        return configured.strip(), False
    generated = "".join(
        secrets.choice(_DASHBOARD_PASSWORD_ALPHABET) for _ in range(12)
    )
    return generated, True
