"""Application configuration."""

import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
DEFAULT_TIMEZONE = "UTC"

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    session_ttl_days: int = 7
    storage_timeout_seconds: float = 10.0
    timezone: str = DEFAULT_TIMEZONE
    password_hash_rounds: int = 12
    cookie_secure: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_timezone(raw: str | None) -> str:
    """Return a valid IANA timezone name, falling back to UTC."""
    if raw is None:
        return DEFAULT_TIMEZONE
    cleaned = raw.strip()
    if not cleaned:
        return DEFAULT_TIMEZONE
    try:
        ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using %s", cleaned, DEFAULT_TIMEZONE)
        return DEFAULT_TIMEZONE
    return cleaned
