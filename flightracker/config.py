"""Configuration settings for the flightracker service and viewer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger("flightracker.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_list(env_var: str, default: str) -> list[str]:
    raw = os.getenv(env_var, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    flightracker_env: str = os.getenv("FLIGHTRACKER_ENV", "local")
    log_level: str = os.getenv("FLIGHTRACKER_LOG_LEVEL", "INFO")

    # OpenSky telemetry provider (OAuth2 client credentials)
    opensky_client_id: str | None = os.getenv("OPENSKY_CLIENT_ID")
    opensky_client_secret: str | None = os.getenv("OPENSKY_CLIENT_SECRET")
    opensky_token_url: str = os.getenv(
        "OPENSKY_TOKEN_URL",
        "https://auth.opensky-network.org/auth/realms/opensky-network/protocol/openid-connect/token",
    )
    opensky_states_url: str = os.getenv(
        "OPENSKY_STATES_URL",
        "https://opensky-network.org/api/states/all",
    )
    opensky_timeout: float = float(os.getenv("OPENSKY_TIMEOUT", "15.0"))
    token_safety_margin: float = float(os.getenv("OPENSKY_TOKEN_SAFETY_MARGIN", "30.0"))

    # adsbdb route lookup provider
    adsbdb_base_url: str = os.getenv("ADSBDB_BASE_URL", "https://api.adsbdb.com/v0")
    adsbdb_timeout: float = float(os.getenv("ADSBDB_TIMEOUT", "10.0"))

    cors_origins: list[str] = field(
        default_factory=lambda: _get_list("FLIGHTRACKER_CORS_ORIGINS", "*")
    )
    log_requests: bool = _get_bool("FLIGHTRACKER_LOG_REQUESTS", default=True)

    # Viewer core (polls the HTTP surface above)
    viewer_api_base_url: str = os.getenv(
        "FLIGHTRACKER_API_BASE_URL", "http://localhost:3001"
    )
    viewer_poll_interval: float = float(os.getenv("FLIGHTRACKER_POLL_INTERVAL", "10.0"))
    viewer_request_timeout: float = float(
        os.getenv("FLIGHTRACKER_REQUEST_TIMEOUT", "15.0")
    )

    @property
    def has_opensky_credentials(self) -> bool:
        return bool(self.opensky_client_id and self.opensky_client_secret)


settings = Settings()

if not settings.has_opensky_credentials:
    logger.warning("OpenSky client credentials not configured at import time")

__all__ = ["settings", "Settings"]
