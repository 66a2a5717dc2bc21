"""Gateway configuration, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_WOR_URL = "https://wor.synbiohub.org/instances/"
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the gateway.

    - PARTGATE_WOR_URL: Web-of-Registries index listing SynBioHub instances
    - PARTGATE_HTTP_TIMEOUT: seconds per registry request
    - PARTGATE_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR
    - PARTGATE_CORS_ORIGINS: comma-separated allowed origins
    - PARTGATE_ROUTE_PREFIX: path prefix for the registry endpoints
    """

    wor_url: str = DEFAULT_WOR_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    route_prefix: str = ""


def get_settings() -> Settings:
    """Build settings from the current environment."""
    origins = os.environ.get("PARTGATE_CORS_ORIGINS", "*")
    prefix = os.environ.get("PARTGATE_ROUTE_PREFIX", "").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return Settings(
        wor_url=os.environ.get("PARTGATE_WOR_URL", DEFAULT_WOR_URL),
        http_timeout=float(
            os.environ.get("PARTGATE_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))
        ),
        log_level=os.environ.get("PARTGATE_LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        route_prefix=prefix,
    )
