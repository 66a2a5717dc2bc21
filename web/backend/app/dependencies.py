"""Shared FastAPI dependencies for registry access and conversion."""

from __future__ import annotations

from typing import Optional

import httpx

from partgate.config import Settings, get_settings
from partgate.convert import DocumentConverter, GraphConverter


def get_gateway_settings() -> Settings:
    return get_settings()


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound registry calls; ``None`` means the network."""
    return None


def get_converter() -> DocumentConverter:
    return GraphConverter()
