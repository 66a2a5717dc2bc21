"""Pydantic models for API response serialization.

These models mirror the partgate dataclasses and fix the JSON field names
the canvas expects.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResultRecordResponse(BaseModel):
    """Mirrors partgate.registry.models.IdentifiedMetadata."""

    uri: str
    name: str = ""
    display_id: str = Field("", serialization_alias="displayId")
    version: str = ""
    description: str = ""


class ServiceInfoResponse(BaseModel):
    name: str
    version: str
    description: str = ""
    docs: str = "/docs"


class HealthResponse(BaseModel):
    status: str = "healthy"
