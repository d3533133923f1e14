"""Pydantic response schemas for the saavn-artists API.

Defines the public contract of every endpoint.  The search envelope itself
lives in :mod:`saavn_artists.models.response` because the service layer
builds it; it is re-exported here next to the endpoint-only schemas.
FastAPI serializes ``response_model`` output by alias.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from saavn_artists.models.response import ArtistOut, ArtistSearchResponse

__all__ = [
    "ArtistOut",
    "ArtistSearchResponse",
    "CacheStatsResponse",
    "ErrorResponse",
    "HealthResponse",
]


class ErrorResponse(BaseModel):
    """Error envelope returned with every non-2xx status."""

    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Response for the health-check endpoint."""

    status: str
    version: str
    provider: str
    languages: list[str] = Field(default_factory=list)


class CacheStatsResponse(BaseModel):
    """Result-cache and background-work counters."""

    cache: dict[str, Any] = Field(default_factory=dict)
    sweeper: dict[str, int] = Field(default_factory=dict)
    prefetch_pending: int = 0
    in_flight: int = 0
