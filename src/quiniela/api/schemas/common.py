"""Shared schemas used across entity schemas."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """RFC 7807 Problem Details error response."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    environment: str
    creator: str
