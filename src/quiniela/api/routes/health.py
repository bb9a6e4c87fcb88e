"""Health check routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from quiniela.api.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> HealthResponse:
    """Application health check endpoint."""
    settings = getattr(request.app.state, "settings", None)
    creator = getattr(request.app.state, "quiniela_creator", None)

    return HealthResponse(
        status="ok",
        environment=settings.app_env if settings else "unknown",
        creator="configured" if creator is not None else "missing",
    )


@router.get("/health/live")
def liveness_probe() -> dict[str, Any]:
    """Liveness probe — is the process alive and responding?"""
    return {"status": "alive"}
