"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from fastapi import Request

from quiniela.services.quinielas import QuinielaService


def get_quiniela_service(request: Request) -> QuinielaService:
    """Build the quiniela service from app state.

    ``app.state.quiniela_creator`` and ``app.state.clock`` are set by
    :func:`quiniela.main.create_app`.
    """
    return QuinielaService(
        creator=getattr(request.app.state, "quiniela_creator", None),
        clock=request.app.state.clock,
    )
