"""API middleware: CORS, correlation IDs, request logging."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quiniela.core.context import set_correlation_id

logger = logging.getLogger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """Attach all middleware to the FastAPI app."""
    settings = getattr(app.state, "settings", None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_and_logging(  # type: ignore[no-untyped-def]
        request: Request, call_next
    ):
        correlation_id = request.headers.get("x-correlation-id", uuid.uuid4().hex[:12])
        set_correlation_id(correlation_id)

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = correlation_id
        response.headers["X-Response-Time"] = f"{elapsed:.1f}ms"

        logger.info(
            "[%s] %s %s → %d (%.1fms)",
            correlation_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response


def _get_cors_origins(settings: Any) -> list[str]:
    """Resolve CORS origins from settings."""
    if settings is None:
        return ["*"]
    return list(settings.cors_origin_list)


def rfc7807_error_response(
    status: int,
    title: str,
    detail: str,
    type_uri: str = "about:blank",
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build an RFC 7807 Problem Details JSON response."""
    body: dict[str, Any] = {
        "type": type_uri,
        "title": title,
        "status": status,
        "detail": detail,
    }
    if instance:
        body["instance"] = instance
    if extra:
        body.update(extra)
    return JSONResponse(status_code=status, content=body)
