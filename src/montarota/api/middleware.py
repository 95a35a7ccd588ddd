"""HTTP middleware: CORS and per-request logging."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings

logger = logging.getLogger(__name__)


def _caller(request: Request) -> str:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        return "anonymous"
    return f"{identity.role}:{identity.id}"


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application"""
    if settings.frontend_allowed_origins:
        origins = list(settings.frontend_allowed_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            # Browsers refuse credentialed requests to a wildcard origin.
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        logger.info(
            f"{request.method} {request.url.path} [{_caller(request)}] - "
            f"Status: {response.status_code} - "
            f"Time: {elapsed:.4f}s"
        )
        return response
