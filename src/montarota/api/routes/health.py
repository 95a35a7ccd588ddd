"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(request: Request) -> dict:
    """Simple health check endpoint that doesn't query the datastore."""
    return {
        "status": "ok",
        "datastore_configured": getattr(request.app.state, "datastore", None) is not None,
    }
