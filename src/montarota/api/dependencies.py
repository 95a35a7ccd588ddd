"""FastAPI dependencies: the injected datastore and the bearer-token gate."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import settings
from ..errors import AuthError, UpstreamError
from ..models.domain import Identity
from ..persistence.datastore import Datastore
from ..services.auth import decode_access_token

# Missing credentials are reported as 401 by get_current_user, not by HTTPBearer.
bearer_scheme = HTTPBearer(auto_error=False)


def get_datastore(request: Request) -> Datastore:
    datastore = getattr(request.app.state, "datastore", None)
    if datastore is None:
        raise UpstreamError(
            "Datastore not configured. Set MONTAROTA_SUPABASE_URL and MONTAROTA_SUPABASE_KEY environment variables."
        )
    return datastore


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthError("Token not provided")
    identity = decode_access_token(credentials.credentials)
    request.state.identity = identity
    return identity


def gps_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """Courier devices may post positions anonymously unless configured otherwise."""
    if not settings.gps_requires_auth:
        return None
    return get_current_user(request, credentials)


def optional_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """Identity of the caller when a token is sent; ``None`` for anonymous calls."""
    if credentials is None:
        return None
    return get_current_user(request, credentials)
