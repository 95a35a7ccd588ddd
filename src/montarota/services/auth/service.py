"""Credential hashing, token issuance and the login/registration flows."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from ...config import settings
from ...errors import AuthError, ConflictError, ValidationError
from ...models.domain import Identity, UserRole
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes of a secret.
_BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> str:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except ValueError as exc:
        logger.warning(f"Stored password hash could not be verified: {exc}")
        return False


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.token_expire_days))
    claims = {
        "id": identity.id,
        "email": identity.email,
        "role": identity.role,
        "store_id": identity.store_id,
        "courier_id": identity.courier_id,
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Identity:
    """Verify a signed token and return the identity it carries."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise AuthError("Invalid token") from exc

    if payload.get("id") is None or not payload.get("role"):
        raise AuthError("Invalid token payload")
    return Identity(
        id=payload["id"],
        email=payload.get("email") or "",
        role=payload["role"],
        store_id=payload.get("store_id"),
        courier_id=payload.get("courier_id"),
    )


def _public_user(user: dict) -> dict:
    return {
        "id": user["id"],
        "name": user.get("name"),
        "email": user["email"],
        "role": user["role"],
        "store_id": user.get("store_id"),
        "courier_id": user.get("courier_id"),
    }


def login(datastore: Datastore, email: str, password: str) -> dict[str, Any]:
    if not email or not password:
        raise ValidationError("Email and password are required")

    users = datastore.users.select(
        Query(filters=[eq("email", email.strip().lower()), eq("status", "active")], limit=1)
    )
    user = users[0] if users else None
    if not user or not verify_password(password, user.get("password_hash")):
        raise AuthError("Invalid email or password")

    datastore.users.update([eq("id", user["id"])], {"last_login_at": datetime.now(timezone.utc).isoformat()})
    identity = Identity(
        id=user["id"],
        email=user["email"],
        role=user["role"],
        store_id=user.get("store_id"),
        courier_id=user.get("courier_id"),
    )
    logger.info(f"User {user['id']} logged in as {user['role']}")
    return {"token": create_access_token(identity), "user": _public_user(user)}


def register(
    datastore: Datastore,
    *,
    name: str,
    email: str,
    password: str,
    role: str | None = None,
    store_id: Any = None,
    courier_id: Any = None,
    caller: Optional[Identity] = None,
) -> dict[str, Any]:
    """Create an active user. Store accounts are open; other roles need an admin ``caller``."""
    if not (name or "").strip() or not (email or "").strip() or not password:
        raise ValidationError("Name, email and password are required")

    role = role or UserRole.STORE.value
    if role != UserRole.STORE.value and (caller is None or caller.role != UserRole.ADMIN.value):
        raise AuthError(f"Only an administrator can create {role} accounts")

    normalized_email = email.strip().lower()
    if datastore.users.select(Query(filters=[eq("email", normalized_email)], columns="id", limit=1)):
        raise ConflictError(f"Email '{normalized_email}' is already registered")

    user = datastore.users.insert(
        {
            "name": name.strip(),
            "email": normalized_email,
            "password_hash": hash_password(password),
            "role": role,
            "store_id": store_id,
            "courier_id": courier_id,
            "status": "active",
        }
    )
    logger.info(f"Registered user {user['id']} with role {user['role']}")
    return {"message": "User created", "id": user["id"]}
