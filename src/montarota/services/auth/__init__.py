"""Authentication helpers."""

from .service import (
    create_access_token,
    decode_access_token,
    hash_password,
    login,
    register,
    verify_password,
)

__all__ = [
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "login",
    "register",
]
