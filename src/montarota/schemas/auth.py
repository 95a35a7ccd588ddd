"""Authentication request/response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..models.domain import UserRole
from .common import RecordId, RequestModel


class LoginRequest(RequestModel):
    email: str
    password: str


class RegisterRequest(RequestModel):
    name: str
    email: str
    password: str
    role: Optional[UserRole] = None
    store_id: Optional[RecordId] = None
    courier_id: Optional[RecordId] = None


class UserModel(BaseModel):
    id: RecordId
    name: Optional[str] = None
    email: str
    role: str
    store_id: Optional[RecordId] = None
    courier_id: Optional[RecordId] = None


class LoginResponse(BaseModel):
    token: str
    user: UserModel


class RegisterResponse(BaseModel):
    message: str
    id: RecordId
