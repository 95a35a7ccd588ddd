"""Login and registration endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status

from ...models.domain import Identity
from ...persistence.datastore import Datastore
from ...schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from ...services.auth import login, register
from ..dependencies import get_datastore, optional_identity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
def login_user(payload: LoginRequest, datastore: Datastore = Depends(get_datastore)) -> LoginResponse:
    return LoginResponse(**login(datastore, payload.email, payload.password))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    payload: RegisterRequest,
    datastore: Datastore = Depends(get_datastore),
    caller: Optional[Identity] = Depends(optional_identity),
) -> RegisterResponse:
    result = register(
        datastore,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role.value if payload.role else None,
        store_id=payload.store_id,
        courier_id=payload.courier_id,
        caller=caller,
    )
    return RegisterResponse(**result)
