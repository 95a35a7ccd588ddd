"""Store registry schemas."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .common import RequestModel


class StoreCreate(RequestModel):
    name: str
    tax_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    platform_fee: Optional[float] = Field(default=None, ge=0)
    email: Optional[str] = None
    contact_name: Optional[str] = None


class StoreUpdate(RequestModel):
    name: Optional[str] = None
    tax_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    platform_fee: Optional[float] = Field(default=None, ge=0)
    email: Optional[str] = None
    contact_name: Optional[str] = None
    status: Optional[Literal["active", "inactive"]] = None
