"""Courier registry and GPS schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from ..models.domain import CourierStatus
from .common import RequestModel


class CourierCreate(RequestModel):
    name: str
    phone: str
    tax_id: Optional[str] = None
    email: Optional[str] = None
    vehicle: Optional[str] = None
    plate: Optional[str] = None
    license_number: Optional[str] = None
    pix_key: Optional[str] = None


class GpsUpdate(RequestModel):
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    speed_kmh: Optional[float] = Field(default=None, ge=0)
    accuracy_m: Optional[float] = Field(default=None, ge=0)


class CourierStatusUpdate(RequestModel):
    status: CourierStatus
