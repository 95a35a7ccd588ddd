"""Order lifecycle schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from ..models.domain import OrderStatus
from .common import RecordId, RequestModel


class OrderCreate(RequestModel):
    customer_address: str = Field(..., description="Delivery address; must not be blank.")
    store_id: Optional[RecordId] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_neighborhood: Optional[str] = None
    customer_city: Optional[str] = None
    customer_postal_code: Optional[str] = None
    customer_complement: Optional[str] = None
    items: Optional[list[dict[str, Any]]] = None
    order_value: Optional[float] = Field(default=None, ge=0)
    payment_method: Optional[str] = None
    change_for: Optional[float] = Field(default=None, ge=0)
    preparation_minutes: Optional[int] = Field(default=None, ge=0, le=24 * 60)
    notes: Optional[str] = None
    origin: Optional[str] = None


class OrderStatusUpdate(RequestModel):
    status: OrderStatus


class ConfirmDeliveryRequest(RequestModel):
    code: str

    @field_validator("code", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # Customers type the code; numeric JSON is accepted too.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
