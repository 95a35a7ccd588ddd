"""Order lifecycle endpoints."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import Identity, OrderStatus
from ...persistence.datastore import Datastore
from ...schemas.orders import ConfirmDeliveryRequest, OrderCreate, OrderStatusUpdate
from ...services import orders as order_service
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", status_code=status.HTTP_200_OK)
def list_orders(
    order_status: Optional[OrderStatus] = Query(default=None, alias="status"),
    store_id: Optional[str] = Query(default=None),
    courier_id: Optional[str] = Query(default=None),
    day: Optional[date] = Query(default=None, alias="date", description="Only orders created on this day (UTC)"),
    limit: int = Query(default=50, ge=1, le=500),
    identity: Identity = Depends(get_current_user),
    datastore: Datastore = Depends(get_datastore),
) -> list[dict]:
    return order_service.list_orders(
        datastore,
        identity,
        status=order_status.value if order_status else None,
        store_id=store_id,
        courier_id=courier_id,
        day=day,
        limit=limit,
    )


@router.get("/overdue", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def list_overdue(datastore: Datastore = Depends(get_datastore)) -> list[dict]:
    return order_service.list_alerts(datastore)


@router.get("/{order_id}", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def get_order(order_id: str, datastore: Datastore = Depends(get_datastore)) -> dict:
    return order_service.get_order(datastore, order_id)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    identity: Identity = Depends(get_current_user),
    datastore: Datastore = Depends(get_datastore),
) -> dict:
    return order_service.create_order(datastore, payload.model_dump(), identity)


@router.patch("/{order_id}/status", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def update_status(order_id: str, payload: OrderStatusUpdate, datastore: Datastore = Depends(get_datastore)) -> dict:
    return order_service.advance_status(datastore, order_id, payload.status.value)


@router.post("/{order_id}/confirm", status_code=status.HTTP_200_OK)
def confirm_delivery(
    order_id: str,
    payload: ConfirmDeliveryRequest,
    datastore: Datastore = Depends(get_datastore),
) -> dict:
    """Public: the customer's code is the credential."""
    return order_service.confirm_delivery(datastore, order_id, payload.code)
