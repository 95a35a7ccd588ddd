"""Order creation, status transitions and delivery confirmation."""

from __future__ import annotations

import logging
import secrets
from datetime import date, datetime, timedelta
from typing import Any, Optional

from ...config import settings
from ...errors import AlreadyConfirmed, ConflictError, InvalidCode, InvalidStatus, NotFoundError, ValidationError
from ...models.domain import (
    ACTIVE_ORDER_STATUSES,
    ORDER_STATUS_TIMESTAMPS,
    TERMINAL_ORDER_STATUSES,
    Identity,
    OrderStatus,
)
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq, gte, in_, is_null, lt, neq
from ..couriers.service import credit_delivery
from ..saga import Saga
from ..timeutils import day_range, utc_now

logger = logging.getLogger(__name__)


def generate_confirmation_code() -> str:
    """Uniform six-digit code in [100000, 999999]."""
    return str(100000 + secrets.randbelow(900000))


def expected_delivery(created_at: datetime, preparation_minutes: int) -> datetime:
    return created_at + timedelta(minutes=preparation_minutes + settings.delivery_buffer_minutes)


def create_order(datastore: Datastore, draft: dict, identity: Optional[Identity] = None) -> dict:
    address = (draft.get("customer_address") or "").strip()
    if not address:
        raise ValidationError("Customer address is required")

    preparation_minutes = draft.get("preparation_minutes")
    if preparation_minutes is None:
        preparation_minutes = settings.default_preparation_minutes

    store_id = draft.get("store_id")
    if store_id is None and identity is not None:
        store_id = identity.store_id

    code = generate_confirmation_code()
    record = {key: value for key, value in draft.items() if value is not None}
    record.update(
        {
            "store_id": store_id,
            "customer_address": address,
            "platform_fee": settings.platform_fee,
            "confirmation_code": code,
            "expected_delivery_at": expected_delivery(utc_now(), preparation_minutes).isoformat(),
            "preparation_minutes": preparation_minutes,
            "origin": draft.get("origin") or "manual",
            "status": OrderStatus.PENDING.value,
        }
    )
    order = datastore.orders.insert(record)
    logger.info(f"Created order {order['id']} for store {store_id}")
    return {**order, "message": "Order created", "confirmation_code": code}


def get_order(datastore: Datastore, order_id: Any) -> dict:
    order = datastore.orders.get(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


def list_orders(
    datastore: Datastore,
    identity: Identity,
    *,
    status: Optional[str] = None,
    store_id: Any = None,
    courier_id: Any = None,
    day: Optional[date] = None,
    limit: Optional[int] = None,
) -> list[dict]:
    filters = []
    if status:
        filters.append(eq("status", status))
    if identity.is_store:
        # Store operators only ever see their own orders.
        if identity.store_id is None:
            return []
        store_id = identity.store_id
    if store_id is not None:
        filters.append(eq("store_id", store_id))
    if courier_id is not None:
        filters.append(eq("courier_id", courier_id))
    if day is not None:
        start, end = day_range(day, day)
        filters.extend([gte("created_at", start), lt("created_at", end)])

    return datastore.orders.select(
        Query(
            filters=filters,
            order_by="created_at",
            descending=True,
            limit=limit or settings.default_order_limit,
        )
    )


def advance_status(datastore: Datastore, order_id: Any, new_status: str) -> dict:
    try:
        target = OrderStatus(new_status)
    except ValueError as exc:
        raise InvalidStatus(f"Invalid order status '{new_status}'") from exc

    order = get_order(datastore, order_id)
    current = order.get("status")
    if current in {status.value for status in TERMINAL_ORDER_STATUSES}:
        raise ConflictError(f"Order is already {current}")
    if target is OrderStatus.DELIVERED:
        raise ConflictError("Delivery must be confirmed with the customer's code")

    changes: dict[str, Any] = {"status": target.value}
    timestamp_field = ORDER_STATUS_TIMESTAMPS.get(target)
    if timestamp_field:
        changes[timestamp_field] = utc_now().isoformat()

    # Written only while the order still has the status checked above.
    guard = eq("status", current) if current is not None else is_null("status")
    updated = datastore.orders.update([eq("id", order_id), guard, is_null("confirmed_at")], changes)
    if not updated:
        raise ConflictError("Order changed while updating its status")
    logger.info(f"Order {order_id}: {current} -> {target.value}")
    return {"message": f"Status: {target.value}", "order": updated[0]}


def confirm_delivery(datastore: Datastore, order_id: Any, code: str) -> dict:
    """Mark the order delivered when ``code`` matches and credit its courier.

    The order write only succeeds while ``confirmed_at`` is still empty, so of
    two concurrent confirmations exactly one credits the courier.
    """
    order = get_order(datastore, order_id)
    expected = order.get("confirmation_code")
    if not expected or str(expected) != str(code).strip():
        raise InvalidCode("Invalid confirmation code")
    if order.get("confirmed_at"):
        raise AlreadyConfirmed("Order already confirmed")
    if order.get("status") == OrderStatus.CANCELLED.value:
        raise ConflictError("Order is already cancelled")

    now = utc_now().isoformat()

    def mark_delivered() -> dict:
        rows = datastore.orders.update(
            [eq("id", order_id), is_null("confirmed_at"), neq("status", OrderStatus.CANCELLED.value)],
            {"status": OrderStatus.DELIVERED.value, "confirmed_at": now, "delivered_at": now},
        )
        if not rows:
            current = datastore.orders.get(order_id) or {}
            if current.get("status") == OrderStatus.CANCELLED.value:
                raise ConflictError("Order is already cancelled")
            raise AlreadyConfirmed("Order already confirmed")
        return rows[0]

    def undo_delivered(_: dict) -> None:
        datastore.orders.update(
            [eq("id", order_id)],
            {"status": order.get("status"), "confirmed_at": None, "delivered_at": order.get("delivered_at")},
        )

    saga = Saga("confirm delivery").step("mark order delivered", mark_delivered, undo_delivered)
    courier_id = order.get("courier_id")
    if courier_id is not None:
        fee = order.get("platform_fee")
        amount = float(fee) if fee is not None else settings.platform_fee
        saga.step("credit courier", lambda: credit_delivery(datastore, courier_id, amount))

    results = saga.run()
    logger.info(f"Order {order_id} delivered and confirmed")
    return {
        "message": "Delivery confirmed",
        "order": results[0],
        "courier": results[1] if len(results) > 1 else None,
    }


def list_alerts(datastore: Datastore) -> list[dict]:
    """Orders still in flight whose expected delivery time has passed."""
    return datastore.orders.select(
        Query(
            filters=[
                in_("status", [status.value for status in ACTIVE_ORDER_STATUSES]),
                lt("expected_delivery_at", utc_now().isoformat()),
            ],
            order_by="expected_delivery_at",
        )
    )
