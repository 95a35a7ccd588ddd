"""Weekly platform-fee settlements between stores and the platform."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional

from ...config import settings
from ...errors import ConflictError, NotFoundError, ValidationError
from ...models.domain import OrderStatus, PaymentStatus, PaymentType
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq, gte, lt
from ..timeutils import day_range, utc_now

logger = logging.getLogger(__name__)


def total_fees(orders: Iterable[dict]) -> float:
    """Sum platform fees, charging the fixed fee where an order has none."""
    total = 0.0
    for order in orders:
        fee = order.get("platform_fee")
        total += float(fee) if fee is not None else settings.platform_fee
    return round(total, 2)


def generate_weekly(datastore: Datastore, store_id: Any, period_start: date, period_end: date) -> dict:
    if period_end < period_start:
        raise ValidationError("period_end must not be before period_start")

    start, end = day_range(period_start, period_end)
    orders = datastore.orders.select(
        Query(
            filters=[
                eq("store_id", store_id),
                eq("status", OrderStatus.DELIVERED.value),
                gte("created_at", start),
                lt("created_at", end),
            ],
            columns="id,platform_fee",
        )
    )
    gross = total_fees(orders)
    payment = datastore.payments.insert(
        {
            "type": PaymentType.STORE_TO_PLATFORM.value,
            "store_id": store_id,
            "period_start": period_start.isoformat(),
            "period_end": period_end.isoformat(),
            "total_deliveries": len(orders),
            "gross_amount": gross,
            "net_amount": gross,
            "status": PaymentStatus.PENDING.value,
        }
    )
    logger.info(f"Settlement {payment['id']} for store {store_id}: {len(orders)} deliveries, {gross:.2f}")
    return {**payment, "message": f"{len(orders)} deliveries = {settings.currency_symbol} {gross:.2f}"}


def mark_paid(
    datastore: Datastore,
    payment_id: Any,
    payment_method: Optional[str] = None,
    receipt_url: Optional[str] = None,
) -> dict:
    payment = datastore.payments.get(payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    if payment.get("status") == PaymentStatus.PAID.value:
        raise ConflictError("Payment is already paid")

    rows = datastore.payments.update(
        [eq("id", payment_id)],
        {
            "status": PaymentStatus.PAID.value,
            "payment_method": payment_method,
            "receipt_url": receipt_url,
            "paid_at": utc_now().isoformat(),
        },
    )
    if not rows:
        raise NotFoundError("Payment not found")
    logger.info(f"Settlement {payment_id} paid via {payment_method}")
    return {"message": "Payment recorded", "payment": rows[0]}


def list_payments(
    datastore: Datastore,
    *,
    store_id: Any = None,
    courier_id: Any = None,
    status: Optional[str] = None,
) -> list[dict]:
    filters = []
    if store_id is not None:
        filters.append(eq("store_id", store_id))
    if courier_id is not None:
        filters.append(eq("courier_id", courier_id))
    if status:
        filters.append(eq("status", status))
    return datastore.payments.select(Query(filters=filters, order_by="created_at", descending=True))
