"""Per-store delivery analytics."""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, List

from ...models.domain import OrderStatus
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq, gte
from ..settlements.service import total_fees
from ..timeutils import start_of_day, utc_now

TOP_NEIGHBORHOODS = 5


def top_neighborhoods(orders: Iterable[dict], top_n: int = TOP_NEIGHBORHOODS) -> List[dict]:
    """Neighborhoods by delivered-order count, highest first.

    Ties keep the order in which the neighborhoods first appear.
    """
    counts: Counter[str] = Counter()
    for order in orders:
        neighborhood = (order.get("customer_neighborhood") or "").strip()
        if neighborhood:
            counts[neighborhood] += 1

    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [{"neighborhood": name, "total": total} for name, total in ranked[:top_n]]


def _delivered_since(datastore: Datastore, store_id: Any, since: str, columns: str) -> list[dict]:
    return datastore.orders.select(
        Query(
            filters=[
                eq("store_id", store_id),
                eq("status", OrderStatus.DELIVERED.value),
                gte("created_at", since),
            ],
            columns=columns,
            order_by="created_at",
        )
    )


def summarize(datastore: Datastore, store_id: Any) -> dict:
    today = utc_now().date()
    today_orders = _delivered_since(
        datastore,
        store_id,
        start_of_day(today).isoformat(),
        "id,order_value,platform_fee,customer_neighborhood,created_at",
    )
    month_orders = _delivered_since(
        datastore,
        store_id,
        start_of_day(today.replace(day=1)).isoformat(),
        "id,platform_fee,created_at",
    )

    ranked = top_neighborhoods(today_orders)
    suggestion = f"Focus marketing on the {ranked[0]['neighborhood']} neighborhood" if ranked else "No data yet"
    return {
        "today": {"total_orders": len(today_orders), "fee_revenue": total_fees(today_orders)},
        "month": {"total_orders": len(month_orders), "fee_revenue": total_fees(month_orders)},
        "top_neighborhoods": ranked,
        "suggestion": suggestion,
    }
