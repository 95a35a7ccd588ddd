"""Route assembly: batch orders under one courier and build navigation links."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ...config import settings
from ...errors import ConflictError, NotFoundError, ValidationError
from ...models.domain import TERMINAL_ORDER_STATUSES, CourierStatus, OrderStatus, RouteStatus
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq, in_, neq
from ..saga import Saga
from ..timeutils import utc_now
from .links import google_maps_link, waze_link

logger = logging.getLogger(__name__)


def _load_orders(datastore: Datastore, order_ids: Sequence[Any]) -> list[dict]:
    """Fetch the orders and return them in the requested visiting order."""
    requested = list(dict.fromkeys(order_ids))
    fetched = datastore.orders.select(Query(filters=[in_("id", requested)]))
    by_id = {str(order["id"]): order for order in fetched}

    missing = [str(order_id) for order_id in requested if str(order_id) not in by_id]
    if missing:
        raise NotFoundError(f"Orders not found: {', '.join(missing)}")

    orders = [by_id[str(order_id)] for order_id in requested]
    closed = [str(order["id"]) for order in orders if order.get("status") in {s.value for s in TERMINAL_ORDER_STATUSES}]
    if closed:
        raise ConflictError(f"Orders already delivered or cancelled: {', '.join(closed)}")
    return orders


def _default_origin(datastore: Datastore, order: dict) -> str | None:
    store_id = order.get("store_id")
    if store_id is None:
        return None
    store = datastore.stores.get(store_id)
    return (store or {}).get("address")


def assemble_route(
    datastore: Datastore,
    courier_id: Any,
    order_ids: Sequence[Any],
    origin_address: Optional[str] = None,
) -> dict:
    if courier_id in (None, "") or not order_ids:
        raise ValidationError("courier_id and order_ids are required")

    courier = datastore.couriers.get(courier_id)
    if courier is None:
        raise NotFoundError("Courier not found")
    if courier.get("status") == CourierStatus.BLOCKED.value:
        raise ConflictError("Courier is blocked")

    orders = _load_orders(datastore, order_ids)
    origin = (origin_address or "").strip() or _default_origin(datastore, orders[0])
    if not origin:
        raise ValidationError("origin_address is required when the store has no address")

    addresses = [order["customer_address"] for order in orders]
    maps_link = google_maps_link(origin, addresses)
    navigate_link = waze_link(addresses[0])
    ids = [order["id"] for order in orders]
    accepted_at = utc_now().isoformat()
    created: dict[str, Any] = {}

    def create_route() -> dict:
        route = datastore.routes.insert(
            {
                "courier_id": courier["id"],
                "store_id": orders[0].get("store_id"),
                "order_ids": ids,
                "total_orders": len(ids),
                "google_maps_link": maps_link,
                "waze_link": navigate_link,
                "status": RouteStatus.PENDING.value,
                "total_fee": round(len(ids) * settings.platform_fee, 2),
            }
        )
        created["route"] = route
        return route

    def delete_route(route: dict) -> None:
        datastore.routes.delete([eq("id", route["id"])])

    def accept_orders() -> list[dict]:
        return datastore.orders.update(
            [in_("id", ids)],
            {
                "status": OrderStatus.ACCEPTED.value,
                "accepted_at": accepted_at,
                "courier_id": courier["id"],
                "route_id": created["route"]["id"],
            },
        )

    def restore_orders(_: list[dict]) -> None:
        for order in orders:
            datastore.orders.update(
                [eq("id", order["id"])],
                {
                    "status": order.get("status"),
                    "accepted_at": order.get("accepted_at"),
                    "courier_id": order.get("courier_id"),
                    "route_id": order.get("route_id"),
                },
            )

    def dispatch_courier() -> dict:
        rows = datastore.couriers.update([eq("id", courier["id"])], {"status": CourierStatus.ON_ROUTE.value})
        if not rows:
            raise NotFoundError("Courier not found")
        return rows[0]

    def release_courier(_: dict) -> None:
        datastore.couriers.update([eq("id", courier["id"])], {"status": courier.get("status")})

    route, _, _ = (
        Saga("route assembly")
        .step("create route", create_route, delete_route)
        .step("accept orders", accept_orders, restore_orders)
        .step("dispatch courier", dispatch_courier, release_courier)
        .run()
    )
    logger.info(f"Route {route['id']} assembled for courier {courier['id']} with {len(ids)} order(s)")

    return {
        "route": route,
        "google_maps_link": maps_link,
        "waze_link": navigate_link,
        "message": f"Route with {len(ids)} delivery(ies) assembled",
        "orders": [
            {
                "sequence": position,
                "id": order["id"],
                "customer": order.get("customer_name"),
                "address": order["customer_address"],
                "confirmation_code": order.get("confirmation_code"),
            }
            for position, order in enumerate(orders, start=1)
        ],
    }


def _get_route(datastore: Datastore, route_id: Any) -> dict:
    route = datastore.routes.get(route_id)
    if route is None:
        raise NotFoundError("Route not found")
    return route


def start_route(datastore: Datastore, route_id: Any) -> dict:
    route = _get_route(datastore, route_id)
    if route.get("status") != RouteStatus.PENDING.value:
        raise ConflictError(f"Route is already {route.get('status')}")

    rows = datastore.routes.update(
        [eq("id", route_id), eq("status", RouteStatus.PENDING.value)],
        {"status": RouteStatus.IN_PROGRESS.value, "started_at": utc_now().isoformat()},
    )
    if not rows:
        raise ConflictError("Route changed while starting")
    logger.info(f"Route {route_id} started")
    return {"message": "Route started", "route": rows[0]}


def complete_route(datastore: Datastore, route_id: Any) -> dict:
    route = _get_route(datastore, route_id)
    if route.get("status") == RouteStatus.COMPLETED.value:
        raise ConflictError("Route is already completed")

    def mark_completed() -> dict:
        rows = datastore.routes.update(
            [eq("id", route_id), neq("status", RouteStatus.COMPLETED.value)],
            {"status": RouteStatus.COMPLETED.value, "completed_at": utc_now().isoformat()},
        )
        if not rows:
            raise ConflictError("Route is already completed")
        return rows[0]

    def reopen(_: dict) -> None:
        datastore.routes.update(
            [eq("id", route_id)],
            {"status": route.get("status"), "completed_at": route.get("completed_at")},
        )

    def release_courier() -> list[dict]:
        return datastore.couriers.update(
            [eq("id", route["courier_id"])], {"status": CourierStatus.AVAILABLE.value}
        )

    completed, _ = (
        Saga("route completion")
        .step("mark route completed", mark_completed, reopen)
        .step("release courier", release_courier)
        .run()
    )
    logger.info(f"Route {route_id} completed; courier {route['courier_id']} available")
    return {"message": "Route completed", "route": completed}


def list_routes(datastore: Datastore, status: Optional[str] = None, courier_id: Any = None) -> list[dict]:
    filters = []
    if status:
        filters.append(eq("status", status))
    if courier_id is not None:
        filters.append(eq("courier_id", courier_id))
    return datastore.routes.select(Query(filters=filters, order_by="created_at", descending=True))
