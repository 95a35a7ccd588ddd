"""Courier registry, GPS ingest and delivery credit."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...config import settings
from ...errors import ConflictError, InvalidStatus, MissingCoordinates, NotFoundError, ValidationError
from ...models.domain import CourierStatus
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq, is_null
from ..timeutils import utc_now

logger = logging.getLogger(__name__)

AVAILABLE_COURIER_COLUMNS = "id,name,phone,vehicle,rating_average,current_lat,current_lng"


def list_couriers(datastore: Datastore, status: Optional[str] = None) -> list[dict]:
    filters = [eq("status", status)] if status else []
    return datastore.couriers.select(Query(filters=filters, order_by="name"))


def list_available(datastore: Datastore) -> list[dict]:
    return datastore.couriers.select(
        Query(
            filters=[eq("status", CourierStatus.AVAILABLE.value)],
            columns=AVAILABLE_COURIER_COLUMNS,
            order_by="rating_average",
            descending=True,
        )
    )


def get_courier(datastore: Datastore, courier_id: Any) -> dict:
    courier = datastore.couriers.get(courier_id)
    if courier is None:
        raise NotFoundError("Courier not found")
    return courier


def create_courier(datastore: Datastore, payload: dict) -> dict:
    name = (payload.get("name") or "").strip()
    phone = (payload.get("phone") or "").strip()
    if not name or not phone:
        raise ValidationError("Name and phone are required")

    record = {key: value for key, value in payload.items() if value is not None}
    record.update(
        {
            "name": name,
            "phone": phone,
            "vehicle": payload.get("vehicle") or "motorcycle",
            "status": CourierStatus.AVAILABLE.value,
            "total_deliveries": 0,
            "balance": 0.0,
        }
    )
    courier = datastore.couriers.insert(record)
    logger.info(f"Created courier {courier['id']}")
    return courier


def set_status(datastore: Datastore, courier_id: Any, status: str) -> dict:
    try:
        new_status = CourierStatus(status)
    except ValueError as exc:
        raise InvalidStatus(f"Invalid courier status '{status}'") from exc

    updated = datastore.couriers.update([eq("id", courier_id)], {"status": new_status.value})
    if not updated:
        raise NotFoundError("Courier not found")
    logger.info(f"Courier {courier_id} is now {new_status.value}")
    return updated[0]


def record_position(
    datastore: Datastore,
    courier_id: Any,
    lat: Optional[float],
    lng: Optional[float],
    speed_kmh: Optional[float] = None,
    accuracy_m: Optional[float] = None,
) -> dict:
    """Move the courier's current position and append a ping to the GPS log."""
    if lat is None or lng is None:
        raise MissingCoordinates("Both lat and lng are required")

    updated = datastore.couriers.update(
        [eq("id", courier_id)],
        {"current_lat": lat, "current_lng": lng, "last_gps_at": utc_now().isoformat()},
    )
    if not updated:
        raise NotFoundError("Courier not found")

    datastore.gps_pings.insert(
        {
            "courier_id": courier_id,
            "lat": lat,
            "lng": lng,
            "speed_kmh": speed_kmh,
            "accuracy_m": accuracy_m,
        }
    )
    return {"ok": True}


def courier_track(datastore: Datastore, courier_id: Any, limit: Optional[int] = None) -> list[dict]:
    return datastore.gps_pings.select(
        Query(
            filters=[eq("courier_id", courier_id)],
            columns="lat,lng,created_at,speed_kmh",
            order_by="created_at",
            descending=True,
            limit=limit or settings.tracking_history_limit,
        )
    )


def credit_delivery(datastore: Datastore, courier_id: Any, amount: float) -> Optional[dict]:
    """Add one delivery and ``amount`` to the courier's running totals.

    The write is a compare-and-set on ``total_deliveries``: if another
    confirmation credited the courier in between, the read is repeated.
    Returns ``None`` when the courier record no longer exists.
    """
    for attempt in range(1, settings.courier_credit_max_retries + 1):
        courier = datastore.couriers.get(courier_id)
        if courier is None:
            logger.warning(f"Courier {courier_id} not found; delivery credit skipped")
            return None

        deliveries = courier.get("total_deliveries")
        guard = is_null("total_deliveries") if deliveries is None else eq("total_deliveries", deliveries)
        updated = datastore.couriers.update(
            [eq("id", courier_id), guard],
            {
                "total_deliveries": (deliveries or 0) + 1,
                "balance": round(float(courier.get("balance") or 0) + amount, 2),
            },
        )
        if updated:
            return updated[0]
        logger.info(f"Courier {courier_id} totals changed concurrently, retrying credit ({attempt})")

    raise ConflictError(f"Could not credit courier {courier_id}: totals kept changing")
