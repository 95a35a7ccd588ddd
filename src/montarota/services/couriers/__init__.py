"""Courier service helpers."""

from .service import (
    courier_track,
    create_courier,
    credit_delivery,
    get_courier,
    list_available,
    list_couriers,
    record_position,
    set_status,
)

__all__ = [
    "list_couriers",
    "list_available",
    "get_courier",
    "create_courier",
    "set_status",
    "record_position",
    "courier_track",
    "credit_delivery",
]
