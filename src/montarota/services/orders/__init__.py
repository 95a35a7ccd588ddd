"""Order lifecycle helpers."""

from .lifecycle import (
    advance_status,
    confirm_delivery,
    create_order,
    get_order,
    list_alerts,
    list_orders,
)

__all__ = [
    "create_order",
    "get_order",
    "list_orders",
    "advance_status",
    "confirm_delivery",
    "list_alerts",
]
