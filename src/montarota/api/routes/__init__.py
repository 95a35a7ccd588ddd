"""Route group exports."""

from . import analytics, auth, couriers, health, ocr, orders, payments, routes, stores, tracking

__all__ = ["auth", "stores", "couriers", "orders", "routes", "payments", "analytics", "ocr", "tracking", "health"]
