"""Domain enumerations and the authenticated identity."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    STORE = "store"
    COURIER = "courier"
    ADMIN = "admin"


class CourierStatus(str, Enum):
    AVAILABLE = "available"
    ON_ROUTE = "on_route"
    OFFLINE = "offline"
    BLOCKED = "blocked"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    COLLECTED = "collected"
    ON_ROUTE = "on_route"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    PROBLEM = "problem"


class RouteStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class PaymentType(str, Enum):
    STORE_TO_PLATFORM = "store_to_platform"


# Orders still expected to reach the customer.
ACTIVE_ORDER_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.ACCEPTED,
    OrderStatus.COLLECTED,
    OrderStatus.ON_ROUTE,
)

TERMINAL_ORDER_STATUSES = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

# Timestamp column stamped when an order enters the status.
ORDER_STATUS_TIMESTAMPS = {
    OrderStatus.ACCEPTED: "accepted_at",
    OrderStatus.COLLECTED: "collected_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCELLED: "cancelled_at",
}


@dataclass(slots=True)
class Identity:
    """Claims carried by a verified access token."""

    id: str
    email: str
    role: str
    store_id: Optional[str] = None
    courier_id: Optional[str] = None

    @property
    def is_store(self) -> bool:
        return self.role == UserRole.STORE.value
