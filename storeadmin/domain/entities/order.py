"""Domain entity representing a storefront order."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class OrderStatus(str, Enum):
    """Lifecycle states an order can move through."""

    PENDING = "pending"
    UNCONFIRMED = "unconfirmed"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"


class OrderType(str, Enum):
    """Origin of an order."""

    ONLINE = "online"
    MANUAL = "manual"


AWAITING_CONFIRMATION: frozenset[str] = frozenset(
    {OrderStatus.PENDING.value, OrderStatus.UNCONFIRMED.value}
)


def is_awaiting_confirmation(status: str | OrderStatus | None) -> bool:
    """Return ``True`` while an order still needs an admin to act on it."""

    if isinstance(status, OrderStatus):
        status = status.value
    return status in AWAITING_CONFIRMATION


@dataclass
class Order:
    """Subset of the order record used by the admin notification flows.

    Orders are owned by the storefront; ``data`` keeps the full stored record
    so updates never drop fields this service does not know about.
    """

    id: str
    status: str | None
    order_number: str | None = None
    customer_email: str | None = None
    updated_at: datetime | None = None
    data: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "AWAITING_CONFIRMATION",
    "Order",
    "OrderStatus",
    "OrderType",
    "is_awaiting_confirmation",
]
