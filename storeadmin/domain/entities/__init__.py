"""Domain entities exposed by the application."""

from .notification import (
    DEFAULT_NOTIFICATION_TITLE,
    MARKETING_NOTIFICATION_TYPES,
    SYSTEM_NOTIFICATION_TYPES,
    Notification,
    NotificationPriority,
    NotificationType,
)
from .order import (
    AWAITING_CONFIRMATION,
    Order,
    OrderStatus,
    OrderType,
    is_awaiting_confirmation,
)
from .result import OperationResult

__all__ = [
    "AWAITING_CONFIRMATION",
    "DEFAULT_NOTIFICATION_TITLE",
    "MARKETING_NOTIFICATION_TYPES",
    "SYSTEM_NOTIFICATION_TYPES",
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "OperationResult",
    "Order",
    "OrderStatus",
    "OrderType",
    "is_awaiting_confirmation",
]
