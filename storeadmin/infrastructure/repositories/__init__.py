"""Repository implementations for infrastructure layer."""

from .notification_repository import NOTIFICATIONS_COLLECTION, NotificationRepository
from .order_repository import ORDERS_COLLECTION, OrderRepository
from .settings_repository import SettingsRepository

__all__ = [
    "NOTIFICATIONS_COLLECTION",
    "NotificationRepository",
    "ORDERS_COLLECTION",
    "OrderRepository",
    "SettingsRepository",
]
