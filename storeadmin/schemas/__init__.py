"""Validated input shapes shared by the use cases and the API layer."""

from .notifications import (
    NotificationInput,
    OrderNotificationInput,
    SystemNotificationInput,
)

__all__ = [
    "NotificationInput",
    "OrderNotificationInput",
    "SystemNotificationInput",
]
