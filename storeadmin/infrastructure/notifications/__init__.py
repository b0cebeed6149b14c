"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NotificationPublisher,
    dispatch_badges_refresh,
    dispatch_notification,
    notification_publisher,
    serialize_notification,
)

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_badges_refresh",
    "dispatch_notification",
    "serialize_notification",
]
