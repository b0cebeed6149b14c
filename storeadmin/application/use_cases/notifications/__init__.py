"""Public notification operations.

Every function here returns an :class:`OperationResult`; store failures,
missing ids and invalid input never escape as exceptions.
"""

from .auto_clear import auto_mark_order_notifications_read, clear_order_notifications
from .badges import (
    NAVIGATION_SECTIONS,
    get_all_navigation_notification_counts,
    get_marketing_notification_count,
    get_navigation_section_counts,
    get_store_orders_notification_count,
    get_system_notification_count,
)
from .cleanup import cleanup_expired_notifications, delete_notification
from .factory import (
    build_notification,
    create_notification,
    create_order_notification,
    create_system_notification,
)
from .queries import (
    ALL_USERS,
    NotificationQuery,
    get_all_notifications,
    get_notification,
    get_unread_notifications_count,
)
from .read_state import mark_multiple_notifications_as_read, mark_notification_as_read

__all__ = [
    "ALL_USERS",
    "NAVIGATION_SECTIONS",
    "NotificationQuery",
    "auto_mark_order_notifications_read",
    "build_notification",
    "cleanup_expired_notifications",
    "clear_order_notifications",
    "create_notification",
    "create_order_notification",
    "create_system_notification",
    "delete_notification",
    "get_all_navigation_notification_counts",
    "get_all_notifications",
    "get_marketing_notification_count",
    "get_navigation_section_counts",
    "get_notification",
    "get_store_orders_notification_count",
    "get_system_notification_count",
    "get_unread_notifications_count",
    "mark_multiple_notifications_as_read",
    "mark_notification_as_read",
]
