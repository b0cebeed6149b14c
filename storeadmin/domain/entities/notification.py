"""Domain entity representing an admin notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Kinds of notification shown in the admin panel."""

    ORDER = "order"
    SECURITY = "security"
    REPORT = "report"
    MAINTENANCE = "maintenance"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NotificationPriority(str, Enum):
    """Urgency levels used to order and style notifications."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


DEFAULT_NOTIFICATION_TITLE = "New Notification"

SYSTEM_NOTIFICATION_TYPES: tuple[NotificationType, ...] = (
    NotificationType.SECURITY,
    NotificationType.MAINTENANCE,
    NotificationType.ERROR,
    NotificationType.WARNING,
)
MARKETING_NOTIFICATION_TYPES: tuple[NotificationType, ...] = (
    NotificationType.REPORT,
    NotificationType.INFO,
)


@dataclass
class Notification:
    """Message surfaced to admins, optionally scoped to a single viewer.

    ``user_id`` set to ``None`` marks a global notification that every admin
    sees. ``read_at``/``read_by`` are only filled in by the read-state
    operations.
    """

    id: str
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    user_id: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
    read_by: str | None = None
    requires_action: bool = False
    action_link: str | None = None
    action_text: str | None = None
    auto_mark_read: bool = False
    related_id: str | None = None
    related_type: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    expires_at: datetime | None = None

    def is_visible_to(self, user_id: str | None) -> bool:
        """Return ``True`` when ``user_id`` should see this notification."""

        return self.user_id is None or self.user_id == user_id


__all__ = [
    "DEFAULT_NOTIFICATION_TITLE",
    "MARKETING_NOTIFICATION_TYPES",
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "SYSTEM_NOTIFICATION_TYPES",
]
