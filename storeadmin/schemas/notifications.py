"""Input schemas accepted by the notification factories.

Every field is optional and carries the documented default. Enumerated
fields are validated, so an unknown ``type`` or ``priority`` is rejected
instead of being stored verbatim.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storeadmin.domain.entities import (
    DEFAULT_NOTIFICATION_TITLE,
    NotificationPriority,
    NotificationType,
    OrderStatus,
)


class _InputModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class NotificationInput(_InputModel):
    """Loosely shaped payload for :func:`create_notification`."""

    title: str = DEFAULT_NOTIFICATION_TITLE
    message: str = ""
    type: NotificationType = NotificationType.INFO
    priority: NotificationPriority = NotificationPriority.MEDIUM
    user_id: str | None = None
    is_read: bool = False
    requires_action: bool = False
    action_link: str | None = None
    action_text: str | None = None
    auto_mark_read: bool = False
    related_id: str | None = None
    related_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime | None = None


class SystemNotificationInput(NotificationInput):
    """System notice; ``auto_mark_read`` follows ``requires_action`` when omitted."""

    auto_mark_read: bool | None = None

    def resolved_auto_mark_read(self) -> bool:
        if self.auto_mark_read is None:
            return not self.requires_action
        return self.auto_mark_read


class OrderNotificationInput(_InputModel):
    """Order fields copied into an order notification."""

    id: str | None = None
    order_number: str | None = None
    customer_name: str | None = None
    email: str | None = None
    total: float | None = None
    status: OrderStatus = OrderStatus.PENDING


__all__ = [
    "NotificationInput",
    "OrderNotificationInput",
    "SystemNotificationInput",
]
