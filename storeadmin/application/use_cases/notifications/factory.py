"""Create notifications from loosely shaped producer payloads."""

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    OperationResult,
    OrderType,
)
from storeadmin.infrastructure.notifications import dispatch_notification
from storeadmin.infrastructure.repositories import NotificationRepository
from storeadmin.schemas import (
    NotificationInput,
    OrderNotificationInput,
    SystemNotificationInput,
)
from storeadmin.utils import ensure_app_timezone, now_in_app_timezone

from .common import returns_envelope

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def generate_notification_id(now: datetime | None = None) -> str:
    """Return an id shaped like ``notification_<epoch-millis>_<random>``."""

    moment = now or now_in_app_timezone()
    millis = int(moment.timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"notification_{millis}_{suffix}"


def build_notification(
    data: NotificationInput | Mapping[str, Any] | None,
    *,
    now: datetime,
    notification_id: str | None = None,
) -> Notification:
    """Fill every missing field of ``data`` with its default.

    Pure: no I/O, and the read stamp (``read_at``/``read_by``) is never set.
    """

    if not isinstance(data, NotificationInput):
        data = NotificationInput.model_validate(data or {})

    auto_mark_read = (
        data.resolved_auto_mark_read()
        if isinstance(data, SystemNotificationInput)
        else data.auto_mark_read
    )
    return Notification(
        id=notification_id or generate_notification_id(now),
        title=data.title,
        message=data.message,
        type=data.type,
        priority=data.priority,
        user_id=data.user_id,
        is_read=data.is_read,
        requires_action=data.requires_action,
        action_link=data.action_link,
        action_text=data.action_text,
        auto_mark_read=auto_mark_read,
        related_id=data.related_id,
        related_type=data.related_type,
        metadata=dict(data.metadata),
        created_at=now,
        updated_at=now,
        expires_at=ensure_app_timezone(data.expires_at),
    )


def build_order_notification_input(order: OrderNotificationInput) -> NotificationInput:
    """Map an online order to the fields of its admin alert."""

    order_label = order.order_number or order.id or "unknown"
    customer = order.customer_name or order.email or "a customer"
    total = f"{order.total:.2f}" if order.total is not None else "n/a"
    return NotificationInput(
        title="New Online Order",
        message=f"Order #{order_label} from {customer} is awaiting confirmation. Total: {total}.",
        type=NotificationType.ORDER,
        priority=NotificationPriority.HIGH,
        user_id=None,
        requires_action=True,
        action_link=f"/admin/store/orders?orderId={order.id}" if order.id else "/admin/store/orders",
        action_text="View Order",
        auto_mark_read=True,
        related_id=order.id,
        related_type="order",
        metadata={
            "orderId": order.id,
            "orderNumber": order.order_number,
            "customerName": order.customer_name,
            "customerEmail": order.email,
            "total": order.total,
            "status": order.status.value,
            "orderType": OrderType.ONLINE.value,
        },
    )


def persist_notification(
    session: Session, data: NotificationInput | Mapping[str, Any] | None
) -> Notification:
    """Build, store and announce a notification. Errors propagate."""

    notification = build_notification(data, now=now_in_app_timezone())
    saved = NotificationRepository(session).create(notification)
    logger.info(
        "Created %s notification %s (%s)", saved.type.value, saved.id, saved.priority.value
    )
    dispatch_notification(saved)
    return saved


@returns_envelope("create notification")
def create_notification(
    session: Session, data: NotificationInput | Mapping[str, Any] | None = None
) -> OperationResult:
    """Create a notification, defaulting every field the producer left out."""

    saved = persist_notification(session, data)
    return OperationResult.ok(saved, message="Notification created successfully")


@returns_envelope("create order notification")
def create_order_notification(
    session: Session,
    order: OrderNotificationInput | Mapping[str, Any] | None,
    order_type: OrderType | str = OrderType.ONLINE,
) -> OperationResult:
    """Alert admins about a new online order.

    Manually entered orders were created by an admin already, so they never
    produce a notification and nothing is written.
    """

    kind = order_type.value if isinstance(order_type, OrderType) else order_type
    if kind != OrderType.ONLINE.value:
        return OperationResult.ok(None, message="Notifications are only created for online orders")

    if not isinstance(order, OrderNotificationInput):
        order = OrderNotificationInput.model_validate(order or {})
    saved = persist_notification(session, build_order_notification_input(order))
    return OperationResult.ok(saved, message="Order notification created successfully")


@returns_envelope("create system notification")
def create_system_notification(
    session: Session, data: SystemNotificationInput | Mapping[str, Any] | None = None
) -> OperationResult:
    """Create a system notice with the caller's type and priority."""

    if not isinstance(data, SystemNotificationInput):
        data = SystemNotificationInput.model_validate(data or {})
    saved = persist_notification(session, data)
    return OperationResult.ok(saved, message="System notification created successfully")


__all__ = [
    "build_notification",
    "build_order_notification_input",
    "create_notification",
    "create_order_notification",
    "create_system_notification",
    "generate_notification_id",
    "persist_notification",
]
