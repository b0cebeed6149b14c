"""Acknowledge order alerts once an admin moves the order forward."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from storeadmin.domain.entities import (
    Notification,
    NotificationType,
    OperationResult,
    OrderStatus,
    is_awaiting_confirmation,
)
from storeadmin.infrastructure.notifications import dispatch_badges_refresh
from storeadmin.infrastructure.repositories import NotificationRepository

from .common import returns_envelope
from .read_state import mark_many_read

logger = logging.getLogger(__name__)

AWAITING_CONFIRMATION_REASON = "Order is still pending or unconfirmed"


def _is_auto_clearable(order_id: str) -> Callable[[Notification], bool]:
    def predicate(notification: Notification) -> bool:
        return (
            notification.related_id == order_id
            and notification.type == NotificationType.ORDER
            and not notification.is_read
            and notification.auto_mark_read
        )

    return predicate


def _is_unread_order_alert(order_id: str) -> Callable[[Notification], bool]:
    def predicate(notification: Notification) -> bool:
        return (
            notification.related_id == order_id
            and notification.type == NotificationType.ORDER
            and not notification.is_read
        )

    return predicate


def _mark_matching(
    session: Session,
    *,
    order_id: str,
    new_status: OrderStatus | str,
    actor: str | None,
    predicate: Callable[[Notification], bool],
) -> OperationResult:
    status = OrderStatus(new_status)
    candidates = [
        notification
        for notification in NotificationRepository(session).list_all()
        if predicate(notification)
    ]
    if is_awaiting_confirmation(status):
        return OperationResult.ok(
            {"marked": 0, "notification_ids": [], "failed_ids": [], "reason": AWAITING_CONFIRMATION_REASON},
            message=AWAITING_CONFIRMATION_REASON,
        )

    ids = [notification.id for notification in candidates]
    summary = mark_many_read(session, ids, read_by=actor)
    marked = summary["success_count"]
    if marked:
        logger.info(
            "Marked %s notifications for order %s as read (status %s)",
            marked,
            order_id,
            status.value,
        )
        dispatch_badges_refresh("order_status")

    data = {
        "marked": marked,
        "notification_ids": ids,
        "failed_ids": summary["failed_ids"],
    }
    message = f"{marked} order notifications marked as read"
    if summary["failure_count"]:
        return OperationResult.failure(
            "Some order notifications could not be marked as read", data=data, message=message
        )
    return OperationResult.ok(data, message=message)


@returns_envelope("auto-mark order notifications")
def auto_mark_order_notifications_read(
    session: Session,
    order_id: str,
    new_status: OrderStatus | str,
    user_id: str | None = None,
) -> OperationResult:
    """Mark the order's auto-clearable alerts read once it leaves pending/unconfirmed."""

    return _mark_matching(
        session,
        order_id=str(order_id),
        new_status=new_status,
        actor=user_id,
        predicate=_is_auto_clearable(str(order_id)),
    )


@returns_envelope("clear order notifications")
def clear_order_notifications(
    session: Session,
    order_id: str,
    new_status: OrderStatus | str,
    user_id: str | None = None,
) -> OperationResult:
    """Mark every unread alert of the order read, whatever its ``auto_mark_read``.

    Used when an admin changes the status from the orders screen. Still a
    no-op while the order is pending or unconfirmed.
    """

    return _mark_matching(
        session,
        order_id=str(order_id),
        new_status=new_status,
        actor=user_id,
        predicate=_is_unread_order_alert(str(order_id)),
    )


__all__ = [
    "AWAITING_CONFIRMATION_REASON",
    "auto_mark_order_notifications_read",
    "clear_order_notifications",
]
