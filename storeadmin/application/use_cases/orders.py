"""Use case for changing an order's status from the admin panel."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from storeadmin.domain.entities import OperationResult, OrderStatus, is_awaiting_confirmation
from storeadmin.domain.exceptions import OrderNotFoundError
from storeadmin.infrastructure.repositories import OrderRepository

from .notifications.auto_clear import clear_order_notifications
from .notifications.common import returns_envelope
from .notifications.triggers import trigger_order_status_change_notification

logger = logging.getLogger(__name__)


@returns_envelope("update order status")
def update_order_status(
    session: Session,
    *,
    order_id: str,
    new_status: OrderStatus | str,
    user_id: str | None = None,
    customer_email: str | None = None,
) -> OperationResult:
    """Write ``new_status`` and acknowledge the order's alerts when it moves on."""

    status = OrderStatus(new_status)
    repository = OrderRepository(session)
    current = repository.get(order_id)
    if current is None:
        raise OrderNotFoundError(order_id)

    old_status = current.status
    updated = repository.update_status(order_id, status.value, changed_by=user_id)
    status_changed = old_status != status.value

    cleared = False
    if status_changed:
        logger.info("Order %s moved from %s to %s", order_id, old_status, status.value)
        clear_result = clear_order_notifications(session, order_id, status, user_id)
        if not clear_result.success:
            logger.warning(
                "Order %s notifications were not fully cleared: %s",
                order_id,
                clear_result.error,
            )
        trigger_order_status_change_notification(
            session,
            order_id=order_id,
            old_status=old_status,
            new_status=status,
            user_id=user_id,
            customer_email=customer_email or current.customer_email,
        )
        cleared = not is_awaiting_confirmation(status)

    return OperationResult.ok(
        {
            "order": updated,
            "status_changed": status_changed,
            "notifications_cleared": cleared,
        },
        message="Order status updated",
    )


__all__ = ["update_order_status"]
