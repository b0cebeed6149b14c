"""Mark notifications as read."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.domain.entities import Notification, OperationResult
from storeadmin.domain.exceptions import RecordStoreError
from storeadmin.infrastructure.notifications import dispatch_badges_refresh
from storeadmin.infrastructure.repositories import NotificationRepository

from .common import returns_envelope

logger = logging.getLogger(__name__)


def mark_read(
    session: Session,
    notification_id: str,
    *,
    read_by: str | None,
    now: datetime | None = None,
) -> Notification:
    """Stamp ``notification_id`` as read by ``read_by``. Errors propagate.

    Marking an already read notification again refreshes the stamp.
    """

    repository = NotificationRepository(session)
    return repository.mark_as_read(notification_id, read_by=read_by, read_at=now)


def mark_many_read(
    session: Session,
    notification_ids: Iterable[str],
    *,
    read_by: str | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Mark each id in order and return the per-id breakdown.

    Writes are issued one at a time. A failed id does not stop the batch and
    nothing is retried; ``failed_ids`` lists what a caller could resubmit.
    Records are stamped without loading them as notifications, so a record
    with an unknown type is marked like any other.
    """

    repository = NotificationRepository(session)
    results: list[dict[str, Any]] = []
    failed_ids: list[str] = []
    for notification_id in notification_ids:
        try:
            repository.stamp_read(notification_id, read_by=read_by, read_at=now)
        except (ValueError, RecordStoreError) as exc:
            logger.warning("Could not mark notification %s as read: %s", notification_id, exc)
            results.append({"id": notification_id, "success": False, "error": str(exc)})
            failed_ids.append(notification_id)
        else:
            results.append({"id": notification_id, "success": True})

    return {
        "results": results,
        "success_count": len(results) - len(failed_ids),
        "failure_count": len(failed_ids),
        "failed_ids": failed_ids,
    }


@returns_envelope("mark notification as read")
def mark_notification_as_read(
    session: Session, notification_id: str, user_id: str | None = None
) -> OperationResult:
    """Mark one notification read on behalf of ``user_id``."""

    notification = mark_read(session, notification_id, read_by=user_id)
    dispatch_badges_refresh("read")
    return OperationResult.ok(notification, message="Notification marked as read")


@returns_envelope("mark notifications as read")
def mark_multiple_notifications_as_read(
    session: Session, notification_ids: Iterable[str], user_id: str | None = None
) -> OperationResult:
    """Mark several notifications read; ``success`` only if every id succeeded."""

    summary = mark_many_read(session, notification_ids, read_by=user_id)
    if summary["success_count"]:
        dispatch_badges_refresh("read")

    message = (
        f"{summary['success_count']} notifications marked as read, "
        f"{summary['failure_count']} failed"
    )
    if summary["failure_count"]:
        return OperationResult.failure(
            "Some notifications could not be marked as read",
            data=summary,
            message=message,
        )
    return OperationResult.ok(summary, message=message)


__all__ = [
    "mark_many_read",
    "mark_multiple_notifications_as_read",
    "mark_notification_as_read",
    "mark_read",
]
