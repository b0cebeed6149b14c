"""Delete expired notifications and read notifications past retention."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.config import get_settings
from storeadmin.domain.entities import OperationResult
from storeadmin.domain.exceptions import NotificationNotFoundError
from storeadmin.infrastructure.notifications import dispatch_badges_refresh
from storeadmin.infrastructure.repositories import NotificationRepository
from storeadmin.utils import ensure_app_timezone, now_in_app_timezone, parse_iso

from .common import returns_envelope

logger = logging.getLogger(__name__)


def is_expired(
    record: Mapping[str, Any], *, now: datetime, read_retention: timedelta
) -> bool:
    """Return ``True`` when the sweeper should delete the stored ``record``.

    Only ``expiresAt``, ``isRead`` and ``readAt`` are looked at, so records
    with a type or priority this service does not know still expire.
    """

    expires_at = parse_iso(record.get("expiresAt"))
    if expires_at is not None and expires_at < now:
        return True
    read_at = parse_iso(record.get("readAt"))
    return (
        bool(record.get("isRead"))
        and read_at is not None
        and read_at < now - read_retention
    )


@returns_envelope("clean up expired notifications")
def cleanup_expired_notifications(
    session: Session,
    *,
    now: datetime | None = None,
    batch_size: int | None = None,
    read_retention_days: int | None = None,
) -> OperationResult:
    """Sweep the collection batch by batch and delete what has expired.

    Each batch is deleted before the next one is loaded, so memory stays
    bounded by ``batch_size`` however large the collection grows.
    """

    settings = get_settings()
    moment = ensure_app_timezone(now) or now_in_app_timezone()
    if read_retention_days is None:
        read_retention_days = settings.notification_read_retention_days
    if batch_size is None:
        batch_size = settings.notification_cleanup_batch_size
    retention = timedelta(days=read_retention_days)

    repository = NotificationRepository(session)
    scanned = 0
    deleted = 0
    for batch in repository.iter_record_batches(batch_size):
        scanned += len(batch)
        for record in batch:
            if is_expired(record, now=moment, read_retention=retention):
                if repository.delete(record["id"]):
                    deleted += 1

    logger.info("Notification cleanup scanned %s and deleted %s", scanned, deleted)
    if deleted:
        dispatch_badges_refresh("cleanup")
    return OperationResult.ok(
        {"deleted": deleted, "scanned": scanned},
        message=f"Cleaned up {deleted} expired notifications",
    )


@returns_envelope("delete notification")
def delete_notification(session: Session, notification_id: str) -> OperationResult:
    """Delete one notification; a missing id is reported, not raised."""

    if not NotificationRepository(session).delete(notification_id):
        raise NotificationNotFoundError(notification_id)
    dispatch_badges_refresh("delete")
    return OperationResult.ok({"id": notification_id}, message="Notification deleted")


__all__ = ["cleanup_expired_notifications", "delete_notification", "is_expired"]
