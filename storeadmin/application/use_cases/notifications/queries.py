"""Query notifications by viewer, read state and type."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy.orm import Session

from storeadmin.domain.entities import Notification, NotificationType, OperationResult
from storeadmin.domain.exceptions import NotificationNotFoundError
from storeadmin.infrastructure.repositories import NotificationRepository

from .common import returns_envelope


class AllUsers(Enum):
    """Sentinel type for :data:`ALL_USERS`."""

    ALL_USERS = "all_users"


ALL_USERS = AllUsers.ALL_USERS
"""Leave the viewer filter out entirely (distinct from ``None``)."""

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class NotificationQuery:
    """Filters applied by :func:`get_all_notifications`.

    ``user_id`` keeps the viewer's own notifications plus the global ones;
    passing ``None`` therefore keeps only global notifications, while
    :data:`ALL_USERS` disables the filter.
    """

    user_id: str | None | AllUsers = ALL_USERS
    unread_only: bool = False
    type: NotificationType | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.type is not None and not isinstance(self.type, NotificationType):
            object.__setattr__(self, "type", NotificationType(self.type))
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must not be negative")


def filter_notifications(
    notifications: Iterable[Notification], query: NotificationQuery
) -> list[Notification]:
    """Apply ``query`` to ``notifications`` and sort them newest first."""

    selected = list(notifications)
    if query.user_id is not ALL_USERS:
        selected = [n for n in selected if n.is_visible_to(query.user_id)]
    if query.unread_only:
        selected = [n for n in selected if not n.is_read]
    if query.type is not None:
        selected = [n for n in selected if n.type == query.type]

    # sorted() is stable, so equal timestamps keep their stored order.
    selected = sorted(selected, key=_created_at_key, reverse=True)
    if query.limit is not None:
        selected = selected[: query.limit]
    return selected


def list_notifications(session: Session, query: NotificationQuery | None = None) -> list[Notification]:
    """Load the collection and apply ``query``. Errors propagate."""

    notifications = NotificationRepository(session).list_all()
    return filter_notifications(notifications, query or NotificationQuery())


@returns_envelope("fetch notifications")
def get_all_notifications(
    session: Session, params: NotificationQuery | None = None
) -> OperationResult:
    """Return the notifications matching ``params``, newest first."""

    return OperationResult.ok(list_notifications(session, params))


@returns_envelope("fetch notification")
def get_notification(session: Session, notification_id: str) -> OperationResult:
    """Return a single notification or a ``Notification not found`` failure."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotificationNotFoundError(notification_id)
    return OperationResult.ok(notification)


@returns_envelope("count unread notifications")
def get_unread_notifications_count(
    session: Session, user_id: str | None | AllUsers = ALL_USERS
) -> OperationResult:
    """Count unread notifications visible to ``user_id``."""

    unread = list_notifications(
        session, NotificationQuery(user_id=user_id, unread_only=True)
    )
    return OperationResult.ok(len(unread))


def _created_at_key(notification: Notification) -> datetime:
    return notification.created_at or _OLDEST


__all__ = [
    "ALL_USERS",
    "AllUsers",
    "NotificationQuery",
    "filter_notifications",
    "get_all_notifications",
    "get_notification",
    "get_unread_notifications_count",
    "list_notifications",
]
