"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.domain.entities import (
    DEFAULT_NOTIFICATION_TITLE,
    Notification,
    NotificationPriority,
    NotificationType,
)
from storeadmin.domain.exceptions import NotificationNotFoundError, RecordNotFoundError
from storeadmin.infrastructure.record_store import RecordStore
from storeadmin.utils import now_in_app_timezone, parse_iso, to_iso

NOTIFICATIONS_COLLECTION = "notifications"

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session, *, store: RecordStore | None = None) -> None:
        self.session = session
        self.store = store or RecordStore(session)

    def list_all(self) -> list[Notification]:
        records = self.store.read_all(NOTIFICATIONS_COLLECTION)
        return self._to_entities(records)

    def iter_record_batches(self, batch_size: int) -> Iterator[list[dict[str, Any]]]:
        """Yield raw stored records, including ones that would not hydrate."""

        yield from self.store.iter_batches(NOTIFICATIONS_COLLECTION, batch_size)

    def get(self, notification_id: str) -> Notification | None:
        record = self.store.read(notification_id, NOTIFICATIONS_COLLECTION)
        if record is None:
            return None
        return self._to_entity(record)

    def create(self, notification: Notification) -> Notification:
        record = self.store.create(self._to_record(notification), NOTIFICATIONS_COLLECTION)
        return self._to_entity(record)

    def stamp_read(
        self, notification_id: str, *, read_by: str | None, read_at: datetime | None = None
    ) -> dict[str, Any]:
        """Stamp the read state on ``notification_id`` keeping its other fields.

        Returns the stored record as is, so records with a type this service
        does not know can still be marked.
        """

        timestamp = to_iso(read_at or now_in_app_timezone())
        try:
            record = self.store.update(
                notification_id,
                {
                    "isRead": True,
                    "readAt": timestamp,
                    "readBy": read_by,
                    "updatedAt": timestamp,
                },
                NOTIFICATIONS_COLLECTION,
            )
        except RecordNotFoundError as exc:
            raise NotificationNotFoundError(notification_id) from exc
        return record

    def mark_as_read(
        self, notification_id: str, *, read_by: str | None, read_at: datetime | None = None
    ) -> Notification:
        record = self.stamp_read(notification_id, read_by=read_by, read_at=read_at)
        return self._to_entity(record)

    def delete(self, notification_id: str) -> bool:
        return self.store.delete(notification_id, NOTIFICATIONS_COLLECTION)

    def _to_entities(self, records: list[dict[str, Any]]) -> list[Notification]:
        notifications: list[Notification] = []
        for record in records:
            try:
                notifications.append(self._to_entity(record))
            except ValueError as exc:
                logger.warning("Skipping malformed notification %s: %s", record.get("id"), exc)
        return notifications

    @staticmethod
    def _to_record(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "title": notification.title,
            "message": notification.message,
            "type": notification.type.value,
            "priority": notification.priority.value,
            "userId": notification.user_id,
            "isRead": notification.is_read,
            "readAt": to_iso(notification.read_at),
            "readBy": notification.read_by,
            "requiresAction": notification.requires_action,
            "actionLink": notification.action_link,
            "actionText": notification.action_text,
            "autoMarkRead": notification.auto_mark_read,
            "relatedId": notification.related_id,
            "relatedType": notification.related_type,
            "metadata": dict(notification.metadata or {}),
            "createdAt": to_iso(notification.created_at),
            "updatedAt": to_iso(notification.updated_at),
            "expiresAt": to_iso(notification.expires_at),
        }

    @staticmethod
    def _to_entity(record: dict[str, Any]) -> Notification:
        related_id = record.get("relatedId")
        return Notification(
            id=str(record["id"]),
            title=record.get("title") or DEFAULT_NOTIFICATION_TITLE,
            message=record.get("message") or "",
            type=NotificationType(record.get("type") or NotificationType.INFO.value),
            priority=NotificationPriority(
                record.get("priority") or NotificationPriority.MEDIUM.value
            ),
            user_id=record.get("userId"),
            is_read=bool(record.get("isRead", False)),
            read_at=parse_iso(record.get("readAt")),
            read_by=record.get("readBy"),
            requires_action=bool(record.get("requiresAction", False)),
            action_link=record.get("actionLink"),
            action_text=record.get("actionText"),
            auto_mark_read=bool(record.get("autoMarkRead", False)),
            related_id=str(related_id) if related_id is not None else None,
            related_type=record.get("relatedType"),
            metadata=dict(record.get("metadata") or {}),
            created_at=parse_iso(record.get("createdAt")),
            updated_at=parse_iso(record.get("updatedAt")),
            expires_at=parse_iso(record.get("expiresAt")),
        )


__all__ = ["NOTIFICATIONS_COLLECTION", "NotificationRepository"]
