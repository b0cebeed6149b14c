"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from anyio import from_thread

from storeadmin.domain.entities import Notification
from storeadmin.utils import to_iso

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` for its viewer, or for everyone when global."""

        message = {"type": "notification", "data": self._serialize(notification)}
        if notification.user_id is None:
            self._schedule(self._manager.broadcast, message)
        else:
            self._schedule(self._manager.send_to_user, notification.user_id, message)

    def dispatch_badges_refresh(self, reason: str) -> None:
        """Tell connected admins that unread counts changed."""

        self._schedule(self._manager.broadcast, {"type": "badges", "data": {"reason": reason}})

    def _schedule(self, func: Callable[..., Awaitable[None]], *args: Any) -> None:
        if not self._manager.has_connections():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(func, *args)
            except RuntimeError:
                # Not inside an AnyIO worker thread (scripts, direct calls).
                logger.debug("No event loop available; realtime push skipped")
        else:
            loop.create_task(func(*args))

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "title": notification.title,
            "message": notification.message,
            "type": notification.type.value,
            "priority": notification.priority.value,
            "user_id": notification.user_id,
            "is_read": notification.is_read,
            "read_at": to_iso(notification.read_at),
            "read_by": notification.read_by,
            "requires_action": notification.requires_action,
            "action_link": notification.action_link,
            "action_text": notification.action_text,
            "auto_mark_read": notification.auto_mark_read,
            "related_id": notification.related_id,
            "related_type": notification.related_type,
            "metadata": notification.metadata or {},
            "created_at": to_iso(notification.created_at),
            "updated_at": to_iso(notification.updated_at),
            "expires_at": to_iso(notification.expires_at),
        }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


def dispatch_badges_refresh(reason: str) -> None:
    """Public helper announcing that badge counts should be reloaded."""

    notification_publisher.dispatch_badges_refresh(reason)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NotificationPublisher",
    "dispatch_badges_refresh",
    "dispatch_notification",
    "notification_publisher",
    "serialize_notification",
]
