"""Pydantic models describing notification payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")
    user_id: str | None = Field(default=None, description="Admin marking the notifications")

    def unique_ids(self) -> list[str]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[str] = []
        seen: set[str] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationReadRequest(BaseModel):
    """Payload used to mark a single notification as read."""

    user_id: str | None = None


class NotificationDispatchRequest(BaseModel):
    """Producer request routed by ``type`` to the matching factory."""

    type: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "NotificationDispatchRequest",
    "NotificationMarkReadRequest",
    "NotificationReadRequest",
]
