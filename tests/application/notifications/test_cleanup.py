"""Tests for the expiry sweeper and direct deletes."""

from __future__ import annotations

from datetime import timedelta

import pytest

from storeadmin.application.use_cases.notifications import (
    cleanup_expired_notifications,
    delete_notification,
)
from storeadmin.infrastructure.record_store import RecordStore
from storeadmin.infrastructure.repositories import NOTIFICATIONS_COLLECTION


def _remaining(session) -> set[str]:
    return {record["id"] for record in RecordStore(session).read_all(NOTIFICATIONS_COLLECTION)}


@pytest.mark.parametrize(
    ("read_days_ago", "deleted"),
    [(31, True), (29, False), (10, False)],
)
def test_read_retention_boundary(
    session, add_notification, now, read_days_ago: int, deleted: bool
) -> None:
    read_at = now - timedelta(days=read_days_ago)
    add_notification(id="read", isRead=True, readAt=read_at.isoformat())

    result = cleanup_expired_notifications(session, now=now)

    assert result.success is True
    assert result.data["deleted"] == (1 if deleted else 0)
    assert ("read" in _remaining(session)) is not deleted


def test_expires_at_boundary(session, add_notification, now) -> None:
    add_notification(id="expired", expiresAt=(now - timedelta(seconds=1)).isoformat())
    add_notification(id="future", expiresAt=(now + timedelta(hours=1)).isoformat())
    add_notification(id="plain")

    result = cleanup_expired_notifications(session, now=now)

    assert result.data == {"deleted": 1, "scanned": 3}
    assert _remaining(session) == {"future", "plain"}


def test_unread_notifications_are_kept_regardless_of_age(
    session, add_notification, now
) -> None:
    add_notification(id="ancient", isRead=False, createdAt=(now - timedelta(days=400)).isoformat())
    add_notification(id="read-no-stamp", isRead=True, readAt=None)

    result = cleanup_expired_notifications(session, now=now)

    assert result.data["deleted"] == 0
    assert _remaining(session) == {"ancient", "read-no-stamp"}


def test_sweep_runs_in_batches(session, add_notification, now) -> None:
    old = (now - timedelta(days=60)).isoformat()
    for index in range(7):
        add_notification(id=f"n-{index}", isRead=True, readAt=old if index % 2 == 0 else None)

    result = cleanup_expired_notifications(session, now=now, batch_size=2)

    assert result.data == {"deleted": 4, "scanned": 7}
    assert _remaining(session) == {"n-1", "n-3", "n-5"}


def test_custom_retention(session, add_notification, now) -> None:
    add_notification(id="read", isRead=True, readAt=(now - timedelta(days=8)).isoformat())

    result = cleanup_expired_notifications(session, now=now, read_retention_days=7)

    assert result.data["deleted"] == 1


def test_zero_retention_deletes_every_read_notification(
    session, add_notification, now
) -> None:
    add_notification(id="read", isRead=True, readAt=(now - timedelta(minutes=5)).isoformat())
    add_notification(id="unread")

    result = cleanup_expired_notifications(session, now=now, read_retention_days=0)

    assert result.data == {"deleted": 1, "scanned": 2}
    assert _remaining(session) == {"unread"}


def test_zero_batch_size_is_rejected(session, add_notification, now) -> None:
    add_notification(id="n-1")

    result = cleanup_expired_notifications(session, now=now, batch_size=0)

    assert result.success is False
    assert result.error == "batch_size must be positive"
    assert _remaining(session) == {"n-1"}


def test_expired_records_of_unknown_type_are_deleted(
    session, add_notification, now
) -> None:
    add_notification(id="old", type="promo", expiresAt=(now - timedelta(days=1)).isoformat())
    add_notification(id="current", type="promo")
    add_notification(
        id="stale-read",
        priority="urgent",
        isRead=True,
        readAt=(now - timedelta(days=45)).isoformat(),
    )

    result = cleanup_expired_notifications(session, now=now)

    assert result.data == {"deleted": 2, "scanned": 3}
    assert _remaining(session) == {"current"}


def test_delete_notification_is_terminal(session, add_notification) -> None:
    add_notification(id="n-1")

    first = delete_notification(session, "n-1")
    second = delete_notification(session, "n-1")

    assert first.success is True
    assert second.success is False
    assert second.error == "Notification not found"
