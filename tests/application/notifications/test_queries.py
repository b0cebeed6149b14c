"""Tests for the notification query engine."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from storeadmin.application.use_cases.notifications import (
    ALL_USERS,
    NotificationQuery,
    get_all_notifications,
    get_notification,
    get_unread_notifications_count,
)
from storeadmin.application.use_cases.notifications.queries import filter_notifications
from storeadmin.domain.entities import Notification, NotificationPriority, NotificationType
from storeadmin.domain.exceptions import RecordStoreError
from storeadmin.infrastructure.record_store import RecordStore


def _ids(result) -> list[str]:
    assert result.success is True
    return [notification.id for notification in result.data]


def test_results_are_sorted_newest_first(session, add_notification) -> None:
    add_notification(id="old", createdAt="2024-05-01T08:00:00+00:00")
    add_notification(id="new", createdAt="2024-05-03T08:00:00+00:00")
    add_notification(id="mid", createdAt="2024-05-02T08:00:00+00:00")

    assert _ids(get_all_notifications(session)) == ["new", "mid", "old"]


def test_user_filter_adds_global_notifications(session, add_notification) -> None:
    add_notification(id="global", userId=None)
    add_notification(id="mine", userId="admin-1")
    add_notification(id="theirs", userId="admin-2")

    visible = _ids(get_all_notifications(session, NotificationQuery(user_id="admin-1")))

    assert set(visible) == {"global", "mine"}


@pytest.mark.parametrize("viewer", ["admin-1", "admin-2", "someone-else"])
def test_global_notifications_are_visible_to_every_viewer(
    session, add_notification, viewer: str
) -> None:
    add_notification(id="global", userId=None)
    add_notification(id="scoped", userId="admin-1")

    assert "global" in _ids(get_all_notifications(session, NotificationQuery(user_id=viewer)))


def test_omitted_user_returns_everything_and_none_keeps_globals(
    session, add_notification
) -> None:
    add_notification(id="global", userId=None)
    add_notification(id="scoped", userId="admin-1")

    everything = _ids(get_all_notifications(session, NotificationQuery(user_id=ALL_USERS)))
    globals_only = _ids(get_all_notifications(session, NotificationQuery(user_id=None)))

    assert set(everything) == {"global", "scoped"}
    assert globals_only == ["global"]


def test_filters_combine_and_limit_truncates(session, add_notification) -> None:
    add_notification(id="a", type="order", isRead=False)
    add_notification(id="b", type="order", isRead=True)
    add_notification(id="c", type="info", isRead=False)
    add_notification(id="d", type="order", isRead=False)

    query = NotificationQuery(unread_only=True, type="order")
    assert _ids(get_all_notifications(session, query)) == ["d", "a"]

    limited = NotificationQuery(unread_only=True, type=NotificationType.ORDER, limit=1)
    assert _ids(get_all_notifications(session, limited)) == ["d"]


def test_over_constrained_query_is_empty(session, add_notification) -> None:
    add_notification(id="a", type="info", userId="admin-1")

    query = NotificationQuery(user_id="admin-2", type="security", unread_only=True)

    assert _ids(get_all_notifications(session, query)) == []


def test_query_rejects_unknown_type_and_negative_limit() -> None:
    with pytest.raises(ValueError):
        NotificationQuery(type="carrier-pigeon")
    with pytest.raises(ValueError):
        NotificationQuery(limit=-1)


def test_equal_timestamps_keep_stored_order() -> None:
    moment = datetime(2024, 5, 1, tzinfo=timezone.utc)
    notifications = [
        Notification(
            id=f"n{index}",
            title="t",
            message="",
            type=NotificationType.INFO,
            priority=NotificationPriority.LOW,
            created_at=moment if index < 3 else moment + timedelta(seconds=1),
        )
        for index in range(4)
    ]

    ordered = filter_notifications(notifications, NotificationQuery())

    assert [n.id for n in ordered] == ["n3", "n0", "n1", "n2"]


def test_malformed_records_are_skipped(session, add_notification) -> None:
    add_notification(id="good")
    add_notification(id="bad", type="carrier-pigeon")

    assert _ids(get_all_notifications(session)) == ["good"]


def test_get_notification_and_not_found(session, add_notification) -> None:
    add_notification(id="n-1", title="Hello")

    found = get_notification(session, "n-1")
    missing = get_notification(session, "missing")

    assert found.success is True
    assert found.data.title == "Hello"
    assert missing.success is False
    assert missing.error == "Notification not found"


def test_unread_count_respects_viewer(session, add_notification) -> None:
    add_notification(userId=None)
    add_notification(userId="admin-1")
    add_notification(userId="admin-2")
    add_notification(userId="admin-1", isRead=True)

    assert get_unread_notifications_count(session).data == 3
    assert get_unread_notifications_count(session, "admin-1").data == 2
    assert get_unread_notifications_count(session, None).data == 1


def test_store_failure_is_reported(session, monkeypatch) -> None:
    def broken_read_all(self, collection):
        raise RecordStoreError("store unavailable")

    monkeypatch.setattr(RecordStore, "read_all", broken_read_all)

    result = get_all_notifications(session)

    assert result.success is False
    assert result.error == "Failed to fetch notifications"
