"""Tests for clearing order alerts on status changes."""

from __future__ import annotations

import pytest

from storeadmin.application.use_cases.notifications import (
    auto_mark_order_notifications_read,
    clear_order_notifications,
)
from storeadmin.infrastructure.record_store import RecordStore
from storeadmin.infrastructure.repositories import NOTIFICATIONS_COLLECTION


def _is_read(session, notification_id: str) -> bool:
    return RecordStore(session).read(notification_id, NOTIFICATIONS_COLLECTION)["isRead"]


@pytest.fixture()
def order_alerts(add_notification):
    add_notification(
        id="clearable", type="order", relatedId="o-1", relatedType="order", autoMarkRead=True
    )
    add_notification(
        id="sticky", type="order", relatedId="o-1", relatedType="order", autoMarkRead=False
    )
    add_notification(
        id="other-order", type="order", relatedId="o-2", relatedType="order", autoMarkRead=True
    )
    add_notification(
        id="not-order", type="error", relatedId="o-1", relatedType="order", autoMarkRead=True
    )


@pytest.mark.parametrize("status", ["pending", "unconfirmed"])
def test_awaiting_confirmation_is_a_no_op(session, order_alerts, status: str) -> None:
    result = auto_mark_order_notifications_read(session, "o-1", status, "admin-1")

    assert result.success is True
    assert result.data["marked"] == 0
    assert result.data["reason"]
    assert _is_read(session, "clearable") is False


def test_only_auto_clearable_order_alerts_are_marked(session, order_alerts) -> None:
    result = auto_mark_order_notifications_read(session, "o-1", "confirmed", "admin-1")

    assert result.success is True
    assert result.data["marked"] == 1
    assert result.data["notification_ids"] == ["clearable"]
    assert _is_read(session, "clearable") is True
    assert _is_read(session, "sticky") is False
    assert _is_read(session, "other-order") is False
    assert _is_read(session, "not-order") is False

    stored = RecordStore(session).read("clearable", NOTIFICATIONS_COLLECTION)
    assert stored["readBy"] == "admin-1"


def test_already_read_alerts_are_not_candidates(session, add_notification) -> None:
    add_notification(
        id="done", type="order", relatedId="o-1", autoMarkRead=True, isRead=True
    )

    result = auto_mark_order_notifications_read(session, "o-1", "shipped")

    assert result.data["marked"] == 0
    assert result.data["notification_ids"] == []


def test_clear_ignores_auto_mark_read_flag(session, order_alerts) -> None:
    result = clear_order_notifications(session, "o-1", "processing", "admin-1")

    assert result.success is True
    assert result.data["marked"] == 2
    assert _is_read(session, "clearable") is True
    assert _is_read(session, "sticky") is True
    assert _is_read(session, "not-order") is False


def test_clear_is_a_no_op_while_pending(session, order_alerts) -> None:
    result = clear_order_notifications(session, "o-1", "pending")

    assert result.data["marked"] == 0
    assert _is_read(session, "sticky") is False


def test_unknown_status_is_rejected(session, order_alerts) -> None:
    result = auto_mark_order_notifications_read(session, "o-1", "teleported")

    assert result.success is False
    assert _is_read(session, "clearable") is False
