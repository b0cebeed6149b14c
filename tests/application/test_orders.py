"""Tests for the order status use case."""

from __future__ import annotations

import pytest

from storeadmin.application.use_cases import update_order_status
from storeadmin.infrastructure.record_store import RecordStore
from storeadmin.infrastructure.repositories import NOTIFICATIONS_COLLECTION, ORDERS_COLLECTION


@pytest.fixture()
def pending_order(store, add_notification):
    store.create(
        {"id": "o-1", "status": "pending", "orderNumber": "1001", "email": "c@example.com"},
        ORDERS_COLLECTION,
    )
    add_notification(
        id="alert", type="order", relatedId="o-1", relatedType="order", autoMarkRead=False
    )


def test_moving_forward_clears_every_order_alert(session, pending_order) -> None:
    result = update_order_status(
        session, order_id="o-1", new_status="confirmed", user_id="admin-1"
    )

    assert result.success is True
    assert result.data["status_changed"] is True
    assert result.data["notifications_cleared"] is True
    assert result.data["order"].status == "confirmed"

    store = RecordStore(session)
    order = store.read("o-1", ORDERS_COLLECTION)
    assert order["status"] == "confirmed"
    assert order["orderNumber"] == "1001"
    assert order["statusChangedBy"] == "admin-1"
    assert store.read("alert", NOTIFICATIONS_COLLECTION)["isRead"] is True

    updates = [
        record
        for record in store.read_all(NOTIFICATIONS_COLLECTION)
        if record["title"] == "Order Status Update"
    ]
    assert len(updates) == 1
    assert updates[0]["metadata"]["customerEmail"] == "c@example.com"


def test_same_status_changes_nothing(session, pending_order) -> None:
    result = update_order_status(session, order_id="o-1", new_status="pending")

    assert result.success is True
    assert result.data["status_changed"] is False
    assert RecordStore(session).read("alert", NOTIFICATIONS_COLLECTION)["isRead"] is False


def test_back_to_unconfirmed_keeps_alerts(session, pending_order) -> None:
    result = update_order_status(session, order_id="o-1", new_status="unconfirmed")

    assert result.data["status_changed"] is True
    assert result.data["notifications_cleared"] is False
    assert RecordStore(session).read("alert", NOTIFICATIONS_COLLECTION)["isRead"] is False


def test_missing_order_is_reported(session) -> None:
    result = update_order_status(session, order_id="missing", new_status="confirmed")

    assert result.success is False
    assert result.error == "Order not found"
