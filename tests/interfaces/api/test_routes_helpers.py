"""Tests for the envelope helpers shared by the routers."""

from datetime import datetime, timezone

from storeadmin.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    OperationResult,
    Order,
)
from storeadmin.interfaces.api.routes_helpers import to_jsonable, to_response


def test_nested_domain_objects_are_serialized() -> None:
    notification = Notification(
        id="n-1",
        title="Hello",
        message="",
        type=NotificationType.ORDER,
        priority=NotificationPriority.HIGH,
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    order = Order(id="o-1", status="shipped", data={"id": "o-1", "total": 5})

    payload = to_jsonable({"items": [notification], "order": order, "count": 1})

    assert payload["items"][0]["type"] == "order"
    assert payload["items"][0]["created_at"] == "2024-05-01T00:00:00+00:00"
    assert payload["order"]["status"] == "shipped"
    assert payload["order"]["total"] == 5
    assert payload["count"] == 1


def test_failure_envelope_keeps_error_and_message() -> None:
    response = to_response(OperationResult.failure("Failed to fetch", message="boom"))

    assert response.model_dump() == {
        "success": False,
        "data": None,
        "error": "Failed to fetch",
        "message": "boom",
    }
