"""Integration tests for the scheduled notification endpoint."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

CRON_SECRET = os.environ["CRON_SECRET"]
AUTH = {"Authorization": f"Bearer {CRON_SECRET}"}


def test_health_check_needs_no_auth(client: TestClient) -> None:
    response = client.get("/cronjobs/notifications")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["timestamp"]


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer wrong"}, {"Authorization": f"Token {CRON_SECRET}"}],
)
def test_rejects_missing_or_wrong_secret(client: TestClient, headers: dict) -> None:
    response = client.post("/cronjobs/notifications", json={"action": "cleanup"}, headers=headers)

    assert response.status_code == 401


def test_rejects_every_call_when_secret_is_unset(client: TestClient) -> None:
    from storeadmin.config import Settings, get_settings

    client.app.dependency_overrides[get_settings] = lambda: Settings(cron_secret="")
    try:
        response = client.post(
            "/cronjobs/notifications", json={"action": "cleanup"}, headers=AUTH
        )
    finally:
        client.app.dependency_overrides.clear()

    assert response.status_code == 401


def test_unknown_action_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/cronjobs/notifications", json={"action": "make_coffee"}, headers=AUTH
    )

    assert response.status_code == 400


def test_cleanup_action(client: TestClient, add_notification) -> None:
    past = datetime.now(timezone.utc) - timedelta(days=1)
    add_notification(id="expired", expiresAt=past.isoformat())
    add_notification(id="fresh")

    response = client.post("/cronjobs/notifications", json={"action": "cleanup"}, headers=AUTH)

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"] == {"deleted": 1, "scanned": 2}
    assert body["message"] == "Notification action 'cleanup' completed successfully"
    assert body["timestamp"]


@pytest.mark.parametrize(
    ("action", "data", "expected_type"),
    [
        ("monthly_report", {"total_orders": 3}, "report"),
        ("weekly_backup_reminder", None, "maintenance"),
        ("system_health_check", {"uptime": "99%"}, "maintenance"),
        ("security_digest", {"critical_updates": 1}, "security"),
    ],
)
def test_notification_actions(
    client: TestClient, action: str, data: dict | None, expected_type: str
) -> None:
    response = client.post(
        "/cronjobs/notifications", json={"action": action, "data": data}, headers=AUTH
    )

    body = response.json()
    assert body["success"] is True
    assert body["data"]["type"] == expected_type


def test_recurring_action(client: TestClient) -> None:
    response = client.post(
        "/cronjobs/notifications", json={"action": "recurring"}, headers=AUTH
    )

    body = response.json()
    assert body["success"] is True
    assert isinstance(body["data"]["created"], list)
