"""Shared fixtures: an in-memory record store and an application client."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["APP_TIMEZONE"] = "UTC"


@pytest.fixture()
def session():
    """Yield a session bound to a fresh in-memory database.

    Every test gets its own engine, so an application shutdown disposing the
    engine never leaks into the next test.
    """

    from storeadmin.infrastructure import database

    engine = database.build_engine("sqlite://")
    database.engine = engine
    database.SessionLocal.configure(bind=engine)
    database.initialize_database()

    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def store(session):
    from storeadmin.infrastructure.record_store import RecordStore

    return RecordStore(session)


@pytest.fixture()
def client(session):
    """Return a test client bound to a clean application instance."""

    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
        # Release the shared connection before shutdown disposes the engine.
        session.close()


@pytest.fixture()
def now() -> datetime:
    return datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def add_notification(store):
    """Write a raw notification record, bypassing the factory."""

    from storeadmin.infrastructure.repositories import NOTIFICATIONS_COLLECTION

    counter = {"value": 0}
    base = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def _add(**fields: Any) -> dict[str, Any]:
        counter["value"] += 1
        record: dict[str, Any] = {
            "id": f"n-{counter['value']:03d}",
            "title": "Test",
            "message": "",
            "type": "info",
            "priority": "medium",
            "userId": None,
            "isRead": False,
            "autoMarkRead": False,
            "metadata": {},
            "createdAt": (base + timedelta(minutes=counter["value"])).isoformat(),
        }
        record.update(fields)
        return store.create(record, NOTIFICATIONS_COLLECTION)

    return _add
