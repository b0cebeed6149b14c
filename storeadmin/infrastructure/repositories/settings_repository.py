"""Access to the single-document site and store settings collections."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from storeadmin.infrastructure.record_store import RecordStore

SITE_SETTINGS_COLLECTION = "site_settings"
STORE_SETTINGS_COLLECTION = "store_settings"


class SettingsRepository:
    """Load the settings document stored in a settings collection."""

    def __init__(self, session: Session, *, store: RecordStore | None = None) -> None:
        self.session = session
        self.store = store or RecordStore(session)

    def get_first(self, collection: str) -> dict[str, Any] | None:
        """Return the first settings record of ``collection`` if any exists."""

        records = self.store.read_all(collection)
        return records[0] if records else None


__all__ = [
    "SITE_SETTINGS_COLLECTION",
    "STORE_SETTINGS_COLLECTION",
    "SettingsRepository",
]
