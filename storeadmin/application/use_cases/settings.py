"""Use cases for reading cached site and store settings."""

from typing import Any

from sqlalchemy.orm import Session

from storeadmin.infrastructure.repositories import SettingsRepository
from storeadmin.infrastructure.repositories.settings_repository import (
    SITE_SETTINGS_COLLECTION,
    STORE_SETTINGS_COLLECTION,
)
from storeadmin.infrastructure.settings_cache import SettingsCache


def get_site_settings(session: Session, cache: SettingsCache) -> dict[str, Any] | None:
    """Return the site settings document, loading it on a cache miss."""

    repository = SettingsRepository(session)
    return cache.get_or_load(
        SITE_SETTINGS_COLLECTION,
        lambda: repository.get_first(SITE_SETTINGS_COLLECTION),
    )


def get_store_settings(session: Session, cache: SettingsCache) -> dict[str, Any] | None:
    """Return the store settings document, loading it on a cache miss."""

    repository = SettingsRepository(session)
    return cache.get_or_load(
        STORE_SETTINGS_COLLECTION,
        lambda: repository.get_first(STORE_SETTINGS_COLLECTION),
    )


def clear_settings_cache(cache: SettingsCache) -> None:
    """Forget cached settings so the next read goes to the store."""

    cache.clear()


__all__ = ["clear_settings_cache", "get_site_settings", "get_store_settings"]
