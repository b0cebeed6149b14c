"""FastAPI dependency utilities."""

import logging
import secrets

from fastapi import Depends, Header, HTTPException, Request, status

from storeadmin.config import Settings, get_settings
from storeadmin.infrastructure.database import get_db
from storeadmin.infrastructure.settings_cache import SettingsCache

logger = logging.getLogger(__name__)


def get_settings_cache(request: Request) -> SettingsCache:
    """Return the settings cache owned by the running application."""

    cache = getattr(request.app.state, "settings_cache", None)
    if cache is None:
        cache = SettingsCache(get_settings().settings_cache_ttl_seconds)
        request.app.state.settings_cache = cache
    return cache


def verify_cron_secret(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject scheduled-job calls that do not carry ``Bearer <CRON_SECRET>``."""

    expected = settings.cron_secret
    if expected is None:
        logger.warning("Rejected cron call: CRON_SECRET is not configured")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(token, expected):
        logger.warning("Rejected cron call with invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


__all__ = ["get_db", "get_settings_cache", "verify_cron_secret"]
