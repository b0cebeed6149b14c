"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from functools import lru_cache
from typing import Any

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from storeadmin.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The value comes from ``APP_TIMEZONE``. Names that cannot be resolved fall
    back to UTC so timestamps are still comparable across records.
    """

    tz_name = (get_settings().app_timezone or "").strip()
    if not tz_name or tz_name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown APP_TIMEZONE '%s'; using UTC", tz_name)
        return timezone.utc


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def to_iso(value: datetime | None) -> str | None:
    """Serialize ``value`` as an ISO-8601 string in the app timezone."""

    localized = ensure_app_timezone(value)
    return localized.isoformat() if localized else None


def parse_iso(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp coming from a stored record.

    Accepts ``datetime`` instances, ISO strings (including a trailing ``Z``)
    and ``None``. Anything unparseable is treated as missing.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_app_timezone(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Ignoring malformed timestamp %r", value)
        return None
    return ensure_app_timezone(parsed)
