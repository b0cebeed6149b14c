"""Unread counts for the admin navigation sections."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.domain.entities import (
    MARKETING_NOTIFICATION_TYPES,
    SYSTEM_NOTIFICATION_TYPES,
    Notification,
    NotificationType,
    OperationResult,
    OrderType,
)

from .common import returns_envelope
from .queries import ALL_USERS, AllUsers, NotificationQuery, list_notifications

Viewer = str | None | AllUsers

SECTION_STORE = "store"
SECTION_SYSTEM = "system"
SECTION_MARKETING = "marketing"
NAVIGATION_SECTIONS = (SECTION_STORE, SECTION_SYSTEM, SECTION_MARKETING)


def is_store_order_alert(notification: Notification) -> bool:
    """Order alerts for storefront orders; manual orders never count."""

    return (
        notification.type == NotificationType.ORDER
        and notification.metadata.get("orderType") != OrderType.MANUAL.value
        and notification.related_type == "order"
    )


def is_system_alert(notification: Notification) -> bool:
    return notification.type in SYSTEM_NOTIFICATION_TYPES


def is_marketing_notice(notification: Notification) -> bool:
    """Reports and info notices that belong to a report or a campaign."""

    return notification.type in MARKETING_NOTIFICATION_TYPES and (
        notification.metadata.get("reportType") is not None
        or notification.metadata.get("campaignType") is not None
    )


_SECTION_PREDICATES: dict[str, Callable[[Notification], bool]] = {
    SECTION_STORE: is_store_order_alert,
    SECTION_SYSTEM: is_system_alert,
    SECTION_MARKETING: is_marketing_notice,
}


def system_breakdown(notifications: Iterable[Notification]) -> dict[str, int]:
    counts = {kind.value: 0 for kind in SYSTEM_NOTIFICATION_TYPES}
    for notification in notifications:
        if notification.type in SYSTEM_NOTIFICATION_TYPES:
            counts[notification.type.value] += 1
    return counts


def _unread(session: Session, user_id: Viewer, type_: NotificationType | None = None) -> list[Notification]:
    return list_notifications(
        session, NotificationQuery(user_id=user_id, unread_only=True, type=type_)
    )


def count_sections(
    unread: Sequence[Notification], sections: Iterable[str] = NAVIGATION_SECTIONS
) -> dict[str, Any]:
    """Evaluate each section predicate against one unread snapshot."""

    counts: dict[str, Any] = {}
    for section in sections:
        predicate = _SECTION_PREDICATES.get(section)
        if predicate is None:
            raise ValueError(f"Unknown navigation section '{section}'")
        counts[section] = sum(1 for notification in unread if predicate(notification))
    return counts


@returns_envelope("count store order notifications")
def get_store_orders_notification_count(
    session: Session, user_id: Viewer = ALL_USERS
) -> OperationResult:
    unread = _unread(session, user_id, NotificationType.ORDER)
    return OperationResult.ok(sum(1 for n in unread if is_store_order_alert(n)))


@returns_envelope("count system notifications")
def get_system_notification_count(
    session: Session, user_id: Viewer = ALL_USERS
) -> OperationResult:
    """Count security, maintenance, error and warning alerts with a per-type breakdown."""

    unread = [n for n in _unread(session, user_id) if is_system_alert(n)]
    return OperationResult.ok({"count": len(unread), "breakdown": system_breakdown(unread)})


@returns_envelope("count marketing notifications")
def get_marketing_notification_count(
    session: Session, user_id: Viewer = ALL_USERS
) -> OperationResult:
    unread = _unread(session, user_id)
    return OperationResult.ok(sum(1 for n in unread if is_marketing_notice(n)))


@returns_envelope("count navigation notifications")
def get_all_navigation_notification_counts(
    session: Session, user_id: Viewer = ALL_USERS
) -> OperationResult:
    """Return ``store``, ``system`` and ``marketing`` counts plus their ``total``."""

    unread = _unread(session, user_id)
    counts = count_sections(unread)
    counts["total"] = counts[SECTION_STORE] + counts[SECTION_SYSTEM] + counts[SECTION_MARKETING]
    counts["system_breakdown"] = system_breakdown(unread)
    return OperationResult.ok(counts)


@returns_envelope("count navigation sections")
def get_navigation_section_counts(
    session: Session, sections: Iterable[str], user_id: Viewer = ALL_USERS
) -> OperationResult:
    """Counts for the requested subset of navigation sections."""

    requested = list(dict.fromkeys(sections))
    unread = _unread(session, user_id)
    return OperationResult.ok(count_sections(unread, requested))


__all__ = [
    "NAVIGATION_SECTIONS",
    "count_sections",
    "get_all_navigation_notification_counts",
    "get_marketing_notification_count",
    "get_navigation_section_counts",
    "get_store_orders_notification_count",
    "get_system_notification_count",
    "is_marketing_notice",
    "is_store_order_alert",
    "is_system_alert",
    "system_breakdown",
]
