"""Endpoints and websocket handler for admin notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from storeadmin.application.use_cases.notifications import (
    ALL_USERS,
    NotificationQuery,
    auto_mark_order_notifications_read,
    cleanup_expired_notifications,
    create_notification,
    create_order_notification,
    create_system_notification,
    delete_notification,
    get_all_navigation_notification_counts,
    get_all_notifications,
    get_marketing_notification_count,
    get_navigation_section_counts,
    get_notification,
    get_store_orders_notification_count,
    get_system_notification_count,
    get_unread_notifications_count,
    mark_multiple_notifications_as_read,
    mark_notification_as_read,
)
from storeadmin.application.use_cases.notifications.queries import AllUsers, list_notifications
from storeadmin.application.use_cases.notifications.triggers import (
    trigger_backup_reminder,
    trigger_monthly_report_notification,
)
from storeadmin.domain.entities import NotificationPriority, NotificationType, OperationResult
from storeadmin.infrastructure.database import SessionLocal
from storeadmin.infrastructure.notifications import notification_manager, serialize_notification
from storeadmin.interfaces.api.dependencies import get_db
from storeadmin.interfaces.api.routes_helpers import to_response
from storeadmin.interfaces.api.schemas import (
    NotificationDispatchRequest,
    NotificationMarkReadRequest,
    NotificationReadRequest,
    OperationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])

# Connections opened without a user id only receive global notifications.
ANONYMOUS_VIEWER = "__global__"


def _viewer(user_id: str | None) -> str | AllUsers:
    return ALL_USERS if user_id is None else user_id


@router.get("/", response_model=OperationResponse)
def list_notifications_endpoint(
    user_id: str | None = Query(default=None),
    unread_only: bool = Query(default=False),
    type: NotificationType | None = Query(default=None),
    limit: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
) -> OperationResponse:
    """Return notifications newest first, optionally filtered."""

    query = NotificationQuery(
        user_id=_viewer(user_id),
        unread_only=unread_only,
        type=type,
        limit=limit,
    )
    return to_response(get_all_notifications(db, query))


@router.get("/unread-count", response_model=OperationResponse)
def unread_count(
    user_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> OperationResponse:
    return to_response(get_unread_notifications_count(db, _viewer(user_id)))


@router.get("/badges", response_model=OperationResponse)
def navigation_badges(
    user_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> OperationResponse:
    """Unread counts for every navigation section plus their total."""

    return to_response(get_all_navigation_notification_counts(db, _viewer(user_id)))


_SECTION_COUNTERS: dict[str, Callable[..., OperationResult]] = {
    "store": get_store_orders_notification_count,
    "system": get_system_notification_count,
    "marketing": get_marketing_notification_count,
}


@router.get("/badges/{section}", response_model=OperationResponse)
def section_badge(
    section: str,
    user_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> OperationResponse:
    counter = _SECTION_COUNTERS.get(section)
    if counter is None:
        return to_response(get_navigation_section_counts(db, [section], _viewer(user_id)))
    return to_response(counter(db, _viewer(user_id)))


@router.post("/read", response_model=OperationResponse)
def mark_many_as_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
) -> OperationResponse:
    """Mark a batch of notifications as read; partial failures are reported."""

    return to_response(
        mark_multiple_notifications_as_read(db, payload.unique_ids(), payload.user_id)
    )


@router.get("/{notification_id}", response_model=OperationResponse)
def read_notification(notification_id: str, db: Session = Depends(get_db)) -> OperationResponse:
    return to_response(get_notification(db, notification_id))


@router.post("/{notification_id}/read", response_model=OperationResponse)
def mark_as_read(
    notification_id: str,
    payload: NotificationReadRequest | None = None,
    db: Session = Depends(get_db),
) -> OperationResponse:
    user_id = payload.user_id if payload is not None else None
    return to_response(mark_notification_as_read(db, notification_id, user_id))


@router.delete("/{notification_id}", response_model=OperationResponse)
def remove_notification(notification_id: str, db: Session = Depends(get_db)) -> OperationResponse:
    return to_response(delete_notification(db, notification_id))


def _dispatch_order(db: Session, data: dict[str, Any]) -> OperationResult:
    order = data.get("order_data") or data.get("order") or {}
    return create_order_notification(db, order, data.get("order_type") or "online")


def _dispatch_order_status_change(db: Session, data: dict[str, Any]) -> OperationResult:
    order_id = data.get("order_id")
    new_status = data.get("new_status")
    if not order_id or not new_status:
        return OperationResult.failure("order_id and new_status are required")
    return auto_mark_order_notifications_read(db, str(order_id), new_status, data.get("user_id"))


def _dispatch_security_alert(db: Session, data: dict[str, Any]) -> OperationResult:
    extra = data.get("metadata") or {}
    if not isinstance(extra, dict):
        return OperationResult.failure("metadata must be an object")
    metadata = {
        "securityEvent": data.get("event"),
        "sourceIP": data.get("source_ip"),
        "userAgent": data.get("user_agent"),
        **extra,
    }
    return create_notification(
        db,
        {
            "type": NotificationType.SECURITY,
            "title": data.get("title") or "Security Alert",
            "message": data.get("message") or "A security event has been detected",
            "priority": data.get("priority") or NotificationPriority.HIGH,
            "requires_action": data.get("requires_action") is not False,
            "action_link": data.get("action_link"),
            "action_text": data.get("action_text") or "Review Security",
            "metadata": metadata,
        },
    )


def _dispatch_backup_reminder(db: Session, data: dict[str, Any]) -> OperationResult:
    return trigger_backup_reminder(
        db, message=data.get("message"), last_backup_date=data.get("last_backup_date")
    )


_DISPATCHERS: dict[str, Callable[[Session, dict[str, Any]], OperationResult]] = {
    "order": _dispatch_order,
    "order_status_change": _dispatch_order_status_change,
    "system": create_system_notification,
    "security_alert": _dispatch_security_alert,
    "backup_reminder": _dispatch_backup_reminder,
    "monthly_report": lambda db, data: trigger_monthly_report_notification(
        db, data.get("report_data")
    ),
    "cleanup": lambda db, data: cleanup_expired_notifications(db),
}


@router.post("/", response_model=OperationResponse)
def dispatch_notification_request(
    payload: NotificationDispatchRequest,
    db: Session = Depends(get_db),
) -> OperationResponse:
    """Route a producer request to the matching notification factory."""

    dispatcher = _DISPATCHERS.get(payload.type)
    if dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unknown notification type",
        )
    return to_response(dispatcher(db, payload.data))


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams new notifications to an admin."""

    user_id = websocket.query_params.get("user_id") or None
    viewer_id = user_id or ANONYMOUS_VIEWER

    session = SessionLocal()
    try:
        pending_notifications = list_notifications(
            session, NotificationQuery(user_id=user_id, unread_only=True)
        )
    except Exception:  # pragma: no cover - defensive path
        logger.exception("Could not load pending notifications for websocket")
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.connect(viewer_id, websocket)
    try:
        if pending_notifications:
            await websocket.send_json(
                {"type": "init", "data": [serialize_notification(n) for n in pending_notifications]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        mark_multiple_notifications_as_read(
                            ack_session, [str(i) for i in ids], user_id
                        )
                    finally:
                        ack_session.close()
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(viewer_id, websocket)
    except Exception:  # pragma: no cover - defensive path
        notification_manager.disconnect(viewer_id, websocket)
        raise
