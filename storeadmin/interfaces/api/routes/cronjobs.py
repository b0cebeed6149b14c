"""Endpoints invoked by the external scheduler for notification jobs."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storeadmin.application.use_cases.notifications import cleanup_expired_notifications
from storeadmin.application.use_cases.notifications.triggers import (
    schedule_recurring_notifications,
    trigger_backup_reminder,
    trigger_monthly_report_notification,
    trigger_security_digest,
    trigger_system_health_check,
)
from storeadmin.domain.entities import OperationResult
from storeadmin.interfaces.api.dependencies import get_db, verify_cron_secret
from storeadmin.interfaces.api.routes_helpers import to_jsonable
from storeadmin.interfaces.api.schemas import CronJobRequest
from storeadmin.utils import now_in_app_timezone, to_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cronjobs", tags=["cronjobs"])


def _weekly_backup_reminder(db: Session, data: dict[str, Any]) -> OperationResult:
    return trigger_backup_reminder(
        db,
        message="Weekly system backup is recommended. Ensure your data is protected with regular backups.",
        reminder_type="weekly_backup",
    )


_JOBS: dict[str, Callable[[Session, dict[str, Any]], OperationResult]] = {
    "cleanup": lambda db, data: cleanup_expired_notifications(db),
    "monthly_report": lambda db, data: trigger_monthly_report_notification(db, data),
    "weekly_backup_reminder": _weekly_backup_reminder,
    "system_health_check": lambda db, data: trigger_system_health_check(db, data),
    "recurring": lambda db, data: schedule_recurring_notifications(db),
    "security_digest": lambda db, data: trigger_security_digest(db, data),
}


@router.post("/notifications", dependencies=[Depends(verify_cron_secret)])
def run_notification_job(
    payload: CronJobRequest,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Run one scheduled notification job and report its outcome."""

    job = _JOBS.get(payload.action)
    if job is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown action")

    logger.info("Running notification job %s", payload.action)
    result = job(db, payload.data or {})
    if result.success:
        message = f"Notification action '{payload.action}' completed successfully"
    else:
        logger.warning("Notification job %s failed: %s", payload.action, result.error)
        message = result.message or f"Notification action '{payload.action}' failed"
    return {
        "success": result.success,
        "data": to_jsonable(result.data),
        "error": result.error,
        "message": message,
        "timestamp": to_iso(now_in_app_timezone()),
    }


@router.get("/notifications")
def notification_jobs_health() -> dict[str, Any]:
    """Health check for the scheduler."""

    return {
        "success": True,
        "message": "Notifications cron job API is operational",
        "timestamp": to_iso(now_in_app_timezone()),
    }
