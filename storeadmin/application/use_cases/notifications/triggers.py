"""Named producers that emit notifications for storefront events."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.domain.entities import (
    NotificationPriority,
    NotificationType,
    OperationResult,
    OrderStatus,
    is_awaiting_confirmation,
)
from storeadmin.schemas import NotificationInput
from storeadmin.utils import now_in_app_timezone, to_iso

from .auto_clear import auto_mark_order_notifications_read
from .common import returns_envelope
from .factory import create_notification

logger = logging.getLogger(__name__)

_SECURITY_ALERTS: dict[str, tuple[str, str]] = {
    "failed_login": (
        "Security Alert: Failed Login Attempts",
        "{attempts} failed login attempts detected for {email} from IP {ip_address}.",
    ),
    "suspicious_activity": (
        "Security Alert: Suspicious Activity",
        "Suspicious activity detected from IP {ip_address}. Review security logs.",
    ),
    "password_reset": (
        "Security Alert: Password Reset",
        "Password reset requested for {email} from IP {ip_address}.",
    ),
}


def _now_iso() -> str | None:
    return to_iso(now_in_app_timezone())


def _payload(value: Mapping[str, Any] | None, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be an object")
    return dict(value)


def trigger_new_user_notification(
    session: Session, *, user_id: str | None, email: str, name: str | None = None
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title="New User Registration",
            message=f"A new user {name or email} has registered on your platform.",
            type=NotificationType.INFO,
            priority=NotificationPriority.LOW,
            action_link="/admin/access/users",
            action_text="View Users",
            auto_mark_read=True,
            related_id=user_id or email,
            related_type="user",
            metadata={
                "userEmail": email,
                "userName": name,
                "registrationDate": _now_iso(),
            },
        ),
    )


def trigger_security_alert(
    session: Session,
    *,
    alert_type: str,
    email: str | None = None,
    ip_address: str | None = None,
    attempts: int = 0,
    user_agent: str | None = None,
) -> OperationResult:
    """Raise a security alert that stays unread until an admin reviews it."""

    title, template = _SECURITY_ALERTS.get(
        alert_type, ("Security Alert", "A security event has been detected.")
    )
    if alert_type == "failed_login":
        priority = NotificationPriority.HIGH if attempts > 5 else NotificationPriority.MEDIUM
    elif alert_type == "suspicious_activity":
        priority = NotificationPriority.HIGH
    else:
        priority = NotificationPriority.MEDIUM

    return create_notification(
        session,
        NotificationInput(
            title=title,
            message=template.format(attempts=attempts, email=email, ip_address=ip_address),
            type=NotificationType.SECURITY,
            priority=priority,
            requires_action=True,
            action_link="/admin/system/security",
            action_text="Review Security",
            auto_mark_read=False,
            metadata={
                "alertType": alert_type,
                "email": email,
                "ipAddress": ip_address,
                "userAgent": user_agent,
                "attempts": attempts,
                "timestamp": _now_iso(),
            },
        ),
    )


def trigger_maintenance_notification(
    session: Session,
    *,
    maintenance_type: str | None = None,
    title: str | None = None,
    message: str | None = None,
    scheduled_date: str | None = None,
    estimated_duration: str | None = None,
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title=title or "System Maintenance Scheduled",
            message=message
            or "System maintenance has been scheduled. Check for details and estimated downtime.",
            type=NotificationType.MAINTENANCE,
            priority=NotificationPriority.MEDIUM,
            action_link="/admin/system/maintenance",
            action_text="View Details",
            auto_mark_read=True,
            metadata={
                "maintenanceType": maintenance_type,
                "scheduledDate": scheduled_date,
                "estimatedDuration": estimated_duration,
            },
        ),
    )


def trigger_low_inventory_notification(
    session: Session, *, product_id: str, name: str, current_stock: int, threshold: int
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title="Low Inventory Alert",
            message=(
                f'Product "{name}" is running low. Current stock: {current_stock}, '
                f"Threshold: {threshold}."
            ),
            type=NotificationType.WARNING,
            priority=NotificationPriority.HIGH if current_stock == 0 else NotificationPriority.MEDIUM,
            requires_action=True,
            action_link=f"/admin/store/catalog?productId={product_id}",
            action_text="Update Inventory",
            related_id=product_id,
            related_type="product",
            metadata={
                "productId": product_id,
                "productName": name,
                "currentStock": current_stock,
                "threshold": threshold,
            },
        ),
    )


def trigger_payment_failure_notification(
    session: Session,
    *,
    order_id: str,
    customer_email: str | None,
    amount: float,
    reason: str,
) -> OperationResult:
    """Payment failures are errors, so they do not count as store order badges."""

    return create_notification(
        session,
        NotificationInput(
            title="Payment Failure Alert",
            message=(
                f"Payment of ${amount:.2f} failed for order #{order_id}. "
                f"Customer: {customer_email}. Reason: {reason}"
            ),
            type=NotificationType.ERROR,
            priority=NotificationPriority.HIGH,
            requires_action=True,
            action_link=f"/admin/store/orders?orderId={order_id}",
            action_text="Review Order",
            related_id=order_id,
            related_type="order",
            metadata={
                "orderId": order_id,
                "customerEmail": customer_email,
                "amount": amount,
                "failureReason": reason,
            },
        ),
    )


def trigger_backup_success_notification(
    session: Session, *, backup_size: str, duration: str, location: str
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title="Backup Completed Successfully",
            message=(
                f"System backup completed successfully. Size: {backup_size}, "
                f"Duration: {duration}, Location: {location}"
            ),
            type=NotificationType.MAINTENANCE,
            priority=NotificationPriority.LOW,
            auto_mark_read=True,
            metadata={"backupSize": backup_size, "duration": duration, "location": location},
        ),
    )


def trigger_backup_failure_notification(
    session: Session, *, error: str, attempted_date: str
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title="Backup Failed",
            message=(
                f"System backup failed on {attempted_date}. Error: {error}. "
                "Manual backup recommended."
            ),
            type=NotificationType.ERROR,
            priority=NotificationPriority.HIGH,
            requires_action=True,
            action_link="/admin/system/maintenance",
            action_text="Create Manual Backup",
            metadata={"error": error, "attemptedDate": attempted_date},
        ),
    )


def trigger_backup_reminder(
    session: Session,
    *,
    message: str | None = None,
    last_backup_date: str | None = None,
    reminder_type: str = "backup",
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title="Weekly Backup Reminder" if reminder_type == "weekly_backup" else "Backup Reminder",
            message=message
            or "It's time to create a system backup to ensure your data is safe.",
            type=NotificationType.MAINTENANCE,
            priority=NotificationPriority.MEDIUM,
            requires_action=True,
            action_link="/admin/system/maintenance",
            action_text="Create Backup",
            auto_mark_read=False,
            metadata={"reminderType": reminder_type, "lastBackupDate": last_backup_date},
        ),
    )


@returns_envelope("create monthly report notification")
def trigger_monthly_report_notification(
    session: Session,
    report_data: dict[str, Any] | None = None,
    *,
    now: datetime | None = None,
) -> OperationResult:
    """Announce last month's business report."""

    report = _payload(report_data, "report_data")
    current = now or now_in_app_timezone()
    first_of_month = current.replace(day=1)
    if first_of_month.month == 1:
        last_month = first_of_month.replace(year=first_of_month.year - 1, month=12)
    else:
        last_month = first_of_month.replace(month=first_of_month.month - 1)
    month_name = last_month.strftime("%B %Y")

    total_orders = report.get("total_orders", 0)
    total_revenue = report.get("total_revenue", 0)
    new_customers = report.get("new_customers", 0)
    return create_notification(
        session,
        NotificationInput(
            title=f"Monthly Business Report - {month_name}",
            message=(
                f"Your {month_name} report is ready! {total_orders} orders, "
                f"${total_revenue:,} revenue, {new_customers} new customers."
            ),
            type=NotificationType.REPORT,
            priority=NotificationPriority.MEDIUM,
            action_link="/admin/analytics",
            action_text="View Full Report",
            auto_mark_read=True,
            metadata={
                "reportType": "monthly",
                "reportMonth": last_month.month,
                "reportYear": last_month.year,
                "totalOrders": total_orders,
                "totalRevenue": total_revenue,
                "newCustomers": new_customers,
                "topProducts": report.get("top_products", []),
            },
        ),
    )


@returns_envelope("record order status change")
def trigger_order_status_change_notification(
    session: Session,
    *,
    order_id: str,
    old_status: str | None,
    new_status: OrderStatus | str,
    user_id: str | None = None,
    customer_email: str | None = None,
) -> OperationResult:
    """Acknowledge pending alerts and log the status change for the order."""

    status = OrderStatus(new_status)
    if is_awaiting_confirmation(old_status):
        auto_mark_order_notifications_read(session, order_id, status, user_id)

    if not customer_email or is_awaiting_confirmation(status):
        return OperationResult.ok(None, message="No notification created for this status change")

    return create_notification(
        session,
        NotificationInput(
            title="Order Status Update",
            message=f'Order #{order_id} status has been updated to "{status.value}".',
            type=NotificationType.INFO,
            priority=NotificationPriority.LOW,
            action_link=f"/admin/store/orders?orderId={order_id}",
            action_text="View Order",
            auto_mark_read=True,
            related_id=order_id,
            related_type="order",
            metadata={
                "orderId": order_id,
                "oldStatus": old_status,
                "newStatus": status.value,
                "customerEmail": customer_email,
                "statusChangedBy": user_id,
            },
        ),
    )


def trigger_disk_space_warning(
    session: Session, *, available_space: str, total_space: str, percentage_used: float
) -> OperationResult:
    return create_notification(
        session,
        NotificationInput(
            title="Disk Space Warning",
            message=(
                f"Disk space is running low. {available_space} available of {total_space} "
                f"total ({percentage_used}% used)."
            ),
            type=NotificationType.WARNING,
            priority=NotificationPriority.HIGH if percentage_used > 90 else NotificationPriority.MEDIUM,
            requires_action=True,
            action_link="/admin/system/maintenance",
            action_text="Manage Storage",
            metadata={
                "availableSpace": available_space,
                "totalSpace": total_space,
                "percentageUsed": percentage_used,
            },
        ),
    )


@returns_envelope("create system health check notification")
def trigger_system_health_check(
    session: Session, health_data: dict[str, Any] | None = None
) -> OperationResult:
    health = _payload(health_data, "health_data")
    return create_notification(
        session,
        NotificationInput(
            title="System Health Check",
            message="Daily system health check completed. All systems operational.",
            type=NotificationType.MAINTENANCE,
            priority=NotificationPriority.LOW,
            auto_mark_read=True,
            metadata={
                "healthCheckDate": _now_iso(),
                "uptime": health.get("uptime", "99.9%"),
                "responseTime": health.get("response_time", "120ms"),
                "errors": health.get("errors", 0),
            },
        ),
    )


@returns_envelope("create security digest")
def trigger_security_digest(
    session: Session, security_data: dict[str, Any] | None = None
) -> OperationResult:
    data = _payload(security_data, "security_data")
    critical = int(data.get("critical_updates", 0) or 0)
    return create_notification(
        session,
        NotificationInput(
            title="Weekly Security Digest",
            message=(
                f"Security summary: {data.get('login_attempts', 0)} login attempts, "
                f"{data.get('blocked_ips', 0)} blocked IPs, "
                f"{data.get('security_updates', 0)} updates available."
            ),
            type=NotificationType.SECURITY,
            priority=NotificationPriority.HIGH if critical > 0 else NotificationPriority.MEDIUM,
            requires_action=critical > 0,
            action_link="/admin/system/security",
            action_text="Review Security",
            auto_mark_read=critical == 0,
            metadata={
                "digestType": "weekly",
                "loginAttempts": data.get("login_attempts", 0),
                "blockedIPs": data.get("blocked_ips", 0),
                "securityUpdates": data.get("security_updates", 0),
                "criticalUpdates": critical,
            },
        ),
    )


@returns_envelope("schedule recurring notifications")
def schedule_recurring_notifications(
    session: Session, *, now: datetime | None = None
) -> OperationResult:
    """Emit the notifications that are due on ``now``'s weekday."""

    current = now or now_in_app_timezone()
    created: list[str] = []
    if current.day == 1:
        logger.info("Monthly report is due; expecting the monthly_report job to run")
    # Sunday
    if current.weekday() == 6:
        result = trigger_backup_reminder(
            session,
            message="Weekly system backup is recommended. Ensure your data is protected.",
            reminder_type="weekly_backup",
        )
        if not result.success:
            return result
        created.append(result.data.id)
    return OperationResult.ok({"created": created}, message="Recurring notifications scheduled")


__all__ = [
    "schedule_recurring_notifications",
    "trigger_backup_failure_notification",
    "trigger_backup_reminder",
    "trigger_backup_success_notification",
    "trigger_disk_space_warning",
    "trigger_low_inventory_notification",
    "trigger_maintenance_notification",
    "trigger_monthly_report_notification",
    "trigger_new_user_notification",
    "trigger_order_status_change_notification",
    "trigger_payment_failure_notification",
    "trigger_security_alert",
    "trigger_security_digest",
    "trigger_system_health_check",
]
