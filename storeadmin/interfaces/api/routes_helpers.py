"""Helper utilities shared across API route handlers."""

from typing import Any

from storeadmin.domain.entities import Notification, OperationResult, Order
from storeadmin.infrastructure.notifications import serialize_notification
from storeadmin.interfaces.api.schemas import OperationResponse
from storeadmin.utils import to_iso


def serialize_order(order: Order) -> dict[str, Any]:
    """Return the JSON representation of ``order``."""

    return {
        **order.data,
        "id": order.id,
        "status": order.status,
        "order_number": order.order_number,
        "customer_email": order.customer_email,
        "updated_at": to_iso(order.updated_at),
    }


def to_jsonable(value: Any) -> Any:
    """Convert domain objects nested in ``value`` into plain JSON values."""

    if isinstance(value, Notification):
        return serialize_notification(value)
    if isinstance(value, Order):
        return serialize_order(value)
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def to_response(result: OperationResult) -> OperationResponse:
    """Map an :class:`OperationResult` onto the HTTP envelope."""

    return OperationResponse(
        success=result.success,
        data=to_jsonable(result.data),
        error=result.error,
        message=result.message,
    )
