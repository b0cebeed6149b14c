from .common import OperationResponse
from .cronjob import CronJobRequest
from .notification import (
    NotificationDispatchRequest,
    NotificationMarkReadRequest,
    NotificationReadRequest,
)
from .order import OrderStatusUpdate

__all__ = [
    "CronJobRequest",
    "NotificationDispatchRequest",
    "NotificationMarkReadRequest",
    "NotificationReadRequest",
    "OperationResponse",
    "OrderStatusUpdate",
]
