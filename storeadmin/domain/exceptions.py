"""Errors raised by the storage and notification layers."""


class RecordStoreError(RuntimeError):
    """The underlying record store could not complete an operation."""


class RecordNotFoundError(ValueError):
    """A record key does not exist in the requested collection."""

    def __init__(self, key: str, collection: str) -> None:
        super().__init__(f"Record '{key}' not found in collection '{collection}'")
        self.key = key
        self.collection = collection


class NotificationNotFoundError(ValueError):
    """The referenced notification does not exist."""

    def __init__(self, notification_id: str) -> None:
        super().__init__("Notification not found")
        self.notification_id = notification_id


class OrderNotFoundError(ValueError):
    """The referenced order does not exist."""

    def __init__(self, order_id: str) -> None:
        super().__init__("Order not found")
        self.order_id = order_id


__all__ = [
    "NotificationNotFoundError",
    "OrderNotFoundError",
    "RecordNotFoundError",
    "RecordStoreError",
]
