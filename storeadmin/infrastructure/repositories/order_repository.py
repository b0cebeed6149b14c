"""Persistence helpers for storefront orders."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from storeadmin.domain.entities import Order
from storeadmin.domain.exceptions import OrderNotFoundError, RecordNotFoundError
from storeadmin.infrastructure.record_store import RecordStore
from storeadmin.utils import now_in_app_timezone, parse_iso, to_iso

ORDERS_COLLECTION = "orders"


class OrderRepository:
    """Read orders and write status changes back to the ``orders`` collection."""

    def __init__(self, session: Session, *, store: RecordStore | None = None) -> None:
        self.session = session
        self.store = store or RecordStore(session)

    def get(self, order_id: str) -> Order | None:
        record = self.store.read(order_id, ORDERS_COLLECTION)
        if record is None:
            return None
        return self._to_entity(record)

    def update_status(
        self,
        order_id: str,
        status: str,
        *,
        changed_by: str | None,
        changed_at: datetime | None = None,
    ) -> Order:
        timestamp = to_iso(changed_at or now_in_app_timezone())
        try:
            record = self.store.update(
                order_id,
                {"status": status, "updatedAt": timestamp, "statusChangedBy": changed_by},
                ORDERS_COLLECTION,
            )
        except RecordNotFoundError as exc:
            raise OrderNotFoundError(order_id) from exc
        return self._to_entity(record)

    @staticmethod
    def _to_entity(record: dict[str, Any]) -> Order:
        order_number = record.get("orderNumber")
        return Order(
            id=str(record["id"]),
            status=record.get("status"),
            order_number=str(order_number) if order_number is not None else None,
            customer_email=record.get("email") or record.get("customerEmail"),
            updated_at=parse_iso(record.get("updatedAt")),
            data=dict(record),
        )


__all__ = ["ORDERS_COLLECTION", "OrderRepository"]
