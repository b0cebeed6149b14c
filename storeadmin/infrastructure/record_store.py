"""Generic key/value collection store on top of SQLAlchemy.

Every storefront collection (notifications, orders, settings, ...) lives in
the single ``record`` table. Records are plain JSON objects and are always
returned as ``{"id": key, **fields}``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator, Mapping
from typing import Any, NoReturn

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storeadmin.domain.exceptions import RecordNotFoundError, RecordStoreError
from storeadmin.infrastructure.models import RecordModel

logger = logging.getLogger(__name__)


class RecordStore:
    """Provide create/read/update/delete primitives for named collections."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, record: Mapping[str, Any], collection: str) -> dict[str, Any]:
        """Persist ``record`` and return it with its ``id``."""

        data = dict(record)
        key = str(data.pop("id", None) or uuid.uuid4().hex)
        model = RecordModel(collection=collection, key=key, data=data)
        try:
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail(exc, "create", collection, key)
        return self._to_record(model)

    def read(self, key: str, collection: str) -> dict[str, Any] | None:
        """Return the record stored under ``key`` or ``None``."""

        try:
            model = self._get_model(key, collection)
        except SQLAlchemyError as exc:
            self._fail(exc, "read", collection, key)
        if model is None:
            return None
        return self._to_record(model)

    def update(
        self, key: str, partial: Mapping[str, Any], collection: str
    ) -> dict[str, Any]:
        """Merge ``partial`` into the stored record and return the result."""

        try:
            model = self._get_model(key, collection)
            if model is None:
                raise RecordNotFoundError(key, collection)
            changes = {name: value for name, value in partial.items() if name != "id"}
            # Reassign so SQLAlchemy notices the JSON column changed.
            model.data = {**(model.data or {}), **changes}
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail(exc, "update", collection, key)
        return self._to_record(model)

    def delete(self, key: str, collection: str) -> bool:
        """Remove ``key`` from ``collection``. Return ``False`` when absent."""

        try:
            model = self._get_model(key, collection)
            if model is None:
                return False
            self.session.delete(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail(exc, "delete", collection, key)
        return True

    def read_all(self, collection: str) -> list[dict[str, Any]]:
        """Return every record in ``collection`` ordered by key."""

        try:
            models = (
                self.session.query(RecordModel)
                .filter(RecordModel.collection == collection)
                .order_by(RecordModel.key)
                .all()
            )
        except SQLAlchemyError as exc:
            self._fail(exc, "read_all", collection)
        return [self._to_record(model) for model in models]

    def iter_batches(
        self, collection: str, batch_size: int
    ) -> Iterator[list[dict[str, Any]]]:
        """Yield ``collection`` in key order, ``batch_size`` records at a time.

        Pagination is keyset based, so callers may delete records from a
        batch before asking for the next one.
        """

        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        last_key: str | None = None
        while True:
            try:
                query = self.session.query(RecordModel).filter(
                    RecordModel.collection == collection
                )
                if last_key is not None:
                    query = query.filter(RecordModel.key > last_key)
                models = query.order_by(RecordModel.key).limit(batch_size).all()
            except SQLAlchemyError as exc:
                self._fail(exc, "iter_batches", collection)
            if not models:
                return
            last_key = models[-1].key
            yield [self._to_record(model) for model in models]
            if len(models) < batch_size:
                return

    def get_item_key(self, field: str, value: Any, collection: str) -> str | None:
        """Return the key of the first record whose ``field`` equals ``value``."""

        for record in self.read_all(collection):
            if record.get(field) == value:
                return record["id"]
        return None

    def _get_model(self, key: str, collection: str) -> RecordModel | None:
        return (
            self.session.query(RecordModel)
            .filter(RecordModel.collection == collection, RecordModel.key == str(key))
            .one_or_none()
        )

    def _fail(
        self,
        exc: SQLAlchemyError,
        action: str,
        collection: str,
        key: str | None = None,
    ) -> NoReturn:
        self.session.rollback()
        logger.error(
            "Record store %s failed for %s/%s: %s", action, collection, key or "*", exc
        )
        raise RecordStoreError(f"Record store {action} failed for '{collection}'") from exc

    @staticmethod
    def _to_record(model: RecordModel) -> dict[str, Any]:
        return {**(model.data or {}), "id": model.key}


__all__ = ["RecordStore"]
