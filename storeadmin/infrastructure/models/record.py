"""SQLAlchemy model backing the generic collection record store."""

from sqlalchemy import Column, DateTime, Integer, JSON, String, UniqueConstraint

from storeadmin.infrastructure.database import Base
from storeadmin.utils import now_in_app_naive_datetime


class RecordModel(Base):
    """One keyed JSON document inside a named collection."""

    __tablename__ = "record"
    __table_args__ = (
        UniqueConstraint("collection", "key", name="uq_record_collection_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    collection = Column(String(100), nullable=False, index=True)
    key = Column(String(191), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["RecordModel"]
