"""ORM models used by the application infrastructure."""

from .record import RecordModel

__all__ = ["RecordModel"]
