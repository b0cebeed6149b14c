"""Pydantic models for scheduled notification jobs."""

from typing import Any

from pydantic import BaseModel, Field


class CronJobRequest(BaseModel):
    """Scheduled job name plus its optional input."""

    action: str = Field(..., min_length=1)
    data: dict[str, Any] | None = None


__all__ = ["CronJobRequest"]
