"""Envelope returned by every notification endpoint."""

from typing import Any

from pydantic import BaseModel


class OperationResponse(BaseModel):
    """``success`` plus optional ``data``, ``error`` and ``message``."""

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None


__all__ = ["OperationResponse"]
