"""Uniform envelope returned by the public notification operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a use case: ``success`` plus optional data or error."""

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: Any = None, *, message: str | None = None) -> "OperationResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def failure(
        cls, error: str, *, data: Any = None, message: str | None = None
    ) -> "OperationResult":
        return cls(success=False, data=data, error=error, message=message)


__all__ = ["OperationResult"]
