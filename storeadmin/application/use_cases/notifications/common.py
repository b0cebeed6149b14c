"""Shared helpers for the public notification operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec

from storeadmin.domain.entities import OperationResult
from storeadmin.domain.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

P = ParamSpec("P")


def returns_envelope(
    action: str,
) -> Callable[[Callable[P, OperationResult]], Callable[P, OperationResult]]:
    """Convert errors raised by ``func`` into a failed :class:`OperationResult`.

    ``ValueError`` covers missing notifications and orders as well as invalid
    input. Store failures are logged with their traceback.
    """

    def decorator(func: Callable[P, OperationResult]) -> Callable[P, OperationResult]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> OperationResult:
            try:
                return func(*args, **kwargs)
            except RecordStoreError as exc:
                logger.exception("Error trying to %s", action)
                return OperationResult.failure(f"Failed to {action}", message=str(exc))
            except ValueError as exc:
                logger.info("Could not %s: %s", action, exc)
                return OperationResult.failure(str(exc))

        return wrapper

    return decorator


__all__ = ["returns_envelope"]
