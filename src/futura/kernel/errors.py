"""Error types for future-value settlement."""

from __future__ import annotations

from typing import Any


class Rejection(Exception):
    """Carrier for a rejection reason that is not an exception.

    The engine only stores exceptions, so plain payloads travel inside this
    wrapper and are unwrapped again whenever a reason is read.
    """

    def __init__(self, reason: Any) -> None:
        self.reason = reason
        super().__init__(reason)

    def __repr__(self) -> str:
        return f"Rejection(reason={self.reason!r})"


class AggregateRejection(Exception):
    """Error raised when too many inputs rejected to reach a quorum.

    Preserves every collected reason, in arrival order.
    """

    def __init__(self, message: str, reasons: list[Any]) -> None:
        self.reasons = reasons
        super().__init__(message)

    def __repr__(self) -> str:
        return f"AggregateRejection({super().__repr__()}, reasons={self.reasons!r})"


class PromiseStateError(RuntimeError):
    """Accessor used on a future value that is not in the matching state."""

    def __init__(self, message: str, status: str) -> None:
        self.status = status
        super().__init__(message)
