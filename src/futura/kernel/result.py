"""Failure kinds and settlement snapshots - pure and dependency-free."""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Literal, get_args

FailureKind = Literal["generic", "timeout", "cancellation"]
Status = Literal["pending", "fulfilled", "rejected"]

_KIND_ALIASES: dict[str, FailureKind] = {"cancel": "cancellation"}


def normalize_kind(kind: str) -> FailureKind:
    """Map a kind name (or alias) onto a FailureKind.

    Raises:
        ValueError: If the name is not a known failure kind.
    """
    kind = _KIND_ALIASES.get(kind, kind)
    if kind not in get_args(FailureKind):
        raise ValueError(f"Unknown failure kind: {kind!r}")
    return kind  # type: ignore[return-value]


@dataclass(frozen=True)
class Outcome:
    """
    Snapshot of a future value's state.

    Kinds:
    - pending: no outcome yet
    - fulfilled: settled with `value`
    - rejected: settled with `reason`, classified by `kind`
    """

    status: Status
    value: Any | None = None
    reason: Any | None = None
    kind: FailureKind | None = None

    @staticmethod
    def Pending() -> Outcome:
        return Outcome(status="pending")

    @staticmethod
    def Fulfilled(value: Any) -> Outcome:
        return Outcome(status="fulfilled", value=value)

    @staticmethod
    def Rejected(reason: Any, kind: FailureKind = "generic") -> Outcome:
        return Outcome(status="rejected", reason=reason, kind=kind)

    @classmethod
    def of(cls, promise: Any) -> Outcome:
        """Read the current state of anything implementing StatePort."""
        if promise.is_fulfilled():
            return cls.Fulfilled(promise.get_value())
        if promise.is_rejected():
            return cls.Rejected(promise.get_reason(), promise.failure_kind())
        return cls.Pending()


async def settle(awaitable: Awaitable[Any]) -> Outcome:
    """Wait for a future value to settle and return its outcome.

    Never raises the rejection; it is reported in the returned Outcome.
    """
    from futura.kernel.promise import Promise

    promise = Promise.adopt(awaitable)
    await promise.wait()
    return Outcome.of(promise)
