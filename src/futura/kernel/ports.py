"""Port protocols for futura - pure abstractions.

A future value is anything that satisfies these ports; generic code is
written against the capabilities, never against a concrete engine type.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from futura.kernel.result import FailureKind


@runtime_checkable
class ChainPort(Protocol):
    """Chaining port.

    Every method returns a new future value and schedules the callback on a
    later loop turn, even when the receiver is already settled.
    """

    def then(self, on_fulfilled: Callable[[Any], Any]) -> ChainPort:
        """Run `on_fulfilled` with the value; rejections pass through."""
        ...

    def catch_all(self, on_rejected: Callable[[Any], Any]) -> ChainPort:
        """Run `on_rejected` with the reason; values pass through."""
        ...

    def catch_kind(
        self,
        kind: FailureKind | str | type[BaseException],
        on_rejected: Callable[[Any], Any],
    ) -> ChainPort:
        """Like catch_all, restricted to rejections of the given kind."""
        ...

    def finally_(self, on_settled: Callable[[], Any]) -> ChainPort:
        """Run `on_settled` on either outcome and keep the outcome."""
        ...


@runtime_checkable
class StatePort(Protocol):
    """Non-destructive state inspection port."""

    def is_fulfilled(self) -> bool: ...
    def is_rejected(self) -> bool: ...
    def is_pending(self) -> bool: ...
    def get_value(self) -> Any: ...
    def get_reason(self) -> Any: ...
    def failure_kind(self) -> FailureKind | None: ...


@runtime_checkable
class ContextPort(Protocol):
    """Classifies a value into its algebraic context (monad instance)."""

    def get_context(self) -> Any: ...


@runtime_checkable
class PromisePort(ChainPort, StatePort, ContextPort, Protocol):
    """Full capability set of a future value."""
