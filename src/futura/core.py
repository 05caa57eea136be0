"""Construction, predicates and chaining helpers.

The three constructors are explicit; `promise()` is an optional convenience
that dispatches between them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from futura.kernel import FailureKind, Promise, PromisePort

T = TypeVar("T")

Resolve = Callable[..., None]
Reject = Callable[[Any], None]
Computation = Callable[[Resolve, Reject], Any]

logger = logging.getLogger(__name__)


# Constructors


def resolved(value: T) -> Promise[T]:
    """Return a promise fulfilled with `value`.

    An awaitable `value` is adopted instead of being stored as the value.
    """
    promise: Promise[T] = Promise.create()
    promise.resolve(value)
    return promise


def rejected(reason: Any) -> Promise[Any]:
    """Return a promise rejected with `reason`."""
    promise: Promise[Any] = Promise.create()
    promise.reject(reason)
    return promise


def from_computation(computation: Computation) -> Promise[Any]:
    """Run `computation(resolve, reject)` now and return its promise.

    Only the first call to `resolve` or `reject` counts. An exception raised
    by the computation before it settled rejects the promise.
    """
    promise: Promise[Any] = Promise.create()
    settled = False

    def resolve(value: Any = None) -> None:
        nonlocal settled
        if not settled:
            settled = True
            promise.resolve(value)

    def reject(reason: Any) -> None:
        nonlocal settled
        if not settled:
            settled = True
            promise.reject(reason)

    try:
        computation(resolve, reject)
    except Exception as exc:
        if settled:
            logger.debug("Computation raised %r after settling; ignored", exc)
        reject(exc)

    return promise


def promise(value: Any) -> Promise[Any]:
    """Build a promise from a computation, an exception or a plain value."""
    if callable(value):
        return from_computation(value)
    if isinstance(value, BaseException):
        return rejected(value)
    return resolved(value)


def as_promise(value: Any) -> Promise[Any]:
    """Coerce promises, awaitables and plain values into a promise."""
    if isinstance(value, Promise):
        return value
    return resolved(value)


# Predicates


def is_promise(value: Any) -> bool:
    """Return True if `value` implements the full promise capability set."""
    return isinstance(value, PromisePort)


def is_fulfilled(p: PromisePort) -> bool:
    return p.is_fulfilled()


is_resolved = is_fulfilled


def is_rejected(p: PromisePort) -> bool:
    return p.is_rejected()


def is_pending(p: PromisePort) -> bool:
    return p.is_pending()


def is_done(p: PromisePort) -> bool:
    return not p.is_pending()


# Chaining


def then(p: PromisePort, callback: Callable[[Any], Any]) -> PromisePort:
    return p.then(callback)


def catch_all(p: PromisePort, callback: Callable[[Any], Any]) -> PromisePort:
    return p.catch_all(callback)


def catch_kind(
    p: PromisePort,
    kind: FailureKind | str | type[BaseException],
    callback: Callable[[Any], Any],
) -> PromisePort:
    return p.catch_kind(kind, callback)


def finally_(p: PromisePort, callback: Callable[[], Any]) -> PromisePort:
    return p.finally_(callback)


# Accessors


def get_value(p: PromisePort) -> Any:
    """Fulfillment value; raises PromiseStateError if not fulfilled."""
    return p.get_value()


def get_reason(p: PromisePort) -> Any:
    """Rejection reason; raises PromiseStateError if not rejected."""
    return p.get_reason()


extract = get_value
