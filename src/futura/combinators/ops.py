"""Combinator primitives: all_, any_, quorum, spread, timeout, delay, promisify."""

# Ordering:
#
# 1. all_ reports values in input order, whatever the completion order
# 2. any_ and quorum report values in arrival order
# 3. Outcomes that arrive after the result settled are read and discarded;
#    the inputs keep running, nothing is cancelled


from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import NonNegativeFloat, NonNegativeInt, TypeAdapter

from futura.core import as_promise, from_computation
from futura.kernel import AggregateRejection, Promise, PromisePort

T = TypeVar("T")

logger = logging.getLogger(__name__)

_MILLISECONDS = TypeAdapter(NonNegativeFloat)
_COUNT = TypeAdapter(NonNegativeInt)

_MISSING: Any = object()


def all_(promises: Iterable[Any]) -> Promise[list[Any]]:
    """Fulfill with every value, in input order, once all inputs fulfilled.

    Semantics:
        - Rejects with the reason of the first input to reject
        - Empty input fulfills with []

    Args:
        promises: Promises, awaitables or plain values.

    Returns:
        Promise[list[Any]]: The combined promise.
    """
    inputs = [as_promise(p) for p in promises]
    target: Promise[list[Any]] = Promise.create()
    values: list[Any] = [None] * len(inputs)
    remaining = len(inputs)

    if not inputs:
        target.resolve(values)
        return target

    def on_settled(index: int, settled: Promise[Any]) -> None:
        nonlocal remaining
        if settled.is_rejected():
            target.reject(settled.get_reason())
            return
        values[index] = settled.get_value()
        remaining -= 1
        if remaining == 0:
            target.resolve(values)

    for index, p in enumerate(inputs):
        p.add_listener(functools.partial(on_settled, index))

    return target


def quorum(n: int, promises: Iterable[Any]) -> Promise[list[Any]]:
    """Fulfill with the first `n` values to arrive.

    Semantics:
        - Values are listed in arrival order
        - Rejects with AggregateRejection once `total - n + 1` inputs
          rejected, since `n` fulfillments are then out of reach
        - `n == 0` fulfills with []
        - `n > total` rejects with ValueError

    Args:
        n: Number of fulfillments required (validated as non-negative).
        promises: Promises, awaitables or plain values.

    Returns:
        Promise[list[Any]]: The combined promise.
    """
    count = _COUNT.validate_python(n)
    inputs = [as_promise(p) for p in promises]
    target: Promise[list[Any]] = Promise.create()
    values: list[Any] = []
    reasons: list[Any] = []
    threshold = len(inputs) - count + 1

    if count == 0:
        target.resolve(values)
    elif count > len(inputs):
        target.reject(
            ValueError(f"Quorum of {count} needs at least {count} inputs, got {len(inputs)}")
        )

    def on_settled(settled: Promise[Any]) -> None:
        if settled.is_rejected():
            reason = settled.get_reason()
            if target.is_pending():
                reasons.append(reason)
                if len(reasons) >= threshold:
                    target.reject(
                        AggregateRejection(
                            f"{len(reasons)} of {len(inputs)} inputs rejected, "
                            f"quorum of {count} unreachable",
                            reasons,
                        )
                    )
            return
        value = settled.get_value()
        if target.is_pending():
            values.append(value)
            if len(values) == count:
                target.resolve(values)

    for p in inputs:
        p.add_listener(on_settled)

    return target


def any_(promises: Iterable[Any]) -> Promise[Any]:
    """Fulfill with the first value to arrive; reject only if all inputs reject."""
    return quorum(1, promises).then(lambda values: values[0])


def spread(p: PromisePort, fn: Callable[..., Any]) -> PromisePort:
    """Chain `fn`, unpacking the sequence value into positional arguments."""

    def apply(values: Sequence[Any]) -> Any:
        return fn(*values)

    return p.then(apply)


def timeout(p: Any, ms: float, fallback: Any = _MISSING) -> Promise[Any]:
    """Adopt the outcome of `p` if it settles within `ms` milliseconds.

    Otherwise reject with TimeoutError (kind "timeout"), or fulfill with
    `fallback` when one is given. `p` keeps running; its late outcome is
    discarded.
    """
    delay_ms = _MILLISECONDS.validate_python(ms)
    source = as_promise(p)
    target: Promise[Any] = Promise.create()

    def expire() -> None:
        if not target.is_pending():
            return
        if fallback is _MISSING:
            logger.debug("Timed out after %s ms", delay_ms)
            target.reject(TimeoutError(f"Timed out after {delay_ms} ms"))
        else:
            logger.debug("Timed out after %s ms, using fallback", delay_ms)
            target.resolve(fallback)

    handle = Promise.call_later(delay_ms, expire)

    def on_settled(settled: Promise[Any]) -> None:
        handle.cancel()
        if settled.is_rejected():
            target.reject(settled.get_reason())
        else:
            target.resolve(settled.get_value())

    source.add_listener(on_settled)
    return target


def delay(ms: float, value: T | None = None) -> Promise[T | None]:
    """Fulfill with `value` after `ms` milliseconds."""
    delay_ms = _MILLISECONDS.validate_python(ms)
    target: Promise[T | None] = Promise.create()
    Promise.call_later(delay_ms, lambda: target.resolve(value))
    return target


def promisify(fn: Callable[..., Any]) -> Callable[..., Promise[Any]]:
    """Turn a callback-last function into one that returns a promise.

    The callback takes a single argument, which becomes the value. A
    synchronous raise inside `fn` rejects the promise.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Promise[Any]:
        def computation(resolve: Callable[..., None], _reject: Callable[[Any], None]) -> None:
            fn(*args, resolve, **kwargs)

        return from_computation(computation)

    return wrapper


def error(p: PromisePort, on_error: Callable[[Exception], Any]) -> PromisePort:
    """Handle operational errors only.

    Reasons that are not `Exception` instances (plain payloads, cancellation)
    pass through untouched.
    """
    return p.catch_kind(Exception, on_error)
