"""Monad instance for promises and generic algebraic helpers.

Generic code never reads a "current monad" from ambient state. The context
comes either from the container (`get_context(mv)`) or from an explicit
`ctx` argument, and continuations close over it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from futura.combinators.ops import all_, spread
from futura.core import resolved, then
from futura.kernel import ContextPort, PromisePort


@runtime_checkable
class Monad(Protocol):
    """Functor, Applicative and Monad operations of one container category."""

    def fmap(self, f: Callable[[Any], Any], mv: Any) -> Any: ...
    def pure(self, value: Any) -> Any: ...
    def fapply(self, mf: Any, mv: Any) -> Any: ...
    def mreturn(self, value: Any) -> Any: ...
    def mbind(self, mv: Any, f: Callable[[Any], Any]) -> Any: ...


def _call(f: Callable[[Any], Any], value: Any) -> Any:
    return f(value)


@dataclass(frozen=True)
class PromiseMonad:
    """Monad instance built only from the promise ports and combinators."""

    def fmap(self, f: Callable[[Any], Any], mv: PromisePort) -> PromisePort:
        return then(mv, f)

    def pure(self, value: Any) -> PromisePort:
        # Explicit constructor: a callable value is data here, not a computation.
        return resolved(value)

    def fapply(self, mf: PromisePort, mv: PromisePort) -> PromisePort:
        """Apply a promised function to a promised value, both running concurrently."""
        return spread(all_([mf, mv]), _call)

    def mreturn(self, value: Any) -> PromisePort:
        return self.pure(value)

    def mbind(self, mv: PromisePort, f: Callable[[Any], PromisePort]) -> PromisePort:
        return then(mv, f)


promise_monad = PromiseMonad()


# Generic helpers


def get_context(mv: Any) -> Monad:
    """Return the monad instance a container belongs to.

    Raises:
        TypeError: If `mv` does not implement ContextPort.
    """
    if not isinstance(mv, ContextPort):
        raise TypeError(f"'{type(mv).__name__}' object has no monad context")
    return mv.get_context()


def fmap(f: Callable[[Any], Any], mv: Any) -> Any:
    return get_context(mv).fmap(f, mv)


def fapply(mf: Any, mv: Any) -> Any:
    return get_context(mf).fapply(mf, mv)


def bind(mv: Any, f: Callable[[Any], Any]) -> Any:
    return get_context(mv).mbind(mv, f)


def pure(ctx: Monad, value: Any) -> Any:
    return ctx.pure(value)


def mreturn(ctx: Monad, value: Any) -> Any:
    return ctx.mreturn(value)


def join(mv: Any) -> Any:
    """Flatten one level of nesting."""
    return bind(mv, lambda inner: inner)


def sequence(ctx: Monad, mvs: Iterable[Any]) -> Any:
    """Collect the values of `mvs` into a list, binding them in order."""

    def append_to(acc: list[Any]) -> Callable[[Any], Any]:
        return lambda value: ctx.mreturn(acc + [value])

    def step(mv: Any) -> Callable[[list[Any]], Any]:
        return lambda acc: ctx.mbind(mv, append_to(acc))

    result = ctx.mreturn([])
    for mv in mvs:
        result = ctx.mbind(result, step(mv))
    return result


def mapm(ctx: Monad, f: Callable[[Any], Any], xs: Iterable[Any]) -> Any:
    """Run `f` over `xs` one at a time; `f(x)` starts after the previous one settled."""

    def step(x: Any) -> Callable[[list[Any]], Any]:
        return lambda acc: ctx.fmap(lambda value: acc + [value], f(x))

    result = ctx.mreturn([])
    for x in xs:
        result = ctx.mbind(result, step(x))
    return result
