"""Combinator laws as executable checks."""

# Promises satisfy the following algebraic laws, up to settlement
# (two sides are equal when they settle to equal Outcomes):
#
# 1. Functor identity: fmap(id, mv) == mv
#
# 2. Functor composition: fmap(f . g, mv) == fmap(f, fmap(g, mv))
#
# 3. Applicative identity: fapply(pure(id), mv) == mv
#
# 4. Left identity: mbind(mreturn(v), f) == f(v)
#
# 5. Right identity: mbind(mv, mreturn) == mv
#
# 6. Associativity: mbind(mbind(mv, f), g) == mbind(mv, lambda x: mbind(f(x), g))


from __future__ import annotations

from collections.abc import Callable
from typing import Any

from futura.kernel import settle


def _identity(value: Any) -> Any:
    return value


async def settles_identically(left: Any, right: Any) -> bool:
    """Wait for both sides and compare their outcomes."""
    return await settle(left) == await settle(right)


async def functor_identity(ctx: Any, mv: Any) -> bool:
    return await settles_identically(ctx.fmap(_identity, mv), mv)


async def functor_composition(
    ctx: Any, mv: Any, f: Callable[[Any], Any], g: Callable[[Any], Any]
) -> bool:
    return await settles_identically(
        ctx.fmap(lambda x: f(g(x)), mv),
        ctx.fmap(f, ctx.fmap(g, mv)),
    )


async def applicative_identity(ctx: Any, mv: Any) -> bool:
    return await settles_identically(ctx.fapply(ctx.pure(_identity), mv), mv)


async def left_identity(ctx: Any, value: Any, f: Callable[[Any], Any]) -> bool:
    return await settles_identically(ctx.mbind(ctx.mreturn(value), f), f(value))


async def right_identity(ctx: Any, mv: Any) -> bool:
    return await settles_identically(ctx.mbind(mv, ctx.mreturn), mv)


async def associativity(
    ctx: Any, mv: Any, f: Callable[[Any], Any], g: Callable[[Any], Any]
) -> bool:
    return await settles_identically(
        ctx.mbind(ctx.mbind(mv, f), g),
        ctx.mbind(mv, lambda x: ctx.mbind(f(x), g)),
    )
