"""Combinators - higher-order promise composition primitives."""

from futura.combinators.ops import all_, any_, delay, error, promisify, quorum, spread, timeout

__all__ = [
    "all_",
    "any_",
    "quorum",
    "spread",
    "timeout",
    "delay",
    "promisify",
    "error",
]
