"""Kernel layer - ports, failure kinds and the engine binding."""

from futura.kernel.errors import AggregateRejection, PromiseStateError, Rejection
from futura.kernel.ports import ChainPort, ContextPort, PromisePort, StatePort
from futura.kernel.promise import Promise
from futura.kernel.result import FailureKind, Outcome, normalize_kind, settle

__all__ = [
    "Promise",
    "Outcome",
    "FailureKind",
    "normalize_kind",
    "settle",
    # Errors
    "Rejection",
    "AggregateRejection",
    "PromiseStateError",
    # Ports
    "ChainPort",
    "StatePort",
    "ContextPort",
    "PromisePort",
]
