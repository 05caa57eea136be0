from .combinators import all_, any_, delay, error, promisify, quorum, spread, timeout
from .core import (
    as_promise,
    catch_all,
    catch_kind,
    extract,
    finally_,
    from_computation,
    get_reason,
    get_value,
    is_done,
    is_fulfilled,
    is_pending,
    is_promise,
    is_rejected,
    is_resolved,
    promise,
    rejected,
    resolved,
    then,
)
from .kernel import (
    AggregateRejection,
    FailureKind,
    Outcome,
    Promise,
    PromisePort,
    PromiseStateError,
    Rejection,
    settle,
)
from .monad import Monad, PromiseMonad, promise_monad

__all__ = [
    # Core
    "Promise",
    "PromisePort",
    "Outcome",
    "FailureKind",
    "settle",
    # Construction
    "resolved",
    "rejected",
    "from_computation",
    "promise",
    "as_promise",
    # Predicates
    "is_promise",
    "is_fulfilled",
    "is_resolved",
    "is_rejected",
    "is_pending",
    "is_done",
    # Chaining
    "then",
    "catch_all",
    "catch_kind",
    "finally_",
    "get_value",
    "get_reason",
    "extract",
    # Combinators
    "all_",
    "any_",
    "quorum",
    "spread",
    "timeout",
    "delay",
    "promisify",
    "error",
    # Monad
    "Monad",
    "PromiseMonad",
    "promise_monad",
    # Errors
    "Rejection",
    "AggregateRejection",
    "PromiseStateError",
]
