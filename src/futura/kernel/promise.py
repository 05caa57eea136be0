"""Engine binding - adapts asyncio.Future onto the futura ports.

This is the only module that knows the concrete engine. Everything else
talks to `Promise` through the port vocabulary (then / catch / finally,
state inspection, listeners and timers).

The binding changes vocabulary, not semantics:
- settlement is still single-assignment and memoized by the future
- callbacks are still scheduled by the loop (`add_done_callback`), so a
  callback registered on a settled future never runs on the caller's stack
- engine-native timeout and cancellation failures are classified into the
  abstract failure kinds so `catch_kind` works the same for any engine
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import weakref
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar

from futura.kernel.errors import PromiseStateError, Rejection
from futura.kernel.result import FailureKind, Status, normalize_kind

T = TypeVar("T")

logger = logging.getLogger(__name__)

_TIMEOUT_ERRORS = (TimeoutError, asyncio.TimeoutError)

# Exceptions the engine refuses to store, or stores as a bare cancel that
# drops the instance. They travel inside Rejection like plain payloads.
_WRAPPED_ERRORS = (StopIteration, asyncio.CancelledError)

# Failure kind (None when fulfilled) of every future this binding settled.
# State inspection reads this instead of `future.exception()`, which would
# switch off the engine's "exception was never retrieved" report.
_settled_kinds: weakref.WeakKeyDictionary[asyncio.Future[Any], FailureKind | None] = (
    weakref.WeakKeyDictionary()
)

Handler = Callable[["asyncio.Future[Any]", "asyncio.Future[Any]"], None]


def _classify(exc: BaseException) -> FailureKind:
    if isinstance(exc, Rejection):
        if not isinstance(exc.reason, BaseException):
            return "generic"
        exc = exc.reason
    if isinstance(exc, asyncio.CancelledError):
        return "cancellation"
    if isinstance(exc, _TIMEOUT_ERRORS):
        return "timeout"
    return "generic"


def _set_result(target: asyncio.Future[Any], value: Any) -> None:
    target.set_result(value)
    _settled_kinds[target] = None


def _set_exception(target: asyncio.Future[Any], exc: BaseException) -> None:
    target.set_exception(exc)
    _settled_kinds[target] = _classify(exc)


def _retrieve(future: asyncio.Future[Any]) -> BaseException | None:
    """Read the stored exception, marking it as handled by the engine."""
    if future.cancelled():
        return None
    return future.exception()


def _kind_of(future: asyncio.Future[Any]) -> FailureKind | None:
    if not future.done():
        return None
    if future.cancelled():
        return "cancellation"
    try:
        return _settled_kinds[future]
    except KeyError:
        # Settled outside the binding (adopted task or foreign future).
        exc = future.exception()
        return None if exc is None else _classify(exc)


def _is_fulfilled(future: asyncio.Future[Any]) -> bool:
    return future.done() and _kind_of(future) is None


def _reason_of(future: asyncio.Future[Any]) -> Any:
    if future.cancelled():
        try:
            future.result()
        except asyncio.CancelledError as exc:
            return exc
    exc = future.exception()
    if isinstance(exc, Rejection):
        return exc.reason
    return exc


def _reject(target: asyncio.Future[Any], reason: Any) -> None:
    if target.done():
        return
    if isinstance(reason, BaseException) and not isinstance(reason, _WRAPPED_ERRORS):
        _set_exception(target, reason)
    else:
        _set_exception(target, Rejection(reason))


def _transfer(source: asyncio.Future[Any], target: asyncio.Future[Any]) -> None:
    """Copy a settled outcome onto target; late outcomes are discarded."""
    exc = _retrieve(source)
    if target.done():
        return
    if source.cancelled():
        target.cancel()
    elif exc is not None:
        _set_exception(target, exc)
    else:
        _set_result(target, source.result())

def _adopt(target: asyncio.Future[Any], outcome: Any) -> None:
    """Settle target with a plain value or with the outcome of an awaitable."""
    if isinstance(outcome, Promise):
        outcome = outcome.future
    if asyncio.isfuture(outcome) or inspect.isawaitable(outcome):
        upstream = asyncio.ensure_future(outcome, loop=target.get_loop())
        upstream.add_done_callback(lambda done: _transfer(done, target))
    elif not target.done():
        _set_result(target, outcome)


class Promise(Generic[T]):
    """A future value backed by an `asyncio.Future`.

    Instances are cheap wrappers; several `Promise` objects may share one
    future and observe the same memoized outcome.
    """

    __slots__ = ("_future",)

    def __init__(self, future: asyncio.Future[T]) -> None:
        self._future = future

    @classmethod
    def create(cls) -> Promise[Any]:
        """Create a pending promise on the running loop.

        Raises:
            RuntimeError: If no event loop is running.
        """
        return cls(asyncio.get_running_loop().create_future())

    @classmethod
    def adopt(cls, awaitable: Awaitable[T] | Promise[T]) -> Promise[T]:
        """Wrap a Promise, an asyncio future or any awaitable.

        Coroutines are scheduled as tasks on the running loop.
        """
        if isinstance(awaitable, Promise):
            return awaitable
        return cls(asyncio.ensure_future(awaitable))

    @staticmethod
    def call_later(ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Schedule `callback` on the running loop after `ms` milliseconds."""
        return asyncio.get_running_loop().call_later(ms / 1000, callback)

    @property
    def future(self) -> asyncio.Future[T]:
        """The underlying engine future."""
        return self._future

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()

    async def wait(self) -> None:
        """Wait until settled without raising the rejection."""
        await asyncio.wait({self._future})

    def __repr__(self) -> str:
        return f"<Promise {self.status()}>"

    # Settlement

    def resolve(self, value: Any) -> None:
        """Settle with `value`, adopting it first if it is awaitable."""
        _adopt(self._future, value)

    def reject(self, reason: Any) -> None:
        """Settle with `reason`. Ignored if already settled."""
        _reject(self._future, reason)

    def cancel(self) -> bool:
        """Abandon a pending promise; it becomes a cancellation rejection."""
        cancelled = self._future.cancel()
        if cancelled:
            logger.debug("Promise cancelled: %r", self)
        return cancelled

    def add_listener(self, listener: Callable[[Promise[T]], None]) -> None:
        """Call `listener` with this promise once it settles."""
        self._future.add_done_callback(lambda _: listener(self))

    # ContextPort

    def get_context(self) -> Any:
        from futura.monad import promise_monad

        return promise_monad

    # ChainPort

    def _chain(self, handle: Handler) -> Promise[Any]:
        target = self._future.get_loop().create_future()

        def on_done(source: asyncio.Future[Any]) -> None:
            try:
                handle(source, target)
            except asyncio.CancelledError as exc:
                logger.debug("Handler cancelled, rejecting derived promise as cancellation")
                _retrieve(source)
                _reject(target, exc)
            except Exception as exc:
                logger.debug("Handler raised %r, rejecting derived promise", exc)
                _retrieve(source)
                _reject(target, exc)

        self._future.add_done_callback(on_done)
        return Promise(target)

    def then(self, on_fulfilled: Callable[[T], Any]) -> Promise[Any]:
        def handle(source: asyncio.Future[Any], target: asyncio.Future[Any]) -> None:
            if _is_fulfilled(source):
                _adopt(target, on_fulfilled(source.result()))
            else:
                _transfer(source, target)

        return self._chain(handle)

    def _catch(
        self,
        matches: Callable[[asyncio.Future[Any]], bool],
        on_rejected: Callable[[Any], Any],
    ) -> Promise[Any]:
        def handle(source: asyncio.Future[Any], target: asyncio.Future[Any]) -> None:
            if _is_fulfilled(source) or not matches(source):
                _transfer(source, target)
            else:
                _adopt(target, on_rejected(_reason_of(source)))

        return self._chain(handle)

    def catch_all(self, on_rejected: Callable[[Any], Any]) -> Promise[Any]:
        return self._catch(lambda _: True, on_rejected)

    def catch_kind(
        self,
        kind: FailureKind | str | type[BaseException],
        on_rejected: Callable[[Any], Any],
    ) -> Promise[Any]:
        """Handle only rejections of `kind`.

        `kind` is a failure kind name ("generic" matches every rejection)
        or an exception class matched against the reason.
        """
        if isinstance(kind, type) and issubclass(kind, BaseException):
            exc_type = kind

            def matches(source: asyncio.Future[Any]) -> bool:
                return isinstance(_reason_of(source), exc_type)
        else:
            wanted = normalize_kind(kind)

            def matches(source: asyncio.Future[Any]) -> bool:
                return wanted == "generic" or _kind_of(source) == wanted

        return self._catch(matches, on_rejected)

    def finally_(self, on_settled: Callable[[], Any]) -> Promise[T]:
        def handle(source: asyncio.Future[Any], target: asyncio.Future[Any]) -> None:
            outcome = on_settled()
            if not (isinstance(outcome, Promise) or inspect.isawaitable(outcome)):
                _transfer(source, target)
                return

            def after_cleanup(cleanup: Promise[Any]) -> None:
                if cleanup.is_fulfilled():
                    _transfer(source, target)
                else:
                    _retrieve(source)
                    _transfer(cleanup.future, target)

            Promise.adopt(outcome).add_listener(after_cleanup)

        return self._chain(handle)

    # StatePort

    def status(self) -> Status:
        if not self._future.done():
            return "pending"
        return "fulfilled" if _is_fulfilled(self._future) else "rejected"

    def is_pending(self) -> bool:
        return not self._future.done()

    def is_fulfilled(self) -> bool:
        return _is_fulfilled(self._future)

    def is_rejected(self) -> bool:
        return self._future.done() and not _is_fulfilled(self._future)

    def get_value(self) -> T:
        status = self.status()
        if status != "fulfilled":
            raise PromiseStateError(f"Promise is {status}, not fulfilled", status)
        return self._future.result()

    def get_reason(self) -> Any:
        status = self.status()
        if status != "rejected":
            raise PromiseStateError(f"Promise is {status}, not rejected", status)
        return _reason_of(self._future)

    def failure_kind(self) -> FailureKind | None:
        return _kind_of(self._future)
