import asyncio

from futura import (
    Outcome,
    delay,
    extract,
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
    settle,
)


def test_resolved_and_rejected_roundtrip() -> None:
    async def run_flow():
        payload = {"key": [1, 2]}
        ok = resolved(payload)
        bad = rejected(payload)
        return payload, ok, bad

    payload, ok, bad = asyncio.run(run_flow())
    assert is_fulfilled(ok) and is_resolved(ok)
    assert get_value(ok) is payload
    assert extract(ok) is payload
    assert is_rejected(bad)
    assert get_reason(bad) is payload


def test_resolved_adopts_awaitable() -> None:
    async def run_flow():
        p = resolved(delay(5, "x"))
        assert is_pending(p)
        return await p

    assert asyncio.run(run_flow()) == "x"


def test_rejected_with_cancelled_error_is_cancellation() -> None:
    reason = asyncio.CancelledError("why")

    async def run_flow():
        p = rejected(reason)
        caught = await p.catch_kind("cancel", lambda r: r)
        return p.failure_kind(), p.get_reason(), caught

    kind, stored, caught = asyncio.run(run_flow())
    assert kind == "cancellation"
    assert stored is reason
    assert caught is reason


def test_from_computation_settles_later() -> None:
    async def run_flow():
        def computation(resolve, reject):
            asyncio.get_running_loop().call_later(0.01, resolve, "done")

        p = from_computation(computation)
        assert is_pending(p)
        assert not is_done(p)
        value = await p
        assert is_done(p)
        return value

    assert asyncio.run(run_flow()) == "done"


def test_from_computation_first_settlement_wins() -> None:
    async def run_flow():
        def computation(resolve, reject):
            resolve(1)
            reject("ignored")
            resolve(2)

        return await from_computation(computation)

    assert asyncio.run(run_flow()) == 1


def test_from_computation_raise_rejects() -> None:
    error = RuntimeError("computation failed")

    async def run_flow():
        def computation(resolve, reject):
            raise error

        return await settle(from_computation(computation))

    assert asyncio.run(run_flow()) == Outcome.Rejected(error, "generic")


def test_from_computation_raise_after_settling_is_ignored() -> None:
    async def run_flow():
        def computation(resolve, reject):
            resolve("kept")
            raise RuntimeError("late")

        return await from_computation(computation)

    assert asyncio.run(run_flow()) == "kept"


def test_from_computation_reject_with_plain_payload() -> None:
    async def run_flow():
        return await settle(from_computation(lambda resolve, reject: reject(404)))

    assert asyncio.run(run_flow()) == Outcome.Rejected(404, "generic")


def test_promise_dispatch() -> None:
    error = ValueError("bad")

    async def run_flow():
        from_callable = promise(lambda resolve, reject: resolve("computed"))
        from_error = promise(error)
        from_value = promise(5)
        return await from_callable, get_reason(from_error), get_value(from_value)

    assert asyncio.run(run_flow()) == ("computed", error, 5)


def test_is_promise() -> None:
    async def run_flow():
        future = asyncio.get_running_loop().create_future()
        future.set_result(None)
        return is_promise(resolved(1)), is_promise(1), is_promise(future)

    assert asyncio.run(run_flow()) == (True, False, False)
