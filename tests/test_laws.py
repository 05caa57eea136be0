import asyncio

from futura import delay, promise_monad, rejected, resolved
from futura.combinators import laws


def _double(v: int):
    return resolved(v * 2)


def _increment_later(v: int):
    return delay(5, v + 1)


def _refuse(v: int):
    return rejected(f"refused {v}")


def test_functor_laws() -> None:
    async def run_flow():
        return [
            await laws.functor_identity(promise_monad, resolved(5)),
            await laws.functor_identity(promise_monad, rejected("boom")),
            await laws.functor_composition(
                promise_monad, resolved(5), lambda x: x + 1, lambda x: x * 3
            ),
        ]

    assert asyncio.run(run_flow()) == [True, True, True]


def test_applicative_identity() -> None:
    async def run_flow():
        return [
            await laws.applicative_identity(promise_monad, resolved(5)),
            await laws.applicative_identity(promise_monad, delay(5, "later")),
            await laws.applicative_identity(promise_monad, rejected("boom")),
        ]

    assert asyncio.run(run_flow()) == [True, True, True]


def test_left_identity() -> None:
    async def run_flow():
        return [
            await laws.left_identity(promise_monad, 3, _double),
            await laws.left_identity(promise_monad, 3, _refuse),
        ]

    assert asyncio.run(run_flow()) == [True, True]


def test_right_identity() -> None:
    async def run_flow():
        return [
            await laws.right_identity(promise_monad, resolved(5)),
            await laws.right_identity(promise_monad, rejected("boom")),
        ]

    assert asyncio.run(run_flow()) == [True, True]


def test_associativity() -> None:
    async def run_flow():
        return [
            await laws.associativity(promise_monad, resolved(1), _double, _increment_later),
            await laws.associativity(promise_monad, resolved(1), _refuse, _double),
        ]

    assert asyncio.run(run_flow()) == [True, True]


def test_different_outcomes_are_detected() -> None:
    async def run_flow():
        return await laws.settles_identically(resolved(1), resolved(2))

    assert asyncio.run(run_flow()) is False
