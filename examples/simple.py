from __future__ import annotations

import asyncio
import logging

from futura import all_, delay, promise_monad, promisify, quorum, timeout
from futura.monad import mapm


def lookup_capital(country: str, callback) -> None:
    capitals = {"France": "Paris", "Japan": "Tokyo", "Peru": "Lima"}
    asyncio.get_running_loop().call_later(0.02, callback, capitals.get(country, "?"))


async def run_simple_flow() -> None:
    lookup = promisify(lookup_capital)

    together = await all_([lookup("France"), lookup("Japan")])
    print("all:", together)

    fastest_two = await quorum(2, [delay(50, "mirror-a"), delay(10, "mirror-b"), delay(20, "mirror-c")])
    print("quorum:", fastest_two)

    answer = await timeout(delay(1000, "too late"), 30, "cached answer")
    print("timeout:", answer)

    report = await promise_monad.fmap(
        lambda capitals: "Report: " + ", ".join(capitals),
        mapm(promise_monad, lookup, ["France", "Japan", "Peru"]),
    )
    print(report)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(run_simple_flow())
