from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable


def add_later(a: int, b: int, callback: Callable[[int], None]) -> None:
    """Callback-last function that reports on a later loop turn."""
    asyncio.get_running_loop().call_soon(callback, a + b)


def explode(callback: Callable[[Any], None]) -> None:
    _ = callback
    raise RuntimeError("sync failure")


@dataclass
class Recorder:
    calls: list[Any] = field(default_factory=list)

    def __call__(self, value: Any = None) -> Any:
        self.calls.append(value)
        return value
