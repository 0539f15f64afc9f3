"""Throttling policies applied between consecutive lookups in a batch."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Optional, Protocol


class Throttle(Protocol):
    def wait(self) -> None:
        ...


class AsyncThrottle(Protocol):
    async def wait(self) -> None:
        ...


def _check_delay(delay: float) -> float:
    delay = float(delay)
    if delay < 0:
        raise ValueError(f"Inter-request delay must not be negative, got {delay}")
    return delay


class FixedDelayThrottle:
    """Sleep for a fixed number of seconds every time ``wait`` is called."""

    def __init__(self, delay: float, sleep: Optional[Callable[[float], None]] = None):
        self.delay = _check_delay(delay)
        self._sleep = sleep or time.sleep

    def wait(self) -> None:
        self._sleep(self.delay)

    def __repr__(self) -> str:
        return f"FixedDelayThrottle(delay={self.delay})"


class AsyncFixedDelayThrottle:
    """Awaitable counterpart of ``FixedDelayThrottle``."""

    def __init__(
        self,
        delay: float,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.delay = _check_delay(delay)
        self._sleep = sleep or asyncio.sleep

    async def wait(self) -> None:
        await self._sleep(self.delay)

    def __repr__(self) -> str:
        return f"AsyncFixedDelayThrottle(delay={self.delay})"


__all__ = ["Throttle", "AsyncThrottle", "FixedDelayThrottle", "AsyncFixedDelayThrottle"]
