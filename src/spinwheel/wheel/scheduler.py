"""One-shot timers used to settle spins.

Two flavours:

- ``AsyncioScheduler`` hands the callback to the running event loop.
- ``FrameScheduler`` holds callbacks until a render loop advances it with
  ``tick(delta_ms)``, the same way modes advance on frame updates.
"""

from dataclasses import dataclass, field
from typing import Callable, Protocol
import asyncio
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Fires a callback once after a delay in milliseconds."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None: ...


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(delay_ms / 1000.0, callback)
        logger.debug(f"Scheduled callback in {delay_ms:.0f}ms on asyncio loop")


@dataclass(order=True)
class _Timer:
    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)


class FrameScheduler:
    """
    Scheduler driven by explicit frame ticks.

    Timers fire in due order during ``tick``. Timers with the same due time
    fire in the order they were scheduled. A timer scheduled from inside a
    callback is only fired if it is already due within the same tick.
    """

    def __init__(self) -> None:
        self._now_ms = 0.0
        self._timers: list[_Timer] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> float:
        """Milliseconds elapsed across all ticks."""
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of timers not yet fired."""
        return len(self._timers)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        timer = _Timer(self._now_ms + max(0.0, delay_ms), next(self._counter), callback)
        heapq.heappush(self._timers, timer)

    def tick(self, delta_ms: float) -> int:
        """
        Advance time and fire every timer that came due.

        Args:
            delta_ms: Milliseconds since the previous tick

        Returns:
            Number of timers fired
        """
        self._now_ms += delta_ms
        fired = 0
        while self._timers and self._timers[0].due_ms <= self._now_ms:
            timer = heapq.heappop(self._timers)
            timer.callback()
            fired += 1
        return fired
