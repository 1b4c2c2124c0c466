"""
Deferred-callback schedulers used by the simulation player.

All delays are in milliseconds. A scheduler never runs callbacks
concurrently: ManualScheduler fires them from `advance()`, AsyncioScheduler
from the owning event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> TimerHandle:
        """Run `callback` once after `delay_ms`."""


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    callback: Callable[[], Any] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock. Nothing fires until `advance()` / `run_until_idle()`;
    callbacks due at the same time fire in scheduling order.
    """

    def __init__(self):
        self.now: float = 0.0
        self._queue: List[_Timer] = []
        self._seq = itertools.count()
        self.fired = 0

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> _Timer:
        timer = _Timer(self.now + max(0.0, float(delay_ms)), next(self._seq), callback)
        heapq.heappush(self._queue, timer)
        return timer

    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def next_due(self) -> Optional[float]:
        for timer in sorted(self._queue):
            if not timer.cancelled:
                return timer.due
        return None

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, firing everything that comes due. Returns callbacks run."""
        target = self.now + float(delta_ms)
        ran = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = timer.due
            timer.callback()
            ran += 1
        self.now = target
        self.fired += ran
        return ran

    def run_until_idle(self, max_callbacks: int = 1_000_000) -> int:
        """Fire callbacks (including newly scheduled ones) until the queue is empty."""
        ran = 0
        while ran < max_callbacks:
            due = self.next_due()
            if due is None:
                break
            ran += self.advance(due - self.now)
        return ran


class AsyncioScheduler:
    """Adapter over `loop.call_later` for running inside an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, float(delay_ms)) / 1000.0, callback)
