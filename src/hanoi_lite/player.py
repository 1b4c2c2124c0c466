"""
Simulation player: replays solver output one MoveRecord per tick.

States:
    IDLE      -> nothing loaded (initial, or after abandon())
    PLAYING   -> records pending, next tick scheduled
    FINISHED  -> every record applied, on_finished has run

Each start() bumps a generation counter; a scheduled tick only acts if its
generation is still current, so a callback belonging to an abandoned
playback is a no-op even when its timer could not be cancelled.
"""

from __future__ import annotations

from collections import deque
from enum import Enum, auto
from typing import Any, Callable, Deque, Iterable, Optional

from .config import FALLBACK_DELAY_MS, clamp_delay
from .scheduler import Scheduler, TimerHandle
from .state import MoveRecord


class PlayerState(Enum):
    IDLE = auto()
    PLAYING = auto()
    FINISHED = auto()


class SimulationPlayer:
    def __init__(
        self,
        scheduler: Scheduler,
        on_step: Callable[[MoveRecord], Any],
        on_finished: Callable[[], Any],
        fallback_delay_ms: float = FALLBACK_DELAY_MS,
    ):
        self.scheduler = scheduler
        self.on_step = on_step
        self.on_finished = on_finished
        self.fallback_delay_ms = fallback_delay_ms
        self.state = PlayerState.IDLE
        self.delay_ms: float = fallback_delay_ms
        self.applied = 0
        self.generation = 0
        self._pending: Deque[MoveRecord] = deque()
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def start(self, records: Iterable[MoveRecord], delay_ms: Any = None) -> PlayerState:
        """
        Load `records` and begin playback. An empty sequence finishes at once
        (on_finished runs synchronously). Any earlier playback is abandoned.
        """
        self.abandon()
        self._pending = deque(records)
        self.delay_ms = clamp_delay(delay_ms, self.fallback_delay_ms)
        if not self._pending:
            self._finish()
            return self.state
        self.state = PlayerState.PLAYING
        self._schedule()
        return self.state

    def abandon(self) -> None:
        """Drop the remaining records and invalidate any scheduled tick."""
        self.generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending.clear()
        self.applied = 0
        self.state = PlayerState.IDLE

    def _schedule(self) -> None:
        generation = self.generation
        self._handle = self.scheduler.call_later(self.delay_ms, lambda: self._tick(generation))

    def _tick(self, generation: int) -> None:
        if generation != self.generation or self.state is not PlayerState.PLAYING:
            return  # stale timer from an abandoned playback
        self._handle = None
        record = self._pending.popleft()
        self.applied += 1
        self.on_step(record)
        if generation != self.generation:
            return  # on_step restarted or abandoned playback
        if self._pending:
            self._schedule()
        else:
            self._finish()

    def _finish(self) -> None:
        self.state = PlayerState.FINISHED
        self.on_finished()
