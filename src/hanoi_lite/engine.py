# src/hanoi_lite/engine.py
from collections import deque
from dataclasses import dataclass, replace
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .board import initialize_disks
from .config import PuzzleConfig, parse_disk_count
from .disk import Disk
from .errors import MoveOutcome
from .logger import RunLogger
from .player import PlayerState, SimulationPlayer
from .rules import apply_move, is_solved
from .scheduler import ManualScheduler, Scheduler
from .solver import solve
from .state import MoveRecord, PegId, PuzzleState

WIN_MESSAGE = "You Win!!!"


@dataclass
class MoveResult:
    outcome: MoveOutcome
    state: PuzzleState
    solved: bool

    @property
    def legal(self) -> bool:
        return self.outcome is MoveOutcome.LEGAL


class PuzzleEngine:
    """
    Facade the rendering/input layer talks to:
    - create_puzzle() starts a fresh game with every disk on peg 1.
    - attempt_move() validates a drag-drop gesture, counts it and checks the
      destination peg for a win.
    - solve_and_animate() recreates the puzzle, solves it onto peg 3 and
      replays the solution through the SimulationPlayer.

    Invalid configuration raises InvalidConfiguration before anything is
    touched, so the previous puzzle stays in place.
    """

    def __init__(
        self,
        config: Optional[PuzzleConfig] = None,
        scheduler: Optional[Scheduler] = None,
        logger: Optional[RunLogger] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or PuzzleConfig()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.logger = logger
        self.rng = rng if rng is not None else np.random.default_rng()
        self.player = SimulationPlayer(
            self.scheduler,
            on_step=self._apply_record,
            on_finished=self._playback_finished,
            fallback_delay_ms=self.config.fallback_delay_ms,
        )
        self.on_win: List[Callable[[str], Any]] = []
        self.on_update: List[Callable[[PuzzleState], Any]] = []

        self.state: Optional[PuzzleState] = None
        self.move_count = 0
        self.solved = False
        self.records: List[MoveRecord] = []
        self._updates: Deque[PuzzleState] = deque()
        self.create_puzzle(self.config.disk_count)

    # --- read-only observers ---------------------------------------------
    @property
    def pegs(self) -> Tuple[Tuple[Disk, ...], Tuple[Disk, ...], Tuple[Disk, ...]]:
        return self.state.pegs()

    @property
    def playback_state(self) -> PlayerState:
        return self.player.state

    # --- actions ------------------------------------------------------------
    def create_puzzle(self, disk_count: Any = None) -> PuzzleState:
        """Start a new game. `None` reuses the configured disk count."""
        n = self.config.disk_count if disk_count is None else parse_disk_count(disk_count)
        disks = initialize_disks(n, self.config.geometry, self.rng)

        # Nothing below can fail: commit the new game.
        self.player.abandon()
        self.config = replace(self.config, disk_count=n)
        self.state = PuzzleState.fresh(disks)
        self.move_count = 0
        self.solved = False
        self.records = []
        self._updates.clear()
        self._log("create", note=f"{n} disks")
        self._notify_update()
        return self.state

    def attempt_move(self, source: Any, destination: Any, source_index: int = 0) -> MoveResult:
        """
        Move the top disk of `source` onto `destination` if the rules allow.
        Illegal gestures return MoveOutcome.ILLEGAL and change nothing.
        """
        src, dst = PegId.parse(source), PegId.parse(destination)
        outcome = apply_move(self.state, src, dst, source_index)
        if outcome is MoveOutcome.ILLEGAL:
            self._log("rejected", move={"source": src.name, "destination": dst.name})
            return MoveResult(outcome, self.state, self.solved)

        if self.player.state is PlayerState.PLAYING:
            # The user took over; remaining solver steps no longer apply.
            self.player.abandon()
            self.records = []
        self.move_count += 1
        moved = self.state.top(dst)
        self._log("move", move={"disk": moved.rank, "source": src.name, "destination": dst.name})
        self._check_win(self.state.peg(dst))
        self._notify_update()
        return MoveResult(outcome, self.state, self.solved)

    def solve_and_animate(self, disk_count: Any = None, step_delay_ms: Any = None) -> SimulationPlayer:
        """
        Recreate the puzzle, compute the optimal solution from peg 1 to peg 3
        and replay it, one step every `step_delay_ms`. Supersedes any
        playback already in flight.
        """
        self.create_puzzle(disk_count)
        if step_delay_ms is not None:
            self.config = replace(self.config, step_delay_ms=step_delay_ms)
        self.records = solve(
            self.state.disk_count,
            PegId.COLUMN1, PegId.COLUMN3, PegId.COLUMN2,
            state=self.state,
        )
        delay = self.config.effective_delay()
        self._log("solve", meta={"moves": len(self.records), "delay_ms": delay})
        self.player.start(list(self.records), delay)
        return self.player

    def updates(self) -> Iterator[PuzzleState]:
        """Yield copies of the states applied by playback since the last call."""
        while self._updates:
            yield self._updates.popleft()

    # --- callbacks ----------------------------------------------------------
    def _apply_record(self, record: MoveRecord) -> None:
        self.state.restore(record)
        self.move_count += 1
        move: Dict[str, Any] = {}
        if record.disk is not None:
            move = {"disk": record.disk.rank, "source": record.source.name, "destination": record.destination.name}
        self._log("step", move=move or None)
        self._updates.append(self.state.copy())
        self._notify_update()

    def _playback_finished(self) -> None:
        self._log("finished", meta={"moves": self.move_count})
        self.records = []
        self._check_win(self.state.peg(PegId.COLUMN3))
        self._notify_update()

    def _check_win(self, peg_contents) -> bool:
        was_solved = self.solved
        self.solved = is_solved(peg_contents, self.state.disk_count)
        if self.solved and not was_solved:
            self._log("win", note=WIN_MESSAGE)
            for listener in list(self.on_win):
                listener(WIN_MESSAGE)
        return self.solved

    def _log(self, event: str, **fields: Any) -> None:
        # No logger, no frames
        if self.logger is not None:
            self.logger.snapshot(self, event, **fields)

    def _notify_update(self) -> None:
        for listener in list(self.on_update):
            listener(self.state)
