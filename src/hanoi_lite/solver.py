"""Optimal three-peg solver producing replayable MoveRecord sequences."""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from .board import initialize_disks
from .config import parse_disk_count
from .errors import InvalidConfiguration
from .rules import transfer
from .state import MoveRecord, PegId, PuzzleState

MovePlan = List[Tuple[PegId, PegId]]

# Towers taller than this are solved with an explicit stack instead of recursion.
RECURSION_THRESHOLD = 256


def _check_pegs(source: PegId, destination: PegId, auxiliary: PegId) -> Tuple[PegId, PegId, PegId]:
    pegs = (PegId.parse(source), PegId.parse(destination), PegId.parse(auxiliary))
    if len(set(pegs)) != 3:
        raise InvalidConfiguration(f"Solver needs three distinct pegs, got {[p.name for p in pegs]}")
    return pegs


def plan_moves(n: int, src: PegId = PegId.COLUMN1, dst: PegId = PegId.COLUMN3, aux: PegId = PegId.COLUMN2) -> MovePlan:
    """Return the bare (source, destination) pairs of the optimal solution."""
    if n <= 0:
        return []
    plan: MovePlan = []
    plan.extend(plan_moves(n - 1, src, aux, dst))
    plan.append((src, dst))
    plan.extend(plan_moves(n - 1, aux, dst, src))
    return plan


def _start_state(n: int, state: Optional[PuzzleState], source: PegId) -> PuzzleState:
    if state is not None:
        work = state.copy()
    elif n == 0:
        work = PuzzleState(disk_count=0)
    else:
        work = PuzzleState(disk_count=n)
        work.peg(source).extend(initialize_disks(n))
    if len(work.peg(source)) < n:
        raise InvalidConfiguration(
            f"Cannot move a tower of {n} from {source.name}: it holds {len(work.peg(source))} disks"
        )
    return work


def _move_disk(work: PuzzleState, src: PegId, dst: PegId, records: List[MoveRecord]) -> None:
    disk = transfer(work, src, dst)
    records.append(work.snapshot(disk=disk, source=src, destination=dst))


def _move_tower(h: int, src: PegId, dst: PegId, aux: PegId, work: PuzzleState, records: List[MoveRecord]) -> None:
    if h == 0:
        return
    _move_tower(h - 1, src, aux, dst, work, records)
    _move_disk(work, src, dst, records)
    _move_tower(h - 1, aux, dst, src, work, records)


def solve_iterative(
    disk_count: Any,
    source: PegId = PegId.COLUMN1,
    destination: PegId = PegId.COLUMN3,
    auxiliary: PegId = PegId.COLUMN2,
    state: Optional[PuzzleState] = None,
) -> List[MoveRecord]:
    """
    Same sequence as `solve`, built with an explicit stack so tower height is
    not bounded by the interpreter's recursion limit.
    """
    n = parse_disk_count(disk_count, allow_zero=True)
    source, destination, auxiliary = _check_pegs(source, destination, auxiliary)
    work = _start_state(n, state, source)
    records: List[MoveRecord] = []

    # ("tower", h, src, dst, aux) expands; ("disk", src, dst) moves one disk.
    # Pushed in reverse so pops happen in recursive order.
    stack: List[tuple] = [("tower", n, source, destination, auxiliary)]
    while stack:
        task = stack.pop()
        if task[0] == "disk":
            _move_disk(work, task[1], task[2], records)
            continue
        _, h, src, dst, aux = task
        if h == 0:
            continue
        stack.append(("tower", h - 1, aux, dst, src))
        stack.append(("disk", src, dst))
        stack.append(("tower", h - 1, src, aux, dst))
    return records


def solve(
    disk_count: Any,
    source: PegId = PegId.COLUMN1,
    destination: PegId = PegId.COLUMN3,
    auxiliary: PegId = PegId.COLUMN2,
    state: Optional[PuzzleState] = None,
) -> List[MoveRecord]:
    """
    Compute the minimal move sequence for a tower of `disk_count` disks.

    Works on a copy of `state` (a fresh tower on `source` when omitted) and
    returns one MoveRecord per single-disk move, exactly 2**N - 1 of them.
    A count of 0 yields []; negative or malformed counts raise
    InvalidConfiguration.
    """
    n = parse_disk_count(disk_count, allow_zero=True)
    if n > RECURSION_THRESHOLD:
        return solve_iterative(n, source, destination, auxiliary, state)
    source, destination, auxiliary = _check_pegs(source, destination, auxiliary)
    work = _start_state(n, state, source)
    records: List[MoveRecord] = []
    _move_tower(n, source, destination, auxiliary, work, records)
    return records
