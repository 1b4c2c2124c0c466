# src/hanoi_lite/rules.py
from typing import Sequence

from .disk import Disk
from .errors import MoveOutcome
from .state import PegId, PuzzleState


def validate_move(state: PuzzleState, source: PegId, destination: PegId, source_index: int = 0) -> MoveOutcome:
    """
    Decide whether the top disk of `source` may go onto `destination`.

    Legal iff the source peg is non-empty, the pegs differ, the dragged disk
    is the top one (`source_index == 0`) and the destination is empty or its
    top disk outranks the moving one.
    """
    if source == destination:
        return MoveOutcome.ILLEGAL
    moving = state.top(source)
    if moving is None or source_index != 0:
        return MoveOutcome.ILLEGAL
    resting = state.top(destination)
    if resting is None or resting.rank > moving.rank:
        return MoveOutcome.LEGAL
    return MoveOutcome.ILLEGAL


def transfer(state: PuzzleState, source: PegId, destination: PegId) -> Disk:
    """Pop the top of `source` and push it onto `destination`. No legality check."""
    disk = state.peg(source).pop(0)
    state.peg(destination).insert(0, disk)
    return disk


def apply_move(state: PuzzleState, source: PegId, destination: PegId, source_index: int = 0) -> MoveOutcome:
    """Validate, then transfer on success. Illegal moves leave `state` untouched."""
    outcome = validate_move(state, source, destination, source_index)
    if outcome is MoveOutcome.LEGAL:
        transfer(state, source, destination)
    return outcome


def is_solved(peg_contents: Sequence[Disk], total_disk_count: int) -> bool:
    """Win check: the inspected peg holds every disk."""
    return len(peg_contents) == total_disk_count
