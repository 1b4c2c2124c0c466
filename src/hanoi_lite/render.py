"""ASCII rendering of a PuzzleState (top row first, peg labels underneath)."""
from __future__ import annotations

from typing import Optional

from .state import PegId, PuzzleState, MoveRecord

LABELS = ("1", "2", "3")


def render_state(state: PuzzleState, note: Optional[str] = None) -> str:
    height = max(state.disk_count, 1)
    # Pegs are stored top first; row 0 of the drawing is the highest level.
    columns = [state.ranks(pid) for pid in PegId]
    levels = []
    for level in range(height - 1, -1, -1):
        row = []
        for ranks in columns:
            if level < len(ranks):
                row.append(str(ranks[len(ranks) - 1 - level]).rjust(2))
            else:
                row.append(" |")
        levels.append("  ".join(row))
    labels = "  ".join(label.rjust(2) for label in LABELS)
    lines = levels + [labels]
    if note:
        lines.insert(0, note)
    return "\n".join(lines)


def describe_record(record: MoveRecord) -> str:
    if record.disk is None:
        return "snapshot"
    return f"disk {record.disk.rank}: {record.source.value} -> {record.destination.value}"
