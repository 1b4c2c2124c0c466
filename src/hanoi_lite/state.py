"""
Puzzle state: the three pegs and the snapshots the solver records.

Peg contents are plain lists of Disk with index 0 as the top of the peg.
MoveRecord is a fixed-shape snapshot (one field per peg) so playback can
restore all three pegs verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .disk import Disk
from .errors import InvalidConfiguration


class PegId(Enum):
    COLUMN1 = 1
    COLUMN2 = 2
    COLUMN3 = 3

    @property
    def field_name(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: Any) -> "PegId":
        """Accept a PegId, 1..3, "2", "column2" or "COLUMN2"."""
        if isinstance(value, PegId):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidConfiguration(f"Unknown peg: {value!r}") from None
        if isinstance(value, str):
            text = value.strip()
            if text.isdecimal():
                return cls.parse(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                raise InvalidConfiguration(f"Unknown peg: {value!r}") from None
        raise InvalidConfiguration(f"Unknown peg: {value!r}")


@dataclass(frozen=True)
class MoveRecord:
    """Post-move contents of all three pegs (top first) plus the move that produced them."""
    column1: Tuple[Disk, ...]
    column2: Tuple[Disk, ...]
    column3: Tuple[Disk, ...]
    disk: Optional[Disk] = None
    source: Optional[PegId] = None
    destination: Optional[PegId] = None

    def peg(self, pid: PegId) -> Tuple[Disk, ...]:
        return getattr(self, pid.field_name)

    def ranks(self) -> Tuple[List[int], List[int], List[int]]:
        return tuple([d.rank for d in self.peg(pid)] for pid in PegId)  # type: ignore[return-value]

    @property
    def disk_total(self) -> int:
        return len(self.column1) + len(self.column2) + len(self.column3)


@dataclass
class PuzzleState:
    """Mutable three-peg board. Total disk count never changes for one instance."""
    disk_count: int
    column1: List[Disk] = field(default_factory=list)
    column2: List[Disk] = field(default_factory=list)
    column3: List[Disk] = field(default_factory=list)

    @classmethod
    def fresh(cls, disks: List[Disk]) -> "PuzzleState":
        """All disks on peg 1, `disks` given top first."""
        return cls(disk_count=len(disks), column1=list(disks))

    def peg(self, pid: PegId) -> List[Disk]:
        return getattr(self, pid.field_name)

    def pegs(self) -> Tuple[Tuple[Disk, ...], Tuple[Disk, ...], Tuple[Disk, ...]]:
        return tuple(self.column1), tuple(self.column2), tuple(self.column3)

    def ranks(self, pid: Optional[PegId] = None):
        if pid is None:
            return tuple([d.rank for d in self.peg(p)] for p in PegId)
        return [d.rank for d in self.peg(pid)]

    def top(self, pid: PegId) -> Optional[Disk]:
        contents = self.peg(pid)
        return contents[0] if contents else None

    def copy(self) -> "PuzzleState":
        # Disks are immutable, shallow list copies are enough
        return PuzzleState(
            disk_count=self.disk_count,
            column1=list(self.column1),
            column2=list(self.column2),
            column3=list(self.column3),
        )

    def snapshot(
        self,
        disk: Optional[Disk] = None,
        source: Optional[PegId] = None,
        destination: Optional[PegId] = None,
    ) -> MoveRecord:
        return MoveRecord(
            column1=tuple(self.column1),
            column2=tuple(self.column2),
            column3=tuple(self.column3),
            disk=disk,
            source=source,
            destination=destination,
        )

    def restore(self, record: MoveRecord) -> None:
        """Replace all three pegs with the record's contents in one go."""
        if record.disk_total != self.disk_count:
            raise ValueError(
                f"Snapshot holds {record.disk_total} disks, puzzle has {self.disk_count}"
            )
        self.column1 = list(record.column1)
        self.column2 = list(record.column2)
        self.column3 = list(record.column3)

    def is_well_ordered(self) -> bool:
        """True iff ranks strictly increase from top to bottom on every peg."""
        for pid in PegId:
            ranks = self.ranks(pid)
            if any(a >= b for a, b in zip(ranks, ranks[1:])):
                return False
        return True

    def as_dict(self) -> Dict[str, List[int]]:
        return {pid.field_name: self.ranks(pid) for pid in PegId}
