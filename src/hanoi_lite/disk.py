# src/hanoi_lite/disk.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Disk:
    """
    A single disk. `rank` orders disks by size (1 = smallest); width, height
    and color are only used by whatever draws the board.
    """
    width: float
    height: float
    color: str
    rank: int

    def to_dict(self):
        return {
            "rank": self.rank,
            "width": round(self.width, 4),
            "height": round(self.height, 4),
            "color": self.color,
        }
