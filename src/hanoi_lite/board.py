"""Board initializer: builds the starting tower of disks for a puzzle."""
from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .config import BoardGeometry, parse_disk_count
from .disk import Disk

COLOR_SPACE = 0xFFFFFF


def random_color(rng: Optional[np.random.Generator] = None) -> str:
    """Uniform pick over the 24-bit colour space, formatted as #rrggbb."""
    rng = rng if rng is not None else np.random.default_rng()
    return f"#{int(rng.integers(0, COLOR_SPACE)):06x}"


def disk_dimensions(disk_count: int, geometry: BoardGeometry = BoardGeometry()) -> Tuple[np.ndarray, float]:
    """
    Widths (indexed by rank - 1, smallest first) and the shared per-disk height.

    base = min(N * base_rate, base_width), top = min(N * top_rate, top_width)
    and every step down in rank narrows the disk by (base - top) / N.
    """
    n = disk_count
    base = min(n * geometry.base_rate, geometry.base_width)
    top = min(n * geometry.top_rate, geometry.top_width)
    height = min(geometry.column_height / n, geometry.height_rate)
    rate = (base - top) / n

    ranks = np.arange(1, n + 1)
    widths = base - (n - ranks) * rate
    return widths, float(height)


def initialize_disks(
    disk_count,
    geometry: BoardGeometry = BoardGeometry(),
    rng: Optional[np.random.Generator] = None,
) -> List[Disk]:
    """
    Return a full tower, top first: index 0 holds rank 1 (the smallest disk)
    and the last entry holds rank N with width `base`.

    Raises InvalidConfiguration for non-positive or malformed counts.
    """
    n = parse_disk_count(disk_count)
    rng = rng if rng is not None else np.random.default_rng()
    widths, height = disk_dimensions(n, geometry)
    return [
        Disk(width=float(widths[rank - 1]), height=height, color=random_color(rng), rank=rank)
        for rank in range(1, n + 1)
    ]
