"""
Configuration payloads for the puzzle engine.

This module contains:
- BoardGeometry: sizing constants used when disks are created
- PuzzleConfig: disk count and replay cadence requested by the caller
- parse_disk_count: strict conversion of user input into a disk count
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import math
from numbers import Integral, Real
from typing import Any, Optional

from .errors import InvalidConfiguration

DEFAULT_DISK_COUNT = 8
DEFAULT_STEP_DELAY_MS = 300
FALLBACK_DELAY_MS = 1000


@dataclass(frozen=True)
class BoardGeometry:
    """Sizing constants for disk widths/heights (same units as the drawing surface)."""
    base_width: float = 300.0    # width of the largest disk, upper bound
    base_rate: float = 30.0      # base width grows by this per disk
    top_width: float = 30.0      # width of the smallest disk, upper bound
    top_rate: float = 3.0
    column_height: float = 300.0
    height_rate: float = 30.0    # tallest a single disk may be


@dataclass
class PuzzleConfig:
    """Caller-owned settings for one puzzle instance."""
    disk_count: int = DEFAULT_DISK_COUNT
    step_delay_ms: Optional[float] = DEFAULT_STEP_DELAY_MS
    fallback_delay_ms: float = FALLBACK_DELAY_MS
    geometry: BoardGeometry = field(default_factory=BoardGeometry)

    def __post_init__(self) -> None:
        self.disk_count = parse_disk_count(self.disk_count)
        if not self.fallback_delay_ms or self.fallback_delay_ms <= 0:
            raise InvalidConfiguration("fallback_delay_ms must be positive")

    def effective_delay(self, delay_ms: Any = None) -> float:
        """
        Delay between replay steps. `delay_ms` overrides the configured value;
        zero, negative, missing or non-numeric delays fall back to
        `fallback_delay_ms`.
        """
        candidate = self.step_delay_ms if delay_ms is None else delay_ms
        return clamp_delay(candidate, self.fallback_delay_ms)

    def with_disk_count(self, value: Any) -> "PuzzleConfig":
        return replace(self, disk_count=parse_disk_count(value))


def clamp_delay(delay_ms: Any, fallback_ms: float = FALLBACK_DELAY_MS) -> float:
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, Real):
        return float(fallback_ms)
    if delay_ms != delay_ms or delay_ms <= 0:  # NaN or non-positive
        return float(fallback_ms)
    return float(delay_ms)


def parse_disk_count(value: Any, *, allow_zero: bool = False) -> int:
    """
    Convert `value` into a disk count.

    Accepts integers and integer strings ("8", " 12 "). Booleans, fractional
    numbers, blank or non-numeric strings and counts below the minimum raise
    InvalidConfiguration; nothing is clamped.
    """
    if isinstance(value, bool):
        raise InvalidConfiguration(f"Disk count must be an integer, got {value!r}")
    if isinstance(value, Integral):
        count = int(value)
    elif isinstance(value, Real):
        if not math.isfinite(value) or int(value) != value:
            raise InvalidConfiguration(f"Disk count must be a whole number, got {value!r}")
        count = int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            count = int(text)
        except ValueError:
            raise InvalidConfiguration(f"Malformed disk count: {value!r}") from None
    else:
        raise InvalidConfiguration(f"Disk count must be an integer, got {type(value).__name__}")

    minimum = 0 if allow_zero else 1
    if count < minimum:
        raise InvalidConfiguration(f"Disk count must be >= {minimum}, got {count}")
    return count
