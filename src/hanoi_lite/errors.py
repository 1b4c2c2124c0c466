# src/hanoi_lite/errors.py
from enum import Enum


class InvalidConfiguration(ValueError):
    """Rejected create/solve input (disk count, peg ids). State is left untouched."""


class MoveOutcome(Enum):
    LEGAL = "legal"
    ILLEGAL = "illegal"  # rejected gesture, not an error

    def __bool__(self) -> bool:
        return self is MoveOutcome.LEGAL
