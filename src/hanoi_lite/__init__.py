# src/hanoi_lite/__init__.py
"""
Tower of Hanoi puzzle engine.

Rules for manual moves, the optimal recursive solver and a timed simulation
player that replays solver output, behind a single PuzzleEngine facade.
"""

from .disk import Disk
from .errors import InvalidConfiguration, MoveOutcome
from .config import BoardGeometry, PuzzleConfig, parse_disk_count
from .board import initialize_disks
from .state import MoveRecord, PegId, PuzzleState
from .rules import apply_move, is_solved, validate_move
from .solver import plan_moves, solve, solve_iterative
from .scheduler import AsyncioScheduler, ManualScheduler
from .player import PlayerState, SimulationPlayer
from .engine import MoveResult, PuzzleEngine
from .logger import RunLogger

__all__ = [
    # Model
    "Disk", "PegId", "PuzzleState", "MoveRecord",
    "BoardGeometry", "PuzzleConfig", "parse_disk_count",
    "InvalidConfiguration", "MoveOutcome",
    # Engine components
    "initialize_disks", "validate_move", "apply_move", "is_solved",
    "solve", "solve_iterative", "plan_moves",
    "ManualScheduler", "AsyncioScheduler", "SimulationPlayer", "PlayerState",
    "PuzzleEngine", "MoveResult", "RunLogger",
]
