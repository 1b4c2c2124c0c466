#!/usr/bin/env python3
"""
Interactive Tower of Hanoi (manual moves)

Commands
--------
    1 3        move the top disk of peg 1 onto peg 3
    new [N]    start over, optionally with N disks
    solve      replay the optimal solution from a fresh board
    quit

Usage
-----
    python demos/hanoi/play.py --n 4
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
for path in (str(SRC), str(ROOT)):
    if path not in sys.path:
        sys.path.insert(0, path)

from hanoi_lite import InvalidConfiguration, ManualScheduler, PuzzleConfig, PuzzleEngine  # noqa: E402
from hanoi_lite.render import render_state  # noqa: E402


def handle(engine: PuzzleEngine, scheduler: ManualScheduler, line: str) -> bool:
    """Run one command. Returns False when the session should end."""
    parts = line.split()
    if not parts:
        return True
    cmd = parts[0].lower()
    if cmd in ("quit", "exit", "q"):
        return False
    try:
        if cmd == "new":
            engine.create_puzzle(parts[1] if len(parts) > 1 else None)
        elif cmd == "solve":
            engine.solve_and_animate()
            scheduler.run_until_idle()
        elif len(parts) == 2:
            result = engine.attempt_move(parts[0], parts[1])
            if not result.legal:
                print("Illegal move")
        else:
            print("Unknown command")
    except InvalidConfiguration as exc:
        print(f"Rejected: {exc}")
    print(render_state(engine.state, note=f"Moves: {engine.move_count}"))
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Tower of Hanoi in the terminal.")
    parser.add_argument("--n", default="3", help="Number of disks (default: 3)")
    args = parser.parse_args()

    try:
        config = PuzzleConfig(disk_count=args.n)
    except InvalidConfiguration as exc:
        parser.error(str(exc))

    scheduler = ManualScheduler()
    engine = PuzzleEngine(config, scheduler=scheduler)
    engine.on_win.append(print)
    print(render_state(engine.state, note="Moves: 0"))

    for line in sys.stdin:
        if not handle(engine, scheduler, line):
            break


if __name__ == "__main__":
    main()
