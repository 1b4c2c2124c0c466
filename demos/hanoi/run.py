"""CLI runner: solve a Tower of Hanoi puzzle and replay the solution."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
for path in (str(SRC), str(ROOT)):
    if path not in sys.path:
        sys.path.insert(0, path)

from hanoi_lite import (  # noqa: E402
    AsyncioScheduler,
    InvalidConfiguration,
    ManualScheduler,
    PlayerState,
    PuzzleConfig,
    PuzzleEngine,
    RunLogger,
)
from hanoi_lite.render import render_state  # noqa: E402


def _expected_moves(n: int) -> int:
    return (1 << n) - 1


def _print_state(engine: PuzzleEngine) -> None:
    print(f"Move {engine.move_count:03d}")
    print(render_state(engine.state))
    print()


async def _play_realtime(engine: PuzzleEngine) -> None:
    finished = asyncio.Event()

    def on_update(_state) -> None:
        _print_state(engine)
        if engine.playback_state is PlayerState.FINISHED:
            finished.set()

    engine.on_update.append(on_update)
    engine.on_win.append(print)
    engine.solve_and_animate()
    await finished.wait()


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve and replay a Tower of Hanoi puzzle.")
    parser.add_argument("--n", default="3", help="Number of disks (default: 3)")
    parser.add_argument("--delay", type=float, default=300, help="Milliseconds between steps (<= 0 uses 1000)")
    parser.add_argument("--headless", action="store_true", help="Use a virtual clock instead of waiting")
    parser.add_argument("--log", default=None, help="Optional path for a JSON dump of engine frames")
    args = parser.parse_args()

    try:
        config = PuzzleConfig(disk_count=args.n, step_delay_ms=args.delay)
    except InvalidConfiguration as exc:
        parser.error(str(exc))

    logger = RunLogger() if args.log else None

    if args.headless:
        scheduler = ManualScheduler()
        engine = PuzzleEngine(config, scheduler=scheduler, logger=logger)
        print("Initial state:")
        print(render_state(engine.state))
        print()
        engine.solve_and_animate()
        scheduler.run_until_idle()
        for idx, state in enumerate(engine.updates(), start=1):
            print(render_state(state, note=f"Move {idx:03d}"))
            print()
    else:
        engine = PuzzleEngine(config, scheduler=AsyncioScheduler(), logger=logger)
        asyncio.run(_play_realtime(engine))

    print("Final state:")
    print(render_state(engine.state))
    print()
    print(f"Goal reached: {engine.solved}")
    print(f"Moves executed: {engine.move_count}")
    print(f"Expected moves: {_expected_moves(config.disk_count)}")

    if args.log:
        logger.to_json(args.log)


if __name__ == "__main__":
    main()
