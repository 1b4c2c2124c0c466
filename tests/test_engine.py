"""PuzzleEngine facade: create / attempt_move / solve_and_animate."""

import numpy as np
import pytest

from hanoi_lite import (
    InvalidConfiguration,
    ManualScheduler,
    MoveOutcome,
    PegId,
    PlayerState,
    PuzzleConfig,
    PuzzleEngine,
    RunLogger,
)


def _engine(n=3, delay=100):
    scheduler = ManualScheduler()
    engine = PuzzleEngine(
        PuzzleConfig(disk_count=n, step_delay_ms=delay),
        scheduler=scheduler,
        logger=RunLogger(),
        rng=np.random.default_rng(0),
    )
    wins = []
    engine.on_win.append(wins.append)
    return engine, scheduler, wins


class TestCreate:
    def test_fresh_puzzle(self):
        engine, _, _ = _engine(4)
        assert engine.state.ranks() == ([1, 2, 3, 4], [], [])
        assert engine.move_count == 0
        assert engine.solved is False

    def test_default_config_uses_eight_disks(self):
        engine = PuzzleEngine()
        assert engine.state.disk_count == 8

    def test_create_resets_counters(self):
        engine, _, _ = _engine(2)
        engine.attempt_move(1, 2)
        state = engine.create_puzzle(5)
        assert state is engine.state
        assert engine.move_count == 0
        assert engine.state.ranks() == ([1, 2, 3, 4, 5], [], [])
        assert engine.config.disk_count == 5

    def test_create_none_reuses_last_count(self):
        engine, _, _ = _engine(2)
        engine.create_puzzle("6")
        engine.create_puzzle()
        assert engine.state.disk_count == 6

    @pytest.mark.parametrize("bad", [0, -2, "abc", "", 1.5, float("inf"), float("-inf"), float("nan")])
    def test_invalid_create_keeps_previous_state(self, bad):
        engine, _, _ = _engine(3)
        engine.attempt_move(1, 3)
        before_state = engine.state
        before_ranks = engine.state.ranks()
        with pytest.raises(InvalidConfiguration):
            engine.create_puzzle(bad)
        assert engine.state is before_state
        assert engine.state.ranks() == before_ranks
        assert engine.move_count == 1
        assert engine.config.disk_count == 3


class TestManualMoves:
    def test_legal_move_counts_and_reports(self):
        engine, _, _ = _engine(3)
        result = engine.attempt_move("1", "column3")
        assert result.outcome is MoveOutcome.LEGAL
        assert result.legal
        assert result.state.ranks() == ([2, 3], [], [1])
        assert engine.move_count == 1
        assert result.solved is False

    def test_illegal_moves_change_nothing(self):
        engine, _, _ = _engine(3)
        engine.attempt_move(1, 3)
        before = engine.state.ranks()
        assert engine.attempt_move(1, 3).outcome is MoveOutcome.ILLEGAL   # larger onto smaller
        assert engine.attempt_move(2, 1).outcome is MoveOutcome.ILLEGAL   # empty source
        assert engine.attempt_move(3, 3).outcome is MoveOutcome.ILLEGAL   # same peg
        assert engine.attempt_move(1, 2, source_index=1).outcome is MoveOutcome.ILLEGAL
        assert engine.state.ranks() == before
        assert engine.move_count == 1
        assert len(engine.logger.by_event("rejected")) == 4

    def test_unknown_peg_raises(self):
        engine, _, _ = _engine(3)
        with pytest.raises(InvalidConfiguration):
            engine.attempt_move(1, 7)

    def test_single_disk_win_is_peg_specific(self):
        engine, _, wins = _engine(1)
        result = engine.attempt_move(PegId.COLUMN1, PegId.COLUMN2)
        assert result.solved is True
        assert engine.solved is True
        assert wins == ["You Win!!!"]
        # Moving on to peg 3 also holds every disk, but the win is not re-announced
        engine.attempt_move(2, 3)
        assert engine.solved is True
        assert wins == ["You Win!!!"]

    def test_win_flag_drops_when_destination_incomplete(self):
        engine, _, _ = _engine(2)
        engine.attempt_move(1, 2)
        engine.attempt_move(1, 3)
        engine.attempt_move(2, 3)
        assert engine.solved is True
        engine.attempt_move(3, 1)
        assert engine.solved is False

    def test_manual_solution_of_three(self):
        engine, _, wins = _engine(3)
        for src, dst in [(1, 3), (1, 2), (3, 2), (1, 3), (2, 1), (2, 3), (1, 3)]:
            assert engine.attempt_move(src, dst).legal
        assert engine.pegs[2] == tuple(sorted(engine.pegs[2], key=lambda d: d.rank))
        assert engine.state.ranks() == ([], [], [1, 2, 3])
        assert engine.move_count == 7
        assert wins == ["You Win!!!"]


class TestSolveAndAnimate:
    def test_full_playback(self):
        engine, scheduler, wins = _engine(3, delay=50)
        player = engine.solve_and_animate()
        assert player.state is PlayerState.PLAYING
        assert engine.state.ranks() == ([1, 2, 3], [], [])
        assert len(engine.records) == 7

        scheduler.advance(50)
        assert engine.move_count == 1
        assert engine.state.ranks() == ([2, 3], [], [1])

        scheduler.run_until_idle()
        assert engine.playback_state is PlayerState.FINISHED
        assert engine.state.ranks() == ([], [], [1, 2, 3])
        assert engine.move_count == 7
        assert engine.solved is True
        assert wins == ["You Win!!!"]

    def test_records_cleared_when_playback_finishes(self):
        engine, scheduler, _ = _engine(3)
        engine.solve_and_animate()
        assert len(engine.records) == 7
        scheduler.run_until_idle()
        assert engine.playback_state is PlayerState.FINISHED
        assert engine.records == []

    @pytest.mark.parametrize("n", [1, 2, 4, 6])
    def test_playback_solves_any_size(self, n):
        engine, scheduler, _ = _engine(n)
        engine.solve_and_animate()
        scheduler.run_until_idle()
        assert engine.move_count == 2 ** n - 1
        assert engine.state.ranks() == ([], [], list(range(1, n + 1)))
        assert engine.state.is_well_ordered()

    def test_solve_with_new_count_and_delay(self):
        engine, scheduler, _ = _engine(3)
        engine.solve_and_animate(4, 20)
        assert engine.config.step_delay_ms == 20
        scheduler.advance(20 * 15)
        assert engine.solved is True

    def test_zero_delay_falls_back_to_default(self):
        engine, scheduler, _ = _engine(1, delay=0)
        engine.solve_and_animate()
        scheduler.advance(999)
        assert engine.move_count == 0
        scheduler.advance(1)
        assert engine.move_count == 1

    def test_create_during_playback_cancels_it(self):
        engine, scheduler, wins = _engine(3)
        engine.solve_and_animate()
        scheduler.advance(200)
        engine.create_puzzle(3)
        scheduler.run_until_idle()
        assert engine.state.ranks() == ([1, 2, 3], [], [])
        assert engine.move_count == 0
        assert engine.playback_state is PlayerState.IDLE
        assert wins == []

    def test_new_solve_supersedes_old(self):
        engine, scheduler, wins = _engine(3)
        engine.solve_and_animate()
        scheduler.advance(300)
        engine.solve_and_animate(2)
        scheduler.run_until_idle()
        assert engine.state.ranks() == ([], [], [1, 2])
        assert engine.move_count == 3
        assert wins == ["You Win!!!"]

    def test_invalid_solve_keeps_state(self):
        engine, scheduler, _ = _engine(3)
        engine.attempt_move(1, 2)
        with pytest.raises(InvalidConfiguration):
            engine.solve_and_animate(0)
        assert engine.state.ranks() == ([2, 3], [1], [])
        assert engine.playback_state is PlayerState.IDLE

    def test_manual_move_takes_over_playback(self):
        engine, scheduler, _ = _engine(3)
        engine.solve_and_animate()
        scheduler.advance(100)
        assert engine.attempt_move(1, 2).legal
        scheduler.run_until_idle()
        assert engine.state.ranks() == ([3], [2], [1])
        assert engine.move_count == 2
        assert engine.playback_state is PlayerState.IDLE

    def test_updates_yield_each_applied_state(self):
        engine, scheduler, _ = _engine(2)
        engine.solve_and_animate()
        scheduler.run_until_idle()
        states = [s.ranks() for s in engine.updates()]
        assert states == [([2], [1], []), ([], [1], [2]), ([], [], [1, 2])]
        assert list(engine.updates()) == []

    def test_update_listeners_see_every_step(self):
        engine, scheduler, _ = _engine(2)
        seen = []
        engine.on_update.append(lambda state: seen.append(state.ranks()))
        engine.solve_and_animate()
        scheduler.run_until_idle()
        # create, three steps, finished
        assert len(seen) == 5
        assert seen[-1] == ([], [], [1, 2])
