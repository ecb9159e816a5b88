"""Tests for the cooperative and threaded session loops."""

from __future__ import annotations

import random
import threading
import time

from blockfall.game.engine import Command, GameState
from blockfall.input import RandomInput, ScriptedInput
from blockfall.session import GravityWorker, run_cooperative, run_threaded

from conftest import make_game


class FakeClock:
    """Advances by a fixed step on every call."""

    def __init__(self, step: float) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames = []

    def render(self, pieces, active):
        self.frames.append((pieces, active))


def test_cooperative_ticks_on_interval():
    game = make_game(gravity_interval_ms=2000)
    renderer = RecordingRenderer()

    # One tick every second command: 13 falls, then the lock on tick 14
    settled = run_cooperative(
        game, ScriptedInput([Command.NOOP] * 28), renderer, clock=FakeClock(1.0)
    )

    assert settled == 1
    assert len(renderer.frames) == 28
    assert renderer.frames[-1][1].y == 1
    assert not game.running
    assert game.state is GameState.GAME_OVER


def test_cooperative_stops_on_quit():
    game = make_game()
    renderer = RecordingRenderer()
    commands = [Command.NOOP, Command.QUIT, Command.MOVE_LEFT, Command.MOVE_LEFT]

    run_cooperative(game, ScriptedInput(commands), renderer, clock=FakeClock(0.0))

    assert len(renderer.frames) == 2
    assert game.current_piece.x == 3


def test_cooperative_applies_moves():
    game = make_game()
    run_cooperative(
        game,
        ScriptedInput([Command.MOVE_LEFT, Command.MOVE_LEFT, Command.MOVE_LEFT]),
        clock=FakeClock(0.0),
    )
    assert game.current_piece.x == 1


def test_cooperative_resets_stopped_game():
    game = make_game()
    game.quit()
    run_cooperative(game, ScriptedInput([Command.MOVE_RIGHT]), clock=FakeClock(0.0))
    assert game.current_piece.x == 4


def _gravity_threads():
    return [t for t in threading.enumerate() if t.name == "blockfall-gravity"]


def test_threaded_gravity_runs_until_input_ends():
    game = make_game(gravity_interval_ms=1)
    renderer = RecordingRenderer()

    settled = run_threaded(game, ScriptedInput([Command.NOOP] * 50, delay=0.01), renderer)

    assert settled >= 1
    assert settled == len(game.board)
    assert len(renderer.frames) == 50
    assert not game.running
    assert not _gravity_threads()


def test_threaded_quit_joins_worker():
    game = make_game(gravity_interval_ms=5)
    settled = run_threaded(game, ScriptedInput([Command.QUIT]))

    assert settled == len(game.board)
    assert game.state is GameState.GAME_OVER
    assert not _gravity_threads()


def test_threaded_random_input_keeps_piece_in_bounds():
    game = make_game(gravity_interval_ms=1)
    renderer = RecordingRenderer()
    run_threaded(game, RandomInput(random.Random(3), 300), renderer)

    for _, active in renderer.frames:
        assert game.board.in_bounds(active)
    assert all(game.board.in_bounds(piece) for piece in game.board.pieces)


def test_threaded_quit_does_not_wait_for_gravity_interval():
    game = make_game(gravity_interval_ms=10_000)
    started = time.monotonic()
    run_threaded(game, ScriptedInput([Command.NOOP, Command.QUIT], delay=0.05))
    assert time.monotonic() - started < 2.0
    assert not _gravity_threads()


def test_gravity_worker_stop_interrupts_wait():
    game = make_game(gravity_interval_ms=10_000)
    worker = GravityWorker(game, 10.0)
    worker.start()
    game.quit()
    worker.stop()
    worker.join(timeout=2.0)
    assert not worker.is_alive()
    assert worker.ticks <= 1
