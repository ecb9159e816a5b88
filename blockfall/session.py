"""
Game sessions — the two supported loop shapes.

  - run_cooperative: one thread reads input, applies it, advances gravity
    when the interval has elapsed, and renders.
  - run_threaded:    a GravityWorker thread ticks on a fixed interval while
    the calling thread applies input and renders.

In both shapes the only shared state is the game's active piece and board,
guarded by the context lock, plus the context's running flag.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, Protocol

from blockfall.game.engine import BlockfallGame, Command
from blockfall.game.piece import Piece


class Renderer(Protocol):
    def render(self, pieces: tuple[Piece, ...], active: Piece | None) -> None: ...


def _render(game: BlockfallGame, renderer: Renderer | None) -> None:
    if renderer is not None:
        renderer.render(*game.snapshot())


def run_cooperative(
    game: BlockfallGame,
    inputs: Iterable[Command],
    renderer: Renderer | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """Run a single-threaded session.

    Each iteration pulls one command (the input source bounds how long that
    may block), applies it, ticks gravity if the gravity interval has
    elapsed, and renders.

    Args:
        game: The game to drive. Reset first if it is not running.
        inputs: Iterable of Command values.
        renderer: Optional renderer called once per iteration.
        clock: Monotonic time source in seconds.

    Returns:
        Number of settled pieces when the session ended.
    """
    if not game.running:
        game.reset()

    interval = game.context.config.gravity_interval_ms / 1000.0
    next_tick = clock() + interval
    commands = iter(inputs)
    try:
        while game.running:
            command = next(commands, None)
            if command is None:
                break
            game.apply(command)

            now = clock()
            if now >= next_tick:
                game.tick()
                next_tick = now + interval

            _render(game, renderer)
    finally:
        game.quit()
    return len(game.board)


class GravityWorker(threading.Thread):
    """Background task that ticks gravity until the running flag clears.

    The wait between ticks ends early on stop(), so joining the worker after
    Quit does not wait out a full gravity interval.
    """

    def __init__(self, game: BlockfallGame, interval: float) -> None:
        super().__init__(name="blockfall-gravity", daemon=True)
        self.game = game
        self.interval = interval
        self.ticks = 0
        self._wakeup = threading.Event()

    def run(self) -> None:
        while self.game.running:
            self.game.tick()
            self.ticks += 1
            self._wakeup.wait(self.interval)

    def stop(self) -> None:
        """Interrupt the current wait; the loop exits once running is clear."""
        self._wakeup.set()


def run_threaded(
    game: BlockfallGame,
    inputs: Iterable[Command],
    renderer: Renderer | None = None,
) -> int:
    """Run a two-task session.

    Gravity runs in a GravityWorker thread. The calling thread consumes
    input and renders, since pygame's event queue and display belong to the
    thread that opened them. When input ends or Quit arrives, the running
    flag is cleared and the worker is joined before returning, so the caller
    can release rendering resources safely.

    Args:
        game: The game to drive. Reset first if it is not running.
        inputs: Iterable of Command values.
        renderer: Optional renderer called after every command.

    Returns:
        Number of settled pieces when the session ended.
    """
    if not game.running:
        game.reset()

    worker = GravityWorker(game, game.context.config.gravity_interval_ms / 1000.0)
    worker.start()
    commands = iter(inputs)
    try:
        while game.running:
            command = next(commands, None)
            if command is None:
                break
            game.apply(command)
            _render(game, renderer)
    finally:
        game.quit()
        worker.stop()
        worker.join()
    return len(game.board)
