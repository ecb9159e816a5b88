"""
Game orchestrator — spawn, gravity, lock and player moves.

The active piece moves through a small state machine:

    SPAWNING -> FALLING -> LOCKING -> SPAWNING ...
                   \
                    -> GAME_OVER   (explicit Quit only)

Every change to the active piece or the board is a check-then-commit done
under the context lock, so input handling and gravity may run on separate
threads.
"""

from __future__ import annotations

import dataclasses
import enum
import random
import threading
from typing import Protocol

from blockfall.config import EngineConfig
from blockfall.game.board import Board
from blockfall.game.piece import Piece
from blockfall.game.shapes import Shape


class Command(enum.IntEnum):
    """Discrete input commands."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    MOVE_DOWN = 3
    QUIT = 4
    NOOP = 5


class RandomSource(Protocol):
    """Spawn randomizer, e.g. random.Random or a seeded test double."""

    def randrange(self, stop: int) -> int: ...


class GameState(enum.Enum):
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    GAME_OVER = "game_over"


@dataclasses.dataclass
class GameContext:
    """Shared resources for one game instance.

    Attributes:
        config: Engine settings.
        rng: Spawn randomizer; anything with a `randrange(n)` method.
            Defaults to random.Random seeded from config.seed.
        lock: The single exclusion scope guarding the active piece and
            the board.
        running: Set while the game runs; cleared on Quit.
    """

    config: EngineConfig = dataclasses.field(default_factory=EngineConfig)
    rng: RandomSource | None = None
    lock: threading.Lock = dataclasses.field(default_factory=threading.Lock)
    running: threading.Event = dataclasses.field(default_factory=threading.Event)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)


class BlockfallGame:
    """Falling-block engine with bit-mask collision.

    There is no loss condition: a new piece is spawned even if its spawn
    cell is already occupied, and the game ends only on Quit.

    Attributes:
        context: Shared config, randomizer, lock and running flag.
        board: Settled pieces and playfield bounds.
        current_piece: The active piece, or None before the first spawn.
        state: Current GameState.
    """

    def __init__(self, context: GameContext | None = None) -> None:
        self.context = context if context is not None else GameContext()
        config = self.context.config
        self.board = Board(config.board_width, config.board_height)
        self.current_piece: Piece | None = None
        self.state = GameState.SPAWNING

    def reset(self) -> None:
        """Start a new game: empty board, fresh piece, running flag set."""
        config = self.context.config
        with self.context.lock:
            self.board = Board(config.board_width, config.board_height)
            self.current_piece = None
            self.state = GameState.SPAWNING
            self._spawn()
        self.context.running.set()

    @property
    def running(self) -> bool:
        return self.context.running.is_set()

    # ── State transitions ────────────────────────────────────────────────

    def spawn(self) -> Piece:
        """Spawn a new active piece and enter FALLING."""
        with self.context.lock:
            return self._spawn()

    def tick(self) -> bool:
        """Advance gravity by one row.

        From FALLING the piece moves down if the row below is free. If it is
        blocked by the board or the floor, the piece is locked into the board
        and a new one is spawned during the same tick.

        Returns:
            True if a piece was locked during this tick.
        """
        with self.context.lock:
            if self.state is GameState.GAME_OVER:
                return False
            if self.state is GameState.SPAWNING or self.current_piece is None:
                self._spawn()
                return False

            candidate = self.current_piece.moved(0, 1)
            if self.board.admits(candidate):
                self.current_piece.y += 1
                return False

            self.state = GameState.LOCKING
            self._lock()
            self._spawn()
            return True

    def _spawn(self) -> Piece:
        # Caller holds the lock.
        config = self.context.config
        shape = Shape(self.context.rng.randrange(len(Shape)))
        self.current_piece = Piece.from_shape(shape, config.spawn_x, config.spawn_y)
        self.state = GameState.FALLING
        return self.current_piece

    def _lock(self) -> None:
        # Caller holds the lock.
        self.board.settle(self.current_piece)
        self.current_piece = None
        self.state = GameState.SPAWNING

    # ── Player moves ─────────────────────────────────────────────────────

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def move_down(self) -> bool:
        """Soft drop by one row. Never locks; locking is left to gravity."""
        return self._shift(0, 1)

    def rotate(self) -> bool:
        """Rotate the active piece clockwise if the rotated shape fits.

        Returns:
            True if the rotation was committed.
        """
        with self.context.lock:
            if not self._accepts_moves():
                return False
            if not self.board.admits(self.current_piece.rotated()):
                return False
            self.current_piece.rotate()
            return True

    def _shift(self, dx: int, dy: int) -> bool:
        """Translate the active piece by (dx, dy) if the target fits.

        Returns:
            True if the move was committed, False if it was ignored.
        """
        with self.context.lock:
            if not self._accepts_moves():
                return False
            if not self.board.admits(self.current_piece.moved(dx, dy)):
                return False
            self.current_piece.x += dx
            self.current_piece.y += dy
            return True

    def _accepts_moves(self) -> bool:
        return self.state is GameState.FALLING and self.current_piece is not None

    def quit(self) -> None:
        with self.context.lock:
            self.state = GameState.GAME_OVER
        self.context.running.clear()

    def apply(self, command: Command) -> bool:
        """Apply one input command.

        Args:
            command: A Command value.

        Returns:
            True if the command changed the game state.
        """
        if command == Command.QUIT:
            self.quit()
            return True
        if command == Command.MOVE_LEFT:
            return self.move_left()
        if command == Command.MOVE_RIGHT:
            return self.move_right()
        if command == Command.MOVE_DOWN:
            return self.move_down()
        if command == Command.ROTATE:
            return self.rotate()
        return False

    def snapshot(self) -> tuple[tuple[Piece, ...], Piece | None]:
        """Return (settled pieces, copy of the active piece) for rendering."""
        with self.context.lock:
            active = self.current_piece.copy() if self.current_piece is not None else None
            return self.board.pieces, active
