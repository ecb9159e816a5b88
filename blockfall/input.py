"""
Input sources.

An input source is any iterable of Command values. The session loops pull
one command per iteration; how long a pull may block is up to the source.

  - KeyboardInput: pygame keyboard events, waits at most `poll_ms`.
  - ScriptedInput: a fixed command sequence (tests, demos).
  - RandomInput:   random moves followed by QUIT (headless recording).
"""

from __future__ import annotations

import time
from typing import Any, Iterable, Iterator

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from blockfall.game.engine import Command


# ── Keyboard mapping ─────────────────────────────────────────────────────
# Arrow keys move / rotate, Escape quits
KEY_MAP: dict[int, Command] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Command.MOVE_LEFT,
        pygame.K_RIGHT: Command.MOVE_RIGHT,
        pygame.K_UP: Command.ROTATE,
        pygame.K_DOWN: Command.MOVE_DOWN,
        pygame.K_ESCAPE: Command.QUIT,
    }

MOVE_COMMANDS: tuple[Command, ...] = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.MOVE_DOWN,
    Command.NOOP,
)


class KeyboardInput:
    """Endless stream of commands read from the pygame event queue.

    The pygame display must already be open (see PygameRenderer.open).
    """

    def __init__(self, poll_ms: int = 10) -> None:
        if pygame is None:
            raise RuntimeError("pygame is required for keyboard input. Install it: pip install pygame")
        self.poll_ms = poll_ms

    def __iter__(self) -> Iterator[Command]:
        while True:
            yield self.poll()

    def poll(self) -> Command:
        """Wait up to poll_ms for one event and translate it.

        Returns:
            The mapped Command, or NOOP on timeout / unmapped events.
        """
        event = pygame.event.wait(self.poll_ms)
        if event.type == pygame.QUIT:
            return Command.QUIT
        if event.type == pygame.KEYDOWN:
            return KEY_MAP.get(event.key, Command.NOOP)
        return Command.NOOP


class ScriptedInput:
    """Replays a fixed sequence of commands, optionally pausing before each."""

    def __init__(self, commands: Iterable[Command], delay: float = 0.0) -> None:
        self.commands = list(commands)
        self.delay = delay

    def __iter__(self) -> Iterator[Command]:
        for command in self.commands:
            if self.delay > 0:
                time.sleep(self.delay)
            yield command


class RandomInput:
    """`count` random non-quit commands followed by QUIT."""

    def __init__(self, rng: Any, count: int) -> None:
        self.rng = rng
        self.count = count

    def __iter__(self) -> Iterator[Command]:
        for _ in range(self.count):
            yield self.rng.choice(MOVE_COMMANDS)
        yield Command.QUIT
