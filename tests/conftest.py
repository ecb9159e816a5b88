"""Shared fixtures for the Blockfall tests."""

from __future__ import annotations

import pytest

from blockfall.config import EngineConfig
from blockfall.game.engine import BlockfallGame, GameContext
from blockfall.game.shapes import Shape


class SequenceRng:
    """Deterministic stand-in for random.Random: cycles through fixed indices."""

    def __init__(self, indices):
        self.indices = list(indices)
        self.calls = 0

    def randrange(self, n):
        value = self.indices[self.calls % len(self.indices)]
        self.calls += 1
        assert 0 <= value < n
        return value


def make_game(shapes=(Shape.O,), **config) -> BlockfallGame:
    """A reset game whose spawns cycle through `shapes`."""
    context = GameContext(config=EngineConfig(**config), rng=SequenceRng(int(s) for s in shapes))
    game = BlockfallGame(context)
    game.reset()
    return game


@pytest.fixture
def o_game() -> BlockfallGame:
    return make_game((Shape.O,))
