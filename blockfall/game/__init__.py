"""Game logic: shapes, pieces, collision, board and engine."""

from blockfall.game.shapes import SHAPE_MASKS, Shape, rotate_mask, width_height
from blockfall.game.piece import Piece
from blockfall.game.collision import collides, piece_collides
from blockfall.game.board import Board
from blockfall.game.engine import BlockfallGame, Command, GameContext, GameState

__all__ = [
    "SHAPE_MASKS",
    "Shape",
    "rotate_mask",
    "width_height",
    "Piece",
    "collides",
    "piece_collides",
    "Board",
    "BlockfallGame",
    "Command",
    "GameContext",
    "GameState",
]
