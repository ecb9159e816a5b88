"""Tests for the Piece model."""

from __future__ import annotations

import pytest

from blockfall.game.piece import Piece
from blockfall.game.shapes import SHAPE_MASKS, Shape, width_height


@pytest.mark.parametrize("shape", list(Shape))
def test_extent_tracks_mask_through_rotations(shape):
    piece = Piece.from_shape(shape)
    for _ in range(4):
        piece.rotate()
        assert (piece.width, piece.height) == width_height(piece.mask)
    assert piece.mask == SHAPE_MASKS[shape]


def test_rotate_l_piece():
    piece = Piece.from_shape(Shape.L, 2, 3)
    piece.rotate()
    # X X X
    # X . .
    assert piece.mask == 0xE800
    assert (piece.width, piece.height) == (3, 2)
    assert (piece.x, piece.y) == (2, 3)


def test_candidates_leave_original_untouched():
    piece = Piece.from_shape(Shape.T, 3, 1)
    moved = piece.moved(1, 1)
    rotated = piece.rotated()

    assert (moved.x, moved.y) == (4, 2)
    assert rotated.mask != piece.mask
    assert piece == Piece.from_shape(Shape.T, 3, 1)


def test_copy_is_independent():
    piece = Piece.from_shape(Shape.S, 1, 1)
    duplicate = piece.copy()
    duplicate.x += 3
    duplicate.rotate()
    assert piece == Piece.from_shape(Shape.S, 1, 1)


def test_cells_are_absolute():
    piece = Piece.from_shape(Shape.O, 1, 1)
    assert set(piece.cells()) == {(1, 1), (2, 1), (1, 2), (2, 2)}
