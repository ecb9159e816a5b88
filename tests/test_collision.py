"""Tests for the bit-mask collision resolver."""

from __future__ import annotations

import random

from blockfall.game.collision import collides, piece_collides, shift_down, shift_right
from blockfall.game.piece import Piece
from blockfall.game.shapes import SHAPE_MASKS, Shape, width_height


def random_piece(rng: random.Random) -> Piece:
    piece = Piece.from_shape(rng.choice(list(Shape)), rng.randint(0, 8), rng.randint(0, 16))
    for _ in range(rng.randint(0, 3)):
        piece.rotate()
    return piece


def test_shift_right_does_not_wrap_rows():
    # Column 3 of row 0 must not reappear as column 0 of row 1
    assert shift_right(0x1000, 1) == 0
    assert shift_right(0x8000, 1) == 0x4000
    assert shift_right(0x8888, 3) == 0x1111
    assert shift_right(0xFFFF, 4) == 0


def test_shift_down():
    assert shift_down(0xF000, 1) == 0x0F00
    assert shift_down(0xF000, 3) == 0x000F
    assert shift_down(0xFFFF, 4) == 0


def test_symmetry_for_shapes():
    rng = random.Random(1234)
    for _ in range(2000):
        a, b = random_piece(rng), random_piece(rng)
        assert piece_collides(a, b) == piece_collides(b, a)


def test_symmetry_for_arbitrary_masks():
    rng = random.Random(99)
    for _ in range(2000):
        mask_a = rng.randrange(0x10000)
        mask_b = rng.randrange(0x10000)
        xa, ya, xb, yb = (rng.randint(0, 6) for _ in range(4))
        wa, ha = width_height(mask_a)
        wb, hb = width_height(mask_b)
        assert collides(mask_a, xa, ya, wa, ha, mask_b, xb, yb, wb, hb) == collides(
            mask_b, xb, yb, wb, hb, mask_a, xa, ya, wa, ha
        )


def test_matches_cell_intersection():
    rng = random.Random(7)
    for _ in range(3000):
        a, b = random_piece(rng), random_piece(rng)
        overlap = bool(set(a.cells()) & set(b.cells()))
        assert piece_collides(a, b) == overlap


def test_crossed_i_pieces():
    vertical = Piece.from_shape(Shape.I, 3, 1)      # column 3, rows 1-4
    horizontal = Piece.from_shape(Shape.I, 1, 2)    # rows 2, columns 1-4 after rotate
    horizontal.rotate()
    assert (vertical.width, vertical.height) == (1, 4)
    assert (horizontal.width, horizontal.height) == (4, 1)
    assert piece_collides(vertical, horizontal)

    # Last overlapping row, then one row further apart
    assert piece_collides(vertical, horizontal.moved(0, 2))
    assert not piece_collides(vertical, horizontal.moved(0, 3))

    # Last overlapping column, then one column further apart
    assert piece_collides(vertical.moved(1, 0), horizontal)
    assert not piece_collides(vertical.moved(2, 0), horizontal)


def test_adjacent_pieces_do_not_collide():
    left = Piece.from_shape(Shape.O, 1, 1)
    assert not piece_collides(left, Piece.from_shape(Shape.O, 3, 1))
    assert not piece_collides(left, Piece.from_shape(Shape.O, 1, 3))
    assert piece_collides(left, Piece.from_shape(Shape.O, 2, 2))


def test_only_shared_cells_count():
    z = Piece.from_shape(Shape.Z, 1, 1)
    s = Piece(SHAPE_MASKS[Shape.S], 2, 2)
    assert set(z.cells()) & set(s.cells()) == {(3, 2)}
    assert piece_collides(z, s)
    assert not piece_collides(z, Piece(SHAPE_MASKS[Shape.O], 4, 1))
    assert not piece_collides(z, Piece(SHAPE_MASKS[Shape.O], 0, 2))


def test_distant_boxes_rejected():
    assert not collides(0xFFFF, 0, 0, 4, 4, 0xFFFF, 5, 0, 4, 4)
    assert not collides(0xFFFF, 0, 0, 4, 4, 0xFFFF, 0, 5, 4, 4)
