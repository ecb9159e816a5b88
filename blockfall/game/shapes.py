"""
Tetromino definitions as 16-bit occupancy masks.

Each shape is a 4x4 grid packed into 16 bits, row-major, most significant
bit first:

    bit for cell (row, col) = 0x8000 >> (row * 4 + col)

so 0x8000 is the top-left cell and 0x0001 the bottom-right one. Every mask
in SHAPE_MASKS is normalized: its occupied cells touch row 0 and column 0,
which keeps a piece's anchor at the top-left corner of its occupied cells.
"""

from __future__ import annotations

import enum
from typing import Iterator

import numpy as np

# =============================================================================
# Bit patterns
# =============================================================================

FULL_MASK = 0xFFFF
TOP_LEFT_BIT = 0x8000

# One set bit per row in the given column / four set bits in the given row
COLUMN_GUARD = 0x8888   # column 0
ROW_GUARD = 0xF000      # row 0

# Everything except column 3; masks off bits that would wrap into the next
# row when a pattern is shifted one column to the right.
RIGHT_SHIFT_GUARD = 0xEEEE


class Shape(enum.IntEnum):
    """The seven tetromino shapes, in spawn-index order."""
    L = 0
    J = 1
    Z = 2
    S = 3
    O = 4
    I = 5
    T = 6


SHAPE_MASKS: dict[Shape, int] = {
    # X . . .
    # X . . .
    # X X . .
    Shape.L: 0b1000_1000_1100_0000,
    # . X . .
    # . X . .
    # X X . .
    Shape.J: 0b0100_0100_1100_0000,
    # X X . .
    # . X X .
    Shape.Z: 0b1100_0110_0000_0000,
    # . X X .
    # X X . .
    Shape.S: 0b0110_1100_0000_0000,
    # X X . .
    # X X . .
    Shape.O: 0b1100_1100_0000_0000,
    # X . . .  (x4)
    Shape.I: 0b1000_1000_1000_1000,
    # X X X .
    # . X . .
    Shape.T: 0b1110_0100_0000_0000,
}


def cell_bit(row: int, col: int) -> int:
    """Return the bit that represents cell (row, col) of the 4x4 window."""
    return TOP_LEFT_BIT >> (row * 4 + col)


def width_height(mask: int) -> tuple[int, int]:
    """Count the columns and rows of the 4x4 window that hold a set bit.

    Args:
        mask: 16-bit occupancy mask.

    Returns:
        (width, height) of the occupied part of the window.
    """
    width = 0
    height = 0
    for i in range(4):
        if mask & (COLUMN_GUARD >> i):
            width += 1
        if mask & (ROW_GUARD >> (4 * i)):
            height += 1
    return width, height


def transpose_mask(mask: int) -> int:
    """Swap cell (y, x) with cell (x, y)."""
    result = 0
    for y in range(4):
        for x in range(4):
            if mask & cell_bit(y, x):
                result |= cell_bit(x, y)
    return result


def mirror_mask(mask: int) -> int:
    """Reverse the four bits of every row (horizontal mirror)."""
    result = 0
    for y in range(4):
        for x in range(4):
            if mask & cell_bit(y, x):
                result |= cell_bit(y, 3 - x)
    return result


def rotate_mask(mask: int) -> int:
    """Rotate the 4x4 window 90 degrees clockwise.

    A transpose followed by a per-row mirror. Four rotations give back the
    original mask for every 16-bit input.
    """
    return mirror_mask(transpose_mask(mask))


def normalize_mask(mask: int) -> int:
    """Shift a pattern up and left until it touches row 0 and column 0.

    Only empty rows/columns are shifted out, so no bit ever crosses a row
    boundary. The empty mask is returned unchanged.
    """
    mask &= FULL_MASK
    if mask == 0:
        return 0
    while not mask & ROW_GUARD:
        mask = (mask << 4) & FULL_MASK
    while not mask & COLUMN_GUARD:
        mask = (mask << 1) & FULL_MASK
    return mask


def mask_cells(mask: int) -> Iterator[tuple[int, int]]:
    """Yield (row, col) for every occupied cell, top-left first."""
    for row in range(4):
        for col in range(4):
            if mask & cell_bit(row, col):
                yield row, col


def mask_to_array(mask: int) -> np.ndarray:
    """Unpack a mask into a 4x4 int8 array (1 = occupied)."""
    bits = [(mask >> (15 - i)) & 1 for i in range(16)]
    return np.array(bits, dtype=np.int8).reshape(4, 4)
