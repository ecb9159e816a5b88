"""
Bit-exact collision test between two anchored 4x4 masks.

Both masks are moved onto one 4x4 window anchored at the top-left-most of
the two anchors, then ANDed. Walls and the floor are expressed as masks too
(see Board.boundaries), so every collision goes through collides().
"""

from __future__ import annotations

from blockfall.game.piece import Piece
from blockfall.game.shapes import FULL_MASK, RIGHT_SHIFT_GUARD


def shift_right(mask: int, columns: int) -> int:
    """Move a pattern right by `columns`, dropping cells that leave the window.

    Shifts one column at a time; the guard clears column 3 first so no bit
    wraps into the row below.
    """
    for _ in range(min(columns, 4)):
        mask = (mask & RIGHT_SHIFT_GUARD) >> 1
    return mask


def shift_down(mask: int, rows: int) -> int:
    """Move a pattern down by `rows`, dropping cells that leave the window."""
    if rows >= 4:
        return 0
    return (mask & FULL_MASK) >> (4 * rows)


def boxes_overlap(
    xa: int, ya: int, wa: int, ha: int,
    xb: int, yb: int, wb: int, hb: int,
) -> bool:
    """Cheap bounding-box test (inclusive, so touching boxes pass through)."""
    return yb <= ya + ha and yb + hb >= ya and xb <= xa + wa and xb + wb >= xa


def collides(
    mask_a: int, xa: int, ya: int, wa: int, ha: int,
    mask_b: int, xb: int, yb: int, wb: int, hb: int,
) -> bool:
    """Return True if two anchored masks share an occupied cell.

    Args:
        mask_a: Occupancy mask of the first shape.
        xa: Anchor column of the first shape.
        ya: Anchor row of the first shape.
        wa: Occupied width of the first shape.
        ha: Occupied height of the first shape.
        mask_b: Occupancy mask of the second shape.
        xb: Anchor column of the second shape.
        yb: Anchor row of the second shape.
        wb: Occupied width of the second shape.
        hb: Occupied height of the second shape.

    Returns:
        True if at least one cell is occupied by both shapes. The result
        does not depend on argument order.
    """
    if not boxes_overlap(xa, ya, wa, ha, xb, yb, wb, hb):
        return False

    left = min(xa, xb)
    top = min(ya, yb)
    aligned_a = shift_down(shift_right(mask_a, xa - left), ya - top)
    aligned_b = shift_down(shift_right(mask_b, xb - left), yb - top)
    return (aligned_a & aligned_b) != 0


def piece_collides(a: Piece, b: Piece) -> bool:
    """collides() for two Piece objects."""
    return collides(
        a.mask, a.x, a.y, a.width, a.height,
        b.mask, b.x, b.y, b.width, b.height,
    )
