"""
Piece model: an occupancy mask anchored on the board.
"""

from __future__ import annotations

import dataclasses
from typing import Iterator

from blockfall.game.shapes import (
    SHAPE_MASKS,
    Shape,
    mask_cells,
    normalize_mask,
    rotate_mask,
    width_height,
)


@dataclasses.dataclass
class Piece:
    """A 4x4 occupancy mask placed at a board position.

    Attributes:
        mask: 16-bit occupancy mask (possibly rotated).
        x: Board column of the 4x4 window's top-left cell.
        y: Board row of the 4x4 window's top-left cell.
        width: Occupied columns of the mask (derived, kept in sync).
        height: Occupied rows of the mask (derived, kept in sync).
    """

    mask: int
    x: int = 1
    y: int = 1
    width: int = dataclasses.field(init=False)
    height: int = dataclasses.field(init=False)

    def __post_init__(self) -> None:
        self._update_extent()

    @classmethod
    def from_shape(cls, shape: Shape, x: int = 1, y: int = 1) -> "Piece":
        """Create a piece for one of the canonical shapes."""
        return cls(SHAPE_MASKS[Shape(shape)], x, y)

    def _update_extent(self) -> None:
        self.width, self.height = width_height(self.mask)

    def rotate(self) -> None:
        """Rotate the piece 90 degrees clockwise in place.

        The rotated pattern is re-anchored to the top-left of the window, so
        four rotations restore the original mask.
        """
        self.mask = normalize_mask(rotate_mask(self.mask))
        self._update_extent()

    def copy(self) -> "Piece":
        return Piece(self.mask, self.x, self.y)

    def moved(self, dx: int, dy: int) -> "Piece":
        """Return a translated copy; the piece itself is left untouched."""
        return Piece(self.mask, self.x + dx, self.y + dy)

    def rotated(self) -> "Piece":
        """Return a rotated copy; the piece itself is left untouched."""
        candidate = self.copy()
        candidate.rotate()
        return candidate

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield the absolute (x, y) board coordinates of occupied cells."""
        for row, col in mask_cells(self.mask):
            yield self.x + col, self.y + row
