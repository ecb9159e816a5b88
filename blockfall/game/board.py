"""
Board: the append-only list of settled pieces plus the playfield bounds.

Board coordinates include a 1-cell frame. For the default 7x15 interior the
framed window is 9x17: column 0 and column 8 are walls, row 16 is the floor,
and pieces live in columns 1-7, rows 1-15.

Walls and floor are expressed as synthetic pieces so they go through the
same collision test as settled pieces:

  - left wall:  column mask at x = 0
  - right wall: column mask at x = width + 1
  - floor:      row mask at y = height + 1, under the candidate's window
"""

from __future__ import annotations

import numpy as np

from blockfall.game.collision import piece_collides
from blockfall.game.piece import Piece
from blockfall.game.shapes import COLUMN_GUARD, ROW_GUARD, mask_to_array

# Cell values of Board.to_grid()
EMPTY_CELL = 0
SETTLED_CELL = 1
ACTIVE_CELL = 2
FRAME_CELL = -1


class Board:
    """Settled pieces and playfield extent.

    Attributes:
        width: Number of interior columns.
        height: Number of interior rows.
    """

    def __init__(self, width: int = 7, height: int = 15) -> None:
        self.width = width
        self.height = height
        self._pieces: list[Piece] = []

    def __len__(self) -> int:
        return len(self._pieces)

    @property
    def pieces(self) -> tuple[Piece, ...]:
        """Copies of the settled pieces in the order they were committed.

        Settled entries are owned by the board; callers only ever see
        copies, so a settled piece cannot be altered from outside.
        """
        return tuple(piece.copy() for piece in self._pieces)

    def settle(self, piece: Piece) -> Piece:
        """Commit a copy of `piece`; the board owns the copy from now on.

        Returns:
            A copy of the stored entry.
        """
        settled = piece.copy()
        self._pieces.append(settled)
        return settled.copy()

    # ── Collision queries ────────────────────────────────────────────────

    def boundaries(self, piece: Piece) -> tuple[Piece, Piece, Piece]:
        """Return (left wall, right wall, floor) placed against `piece`."""
        left_wall = Piece(COLUMN_GUARD, 0, piece.y)
        right_wall = Piece(COLUMN_GUARD, self.width + 1, piece.y)
        floor = Piece(ROW_GUARD, piece.x, self.height + 1)
        return left_wall, right_wall, floor

    def hits_boundary(self, piece: Piece) -> bool:
        return any(piece_collides(piece, wall) for wall in self.boundaries(piece))

    def hits_settled(self, piece: Piece) -> bool:
        return any(piece_collides(settled, piece) for settled in self._pieces)

    def admits(self, piece: Piece) -> bool:
        """True if `piece` overlaps neither a boundary nor a settled piece."""
        return not self.hits_boundary(piece) and not self.hits_settled(piece)

    def in_bounds(self, piece: Piece) -> bool:
        """Half-plane check: every occupied cell lies in the interior."""
        return all(
            1 <= x <= self.width and 1 <= y <= self.height
            for x, y in piece.cells()
        )

    # ── Grid view ────────────────────────────────────────────────────────

    def to_grid(self, active: Piece | None = None) -> np.ndarray:
        """Rasterize the framed playfield.

        Args:
            active: Optional active piece drawn on top of settled cells.

        Returns:
            int8 array of shape (height + 2, width + 2) holding EMPTY_CELL,
            SETTLED_CELL, ACTIVE_CELL or FRAME_CELL. Cells that fall outside
            the array are skipped.
        """
        grid = np.zeros((self.height + 2, self.width + 2), dtype=np.int8)
        grid[0, :] = FRAME_CELL
        grid[-1, :] = FRAME_CELL
        grid[:, 0] = FRAME_CELL
        grid[:, -1] = FRAME_CELL

        layers = [(piece, SETTLED_CELL) for piece in self._pieces]
        if active is not None:
            layers.append((active, ACTIVE_CELL))
        rows, cols = grid.shape
        for piece, value in layers:
            ys, xs = np.nonzero(mask_to_array(piece.mask))
            ys = ys + piece.y
            xs = xs + piece.x
            inside = (ys >= 0) & (ys < rows) & (xs >= 0) & (xs < cols)
            grid[ys[inside], xs[inside]] = value
        return grid
