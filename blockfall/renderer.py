"""
Pygame renderer for the Blockfall playfield.

Draws the frame and every occupied cell of the settled pieces and the
active piece. Board coordinates map directly to cells: a piece anchored at
(x, y) fills cell (x + col, y + row) for every set bit (row, col) of its
mask.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from blockfall.game.piece import Piece


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (0, 0, 0)
FRAME_COLOR = (200, 200, 200)
BLOCK_COLOR = (230, 230, 230)
GRID_LINE_COLOR = (40, 40, 40)


class PygameRenderer:
    """Draws a framed (width + 2) x (height + 2) cell grid.

    Attributes:
        width: Interior columns.
        height: Interior rows.
        cell_size: Pixel size of each cell.
        fps: Frame cap applied after each render.
        screen: Pygame display surface (created by open()).
    """

    def __init__(self, width: int, height: int, cell_size: int = 24, fps: int = 60) -> None:
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.fps = fps
        self.window_width = (width + 2) * cell_size
        self.window_height = (height + 2) * cell_size

        self.screen = None
        self._clock = None

    def open(self) -> None:
        """Create the window.

        Raises:
            RuntimeError: If pygame is unavailable or no display can be
                created. The session must not start in that case.
        """
        if pygame is None:
            raise RuntimeError("pygame is required for rendering. Install it: pip install pygame")
        pygame.init()
        try:
            self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        except pygame.error as e:
            pygame.quit()
            raise RuntimeError(f"Could not create the game window: {e}") from e
        pygame.display.set_caption("Blockfall")
        self._clock = pygame.time.Clock()

    def render(self, pieces: tuple[Piece, ...], active: Piece | None) -> None:
        """Draw one frame.

        Args:
            pieces: Settled pieces.
            active: The active piece, or None between lock and spawn.
        """
        if self.screen is None:
            return
        self.screen.fill(BACKGROUND_COLOR)
        self._draw_frame()
        for piece in pieces:
            self._draw_piece(piece)
        if active is not None:
            self._draw_piece(active)
        pygame.display.flip()
        self._clock.tick(self.fps)

    def _draw_frame(self) -> None:
        last_col = self.width + 1
        last_row = self.height + 1
        for row in range(last_row + 1):
            for col in range(last_col + 1):
                if row in (0, last_row) or col in (0, last_col):
                    self._draw_cell(col, row, FRAME_COLOR)

    def _draw_piece(self, piece: Piece) -> None:
        for x, y in piece.cells():
            self._draw_cell(x, y, BLOCK_COLOR)

    def _draw_cell(self, col: int, row: int, color: tuple[int, int, int]) -> None:
        rect = (col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, color, rect)
        pygame.draw.rect(self.screen, GRID_LINE_COLOR, rect, 1)

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self.screen is not None:
            pygame.quit()
            self.screen = None
