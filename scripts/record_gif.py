"""
Record a demo GIF of a Blockfall game driven by random input.

Renders the board to images using PIL (no pygame needed), then saves as GIF.
Usage: python scripts/record_gif.py --seed 7 --ticks 400
"""

import argparse
import pathlib
import random
import sys

# Ensure project root is on path
PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from PIL import Image, ImageDraw

from blockfall.config import EngineConfig
from blockfall.game.board import ACTIVE_CELL, FRAME_CELL, SETTLED_CELL
from blockfall.game.engine import BlockfallGame, Command, GameContext
from blockfall.input import RandomInput

# ---------------------------------------------------------------------------
# Visual settings
# ---------------------------------------------------------------------------
CELL_SIZE = 20
FRAME_DURATION_MS = 80
COMMANDS_PER_TICK = 3  # input commands applied between gravity ticks

BG_COLOR = (0, 0, 0)
CELL_COLORS = {
    FRAME_CELL: (200, 200, 200),
    SETTLED_CELL: (150, 150, 150),
    ACTIVE_CELL: (240, 240, 240),
}


def render_frame(grid):
    """Render a board grid (see Board.to_grid) as a PIL Image."""
    rows, cols = grid.shape
    img = Image.new("RGB", (cols * CELL_SIZE, rows * CELL_SIZE), BG_COLOR)
    draw = ImageDraw.Draw(img)
    for row in range(rows):
        for col in range(cols):
            color = CELL_COLORS.get(int(grid[row, col]))
            if color is None:
                continue
            x = col * CELL_SIZE
            y = row * CELL_SIZE
            draw.rectangle([x, y, x + CELL_SIZE - 2, y + CELL_SIZE - 2], fill=color)
    return img


def record(seed, ticks):
    """Play a seeded game headlessly and return one frame per gravity tick."""
    config = EngineConfig(seed=seed)
    game = BlockfallGame(GameContext(config=config))
    game.reset()

    frames = [render_frame(game.board.to_grid(game.current_piece))]
    inputs = iter(RandomInput(random.Random(seed), ticks * COMMANDS_PER_TICK))
    for _ in range(ticks):
        for _ in range(COMMANDS_PER_TICK):
            command = next(inputs, Command.QUIT)
            if command == Command.QUIT:
                break
            game.apply(command)
        game.tick()
        _, active = game.snapshot()
        frames.append(render_frame(game.board.to_grid(active)))
    game.quit()
    return frames, len(game.board)


def main():
    parser = argparse.ArgumentParser(description="Record a Blockfall demo GIF.")
    parser.add_argument("--output", type=str, default=str(PROJECT_ROOT / "assets" / "demo.gif"))
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--ticks", type=int, default=400)
    args = parser.parse_args()

    output_path = pathlib.Path(args.output)
    print("Recording demo GIF...")
    print(f"  Seed: {args.seed}")
    print(f"  Ticks: {args.ticks}")
    print(f"  Output: {output_path}")

    frames, settled = record(args.seed, args.ticks)
    print(f"Recording complete: {len(frames)} frames, {settled} pieces settled")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        str(output_path),
        save_all=True,
        append_images=frames[1:],
        duration=FRAME_DURATION_MS,
        loop=0,
        optimize=True,
    )
    file_size_kb = output_path.stat().st_size / 1024
    print(f"GIF saved: {output_path} ({file_size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
