"""
Entry point for Blockfall.

Supports two modes:
  - play:     single-threaded loop (input, gravity and rendering interleaved).
  - threaded: gravity runs in a background thread, input and rendering in
              the main thread.

Usage:
    python main.py --mode play
    python main.py --mode threaded --config config/engine.yaml
    python main.py --mode play --seed 42
"""

from __future__ import annotations

import argparse
import sys

from blockfall.config import load_config
from blockfall.game.engine import BlockfallGame, GameContext
from blockfall.input import KeyboardInput
from blockfall.renderer import PygameRenderer
from blockfall.session import run_cooperative, run_threaded


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, and seed attributes.
    """
    parser = argparse.ArgumentParser(
        description="Blockfall — a minimal falling-block engine.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "threaded"],
        default="play",
        help="Loop shape: 'play' (single thread) or 'threaded' (separate gravity thread).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/engine.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the spawn randomizer (overrides the config file).",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point: parse args, load config, open the window and play."""
    args = parse_args()
    try:
        config = load_config(args.config).with_overrides(seed=args.seed)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    renderer = PygameRenderer(
        config.board_width, config.board_height, cell_size=config.cell_size, fps=config.fps
    )
    try:
        renderer.open()
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    game = BlockfallGame(GameContext(config=config))
    game.reset()
    try:
        inputs = KeyboardInput(config.input_poll_ms)
        if args.mode == "threaded":
            settled = run_threaded(game, inputs, renderer)
        else:
            settled = run_cooperative(game, inputs, renderer)
    finally:
        renderer.close()

    print(f"Session ended | Mode: {args.mode} | Pieces settled: {settled}")


if __name__ == "__main__":
    main()
