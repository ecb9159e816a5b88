"""
Configuration loading for the Blockfall engine.

Settings live in a YAML file (see config/engine.yaml). The file is loaded
into a plain dict and converted into an EngineConfig; keys that are not
present fall back to the defaults below.
"""

from __future__ import annotations

import dataclasses
import pathlib
from typing import Any

import yaml


@dataclasses.dataclass(frozen=True)
class EngineConfig:
    """Engine, timing and renderer settings.

    Attributes:
        board_width: Number of interior columns.
        board_height: Number of interior rows.
        spawn_x: Column of the spawn anchor (board coordinates).
        spawn_y: Row of the spawn anchor (board coordinates).
        gravity_interval_ms: Milliseconds between gravity ticks.
        input_poll_ms: Maximum milliseconds an input poll may block.
        cell_size: Renderer pixels per cell.
        fps: Renderer frame cap.
        seed: Seed for the spawn randomizer, or None.
    """

    board_width: int = 7
    board_height: int = 15
    spawn_x: int = 3
    spawn_y: int = 1
    gravity_interval_ms: int = 200
    input_poll_ms: int = 10
    cell_size: int = 24
    fps: int = 60
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_width <= 0 or self.board_height <= 0:
            raise ValueError(
                f"Board dimensions must be positive, got {self.board_width}x{self.board_height}"
            )
        if self.gravity_interval_ms <= 0 or self.input_poll_ms <= 0:
            raise ValueError("Gravity and input intervals must be positive")
        if not 1 <= self.spawn_x <= self.board_width:
            raise ValueError(f"spawn_x {self.spawn_x} is outside the interior columns")
        if not 1 <= self.spawn_y <= self.board_height:
            raise ValueError(f"spawn_y {self.spawn_y} is outside the interior rows")

        # Every shape must fit at the spawn anchor in its unrotated form
        from blockfall.game.shapes import SHAPE_MASKS, width_height

        extents = [width_height(mask) for mask in SHAPE_MASKS.values()]
        max_width = max(width for width, _ in extents)
        max_height = max(height for _, height in extents)
        if self.spawn_x + max_width - 1 > self.board_width:
            raise ValueError(
                f"spawn_x {self.spawn_x} leaves no room for a {max_width}-wide shape"
                f" on a {self.board_width}-wide board"
            )
        if self.spawn_y + max_height - 1 > self.board_height:
            raise ValueError(
                f"spawn_y {self.spawn_y} leaves no room for a {max_height}-tall shape"
                f" on a {self.board_height}-tall board"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "EngineConfig":
        """Build a config from a dict, ignoring unknown keys.

        Args:
            data: Mapping loaded from YAML (may be None for an empty file).

        Returns:
            A validated EngineConfig.

        Raises:
            ValueError: If a value is out of range.
        """
        data = data or {}
        known = {field.name for field in dataclasses.fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)


def load_config(config_path: str | pathlib.Path) -> EngineConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        The parsed EngineConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file holds invalid settings.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config file must hold a mapping: {config_path}")
    return EngineConfig.from_dict(data)
