"""Blockfall — a minimal falling-block engine with bit-mask collision."""

__version__ = "0.1.0"
