"""Fractal flame rendering: XML flame parsing, chaos-game rendering, filtering and PNG output."""

__version__ = "0.1.0"