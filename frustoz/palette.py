"""Colour palettes indexed by a colour coordinate in [0, 1)."""

from __future__ import annotations

import binascii
from typing import List, NamedTuple


class RGB(NamedTuple):
    r: float
    g: float
    b: float


class Palette:
    """A list of colours built from packed 8-bit RGB triples."""

    def __init__(self, content: bytes) -> None:
        self.size = len(content) // 3
        self.colors: List[RGB] = [
            RGB(content[i] / 256.0, content[i + 1] / 256.0, content[i + 2] / 256.0)
            for i in range(0, self.size * 3, 3)
        ]

    def __repr__(self) -> str:
        return f"Palette size [{self.size}]"

    def __len__(self) -> int:
        return self.size

    def get_color(self, color: float) -> RGB:
        """Return the colour for a coordinate; values at or above 1 are out of range."""
        scaled = color * self.size
        if not scaled > 0.0:
            index = 0
        elif scaled >= self.size:
            raise IndexError(f"colour {color} is outside the palette")
        else:
            index = int(scaled)
        return self.colors[index]


def palette_from_hex(size: int, content: str) -> Palette:
    """Decode a palette of ``size`` colours from a hexadecimal string."""
    try:
        colors = binascii.unhexlify(content.strip())
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Incorrect palette") from exc
    if 3 * size != len(colors):
        raise ValueError(
            f"palette declares {size} colours but holds {len(colors)} bytes"
        )
    return Palette(colors)