"""Writing rendered RGB data to image files."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from PIL import Image


def write_png(
    filename: Union[str, Path], data: bytes, image_width: int, image_height: int
) -> None:
    """Save packed 8-bit RGB data as an image; the format follows the file extension."""
    required = image_width * image_height * 3
    if len(data) < required:
        raise ValueError(
            f"expected {required} bytes for {image_width}x{image_height} RGB, got {len(data)}"
        )
    image = Image.frombytes("RGB", (image_width, image_height), bytes(data[:required]))
    image.save(filename)