"""Camera projection and the accumulation histogram the chaos game draws into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from frustoz.geometry import CameraCoordinates, CanvasPixel, HDRPixel, RealPoint
from frustoz.palette import RGB

_EMPTY_PIXEL = HDRPixel(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Camera:
    """A rectangle on the real plane with its lower-left corner at ``origin``.

    Inside the rectangle the camera's own coordinates run from (0, 0) at the
    origin to (1, 1) at the opposite corner.
    """

    origin: RealPoint
    scale_x: float
    scale_y: float

    def project(self, point: RealPoint) -> CameraCoordinates:
        """Express a point of the plane in camera coordinates."""
        return CameraCoordinates(
            (point.x - self.origin.x) / self.scale_x,
            (point.y - self.origin.y) / self.scale_y,
        )


def valid_coordinates(coordinates: CameraCoordinates) -> bool:
    """True when the coordinates fall inside the camera, [0, 1) on both axes."""
    return 0.0 <= coordinates.x < 1.0 and 0.0 <= coordinates.y < 1.0


@dataclass
class Histogram:
    """A grid of accumulated colour and hit counts, stored row by row."""

    width: int
    height: int
    data: Optional[List[HDRPixel]] = None

    def __post_init__(self) -> None:
        if self.data is None:
            self.data = [_EMPTY_PIXEL] * (self.width * self.height)
        elif len(self.data) != self.width * self.height:
            raise ValueError(
                f"histogram of {self.width}x{self.height} needs "
                f"{self.width * self.height} cells, got {len(self.data)}"
            )

    def project(self, coordinates: CameraCoordinates) -> Optional[CanvasPixel]:
        """Map camera coordinates to a cell, or None when they are outside."""
        if not valid_coordinates(coordinates):
            return None
        return CanvasPixel(
            int(self.width * coordinates.x), int(self.height * coordinates.y)
        )

    def project_and_update(self, coordinates: CameraCoordinates, color: RGB) -> None:
        """Add a colour hit to the cell under the coordinates, if there is one."""
        pixel = self.project(coordinates)
        if pixel is None:
            return
        index = pixel.y * self.width + pixel.x
        r, g, b, a = self.data[index]
        self.data[index] = HDRPixel(r + color.r, g + color.g, b + color.b, a + 1.0)

    def copy(self) -> Histogram:
        """An independent copy of this histogram."""
        return Histogram(self.width, self.height, list(self.data))


def create_histogram(
    image_width: int, image_height: int, oversampling: int, filter_width: int
) -> Histogram:
    """An empty histogram sized for an image, its oversampling and filter border."""
    border = 0 if oversampling > filter_width else filter_width - oversampling
    return Histogram(
        width=image_width * oversampling + border,
        height=image_height * oversampling + border,
    )