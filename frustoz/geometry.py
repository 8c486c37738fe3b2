"""Plane geometry primitives used by the flame renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple, Tuple

EPSILON = 0.00000001

Row = Tuple[float, float, float]


def radius(x: float, y: float) -> float:
    """Distance of (x, y) from the origin."""
    return math.sqrt(x * x + y * y)


def rad2(x: float, y: float) -> float:
    """Squared distance of (x, y) from the origin."""
    return x * x + y * y


def theta(x: float, y: float) -> float:
    """Angle used by the variations: atan2 with x as the first argument."""
    return math.atan2(x, y)


@dataclass(frozen=True)
class RealPoint:
    """A point on the real plane."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: RealPoint) -> RealPoint:
        if not isinstance(other, RealPoint):
            return NotImplemented
        return RealPoint(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> RealPoint:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return RealPoint(scalar * self.x, scalar * self.y)

    __rmul__ = __mul__


def sum_points(points: Iterable[RealPoint]) -> RealPoint:
    """Component-wise sum of points; the empty sum is the origin."""
    x = y = 0.0
    for point in points:
        x += point.x
        y += point.y
    return RealPoint(x, y)


@dataclass(frozen=True)
class TransformMatrix:
    """A 3x3 matrix acting on projective points, stored by rows."""

    row1: Row
    row2: Row
    row3: Row

    def apply(self, point: ProjectivePoint) -> ProjectivePoint:
        """Multiply the matrix by a projective point."""
        return point.transform(self)

    def __matmul__(self, point: ProjectivePoint) -> ProjectivePoint:
        if not isinstance(point, ProjectivePoint):
            return NotImplemented
        return self.apply(point)


@dataclass(frozen=True)
class ProjectivePoint:
    """A point in homogeneous coordinates."""

    x: float
    y: float
    z: float

    @classmethod
    def from_real(cls, point: RealPoint) -> ProjectivePoint:
        """Lift a real point to canonical homogeneous coordinates."""
        return cls(point.x, point.y, 1.0)

    def to_real(self) -> RealPoint:
        """Project back to the real plane."""
        if (self.x, self.y, self.z) == (0.0, 0.0, 0.0):
            raise ValueError("the zero vector is not a projective point")
        if self.z == 0.0:
            raise ValueError("point at infinity has no real counterpart")
        return RealPoint(self.x / self.z, self.y / self.z)

    def transform(self, matrix: TransformMatrix) -> ProjectivePoint:
        """Apply a transformation matrix to this point."""
        (a11, a12, a13), (a21, a22, a23), (a31, a32, a33) = (
            matrix.row1,
            matrix.row2,
            matrix.row3,
        )
        x, y, z = self.x, self.y, self.z
        return ProjectivePoint(
            a11 * x + a12 * y + a13 * z,
            a21 * x + a22 * y + a23 * z,
            a31 * x + a32 * y + a33 * z,
        )


class CameraCoordinates(NamedTuple):
    """Position relative to the camera rectangle, [0, 1) on both axes when visible."""

    x: float
    y: float


class CanvasPixel(NamedTuple):
    """Integer pixel position on the histogram canvas."""

    x: int
    y: int


class HDRPixel(NamedTuple):
    """Accumulated colour channels and hit density of one histogram cell."""

    r: float
    g: float
    b: float
    a: float