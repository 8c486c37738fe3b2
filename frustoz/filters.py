"""Reconstruction kernels, density (log) and gamma filters."""

from __future__ import annotations

import enum
import logging
import math
import time
from dataclasses import dataclass, field
from typing import List

from frustoz.geometry import EPSILON, HDRPixel

log = logging.getLogger(__name__)

_MITCHELL_B = 1.0 / 3.0
_MITCHELL_C = 1.0 / 3.0
GAMMA_FACTOR = 1.0 / 4.0


def _sinc(x: float) -> float:
    xt = x * math.pi
    if xt < EPSILON:
        return 1.0
    return math.sin(xt) / xt


def _gaussian(x: float) -> float:
    return math.exp(-2.0 * x * x) * math.sqrt(2.0 / math.pi)


def _hermite(x: float) -> float:
    if 0.0 <= x < 1.0:
        return (2.0 * x - 3.0) * x * x + 1.0
    if -1.0 < x < 0.0:
        return (-2.0 * x - 3.0) * x * x + 1.0
    return 0.0


def _box(x: float) -> float:
    return float(abs(x) < 0.5)


def _triangle(x: float) -> float:
    t = abs(x)
    return 1.0 - t if t < 1.0 else 0.0


def _bell(x: float) -> float:
    t = abs(x)
    if t < 0.5:
        return 0.75 - t * t
    if t < 1.5:
        return 0.5 * (t - 1.5) * (t - 1.5)
    return 0.0


def _b_spline(x: float) -> float:
    t = abs(x)
    if t < 1.0:
        tt = t * t
        return (0.5 * tt * t) - tt + (2.0 / 3.0)
    if t < 2.0:
        t = 2.0 - t
        return (1.0 / 6.0) * t * t * t
    return 0.0


def _mitchell(x: float) -> float:
    b, c = _MITCHELL_B, _MITCHELL_C
    t = abs(x)
    tt = t * t
    ttt = tt * t
    if t < 1.0:
        return (
            ttt * (12.0 - 9.0 * b - 6.0 * c)
            + tt * (-18.0 + 12.0 * b + 6.0 * c)
            + (6.0 - 2.0 * b)
        ) / 6.0
    if t < 2.0:
        return (
            ttt * (-1.0 * b - 6.0 * c)
            + tt * (6.0 * b + 30.0 * c)
            + t * (-12.0 * b - 48.0 * c)
            + (8.0 * b + 24.0 * c)
        ) / 6.0
    return 0.0


def _blackman(x: float) -> float:
    return _sinc(x) * (0.42 + 0.5 * math.cos(x * math.pi) + 0.08 * math.sin(math.pi * 2.0 * x))


class FilterType(enum.Enum):
    GAUSSIAN = "gaussian"
    HERMITE = "hermite"
    BOX = "box"
    TRIANGLE = "triangle"
    BELL = "bell"
    B_SPLINE = "b_spline"
    MITCHELL = "mitchell"
    BLACKMAN = "blackman"

    def apply(self, x: float) -> float:
        """Evaluate the kernel at x."""
        return _KERNELS[self](x)

    def spatial_support(self) -> float:
        """Half-width of the region where the kernel is meaningful."""
        return _SUPPORT[self]


_KERNELS = {
    FilterType.GAUSSIAN: _gaussian,
    FilterType.HERMITE: _hermite,
    FilterType.BOX: _box,
    FilterType.TRIANGLE: _triangle,
    FilterType.BELL: _bell,
    FilterType.B_SPLINE: _b_spline,
    FilterType.MITCHELL: _mitchell,
    FilterType.BLACKMAN: _blackman,
}

_SUPPORT = {
    FilterType.GAUSSIAN: 1.5,
    FilterType.HERMITE: 1.0,
    FilterType.BOX: 0.5,
    FilterType.TRIANGLE: 1.0,
    FilterType.BELL: 1.5,
    FilterType.B_SPLINE: 2.0,
    FilterType.MITCHELL: 2.0,
    FilterType.BLACKMAN: 1.0,
}


@dataclass
class FilterKernel:
    """A square, normalised convolution kernel stored row by row."""

    width: int
    coefficients: List[float] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Filter width [{self.width}]"


@dataclass(frozen=True)
class FilterConfig:
    filter_type: FilterType
    radius: float


@dataclass(frozen=True)
class LogFilter:
    """Logarithmic density scaling of accumulated histogram cells."""

    k1: float
    k2: float

    def apply(self, pixel: HDRPixel) -> HDRPixel:
        scale = self.get_scale(pixel.a)
        return HDRPixel(pixel.r * scale, pixel.g * scale, pixel.b * scale, pixel.a * scale)

    def get_scale(self, x: float) -> float:
        if x == 0.0:
            return 0.0
        return (self.k1 * math.log10(1.0 + self.k2 * x)) / x


def make_log_filter(
    quality: int, oversampling: int, width: float, height: float, brightness: float
) -> LogFilter:
    """Build the density filter for a view of the given size."""
    area = width * height
    k1 = brightness * 2.0
    k2 = float(oversampling) * float(oversampling) / (area * quality)
    return LogFilter(k1=k1, k2=k2)


def apply_gamma(pixel: HDRPixel) -> HDRPixel:
    """Gamma-correct the density and rescale colour channels to match."""
    r, g, b, a = pixel
    if a < EPSILON:
        return HDRPixel(r, g, b, a)
    new_a = min(max(a**GAMMA_FACTOR, 0.0), 1.0)
    scale = new_a / a
    return HDRPixel(r * scale, g * scale, b * scale, new_a)


def _normalize(values: List[float]) -> List[float]:
    total = sum(values)
    if abs(total) < EPSILON:
        raise ValueError("filter kernel sums to zero")
    return [v / total for v in values]


def build_filter(config: FilterConfig, oversample: int) -> FilterKernel:
    """Sample a filter type into a normalised square kernel."""
    started = time.perf_counter()
    support = config.filter_type.spatial_support()
    fw = 2.0 * oversample * config.radius * support

    width = max(0, int(fw)) + 1
    if (width ^ oversample) == 1:
        width += 1

    adjust = 1.0 if fw < EPSILON else support * width / fw

    axis = [adjust * ((2.0 * i + 1.0) / width - 1.0) for i in range(width)]
    values = [
        config.filter_type.apply(ii) * config.filter_type.apply(jj)
        for jj in axis
        for ii in axis
    ]
    coefficients = _normalize(values)

    log.info(
        "Creating filter took: %s, filter width: %d",
        time.perf_counter() - started,
        width,
    )
    return FilterKernel(width=width, coefficients=coefficients)