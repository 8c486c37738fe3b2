"""Turning accumulated histograms into 8-bit RGB image data."""

from __future__ import annotations

import logging
import math
import time
from typing import List, Sequence

from frustoz.filters import FilterKernel, LogFilter, apply_gamma, make_log_filter
from frustoz.geometry import HDRPixel
from frustoz.histogram import Histogram

log = logging.getLogger(__name__)


def _clamp_unit(value: float) -> float:
    if math.isnan(value):
        return 1.0
    return max(min(value, 1.0), 0.0)


def _to_byte(value: float) -> int:
    scaled = value * 256.0
    if math.isnan(scaled):
        return 0
    return int(max(min(scaled, 255.0), 0.0))


def combine_histograms(histograms: Sequence[Histogram]) -> Histogram:
    """Sum histograms of equal size cell by cell."""
    if not histograms:
        raise ValueError("at least one histogram is needed")
    first = histograms[0]
    for histogram in histograms[1:]:
        if (histogram.width, histogram.height) != (first.width, first.height):
            raise ValueError("histograms must all have the same size")
    data = [
        HDRPixel(
            sum(p.r for p in cells),
            sum(p.g for p in cells),
            sum(p.b for p in cells),
            sum(p.a for p in cells),
        )
        for cells in zip(*(h.data for h in histograms))
    ]
    return Histogram(first.width, first.height, data)


def apply_spatial_filter(
    kernel: FilterKernel,
    histogram: Histogram,
    image_width: int,
    image_height: int,
    oversample: int,
) -> Histogram:
    """Convolve the oversampled histogram down to image size, clamping to [0, 1]."""
    started = time.perf_counter()
    if len(kernel.coefficients) != kernel.width * kernel.width:
        raise ValueError("filter kernel must hold width * width coefficients")
    hist_width = histogram.width
    source = histogram.data
    taps = list(
        zip(
            (fx + fy * hist_width for fy in range(kernel.width) for fx in range(kernel.width)),
            kernel.coefficients,
        )
    )
    data: List[HDRPixel] = []
    for y in range(image_height):
        row_base = y * oversample * hist_width
        for x in range(image_width):
            base = row_base + x * oversample
            r = g = b = a = 0.0
            for offset, k in taps:
                pr, pg, pb, pa = source[base + offset]
                r += pr * k
                g += pg * k
                b += pb * k
                a += pa * k
            data.append(
                HDRPixel(_clamp_unit(r), _clamp_unit(g), _clamp_unit(b), _clamp_unit(a))
            )
    log.info("Filtering took: %s", time.perf_counter() - started)
    return Histogram(image_width, image_height, data)


class HistogramProcessor:
    """Applies density, gamma and spatial filtering to produce the final image."""

    def __init__(
        self,
        quality: int,
        image_width: int,
        image_height: int,
        view_width: float,
        view_height: float,
        oversampling: int,
        brightness: float,
        spatial_filter: FilterKernel,
    ) -> None:
        self.image_width = image_width
        self.image_height = image_height
        self.oversampling = oversampling
        self.spatial_filter = spatial_filter
        self.log_filter: LogFilter = make_log_filter(
            quality, oversampling, view_width, view_height, brightness
        )

    def process_to_raw(self, histograms: Sequence[Histogram]) -> bytes:
        """Combine the histograms and render them as packed RGB bytes."""
        histogram = self._process_pixels(combine_histograms(histograms))
        raw = bytearray()
        for pixel in histogram.data:
            raw.append(_to_byte(pixel.r))
            raw.append(_to_byte(pixel.g))
            raw.append(_to_byte(pixel.b))
        return bytes(raw)

    def _process_pixels(self, histogram: Histogram) -> Histogram:
        data = [apply_gamma(self.log_filter.apply(pixel)) for pixel in histogram.data]
        return apply_spatial_filter(
            self.spatial_filter,
            Histogram(histogram.width, histogram.height, data),
            self.image_width,
            self.image_height,
            self.oversampling,
        )