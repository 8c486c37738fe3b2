"""Flame model configuration and the objects built from it."""

from __future__ import annotations

from dataclasses import dataclass

from frustoz.filters import FilterKernel
from frustoz.geometry import RealPoint
from frustoz.histogram import Camera, Histogram, create_histogram
from frustoz.palette import Palette
from frustoz.processor import HistogramProcessor
from frustoz.transforms import TransformSystem


@dataclass(frozen=True)
class CameraConfig:
    """The viewed region: lower-left corner and size on the real plane."""

    origin: RealPoint
    scale_x: float
    scale_y: float


@dataclass
class RenderConfig:
    """Output image size and rendering parameters."""

    width: int
    height: int
    quality: int
    oversampling: int
    brightness: float
    border: int = 0


@dataclass
class Flame:
    """Everything needed to render one fractal flame."""

    render: RenderConfig
    camera: CameraConfig
    filter: FilterKernel
    transforms: TransformSystem
    palette: Palette


def make_camera(config: CameraConfig) -> Camera:
    """The camera described by a camera configuration."""
    return Camera(config.origin, config.scale_x, config.scale_y)


def make_histogram(config: RenderConfig, filter_width: int) -> Histogram:
    """An empty histogram for a render configuration and filter width."""
    return create_histogram(config.width, config.height, config.oversampling, filter_width)


def iterations(config: RenderConfig) -> int:
    """Total chaos-game iterations for a render: pixels times quality."""
    return config.width * config.height * config.quality


def make_histogram_processor(flame: Flame) -> HistogramProcessor:
    """The processor that turns this flame's histograms into an image."""
    render = flame.render
    return HistogramProcessor(
        quality=render.quality,
        image_width=render.width,
        image_height=render.height,
        view_width=flame.camera.scale_x,
        view_height=flame.camera.scale_y,
        oversampling=render.oversampling,
        brightness=render.brightness,
        spatial_filter=flame.filter,
    )