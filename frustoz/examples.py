"""Built-in example flames."""

from __future__ import annotations

from typing import Sequence

from frustoz.filters import FilterConfig, FilterType, build_filter
from frustoz.flame import CameraConfig, Flame, RenderConfig
from frustoz.geometry import RealPoint
from frustoz.palette import Palette, palette_from_hex
from frustoz.transforms import Transform, TransformSystem, make_transform
from frustoz.variations import Variation, VariationKind, Variations

_FILTER_RADIUS = 0.75

_S1 = (0.5, 0.0, 0.0, 0.0, 0.5, 0.0)
_S2 = (0.5, 0.0, 0.5, 0.0, 0.5, 0.0)
_S3 = (0.5, 0.0, 0.0, 0.0, 0.5, 0.5)

_B1 = (0.0, 0.0, 0.0, 0.0, 0.16, 0.0)
_B2 = (0.85, 0.04, 0.0, -0.04, 0.85, 1.6)
_B3 = (0.2, -0.26, 0.0, 0.23, 0.22, 1.6)
_B4 = (-0.15, 0.28, 0.0, 0.26, 0.24, 0.44)

_T1 = (
    0.9398083605003169,
    -0.8990128677757641,
    1.3909810148054664,
    0.45393094546052914,
    0.17251724552817665,
    0.8074475159114657,
)
_T2 = (
    0.7353743435248136,
    -0.061067459186581186,
    -1.119570085087326,
    -0.2510551099892795,
    0.8032270759543487,
    -0.2239140170174654,
)

_SPARK_PALETTE = "".join(
    (
        "B9EAEBC1EEEBC5F2EBC9F2EBC9F6EBCDF6EBCDF6EBCDF2EBD1F2EBD2EEEBD1F2E1D6F2EB",
        "DDF6FED5F2F4F2FAF4E2F2EBDEF2EBD6F2EBD6F2F4D1EEF4D1EEF4CDEEF4CDEEEBC9EEEB",
        "C9EEEBC9EEF4C9EEF4C9F2F4CDF2F4D1F2F4D2F2F4D1F6F4CDF2F4C5F2F4BDF2F4BDF2F4",
        "B9EEF4B5F2F4BDF2F4C1F2F4C5F2FEC5F2FEBDF2F4B5F2F4B1F2F4B5EEF4BDEAEBBDEAEB",
        "C1E6EBC1E6EBBDE6E1B5E6E1A5E6E1A5E2E1A1E2EB9DE6EA99DEF4A5E2F4A5E6F4A5E6F4",
        "A9E2F4ADE2EBB1E2EBB1DEEBB1E2EBB1E6F4B1E2F4B1E2F4B1E2F4ADE2F4A9E2F4A1E6FE",
        "9DE6FEA5EAF4ADEAF4B1EEEAB9EEEBC1EEEBC5EEEBC5EEEBC9EEEBC9F2F4C5F2F4C5EEF4",
        "C5EAF4C5EAF4C5EAF4C1E6EBC1E6EBC5EAE1C5E6E2C2E2CFCE9B84B27F71A68455918055",
        "9A8055A27255A2764BB6724BBA7F67D2A484C6E2C6C9EAE1CEEED8DEAB83CE9B7ABE907A",
        "CA977ADBA384E6B796FAE9CEDEEAEBD1EEEBC1E2EBBDDEEBB5DEEBADE2F4A9E2F4A9E2F4",
        "ADE6F4ADEAEBADEAEAADE6EBADE2EBADE2EAB1E6E2B5E6E2BDE6EBC1E6F4C5EAF4C9EAF4",
        "C9EEF4C9EEF4C9EEF4C9EEF4C9EEF4C9F2F4C9F2F4C9F2F4C9F2F4C9F2F4C5EEF4C1EEFE",
        "B1EEFEADE6F4B1E6F4B1EAF4B5EEF4BDEEF4C1F2F4C9F6F4CDF6F4CDF6F4CDF6F4CDF2F4",
        "CDEEF4CDEEFEC9EEFEC5EEFEC1EEF4C1EEF4C1EAF4C1EAEBC1EAEBC1EAEBBDEAF4B9EAF4",
        "B5EAF4B5E6F4B5E6F4B5EAF4BDEAF4C1EAF4C5EAEBC5EAEBC9EAEBC9EAF4CDEAF4CDEEF4",
        "CDEEF4CDEEF4CDF2F4C9F2EBC9F2EBC5F2EBC1EAF4B9E6F4B5E2F4B5E2F4B5E6F4B5E6F4",
        "B9EAEBBDEEEBBDF2EBC1EEEBC5EEEBC5EEEBC5EEE1C1EAE1BDDED8AA9471756842483725",
        "0B0C09242C254C75679E9171B1CEC5BDE2D8BDEAE2C1EEEBBDEEF4BDEEF4BDEEF4B9EAF4",
        "B9EAF4B9E6F4BDE6EBBDE6EBBDEAF4C1EEF4C5F2FEC9F6FEC9F2FEC5EEFEC1EEF4BDEEEB",
        "B9EAEBB1E6EAB5E6EBB5E6EBB9E2EBB5E6EBBDE6EBC1EAEBC1EAF4BDEAF4B9E6F4B5E6F4",
        "B1E6F4B1E6EBA9E2EBA9E2EBA1DEE189BEC59E917A957C678579678D6A4B8D5F42856342",
        "796C5A6C5A425A4A364D5938",
    )
)


def _linear() -> Variations:
    return Variations([Variation(VariationKind.LINEAR, 1.0)])


def _assemble(
    render: RenderConfig,
    camera: CameraConfig,
    filter_type: FilterType,
    transforms: Sequence[Transform],
    palette: Palette,
) -> Flame:
    kernel = build_filter(FilterConfig(filter_type, _FILTER_RADIUS), render.oversampling)
    render.border = max(0, kernel.width - render.oversampling)
    return Flame(
        render=render,
        camera=camera,
        filter=kernel,
        transforms=TransformSystem(transforms),
        palette=palette,
    )


def green_palette() -> Palette:
    """A 256-colour palette running from black to green."""
    return Palette(
        bytes(value for i in range(256) for value in (int(i * 0.75), i, i // 16))
    )


def sierpinsky() -> Flame:
    """The Sierpinski triangle."""
    return _assemble(
        RenderConfig(width=1920, height=1080, quality=800, oversampling=1, brightness=4.0),
        CameraConfig(origin=RealPoint(-0.05, -0.05), scale_x=1.1, scale_y=1.1),
        FilterType.GAUSSIAN,
        [
            make_transform(1.0, 0.5, _S1, _linear()),
            make_transform(1.0, 0.5, _S2, _linear()),
            make_transform(1.0, 0.5, _S3, _linear()),
        ],
        green_palette(),
    )


def barnsley() -> Flame:
    """The Barnsley fern."""
    return _assemble(
        RenderConfig(width=1920, height=1080, quality=400, oversampling=3, brightness=4.0),
        CameraConfig(origin=RealPoint(-6.0, -0.5), scale_x=12.0, scale_y=12.0),
        FilterType.GAUSSIAN,
        [
            make_transform(1.0, 0.7, _B1, _linear()),
            make_transform(24.0, 0.8, _B2, _linear()),
            make_transform(3.0, 0.9, _B3, _linear()),
            make_transform(3.0, 0.9, _B4, _linear()),
        ],
        green_palette(),
    )


def spark() -> Flame:
    """A two-transform flame with a pale blue palette."""
    return _assemble(
        RenderConfig(width=1024, height=1024, quality=1200, oversampling=2, brightness=4.0),
        CameraConfig(origin=RealPoint(-7.1282, -3.0393), scale_x=12.355, scale_y=6.95),
        FilterType.MITCHELL,
        [
            make_transform(1.0, 0.47, _T1, _linear()),
            make_transform(1.0, 0.78, _T2, _linear()),
        ],
        palette_from_hex(256, _SPARK_PALETTE),
    )