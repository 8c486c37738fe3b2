"""Reading flames from XML flame files."""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, TypeVar, Union

from frustoz.filters import FilterConfig, FilterKernel, FilterType, build_filter
from frustoz.flame import CameraConfig, Flame, RenderConfig
from frustoz.geometry import RealPoint
from frustoz.palette import Palette, palette_from_hex
from frustoz.transforms import Transform, TransformSystem, make_transform
from frustoz.variations import Variation, VariationKind, Variations

log = logging.getLogger(__name__)

T = TypeVar("T")
Attributes = Mapping[str, str]

DEFAULT_SIZE = "1920 1080"
DEFAULT_CENTER = "0.0 0.0"
DEFAULT_COEFS = "1.0 0.0 0.0 1.0 0.0 0.0"
_U32_MAX = 2**32 - 1

_FILTER_TYPES: Dict[str, FilterType] = {
    "HERMITE": FilterType.HERMITE,
    "BOX": FilterType.BOX,
    "TRIANGLE": FilterType.TRIANGLE,
    "BELL": FilterType.BELL,
    "B_SPLINE": FilterType.B_SPLINE,
    "MITCHELL": FilterType.MITCHELL,
    "MITCHELL_SINEPOW": FilterType.MITCHELL,
    "BLACKMAN": FilterType.BLACKMAN,
    "GAUSSIAN": FilterType.GAUSSIAN,
}

_SIMPLE_VARIATIONS: Dict[str, VariationKind] = {
    "linear": VariationKind.LINEAR,
    "linear3D": VariationKind.LINEAR,
    "sinusoidal": VariationKind.SINUSOIDAL,
    "spherical": VariationKind.SPHERICAL,
    "swirl": VariationKind.SWIRL,
    "horseshoe": VariationKind.HORSESHOE,
    "polar": VariationKind.POLAR,
    "handkerchief": VariationKind.HANDKERCHIEF,
    "heart": VariationKind.HEART,
    "disc": VariationKind.DISC,
    "spiral": VariationKind.SPIRAL,
    "hyperbolic": VariationKind.HYPERBOLIC,
    "diamond": VariationKind.DIAMOND,
    "julia": VariationKind.JULIA,
}


def _uint(text: str) -> int:
    value = int(text)
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{text!r} is not an unsigned 32-bit integer")
    return value


def _as_u32(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return max(0, int(value))


def _convert(name: str, text: str, convert: Callable[[str], T]) -> T:
    try:
        return convert(text)
    except ValueError as exc:
        raise ValueError(f"invalid value {text!r} for attribute {name!r}") from exc


def _extract(
    name: str, default: T, attributes: Attributes, convert: Callable[[str], T]
) -> T:
    text = attributes.get(name)
    if text is None:
        return default
    return _convert(name, text, convert)


def _extract_all(
    name: str, default: str, attributes: Attributes, convert: Callable[[str], T]
) -> List[T]:
    text = attributes.get(name, default)
    return [_convert(name, part, convert) for part in text.split(" ")]


def _local_name(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _local_attributes(attributes: Mapping[str, str]) -> Dict[str, str]:
    return {_local_name(name): value for name, value in attributes.items()}


def extract_render_config(attributes: Attributes) -> RenderConfig:
    """Image size and rendering parameters from flame attributes."""
    dimensions = _extract_all("size", DEFAULT_SIZE, attributes, _uint)
    if len(dimensions) < 2:
        raise ValueError("attribute 'size' needs a width and a height")
    width, height = dimensions[0], dimensions[1]
    return RenderConfig(
        width=width,
        height=height,
        quality=_as_u32(_extract("quality", 100.0, attributes, float)),
        oversampling=_extract("oversample", 2, attributes, _uint),
        brightness=_extract("brightness", 4.0, attributes, float),
        border=0,
    )


def extract_camera_config(
    attributes: Attributes, image_width: float, image_height: float
) -> CameraConfig:
    """The viewed region from the flame's scale and centre attributes."""
    pixels_per_unit = _extract("scale", 100.0, attributes, float)
    scale_x = image_width / pixels_per_unit
    scale_y = image_height / pixels_per_unit
    center = _extract_all("center", DEFAULT_CENTER, attributes, float)
    if len(center) < 2:
        raise ValueError("attribute 'center' needs two coordinates")
    origin = RealPoint(center[0] - scale_x / 2.0, center[1] - scale_y / 2.0)
    return CameraConfig(origin=origin, scale_x=scale_x, scale_y=scale_y)


def extract_palette(attributes: Attributes, body: str) -> Palette:
    """A palette from the hexadecimal body of a palette element."""
    content = "".join(line.strip() for line in body.splitlines())
    size = _extract("count", len(content) // 6, attributes, _uint)
    return palette_from_hex(size, content)


def _weight(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 1.0


def _try_variation(name: str, value: str, attributes: Attributes) -> Optional[Variation]:
    base = name.split("#", 1)[0]
    if base == "julian":
        weight = _weight(value)
        power = _extract("julian_power", 1.0, attributes, float)
        dist = _extract("julian_dist", 1.0, attributes, float)
        log.info("weight: %s, power: %s, dist: %s", weight, power, dist)
        return Variation(VariationKind.JULIA_N, weight, power, dist)
    kind = _SIMPLE_VARIATIONS.get(base)
    if kind is None:
        return None
    return Variation(kind, _weight(value))


def _extract_variations(attributes: Attributes) -> Variations:
    found = [
        variation
        for name, value in attributes.items()
        if (variation := _try_variation(name, value, attributes)) is not None
    ]
    if not found:
        log.warning("No transformation type found, assuming linear: %r", dict(attributes))
        found = [Variation(VariationKind.LINEAR, 1.0)]
    return Variations(found)


def extract_transform(attributes: Attributes) -> Transform:
    """A transform from the attributes of an xform element."""
    weight = _extract("weight", 1.0, attributes, float)
    color = _extract("color", 1.0, attributes, float)
    coefs = _extract_all("coefs", DEFAULT_COEFS, attributes, float)
    if len(coefs) != 6:
        raise ValueError(f"attribute 'coefs' needs 6 values, got {len(coefs)}")
    a, d, b, e, c, f = coefs
    return make_transform(weight, color, [a, b, c, d, e, f], _extract_variations(attributes))


@dataclass
class _FlameBuilder:
    render: RenderConfig
    camera: CameraConfig
    kernel: FilterKernel
    transforms: List[Transform] = field(default_factory=list)
    palette: Optional[Palette] = None

    @classmethod
    def start(cls, attributes: Attributes) -> _FlameBuilder:
        render = extract_render_config(attributes)
        camera = extract_camera_config(attributes, float(render.width), float(render.height))
        radius = _extract("filter", 0.75, attributes, float)
        kernel_name = attributes.get("filter_kernel")
        filter_type = _FILTER_TYPES.get(
            kernel_name.upper() if kernel_name is not None else "", FilterType.GAUSSIAN
        )
        kernel = build_filter(FilterConfig(filter_type, radius), render.oversampling)
        render.border = max(0, kernel.width - render.oversampling)
        return cls(render=render, camera=camera, kernel=kernel)

    def build(self) -> Flame:
        palette = self.palette if self.palette is not None else palette_from_hex(2, "000000FFFFFF")
        flame = Flame(
            render=self.render,
            camera=self.camera,
            filter=self.kernel,
            transforms=TransformSystem(self.transforms),
            palette=palette,
        )
        log.debug("%r", flame)
        return flame


def _parse(data: Union[str, bytes]) -> List[Flame]:
    parser = ET.XMLPullParser(events=("start", "end"))
    parser.feed(data)
    try:
        parser.close()
    except ET.ParseError:
        pass

    flames: List[Flame] = []
    current: Optional[_FlameBuilder] = None
    try:
        for event, element in parser.read_events():
            name = _local_name(element.tag)
            is_flame = name.lower() == "flame"
            if current is None:
                if event == "start" and is_flame:
                    current = _FlameBuilder.start(_local_attributes(element.attrib))
                continue
            if event == "start" and name == "xform":
                current.transforms.append(
                    extract_transform(_local_attributes(element.attrib))
                )
            elif event == "end" and name == "palette":
                if element.text and element.text.strip():
                    current.palette = extract_palette(
                        _local_attributes(element.attrib), element.text
                    )
            elif event == "end" and is_flame:
                flames.append(current.build())
                current = None
    except ET.ParseError as exc:
        log.debug("Stopped reading at malformed XML: %s", exc)
    if current is not None:
        flames.append(current.build())
    return flames


def parse_string(text: str) -> List[Flame]:
    """All flames in an XML document given as text."""
    return _parse(text)


def parse_file(path: Union[str, Path]) -> List[Flame]:
    """All flames in an XML flame file."""
    return _parse(Path(path).read_bytes())