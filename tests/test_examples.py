import math

import pytest

from frustoz.examples import barnsley, green_palette, sierpinsky, spark
from frustoz.geometry import RealPoint
from frustoz.palette import RGB
from frustoz.variations import VariationKind


def test_green_palette_has_256_colours_starting_black():
    palette = green_palette()
    assert len(palette) == 256
    assert palette.get_color(0.0) == RGB(0.0, 0.0, 0.0)


def test_green_palette_green_channel_is_index():
    palette = green_palette()
    for i, colour in enumerate(palette.colors):
        assert colour.g == i / 256.0
        assert colour.r <= colour.g


def test_green_palette_blue_channel():
    palette = green_palette()
    assert palette.colors[255].b == 15 / 256.0


def test_spark_palette_first_colour():
    flame = spark()
    assert len(flame.palette) == 256
    assert flame.palette.get_color(0.0) == RGB(185.0 / 256.0, 234.0 / 256.0, 235.0 / 256.0)


@pytest.mark.parametrize(
    "factory, count", [(sierpinsky, 3), (barnsley, 4), (spark, 2)]
)
def test_transform_counts(factory, count):
    assert len(factory().transforms) == count


def test_border_matches_filter():
    for flame in (sierpinsky(), barnsley(), spark()):
        assert flame.render.border == max(0, flame.filter.width - flame.render.oversampling)


def test_filter_widths():
    assert sierpinsky().filter.width == 3
    assert barnsley().filter.width == 7
    assert spark().filter.width == 7


def test_filter_is_normalised_square():
    for flame in (sierpinsky(), barnsley(), spark()):
        kernel = flame.filter
        assert len(kernel.coefficients) == kernel.width * kernel.width
        assert math.isclose(sum(kernel.coefficients), 1.0)


def test_sierpinsky_config():
    flame = sierpinsky()
    assert (flame.render.width, flame.render.height) == (1920, 1080)
    assert flame.render.quality == 800
    assert flame.render.oversampling == 1
    assert flame.camera.origin == RealPoint(-0.05, -0.05)
    assert flame.camera.scale_x == 1.1


def test_barnsley_weights_and_variations():
    flame = barnsley()
    weights = [t.weight for t in flame.transforms.transforms]
    assert weights == [1.0, 24.0, 3.0, 3.0]
    for transform in flame.transforms.transforms:
        assert [v.kind for v in transform.variations.variations] == [VariationKind.LINEAR]


def test_spark_config():
    flame = spark()
    assert flame.render.oversampling == 2
    assert flame.camera.origin == RealPoint(-7.1282, -3.0393)
    assert flame.transforms.transforms[0].color == 0.47
    assert flame.transforms.transforms[1].color == 0.78


def test_examples_are_independent():
    first = sierpinsky()
    second = sierpinsky()
    first.render.width = 10
    assert second.render.width == 1920