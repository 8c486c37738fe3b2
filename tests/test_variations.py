import random

import pytest

from frustoz.geometry import RealPoint, radius
from frustoz.variations import Variation, VariationKind, Variations


class FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize("weight", [0.5, 1.0, 3.0])
def test_linear_scales_by_weight(weight):
    point = RealPoint(1.25, -2.5)
    result = Variation(VariationKind.LINEAR, weight).apply(point, random.Random(0))
    assert result == weight * point


def test_variations_sum_their_parts():
    point = RealPoint(0.3, 0.7)
    rng = random.Random(1)
    blend = Variations(
        [Variation(VariationKind.LINEAR, 1.0), Variation(VariationKind.LINEAR, 2.0)]
    )
    assert blend.apply(point, rng) == pytest.approx(3.0 * point)


def test_empty_variations_map_to_origin():
    assert Variations([]).apply(RealPoint(5.0, 6.0), random.Random(0)) == RealPoint(0.0, 0.0)


def test_sinusoidal_fixes_origin():
    result = Variation(VariationKind.SINUSOIDAL, 2.0).apply(RealPoint(0.0, 0.0), random.Random(0))
    assert result == RealPoint(0.0, 0.0)


def test_spherical_keeps_unit_circle():
    result = Variation(VariationKind.SPHERICAL, 1.0).apply(RealPoint(0.0, 1.0), random.Random(0))
    assert result.x == pytest.approx(0.0)
    assert result.y == pytest.approx(1.0)


@pytest.mark.parametrize("kind", list(VariationKind))
def test_weight_is_linear_for_every_kind(kind):
    point = RealPoint(0.4, -0.3)
    single = Variation(kind, 1.0, power=2.0, dist=1.0).apply(point, FixedRng(0.25))
    double = Variation(kind, 2.0, power=2.0, dist=1.0).apply(point, FixedRng(0.25))
    assert double.x == pytest.approx(2.0 * single.x)
    assert double.y == pytest.approx(2.0 * single.y)


def test_julia_random_bit_mirrors_point():
    point = RealPoint(0.6, 0.2)
    julia = Variation(VariationKind.JULIA, 1.0)
    low = julia.apply(point, FixedRng(0.1))
    high = julia.apply(point, FixedRng(0.9))
    assert high.x == pytest.approx(-low.x)
    assert high.y == pytest.approx(-low.y)


def test_julia_n_with_dist_equal_power_keeps_scaled_radius():
    point = RealPoint(0.3, -0.4)
    variation = Variation(VariationKind.JULIA_N, 2.0, power=3.0, dist=3.0)
    rng = random.Random(42)
    for _ in range(5):
        result = variation.apply(point, rng)
        assert radius(result.x, result.y) == pytest.approx(2.0 * radius(point.x, point.y))


def test_julia_n_rejects_zero_power():
    variation = Variation(VariationKind.JULIA_N, 1.0, power=0.0, dist=1.0)
    with pytest.raises(ValueError):
        variation.apply(RealPoint(1.0, 1.0), random.Random(0))