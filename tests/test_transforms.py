import random

import pytest

from frustoz.geometry import RealPoint, TransformMatrix
from frustoz.transforms import Transform, TransformSystem, make_transform
from frustoz.variations import Variation, VariationKind, Variations

IDENTITY = [1.0, 0.0, 0.0, 0.0, 1.0, 0.0]


def linear():
    return Variations([Variation(VariationKind.LINEAR, 1.0)])


def test_make_transform_lays_out_rows():
    t = make_transform(2.0, 0.5, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0], linear())
    assert t.affine == TransformMatrix((1.0, 2.0, 3.0), (4.0, 5.0, 6.0), (0.0, 0.0, 1.0))
    assert t.weight == 2.0
    assert t.color == 0.5


def test_make_transform_requires_six_coefficients():
    with pytest.raises(ValueError):
        make_transform(1.0, 0.5, [1.0, 2.0, 3.0], linear())


def test_identity_transform_keeps_point_and_matching_color():
    t = make_transform(1.0, 0.3, IDENTITY, linear())
    point, color = t.apply(RealPoint(0.25, -0.75), 0.3, random.Random(0))
    assert point == RealPoint(0.25, -0.75)
    assert color == pytest.approx(0.3)


def test_color_moves_towards_transform_color():
    t = make_transform(1.0, 1.0, IDENTITY, linear())
    _, color = t.apply(RealPoint(0.0, 0.0), 0.0, random.Random(0))
    assert 0.0 < color < 1.0


def test_affine_translation_applied():
    t = make_transform(1.0, 0.5, [1.0, 0.0, 2.0, 0.0, 1.0, -1.0], linear())
    point, _ = t.apply(RealPoint(1.0, 1.0), 0.5, random.Random(0))
    assert point == RealPoint(3.0, 0.0)


def test_selection_follows_weights():
    first = make_transform(1.0, 0.1, IDENTITY, linear())
    second = make_transform(3.0, 0.9, IDENTITY, linear())
    system = TransformSystem([first, second])
    assert system.get_transformation(0.0) is first
    assert system.get_transformation(0.24) is first
    assert system.get_transformation(0.26) is second
    assert system.get_transformation(0.999) is second


def test_negative_seed_rejected():
    system = TransformSystem([make_transform(1.0, 0.5, IDENTITY, linear())])
    with pytest.raises(ValueError):
        system.get_transformation(-0.1)


def test_seed_of_one_rejected():
    system = TransformSystem([make_transform(1.0, 0.5, IDENTITY, linear())])
    with pytest.raises(ValueError):
        system.get_transformation(1.0)


def test_repr_and_len():
    system = TransformSystem(
        [make_transform(1.0, 0.5, IDENTITY, linear()), make_transform(1.0, 0.5, IDENTITY, linear())]
    )
    assert repr(system) == "Transform system size [2]"
    assert len(system) == 2
    assert system.total_weight == pytest.approx(2.0)


def test_transform_is_dataclass_with_fields():
    t = Transform(
        affine=TransformMatrix((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
        variations=linear(),
        weight=1.0,
        color=0.5,
    )
    assert t == make_transform(1.0, 0.5, IDENTITY, linear())