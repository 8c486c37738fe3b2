"""Non-linear variation functions applied after the affine step."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from frustoz.geometry import EPSILON, RealPoint, rad2, radius, sum_points, theta


class VariationKind(enum.Enum):
    LINEAR = "linear"
    SINUSOIDAL = "sinusoidal"
    SPHERICAL = "spherical"
    SWIRL = "swirl"
    HORSESHOE = "horseshoe"
    POLAR = "polar"
    HANDKERCHIEF = "handkerchief"
    HEART = "heart"
    DISC = "disc"
    SPIRAL = "spiral"
    HYPERBOLIC = "hyperbolic"
    DIAMOND = "diamond"
    JULIA = "julia"
    JULIA_N = "julian"


def _powf(base: float, exponent: float) -> float:
    try:
        return base**exponent
    except (ZeroDivisionError, OverflowError):
        return math.inf


def _linear(p: RealPoint, w: float) -> RealPoint:
    return RealPoint(w * p.x, w * p.y)


def _sinusoidal(p: RealPoint, w: float) -> RealPoint:
    return RealPoint(w * math.sin(p.x), w * math.sin(p.y))


def _spherical(p: RealPoint, w: float) -> RealPoint:
    r2 = 1.0 / (rad2(p.x, p.y) + EPSILON)
    return RealPoint(w * r2 * p.x, w * r2 * p.y)


def _swirl(p: RealPoint, w: float) -> RealPoint:
    r2 = rad2(p.x, p.y)
    c1, c2 = math.sin(r2), math.cos(r2)
    return RealPoint(w * (c1 * p.x - c2 * p.y), w * (c2 * p.x - c1 * p.y))


def _horseshoe(p: RealPoint, w: float) -> RealPoint:
    inv_r = 1.0 / (radius(p.x, p.y) + EPSILON)
    return RealPoint(w * (p.x - p.y) * (p.x + p.y) * inv_r, w * 2.0 * p.x * p.y * inv_r)


def _polar(p: RealPoint, w: float) -> RealPoint:
    r = radius(p.x, p.y)
    a = theta(p.x, p.y)
    return RealPoint(w * a / math.pi, w * (r - 1.0))


def _handkerchief(p: RealPoint, w: float) -> RealPoint:
    r = radius(p.x, p.y)
    t = theta(p.x, p.y)
    return RealPoint(w * r * math.sin(t + r), w * r * math.cos(t - r))


def _heart(p: RealPoint, w: float) -> RealPoint:
    r = radius(p.x, p.y)
    a = r * theta(p.x, p.y)
    return RealPoint(w * r * math.sin(a), -w * r * math.cos(a))


def _disc(p: RealPoint, w: float) -> RealPoint:
    a = theta(p.x * math.pi, p.y * math.pi) / math.pi
    r = math.pi * radius(p.x, p.y)
    return RealPoint(w * math.sin(r) * a, w * math.cos(r) * a)


def _spiral(p: RealPoint, w: float) -> RealPoint:
    r = radius(p.x, p.y) + EPSILON
    t = theta(p.x, p.y)
    return RealPoint(
        w / r * (math.cos(t) + math.sin(r)),
        w / r * (math.sin(t) - math.cos(r)),
    )


def _hyperbolic(p: RealPoint, w: float) -> RealPoint:
    r = radius(p.x, p.y) + EPSILON
    a = theta(p.x, p.y)
    return RealPoint(w * math.sin(a) / r, w * math.cos(a) * r)


def _diamond(p: RealPoint, w: float) -> RealPoint:
    r = radius(p.x, p.y)
    a = theta(p.x, p.y)
    return RealPoint(w * math.sin(a) * math.cos(r), w * math.cos(a) * math.sin(r))


def _julia(p: RealPoint, w: float, random_bit: bool) -> RealPoint:
    a = theta(p.x, p.y) / 2.0
    if random_bit:
        a += math.pi
    r = w * _powf(rad2(p.x, p.y), 0.25)
    return RealPoint(r * math.cos(a), r * math.sin(a))


def _julia_n(
    p: RealPoint, w: float, power: float, dist: float, rng: random.Random
) -> RealPoint:
    if power == 0.0:
        raise ValueError("julian power must not be zero")
    r_n = abs(power)
    cn = dist / power / 2.0
    a = theta(p.x, p.y) + 2.0 * math.pi * (rng.random() * r_n) / power
    r = w * _powf(p.x * p.x + p.y * p.y, cn)
    return RealPoint(r * math.cos(a), r * math.sin(a))


_SIMPLE: Dict[VariationKind, Callable[[RealPoint, float], RealPoint]] = {
    VariationKind.LINEAR: _linear,
    VariationKind.SINUSOIDAL: _sinusoidal,
    VariationKind.SPHERICAL: _spherical,
    VariationKind.SWIRL: _swirl,
    VariationKind.HORSESHOE: _horseshoe,
    VariationKind.POLAR: _polar,
    VariationKind.HANDKERCHIEF: _handkerchief,
    VariationKind.HEART: _heart,
    VariationKind.DISC: _disc,
    VariationKind.SPIRAL: _spiral,
    VariationKind.HYPERBOLIC: _hyperbolic,
    VariationKind.DIAMOND: _diamond,
}


@dataclass(frozen=True)
class Variation:
    """One weighted variation; power and dist are used only by JULIA_N."""

    kind: VariationKind
    weight: float = 1.0
    power: float = 1.0
    dist: float = 1.0

    def apply(self, point: RealPoint, rng: random.Random) -> RealPoint:
        if self.kind is VariationKind.JULIA:
            return _julia(point, self.weight, rng.random() < 0.5)
        if self.kind is VariationKind.JULIA_N:
            return _julia_n(point, self.weight, self.power, self.dist, rng)
        return _SIMPLE[self.kind](point, self.weight)


@dataclass(frozen=True)
class Variations:
    """A blend of variations whose results are summed."""

    variations: List[Variation] = field(default_factory=list)

    def apply(self, point: RealPoint, rng: random.Random) -> RealPoint:
        return sum_points(v.apply(point, rng) for v in self.variations)