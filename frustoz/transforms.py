"""Affine transforms with variations, and weighted selection among them."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from frustoz.geometry import ProjectivePoint, RealPoint, TransformMatrix
from frustoz.variations import Variations


@dataclass(frozen=True)
class Transform:
    """One function of the iterated function system."""

    affine: TransformMatrix
    variations: Variations
    weight: float
    color: float

    def apply(
        self, point: RealPoint, color: float, rng: random.Random
    ) -> Tuple[RealPoint, float]:
        """Map a point and blend its colour towards this transform's colour."""
        affine_result = self.affine.apply(ProjectivePoint.from_real(point)).to_real()
        result = self.variations.apply(affine_result, rng)
        return result, (color + self.color) / 2.0


class TransformSystem:
    """A set of transforms chosen at random in proportion to their weights."""

    def __init__(self, transforms: Sequence[Transform]) -> None:
        self.transforms: List[Transform] = list(transforms)
        self.total_weight: float = sum(t.weight for t in self.transforms)

    def __len__(self) -> int:
        return len(self.transforms)

    def __repr__(self) -> str:
        return f"Transform system size [{len(self.transforms)}]"

    def get_transformation(self, seed: float) -> Transform:
        """Pick the transform for a seed in [0, 1)."""
        if not seed >= 0.0:
            raise ValueError("seed should be in [0, 1) range")
        scaled_seed = seed * self.total_weight
        accumulated = 0.0
        for transform in self.transforms:
            accumulated += transform.weight
            if accumulated > scaled_seed:
                return transform
        raise ValueError("seed is greater than 1 or transformation is incorrect")


def make_transform(
    weight: float, color: float, coefs: Sequence[float], variations: Variations
) -> Transform:
    """Build a transform from six affine coefficients given row by row."""
    if len(coefs) != 6:
        raise ValueError(f"expected 6 affine coefficients, got {len(coefs)}")
    a, b, c, d, e, f = coefs
    affine = TransformMatrix((a, b, c), (d, e, f), (0.0, 0.0, 1.0))
    return Transform(affine=affine, variations=variations, weight=weight, color=color)