"""Mixins that derive normals, distances and samples from a signed distance function."""

from __future__ import annotations

import sys

import numpy as np

_EPS = float(np.sqrt(sys.float_info.epsilon))


class CentralDifferenceNormalMixin:
    """Adds a normal computed by central differences of signed_distance."""

    def normal(self, point) -> np.ndarray:
        """The unit gradient of the signed distance at the point."""
        p = np.asarray(point, dtype=float)
        gradient = np.array(
            [
                self.signed_distance(p + _EPS * unit) - self.signed_distance(p - _EPS * unit)
                for unit in np.eye(len(p))
            ]
        )
        norm = float(np.linalg.norm(gradient))
        return gradient / norm if norm > 0 else gradient


class DistanceMixin:
    """Adds the unsigned distance, the absolute value of signed_distance."""

    def distance(self, point) -> float:
        """The distance of the point from the surface."""
        return abs(self.signed_distance(point))


class SamplingMixin:
    """Adds rejection sampling of interior points inside bounding_box."""

    def sample(self, rng=None) -> np.ndarray:
        """A uniformly random point with negative signed distance.

        rng is a numpy Generator; a fresh one is used when it is omitted.
        """
        generator = np.random.default_rng() if rng is None else rng
        while True:
            unit_point = generator.random(len(self.bounding_box().minimum))
            box = self.bounding_box()
            point = box.minimum + unit_point * box.sizes()
            if self.signed_distance(point) < 0:
                return point