"""Signed distance functions for hyperspheres, hypercubes and cylinders."""

from __future__ import annotations

import math

import numpy as np

from .sdf_mixins import CentralDifferenceNormalMixin, DistanceMixin, SamplingMixin
from .utility import AlignedBox

_APPROX_PRECISION = 1e-12


def _vector(values) -> np.ndarray:
    vec = np.array(values, dtype=float)
    if vec.ndim != 1:
        raise ValueError("expected a vector")
    return vec


def _is_approx(a: np.ndarray, b: np.ndarray) -> bool:
    return float(np.linalg.norm(a - b)) <= _APPROX_PRECISION * min(
        float(np.linalg.norm(a)), float(np.linalg.norm(b))
    )


def _normalized(vec: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vec))
    return vec / norm if norm > 0 else vec


class HyperSphere(DistanceMixin, SamplingMixin):
    """A sphere of any dimension, negative inside."""

    def __init__(self, radius, center):
        self.radius = float(radius)
        self.center = _vector(center)

    def scale(self, factor) -> None:
        """Multiply the radius by factor."""
        self.radius *= float(factor)

    def signed_distance(self, point) -> float:
        """Distance from the surface, negative inside."""
        return float(np.linalg.norm(np.asarray(point, dtype=float) - self.center)) - self.radius

    def normal(self, point) -> np.ndarray:
        """The outward unit normal through the point; the first axis at the center."""
        p = np.asarray(point, dtype=float)
        if _is_approx(self.center, p):
            unit = np.zeros_like(self.center)
            unit[0] = 1.0
            return unit
        return _normalized(p - self.center)

    def bounding_box(self) -> AlignedBox:
        """The smallest axis-aligned box around the sphere."""
        return AlignedBox(self.center - self.radius, self.center + self.radius)

    def __eq__(self, other):
        if not isinstance(other, HyperSphere):
            return NotImplemented
        return self.radius == other.radius and bool(np.array_equal(self.center, other.center))

    __hash__ = None

    def __repr__(self):
        return f"HyperSphere({self.radius}, {self.center.tolist()})"


class HyperCube(CentralDifferenceNormalMixin, DistanceMixin, SamplingMixin):
    """An axis-aligned box as a signed distance function, negative inside."""

    def __init__(self, minimum, maximum):
        self.minimum = _vector(minimum)
        self.maximum = _vector(maximum)
        if self.minimum.shape != self.maximum.shape:
            raise ValueError("corners must have the same dimension")

    def signed_distance(self, point) -> float:
        """Distance from the box surface, negative inside."""
        p = np.asarray(point, dtype=float) - (self.minimum + self.maximum) / 2
        half_extent = (self.maximum - self.minimum) / 2
        q = np.abs(p) - half_extent
        return float(np.linalg.norm(np.maximum(q, 0.0))) + min(float(q.max()), 0.0)

    def bounding_box(self) -> AlignedBox:
        """The box itself."""
        return AlignedBox(self.minimum, self.maximum)

    def __repr__(self):
        return f"HyperCube({self.minimum.tolist()}, {self.maximum.tolist()})"


class CylinderSDF(DistanceMixin, SamplingMixin):
    """A capped cylinder in 3D around the segment from origin to origin + direction."""

    def __init__(self, radius, origin, direction):
        self.radius = float(radius)
        self.origin = _vector(origin)
        self.direction = _vector(direction)
        if self.origin.shape != (3,) or self.direction.shape != (3,):
            raise ValueError("cylinder axis must be three-dimensional")

    def signed_distance(self, point) -> float:
        """Distance from the cylinder surface, negative inside."""
        ba = self.direction
        pa = np.asarray(point, dtype=float) - self.origin
        baba = float(ba @ ba)
        paba = float(ba @ pa)
        x = float(np.linalg.norm(pa * baba - ba * paba)) - self.radius * baba
        y = abs(paba - baba * 0.5) - baba * 0.5
        x2 = x * x
        y2 = y * y * baba
        if max(x, y) <= 0.0:
            d = -min(x2, y2)
        else:
            d = (x2 if x > 0.0 else 0.0) + (y2 if y > 0.0 else 0.0)
        return (1.0 if d > 0.0 else -1.0) * math.sqrt(abs(d)) / baba

    def normal(self, point) -> np.ndarray:
        """The outward unit normal of the side or cap nearest the point."""
        ba = self.direction
        pa = np.asarray(point, dtype=float) - self.origin
        baba = float(ba @ ba)
        paba = float(ba @ pa)
        v = pa - (paba / baba) * ba
        x = math.sqrt(baba) * (float(np.linalg.norm(v)) - self.radius)
        y = abs(paba - baba * 0.5) - baba * 0.5
        if x >= y:
            return _normalized(v)
        sign = 1.0 if paba > baba * 0.5 else -1.0
        return sign * _normalized(ba)

    def bounding_box(self) -> AlignedBox:
        """An axis-aligned box containing the cylinder."""
        end = self.origin + self.direction
        low = np.minimum(self.origin, end)
        high = np.maximum(self.origin, end)
        axis = _normalized(self.direction)
        extent = np.array(
            [abs(np.cross(np.cross(unit, axis), axis)[i]) for i, unit in enumerate(np.eye(3))]
        )
        return AlignedBox(low - self.radius * extent, high + self.radius * extent)