"""Geometric helpers: axis-aligned boxes, box corners, null spaces and vector hashing."""

from __future__ import annotations

import numpy as np

_MASK64 = (1 << 64) - 1
_GOLDEN = 0x9E3779B9


class AlignedBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum, maximum):
        self.minimum = np.array(minimum, dtype=float)
        self.maximum = np.array(maximum, dtype=float)
        if self.minimum.ndim != 1 or self.minimum.shape != self.maximum.shape:
            raise ValueError("box corners must be vectors of equal length")

    def sizes(self) -> np.ndarray:
        """Edge lengths of the box along every axis."""
        return self.maximum - self.minimum

    def contains(self, point) -> bool:
        """Whether the point lies inside the box, boundary included."""
        p = np.asarray(point, dtype=float)
        return bool(np.all(self.minimum <= p) and np.all(p <= self.maximum))

    def extend(self, point) -> AlignedBox:
        """Grow the box in place so that it contains the point."""
        p = np.asarray(point, dtype=float)
        np.minimum(self.minimum, p, out=self.minimum)
        np.maximum(self.maximum, p, out=self.maximum)
        return self

    def __eq__(self, other):
        if not isinstance(other, AlignedBox):
            return NotImplemented
        return bool(
            np.array_equal(self.minimum, other.minimum) and np.array_equal(self.maximum, other.maximum)
        )

    __hash__ = None

    def __repr__(self):
        return f"AlignedBox({self.minimum.tolist()}, {self.maximum.tolist()})"


def all_corners(box: AlignedBox) -> list[np.ndarray]:
    """All 2**D corners of the box; bit j of the corner index selects the maximum on axis j."""
    dim = len(box.minimum)
    return [
        np.where([(i >> j) & 1 for j in range(dim)], box.maximum, box.minimum)
        for i in range(1 << dim)
    ]


def kernel(matrix) -> np.ndarray:
    """An orthonormal basis of the orthogonal complement of the columns of a D x N matrix."""
    m = np.asarray(matrix, dtype=float)
    if m.ndim != 2:
        raise ValueError("kernel needs a two-dimensional matrix")
    u, _, _ = np.linalg.svd(m, full_matrices=True)
    return u[:, m.shape[1]:]


def matrix_hash(matrix) -> int:
    """A 64-bit hash of a matrix, combining its elements in column-major order."""
    acc = 0
    for elem in np.asarray(matrix, dtype=float).ravel(order="F"):
        h = hash(float(elem)) & _MASK64
        acc ^= (h + _GOLDEN + (acc << 6) + (acc >> 2)) & _MASK64
    return acc