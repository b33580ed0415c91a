"""Boundary region managers assigning boundary ids to the faces of a cell."""

from __future__ import annotations

from collections.abc import Sequence

from .sdf import HyperCube


class NoopBoundaryManager:
    """Puts every face in boundary region 0."""

    def find_boundary_region(self, vertices, j) -> int:
        """Always 0."""
        return 0


class HypercubeBoundaryManager:
    """Assigns faces to regions given by hypercubes; later regions take precedence."""

    def __init__(self):
        self._regions: list[HyperCube] = []

    def add_boundary_region(self, boundary_region: HyperCube) -> int:
        """Add a region and return its index, starting at 1; 0 means no region."""
        self._regions.append(boundary_region)
        return len(self._regions)

    def _point_region(self, point) -> int:
        for index in range(len(self._regions), 0, -1):
            if self._regions[index - 1].signed_distance(point) <= 0:
                return index
        return 0

    def find_boundary_region(self, vertices: Sequence, j: int) -> int:
        """The highest region index holding a vertex of the face opposite vertex j."""
        return max(
            (self._point_region(vertex) for i, vertex in enumerate(vertices) if i != j),
            default=0,
        )