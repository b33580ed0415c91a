"""Radius schemes: functions giving the target element radius at a point."""

from __future__ import annotations

from collections.abc import Callable


def _linear(dist: float) -> float:
    return dist


class Constant:
    """The same radius everywhere."""

    def __init__(self, value):
        self.value = float(value)

    def __call__(self, vec) -> float:
        return self.value


class BoundaryDistanceRadius:
    """The mapped signed distance to a boundary.

    signed_distance is any object with a signed_distance(point) method.
    """

    def __init__(self, signed_distance, mapper: Callable[[float], float] | None = None):
        self.signed_distance = signed_distance
        self.mapper = _linear if mapper is None else mapper

    def __call__(self, vec) -> float:
        return self.mapper(self.signed_distance.signed_distance(vec))


class LFSRadius:
    """The mapped distance to the thinned structure, an estimate of the local feature size.

    reader is any object with a distance_to_thinned_at(point) method.
    """

    def __init__(self, reader, mapper: Callable[[float], float] | None = None):
        self.reader = reader
        self.mapper = _linear if mapper is None else mapper

    def __call__(self, vec) -> float:
        return self.mapper(self.reader.distance_to_thinned_at(vec))