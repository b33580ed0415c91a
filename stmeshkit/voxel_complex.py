"""Voxel complexes and their topology-preserving parallel thinning."""

from __future__ import annotations

import functools
import itertools
from collections.abc import Iterator

import numpy as np

from .bitset import Bitset
from .rle_bitset import RleBitset

_REMOVED = 0xFF
_UPPER_BITS = 1 << 4


def _pos(offsets: tuple[int, ...]) -> int:
    return sum((v + 1) * 3**i for i, v in enumerate(offsets))


def _set_mask(offsets: tuple[int, ...]) -> int:
    return sum(1 << (2 * i) for i, v in enumerate(offsets) if v != 0)


def _dim(offsets: tuple[int, ...]) -> int:
    return sum(1 for v in offsets if v == 0)


@functools.lru_cache(maxsize=None)
def _subfaces(offsets: tuple[int, ...]) -> tuple[tuple[tuple[int, ...], ...], ...]:
    """Proper subfaces of a face, grouped by dimension and ordered by position."""
    choices = [(v,) if v != 0 else (-1, 0, 1) for v in offsets]
    groups: list[list[tuple[int, ...]]] = [[] for _ in range(len(offsets) + 1)]
    for sub in itertools.product(*choices):
        if sub != offsets:
            groups[_dim(sub)].append(sub)
    return tuple(tuple(sorted(group, key=_pos)) for group in groups)


def _with(offsets: tuple[int, ...], i: int, value: int) -> tuple[int, ...]:
    return offsets[:i] + (value,) + offsets[i + 1:]


class Face:
    """A face of a voxel, given by an offset of -1, 0 or 1 along every axis.

    A zero offset means the face spans the voxel along that axis.
    """

    def __init__(self, dims: int):
        if dims < 1:
            raise ValueError("a face needs at least one dimension")
        self._offsets = [0] * dims

    @property
    def offsets(self) -> tuple[int, ...]:
        return tuple(self._offsets)

    @property
    def pos(self) -> int:
        """The index of the face among all 3**D faces of a voxel."""
        return _pos(self.offsets)

    def set_pos(self, i: int, value: int) -> None:
        """Set the offset along axis i."""
        if value not in (-1, 0, 1):
            raise ValueError("face offsets must be -1, 0 or 1")
        self._offsets[i] = value

    def get_pos(self, i: int) -> int:
        """The offset along axis i."""
        return self._offsets[i]

    def get_set(self) -> int:
        """A mask with bit 2*i set for every axis i with a nonzero offset."""
        return _set_mask(self.offsets)

    def get_unset(self) -> int:
        """A mask with bit 2*i set for every axis i with a zero offset."""
        return sum(1 << (2 * i) for i, v in enumerate(self._offsets) if v == 0)

    def get_dim(self) -> int:
        """The dimension of the face."""
        return _dim(self.offsets)

    def __repr__(self):
        return f"Face({self._offsets})"


def _offsets_of(face) -> tuple[int, ...]:
    return face.offsets if isinstance(face, Face) else tuple(face)


class VoxelComplex:
    """A D-dimensional binary voxel image that can be thinned while keeping its topology.

    Nested data is indexed data[...][y][x], so the innermost level is the first axis.
    """

    def __init__(self, data):
        array = np.asarray(data, dtype=bool)
        if array.ndim < 1:
            raise ValueError("voxel data needs at least one dimension")
        self._init_dims(tuple(reversed(array.shape)))
        self._table.set_from(array.ravel().tolist())

    @classmethod
    def from_dims(cls, dims) -> VoxelComplex:
        """An empty complex of the given extents."""
        complex_ = cls.__new__(cls)
        complex_._init_dims(tuple(int(d) for d in dims))
        return complex_

    def _init_dims(self, dims: tuple[int, ...]) -> None:
        if not dims:
            raise ValueError("voxel data needs at least one dimension")
        self._dims = dims
        self._d = len(dims)
        size = 1
        self._projection = []
        for d in dims:
            self._projection.append(size)
            size *= d
        self._table = RleBitset(size)
        self._fixed = Bitset(size)
        self._center = (0,) * self._d

    @property
    def dims(self) -> tuple[int, ...]:
        return self._dims

    def index(self, coords) -> int:
        """The flat index of a voxel."""
        coords = tuple(coords)
        if len(coords) != self._d:
            raise ValueError(f"expected {self._d} coordinates")
        return sum(c * p for c, p in zip(coords, self._projection))

    def offset_by_face(self, idx: int, face) -> int:
        """The flat index of the neighbor sharing the given face."""
        return idx + sum(v * p for v, p in zip(_offsets_of(face), self._projection))

    def __getitem__(self, coords) -> bool:
        return self._table[self.index(coords)]

    @staticmethod
    def _bit(bits: Bitset, idx: int) -> bool:
        return 0 <= idx < len(bits) and bits[idx]

    def core(self, idx: int) -> list[int]:
        """Per face of the voxel, the number of axes along which set neighbors sharing it lie."""
        result = [0] * 3**self._d
        for group in _subfaces(self._center)[: self._d]:
            for face in group:
                if self._bit(self._table, self.offset_by_face(idx, face)):
                    mask = _set_mask(face)
                    result[_pos(face)] |= mask
                    for subgroup in _subfaces(face):
                        for sub in subgroup:
                            result[_pos(sub)] |= mask
        return [bin(v).count("1") for v in result]

    def _essential(self, face: tuple[int, ...], onto: list[int], k: int) -> bool:
        return onto[_pos(face)] >= self._d - k

    def _collapse_face(self, face: tuple[int, ...], k: int, onto: list[int]) -> bool:
        store = _subfaces(face)
        faces = [0] * 3**self._d
        for offsets in itertools.product((-1, 0, 1), repeat=self._d):
            faces[_pos(offsets)] = _set_mask(offsets)
        if k != self._d:
            mask = ~_set_mask(face)
            faces[_pos(face)] &= mask
            for group in store:
                for sub in group:
                    faces[_pos(sub)] &= mask

        def remove_face(sub):
            faces[_pos(sub)] = _REMOVED
            for i, v in enumerate(sub):
                if v == 0:
                    bit = ~(1 << (2 * i)) & 0xFF
                    faces[_pos(_with(sub, i, 1))] &= bit
                    faces[_pos(_with(sub, i, -1))] &= bit

        def try_collapse(sub):
            live = faces[_pos(sub)]
            if self._essential(sub, onto, k - 1) or bin(live).count("1") != 1:
                return False
            i = ((live & -live).bit_length() - 1) >> 1
            superface = _with(sub, i, 0)
            if faces[_pos(superface)] != 0:
                return False
            remove_face(sub)
            remove_face(superface)
            return True

        def remaining(sub):
            return not self._essential(sub, onto, k - 1) and faces[_pos(sub)] < _UPPER_BITS

        prior_remaining = 1
        for d in range(k - 1, -1, -1):
            while True:
                current_remaining = 0
                collapsed = False
                for sub in store[d]:
                    if try_collapse(sub):
                        prior_remaining -= 1
                        collapsed = True
                    elif remaining(sub):
                        current_remaining += 1
                if not collapsed:
                    break
            if prior_remaining:
                return False
            prior_remaining = current_remaining
        return not prior_remaining

    def _check_shortcut(self, idx: int) -> bool:
        return all(
            self._bit(self._table, idx + p) and self._bit(self._table, idx - p)
            for p in self._projection
        )

    def _count_containing(self, idx: int, face: tuple[int, ...], bits: Bitset) -> int:
        steps = [v * p for v, p in zip(face, self._projection) if v != 0]
        return sum(
            1
            for chosen in itertools.product((False, True), repeat=len(steps))
            if self._bit(bits, idx + sum(s for s, c in zip(steps, chosen) if c))
        )

    def thinning_step(self, n_threads: int = 1) -> bool:
        """Remove simple voxels in parallel; return whether anything changed."""
        size = len(self._table)
        new_table = RleBitset(size)
        new_table.register_threads(n_threads)

        def keep(idx, thread_id):
            if self._fixed[idx] or self._check_shortcut(idx):
                new_table.set(idx, thread_id)

        self._table.iterate_set(keep, None, new_table.commit, n_threads)

        for vals in range(self._d + 1):
            kd = self._d - vals
            removed = RleBitset(size)
            removed.register_threads(n_threads)

            def mark_removed(idx, thread_id, removed=removed):
                if not new_table[idx]:
                    removed.set(idx, thread_id)

            self._table.iterate_set(mark_removed, None, removed.commit, n_threads)
            removed.unregister_threads()

            faces = [self._center] if kd == self._d else list(_subfaces(self._center)[kd])
            expected = 2**vals

            def visit(idx, thread_id, removed=removed, faces=faces, kd=kd, expected=expected):
                onto = self.core(idx)
                for face in faces:
                    if (
                        self._essential(face, onto, kd)
                        and self._count_containing(idx, face, removed) == expected
                        and self._count_containing(idx, face, new_table) == 0
                        and not self._collapse_face(face, kd, onto)
                    ):
                        Bitset.set(new_table, idx)
                        new_table.set(idx, thread_id)

            removed.iterate_set(visit, new_table.restart_iteration, new_table.commit, n_threads)
        new_table.unregister_threads()

        changed = new_table != self._table
        self._table = new_table
        return changed

    def fix_one_neighbor(self, n_threads: int = 1) -> None:
        """Fix every set voxel with exactly one set neighbor, so thinning keeps it."""
        neighbors = [f for group in _subfaces(self._center)[: self._d] for f in group]

        def check(idx, _thread_id):
            count = sum(
                1 for f in neighbors if self._bit(self._table, self.offset_by_face(idx, f))
            )
            if count == 1:
                self._fixed.set(idx)

        self._table.iterate_set(check, None, None, n_threads)

    def fixed(self) -> Bitset:
        """The voxels that thinning never removes."""
        return self._fixed

    def table(self) -> RleBitset:
        """The current voxel occupancy."""
        return self._table

    def voxels(self) -> Iterator[tuple[int, ...]]:
        """All voxel coordinates, first axis fastest."""
        for coords in itertools.product(*(range(d) for d in reversed(self._dims))):
            yield tuple(reversed(coords))