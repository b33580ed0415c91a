"""A fixed-size set of bits."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Bitset:
    """A fixed-size bitset whose bits can be read and set, individually or in ranges.

    Setting a single bit is a single byte store, so concurrent setters do not lose updates.
    """

    def __init__(self, size_or_data=0):
        data = None
        if isinstance(size_or_data, int):
            size = size_or_data
        else:
            data = list(size_or_data)
            size = len(data)
        if size < 0:
            raise ValueError("bitset size must not be negative")
        self._bits = bytearray(size)
        if data is not None:
            self.set_from(data)

    def _check(self, idx: int) -> None:
        if not 0 <= idx < len(self._bits):
            raise IndexError(f"bit index {idx} out of range")

    def set_from(self, data: Iterable[bool]) -> None:
        """Set every bit whose entry in data is true."""
        values = list(data)
        if len(values) > len(self._bits):
            raise ValueError("data is longer than the bitset")
        for i, value in enumerate(values):
            if value:
                self._bits[i] = 1

    def __getitem__(self, idx: int) -> bool:
        self._check(idx)
        return bool(self._bits[idx])

    def set(self, idx: int) -> None:
        """Set the bit at idx."""
        self._check(idx)
        self._bits[idx] = 1

    def set_range(self, idx_start: int, idx_end: int) -> None:
        """Set every bit from idx_start to idx_end, both inclusive."""
        self._check(idx_start)
        self._check(idx_end)
        if idx_start > idx_end:
            idx_start, idx_end = idx_end, idx_start
        self._bits[idx_start:idx_end + 1] = b"\x01" * (idx_end - idx_start + 1)

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[bool]:
        return (bool(b) for b in self._bits)