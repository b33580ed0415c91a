"""A bitset that also keeps a run-length encoding of its set bits."""

from __future__ import annotations

import bisect
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .bitset import Bitset


@dataclass(frozen=True, order=True)
class Run:
    """A run of consecutive set bits."""

    start: int
    length: int

    @property
    def end(self) -> int:
        """The first index past the run."""
        return self.start + self.length


@dataclass
class _ThreadUpdate:
    start: int = 0
    length: int = 0
    hint: int = -1
    runs: list[Run] = field(default_factory=list)


def _run_end(run: Run) -> int:
    return run.end


def _locate(runs: list[Run], hint: int, idx: int) -> int:
    """Index of the last run after hint ending at or before idx; hint itself if there is none."""
    return bisect.bisect_right(runs, idx, lo=hint + 1, key=_run_end) - 1


class RleBitset(Bitset):
    """A bitset with run-length encoded set bits, filled in per registered worker.

    Each worker id collects consecutive indices and merges them into its own run list on
    commit; unregistering appends all worker runs to the bitset's runs. Two bitsets compare
    equal when their runs are equal.
    """

    def __init__(self, size_or_data=0):
        self._runs: list[Run] = []
        self._updates: list[_ThreadUpdate] = []
        super().__init__(size_or_data)

    def set_from(self, data: Iterable[bool]) -> None:
        """Set every bit whose entry in data is true and record the runs."""
        values = list(data)
        if len(values) > len(self):
            raise ValueError("data is longer than the bitset")
        start = None
        for i, value in enumerate(values):
            if value:
                Bitset.set(self, i)
                if start is None:
                    start = i
            elif start is not None:
                self._runs.append(Run(start, i - start))
                start = None
        if start is not None:
            self._runs.append(Run(start, len(values) - start))

    def register_threads(self, n_threads: int) -> None:
        """Prepare n_threads workers, worker t starting at the t-th equal share of the bits."""
        if n_threads < 0:
            raise ValueError("number of threads must not be negative")
        self._updates = [
            _ThreadUpdate(start=len(self) // n_threads * t) for t in range(n_threads)
        ]

    def unregister_threads(self) -> None:
        """Append the committed runs of all workers, in worker order, and drop the workers."""
        for update in self._updates:
            self._runs.extend(update.runs)
        self._updates = []

    def _update(self, thread_id: int) -> _ThreadUpdate:
        if not 0 <= thread_id < len(self._updates):
            raise IndexError(f"thread {thread_id} is not registered")
        return self._updates[thread_id]

    def restart_iteration(self, thread_id: int) -> None:
        """Let the worker's next update search its runs from the beginning again."""
        self._update(thread_id).hint = -1

    def set(self, idx: int, thread_id: int) -> None:
        """Record idx as set for the worker, extending its pending run when contiguous."""
        update = self._update(thread_id)
        if not 0 <= idx < len(self):
            raise IndexError("Index out of range")
        if update.length == 0 or update.start + update.length != idx:
            if update.length != 0:
                self.commit(thread_id)
            update.hint = _locate(update.runs, update.hint, idx)
            update.start = idx
            update.length = 1
        else:
            update.length += 1

    def commit(self, thread_id: int) -> None:
        """Write the worker's pending run into its bits and runs."""
        update = self._update(thread_id)
        if update.length == 0:
            return
        update.hint = self._set_range(
            update.start, update.start + update.length - 1, update.hint, update.runs
        )
        update.length = 0

    def set_run(self, idx_start: int, idx_end: int) -> None:
        """Set the bits from idx_start to idx_end inclusive and merge them into the runs."""
        self._set_range(idx_start, idx_end, -1, self._runs)

    def set_range(self, idx_start: int, idx_end: int) -> None:
        self.set_run(idx_start, idx_end)

    def _set_range(self, idx_start: int, idx_end: int, hint: int, runs: list[Run]) -> int:
        size = len(self)
        if not (0 <= idx_start < size and 0 <= idx_end < size):
            raise IndexError("Index out of range")
        if idx_start > idx_end:
            idx_start, idx_end = idx_end, idx_start
        Bitset.set_range(self, idx_start, idx_end)

        it = _locate(runs, hint, idx_start)
        nxt = it + 1
        if nxt == len(runs) or runs[nxt].start > idx_end:
            if it >= 0 and runs[it].end >= idx_start:
                prev = runs[it]
                runs[it] = Run(prev.start, max(prev.length, idx_end - prev.start + 1))
            else:
                runs.insert(nxt, Run(idx_start, idx_end - idx_start + 1))
                it = nxt
        else:
            found = runs[nxt]
            new_start = min(found.start, idx_start)
            new_end = max(found.end - 1, idx_end)
            current = Run(new_start, new_end - new_start + 1)
            while nxt + 1 < len(runs) and runs[nxt + 1].start <= current.end:
                follower = runs.pop(nxt + 1)
                current = Run(current.start, max(current.length, follower.end - current.start))
            runs[nxt] = current
        return it

    def runs(self) -> tuple[Run, ...]:
        """The recorded runs of set bits."""
        return tuple(self._runs)

    def iterate_set(
        self,
        func: Callable[[int, int], None],
        on_start: Callable[[int], None] | None = None,
        on_end: Callable[[int], None] | None = None,
        n_threads: int = 1,
    ) -> None:
        """Call func(idx, thread_id) for every index in the runs.

        The index space is shared out in equal contiguous parts, one per worker id; on_start
        and on_end are called with the worker id before and after its part.
        """
        if n_threads < 1:
            raise ValueError("at least one thread is needed")
        size = len(self)
        share = size // n_threads
        snapshot = sorted(self._runs)
        for thread_id in range(n_threads):
            lo = share * thread_id
            hi = size if thread_id == n_threads - 1 else share * (thread_id + 1)
            if on_start is not None:
                on_start(thread_id)
            for run in snapshot:
                for idx in range(max(run.start, lo), min(run.end, hi)):
                    func(idx, thread_id)
            if on_end is not None:
                on_end(thread_id)

    def __eq__(self, other):
        if not isinstance(other, RleBitset):
            return NotImplemented
        return self._runs == other._runs

    __hash__ = None

    def __repr__(self):
        return f"RleBitset(size={len(self)}, runs={self._runs!r})"