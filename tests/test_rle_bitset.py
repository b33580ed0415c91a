import pytest

from stmeshkit.rle_bitset import RleBitset, Run


def _sorted_disjoint(runs):
    return all(a.end <= b.start for a, b in zip(runs, runs[1:]))


def test_runs_from_data():
    b = RleBitset([False, True, True, False, False, True])
    assert b.runs() == (Run(1, 2), Run(5, 1))
    assert [b[i] for i in range(6)] == [False, True, True, False, False, True]


def test_single_thread_contiguous_sets():
    data = [False] * 12
    b = RleBitset(12)
    b.register_threads(1)
    for i in (2, 3, 4, 8, 9):
        b.set(i, 0)
        data[i] = True
    b.commit(0)
    b.unregister_threads()
    assert b == RleBitset(data)
    assert [b[i] for i in range(12)] == data


def test_merging_ranges():
    b = RleBitset(10)
    b.set_run(0, 2)
    b.set_run(5, 6)
    b.set_run(2, 5)
    assert b.runs() == (Run(0, 7),)
    assert all(b[i] for i in range(7))
    assert not b[7]


def test_set_range_keeps_runs_in_step():
    a = RleBitset(16)
    a.set_range(9, 3)
    assert a == RleBitset([3 <= i <= 9 for i in range(16)])


def test_equality_differs():
    a = RleBitset([True, True, False, True])
    b = RleBitset([True, False, False, True])
    assert not a == b
    assert a == RleBitset([True, True, False, True])


def test_two_threads_cover_all_bits():
    b = RleBitset(10)
    b.register_threads(2)
    for i in range(5):
        b.set(i, 0)
    for i in range(5, 10):
        b.set(i, 1)
    b.commit(0)
    b.commit(1)
    b.unregister_threads()
    runs = b.runs()
    assert all(b[i] for i in range(10))
    assert sum(r.length for r in runs) == 10
    assert _sorted_disjoint(runs)


def test_restart_iteration_allows_earlier_indices():
    b = RleBitset(12)
    b.register_threads(1)
    b.set(8, 0)
    b.commit(0)
    b.restart_iteration(0)
    b.set(2, 0)
    b.commit(0)
    b.unregister_threads()
    assert b.runs() == (Run(2, 1), Run(8, 1))


def test_uncommitted_update_is_dropped():
    b = RleBitset(6)
    b.register_threads(1)
    b.set(1, 0)
    b.unregister_threads()
    assert b.runs() == ()
    assert not b[1]


@pytest.mark.parametrize("n_threads", [1, 2, 3, 5])
def test_iterate_set_visits_set_indices(n_threads):
    data = [i % 3 == 0 or i in (10, 11) for i in range(20)]
    b = RleBitset(data)
    seen = []
    started, ended = [], []
    b.iterate_set(lambda idx, t: seen.append(idx), started.append, ended.append, n_threads)
    assert sorted(seen) == [i for i, v in enumerate(data) if v]
    assert started == list(range(n_threads))
    assert ended == list(range(n_threads))


def test_iterate_set_thread_ids_partition():
    b = RleBitset([True] * 8)
    owner = {}
    b.iterate_set(lambda idx, t: owner.setdefault(idx, t), None, None, 2)
    assert all(owner[i] <= owner[i + 1] for i in range(7))
    assert set(owner) == set(range(8))


def test_set_out_of_range():
    b = RleBitset(4)
    b.register_threads(1)
    with pytest.raises(IndexError):
        b.set(4, 0)


def test_unregistered_thread():
    b = RleBitset(4)
    with pytest.raises(IndexError):
        b.set(0, 0)


def test_set_run_out_of_range():
    with pytest.raises(IndexError):
        RleBitset(4).set_run(1, 4)