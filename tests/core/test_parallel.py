"""Tests for the partition thread pool."""

import pytest

from workerskew.core.parallel import parallel_map
from workerskew.core.topology import current_worker, worker_context


def _square(x):
    return x * x


def _tagged(worker, value):
    with worker_context(worker):
        return current_worker(), value


@pytest.mark.parametrize("n_jobs", [1, 2, -1])
def test_results_keep_order(n_jobs):
    assert parallel_map(_square, [(i,) for i in range(20)], n_jobs=n_jobs) == [i * i for i in range(20)]


def test_empty_args():
    assert parallel_map(_square, [], n_jobs=4) == []


@pytest.mark.parametrize("n_jobs", [1, 4])
def test_worker_context_does_not_leak_between_tasks(n_jobs):
    results = parallel_map(_tagged, [(i % 3, i) for i in range(12)], n_jobs=n_jobs)
    assert results == [(i % 3, i) for i in range(12)]
    assert current_worker() is None


def test_outer_context_propagates_to_threads():
    with worker_context(7):
        results = parallel_map(lambda: current_worker(), [() for _ in range(5)], n_jobs=3)
    assert results == [7] * 5


def test_exceptions_propagate():
    def _fail(x):
        raise KeyError(x)

    with pytest.raises(KeyError):
        parallel_map(_fail, [(1,), (2,)], n_jobs=2)
