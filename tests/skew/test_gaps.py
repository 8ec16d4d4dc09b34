"""Tests for gap filling."""

import numpy as np
import pytest

from workerskew.core.exceptions import CountOverflow, InvalidTopology, TopologyUnavailable
from workerskew.skew.gaps import fill_gaps


def test_fill_gaps_adds_missing_workers():
    worker_ids, counts = fill_gaps(4, {1: 20, 2: 10, 3: 10})
    np.testing.assert_array_equal(worker_ids, [0, 1, 2, 3])
    np.testing.assert_array_equal(counts, [0, 20, 10, 10])


def test_fill_gaps_empty_counts():
    worker_ids, counts = fill_gaps(2, {})
    np.testing.assert_array_equal(worker_ids, [0, 1])
    np.testing.assert_array_equal(counts, [0, 0])


def test_fill_gaps_complete_counts_unchanged():
    _, counts = fill_gaps(3, {2: 1, 0: 4, 1: 9})
    np.testing.assert_array_equal(counts, [4, 9, 1])


def test_fill_gaps_dtype():
    worker_ids, counts = fill_gaps(2, {0: 1})
    assert worker_ids.dtype == np.int64
    assert counts.dtype == np.int64


def test_fill_gaps_zero_workers_raises():
    with pytest.raises(InvalidTopology):
        fill_gaps(0, {})


@pytest.mark.parametrize("worker", [-1, 3, 10])
def test_fill_gaps_unknown_worker_raises(worker):
    with pytest.raises(TopologyUnavailable, match="outside"):
        fill_gaps(3, {worker: 1})


def test_fill_gaps_negative_count_raises():
    with pytest.raises(CountOverflow):
        fill_gaps(2, {0: -1})
