"""Tests for the in-process partitioned dataset."""

import numpy as np
import polars as pl
import pytest

from workerskew.core.dataset import Partition, PartitionedDataset
from workerskew.core.exceptions import InvalidTopology
from workerskew.core.topology import StaticTopology


def _holder(records, topology):
    return topology.current_worker_id(), len(records)


def test_partitions_keep_worker_and_records():
    topo = StaticTopology(2)
    ds = PartitionedDataset([(0, [1, 2]), Partition(1, [3])], topo)
    assert ds.partitions == (Partition(0, [1, 2]), Partition(1, [3]))
    assert len(ds) == 3
    assert ds.n_partitions == 2


def test_partition_on_unknown_worker_raises():
    with pytest.raises(InvalidTopology, match="outside"):
        PartitionedDataset([(2, [1])], StaticTopology(2))


@pytest.mark.parametrize("n_jobs", [1, 3])
def test_map_partitions_runs_on_holder(n_jobs):
    topo = StaticTopology(3)
    ds = PartitionedDataset([(2, "ab"), (0, "abc"), (2, ""), (1, "a")], topo)
    assert ds.map_partitions(_holder, topo, n_jobs=n_jobs) == [(2, 2), (0, 3), (2, 0), (1, 1)]


def test_from_records_block_layout():
    ds = PartitionedDataset.from_records(list(range(10)), n_workers=2, n_partitions=4)
    assert [p.worker for p in ds.partitions] == [0, 1, 0, 1]
    assert [list(p.records) for p in ds.partitions] == [[0, 1], [2, 3, 4], [5, 6], [7, 8, 9]]


def test_from_records_round_robin_layout():
    ds = PartitionedDataset.from_records(list(range(7)), n_workers=3, layout="round_robin")
    assert [list(p.records) for p in ds.partitions] == [[0, 3, 6], [1, 4], [2, 5]]


def test_from_records_default_partitions_match_workers():
    ds = PartitionedDataset.from_records("abcdef", n_workers=3)
    assert ds.n_partitions == 3
    assert len(ds) == 6


def test_from_records_fewer_records_than_partitions():
    ds = PartitionedDataset.from_records([1], n_workers=4)
    assert sorted(len(p.records) for p in ds.partitions) == [0, 0, 0, 1]


def test_from_records_rejects_zero_partitions():
    with pytest.raises(ValueError, match="n_partitions"):
        PartitionedDataset.from_records([1, 2], n_workers=2, n_partitions=0)


def test_from_records_unknown_layout_raises():
    with pytest.raises(ValueError):
        PartitionedDataset.from_records([1, 2], n_workers=2, layout="hash")


def test_from_records_zero_workers_raises():
    with pytest.raises(InvalidTopology):
        PartitionedDataset.from_records([1, 2], n_workers=0)


def test_from_frame_polars():
    df = pl.DataFrame({"a": np.arange(9), "b": ["x"] * 9})
    ds = PartitionedDataset.from_frame(df, n_workers=3)
    assert all(isinstance(p.records, pl.DataFrame) for p in ds.partitions)
    assert [p.records.height for p in ds.partitions] == [3, 3, 3]
    assert len(ds) == 9


def test_from_frame_round_robin():
    df = pl.DataFrame({"a": np.arange(5)})
    ds = PartitionedDataset.from_frame(df, n_workers=2, layout="round_robin")
    assert [p.records["a"].to_list() for p in ds.partitions] == [[0, 2, 4], [1, 3]]


def test_from_frame_pandas():
    pd = pytest.importorskip("pandas")
    pytest.importorskip("pyarrow")
    df = pd.DataFrame({"a": range(8)})
    ds = PartitionedDataset.from_frame(df, n_workers=2, n_partitions=4)
    assert len(ds) == 8
    assert ds.n_partitions == 4


def test_from_frame_rejects_non_frame():
    with pytest.raises(TypeError, match="Expected a DataFrame"):
        PartitionedDataset.from_frame([1, 2, 3], n_workers=2)


def test_from_counts():
    ds = PartitionedDataset.from_counts([3, 0, 5], partitions_per_worker=2)
    assert ds.topology.worker_count() == 3
    assert ds.n_partitions == 6
    per_worker = {}
    for p in ds.partitions:
        per_worker[p.worker] = per_worker.get(p.worker, 0) + len(p.records)
    assert per_worker == {0: 3, 1: 0, 2: 5}


def test_from_counts_records_are_distinct():
    ds = PartitionedDataset.from_counts([2, 3])
    records = [r for p in ds.partitions for r in p.records]
    assert records == [0, 1, 2, 3, 4]


@pytest.mark.parametrize("kwargs", [{"counts": [1, -1]}, {"counts": [1], "partitions_per_worker": 0}])
def test_from_counts_invalid(kwargs):
    with pytest.raises(ValueError):
        PartitionedDataset.from_counts(**kwargs)


def test_from_counts_no_workers_raises():
    with pytest.raises(InvalidTopology):
        PartitionedDataset.from_counts([])


def test_repr():
    ds = PartitionedDataset.from_counts([1, 2])
    assert repr(ds) == "PartitionedDataset(n_records=3, n_partitions=2, n_workers=2)"
