"""In-process partitioned dataset."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

import numpy as np

from .constants import PartitionLayout
from .dataframe import is_dataframe, to_polars
from .exceptions import InvalidTopology
from .parallel import parallel_map
from .topology import StaticTopology, worker_context

log = logging.getLogger("workerskew.core.dataset")


class Partition(NamedTuple):
    """One physical partition and the worker that holds it.

    Attributes
    ----------
    worker : int
        Ordinal of the worker holding the partition.
    records : sized iterable
        The partition's records. Their schema is never inspected.
    """

    worker: int
    records: Any


class PartitionedDataset:
    """A dataset split into partitions, each resident on one worker.

    Several partitions may live on the same worker, and a worker may hold
    none at all. Partition count is never assumed to equal worker count.

    Parameters
    ----------
    partitions : iterable of Partition or (worker, records) tuples
        The dataset's partitions.
    topology : StaticTopology
        Topology the partitions' worker IDs refer to.

    Raises
    ------
    InvalidTopology
        If a partition names a worker outside ``[0, topology.worker_count())``.
    """

    def __init__(self, partitions, topology):
        self.topology = topology
        n_workers = topology.worker_count()
        parts = []
        for worker, records in partitions:
            worker = int(worker)
            if not 0 <= worker < n_workers:
                raise InvalidTopology(f"Partition assigned to worker {worker}, outside [0, {n_workers}).")
            parts.append(Partition(worker, records))
        self.partitions = tuple(parts)

    def __repr__(self):
        return (
            f"PartitionedDataset(n_records={len(self)}, n_partitions={self.n_partitions}, "
            f"n_workers={self.topology.worker_count()})"
        )

    def __len__(self):
        return sum(len(p.records) for p in self.partitions)

    @property
    def n_partitions(self):
        """Number of physical partitions."""
        return len(self.partitions)

    def map_partitions(self, func, *args, n_jobs=1):
        """Apply ``func(records, *args)`` to every partition on its own worker.

        Each call runs inside the worker context of the partition's holder,
        so ``topology.current_worker_id()`` called from ``func`` reports that
        worker. No records move between partitions.

        Parameters
        ----------
        func : callable
            Partition-local function.
        *args
            Extra positional arguments passed to ``func``.
        n_jobs : int, default 1
            Thread parallelism, as in :func:`~workerskew.core.parallel.parallel_map`.

        Returns
        -------
        list
            One result per partition, in partition order.
        """
        return parallel_map(_run_on_worker, [(p.worker, func, p.records, args) for p in self.partitions], n_jobs)

    @classmethod
    def from_records(cls, records, n_workers, n_partitions=None, layout="block", topology=None):
        """Split a sequence of records into partitions spread over workers.

        Partition ``i`` is placed on worker ``i % n_workers``.

        Parameters
        ----------
        records : sequence or DataFrame
            Records to distribute. DataFrames (polars, or anything Arrow
            compatible) are converted to polars and sliced by row.
        n_workers : int
            Number of workers. Ignored when ``topology`` is given.
        n_partitions : int, optional
            Number of partitions. Defaults to ``n_workers``.
        layout : {"block", "round_robin"}, default "block"
            ``"block"`` gives each partition a contiguous slice;
            ``"round_robin"`` deals records one at a time.
        topology : StaticTopology, optional
            Topology to attach. Built from ``n_workers`` when omitted.

        Returns
        -------
        PartitionedDataset
        """
        if topology is None:
            topology = StaticTopology(n_workers)
        n_workers = topology.worker_count()
        if n_partitions is None:
            n_partitions = n_workers
        if n_partitions < 1:
            raise ValueError(f"n_partitions must be at least 1, got {n_partitions}.")
        layout = PartitionLayout(layout)

        if is_dataframe(records):
            frame = to_polars(records)
            chunks = _split_frame(frame, n_partitions, layout)
        else:
            records = list(records)
            chunks = _split_sequence(records, n_partitions, layout)

        log.debug("from_records: %d partitions over %d workers (%s)", n_partitions, n_workers, layout.value)
        return cls([(i % n_workers, chunk) for i, chunk in enumerate(chunks)], topology)

    @classmethod
    def from_frame(cls, df, n_workers, n_partitions=None, layout="block", topology=None):
        """Build a dataset from an Arrow-compatible DataFrame; see :meth:`from_records`."""
        if not is_dataframe(df):
            raise TypeError(f"Expected a DataFrame, got {type(df).__name__}.")
        return cls.from_records(df, n_workers, n_partitions=n_partitions, layout=layout, topology=topology)

    @classmethod
    def from_counts(cls, counts, partitions_per_worker=1):
        """Build a dataset with a given number of records on each worker.

        Worker ``i`` holds ``counts[i]`` records, spread over
        ``partitions_per_worker`` partitions. Records are integer positions.

        Parameters
        ----------
        counts : sequence of int
            Record count for each worker; its length is the worker count.
        partitions_per_worker : int, default 1
            Partitions created on every worker.

        Returns
        -------
        PartitionedDataset
        """
        counts = [int(c) for c in counts]
        if any(c < 0 for c in counts):
            raise ValueError("counts must be non-negative.")
        if partitions_per_worker < 1:
            raise ValueError(f"partitions_per_worker must be at least 1, got {partitions_per_worker}.")
        topology = StaticTopology(len(counts))

        partitions = []
        offset = 0
        for worker, count in enumerate(counts):
            bounds = np.linspace(0, count, partitions_per_worker + 1).astype(np.int64)
            for start, stop in zip(bounds[:-1], bounds[1:], strict=True):
                partitions.append((worker, range(offset + int(start), offset + int(stop))))
            offset += count
        return cls(partitions, topology)


def _run_on_worker(worker, func, records, args):
    """Run one partition task as its holding worker."""
    with worker_context(worker):
        return func(records, *args)


def _split_sequence(records, n_partitions, layout):
    if layout is PartitionLayout.ROUND_ROBIN:
        return [records[i::n_partitions] for i in range(n_partitions)]
    bounds = np.linspace(0, len(records), n_partitions + 1).astype(np.int64)
    return [records[int(start) : int(stop)] for start, stop in zip(bounds[:-1], bounds[1:], strict=True)]


def _split_frame(frame, n_partitions, layout):
    if layout is PartitionLayout.ROUND_ROBIN:
        return [frame.gather_every(n_partitions, offset=i) for i in range(n_partitions)]
    bounds = np.linspace(0, frame.height, n_partitions + 1).astype(np.int64)
    return [frame.slice(int(start), int(stop - start)) for start, stop in zip(bounds[:-1], bounds[1:], strict=True)]
