"""Local tagging: attach the holding worker's ID to every record."""

from __future__ import annotations

import numpy as np

from workerskew.core.topology import query_current_worker


def tag_partition(records, topology):
    """Tag every record of one partition with the ID of the worker running this call.

    Runs entirely on the worker that holds ``records``: it asks the
    topology for the current worker once and never communicates with
    other workers. Records are not inspected.

    Parameters
    ----------
    records : iterable
        The partition's records, of any type.
    topology : Topology
        Accessor answering ``current_worker_id()`` for the running worker.

    Returns
    -------
    ndarray of shape (n_records,)
        ``int64`` worker ID for each record, in record order.

    Raises
    ------
    TopologyUnavailable
        If the topology cannot say which worker is running.
    """
    worker_id = query_current_worker(topology)
    if hasattr(records, "__len__"):
        n_records = len(records)
    else:
        n_records = sum(1 for _ in records)
    return np.full(n_records, worker_id, dtype=np.int64)


def tag_records(dataset, topology=None, n_jobs=1):
    """Tag all partitions of an in-process dataset, each on its own worker.

    Parameters
    ----------
    dataset : PartitionedDataset
        Dataset to tag.
    topology : Topology, optional
        Accessor to query; defaults to ``dataset.topology``.
    n_jobs : int, default 1
        Thread parallelism across partitions.

    Returns
    -------
    list of ndarray
        Tag arrays, one per partition, in partition order.
    """
    if topology is None:
        topology = dataset.topology
    return dataset.map_partitions(tag_partition, topology, n_jobs=n_jobs)
