"""Record distribution skew for Dask collections."""

from __future__ import annotations

import logging

from workerskew.core.config import SkewConfig
from workerskew.core.exceptions import TopologyUnavailable
from workerskew.core.topology import query_worker_count
from workerskew.skew.counting import merge_histograms, partition_histogram
from workerskew.skew.gaps import fill_gaps
from workerskew.skew.record_skew import build_result
from workerskew.skew.tagging import tag_partition

from ._reduce import combine_on_holders, tree_reduce
from ._topology import DaskTopology
from ._utils import get_or_create_client, partition_futures, partition_holders, validate_dask_input

log = logging.getLogger("workerskew.dask.skew")


def dask_record_skew(
    data,
    client=None,
    rounding="nearest",
    split_every=8,
    combine_local=True,
):
    r"""Compute per-worker record distribution skew of a Dask collection.

    Distributed implementation of :func:`~workerskew.record_skew`. Each
    partition is tagged and histogrammed by a task pinned to the worker
    that holds it, so records never leave their worker. Only the small
    ``{worker_id: count}`` histograms move: first combined per worker,
    then tree-reduced across workers.

    Users do not need to call this function directly. Passing a Dask
    collection to :func:`~workerskew.record_skew` will automatically
    dispatch here.

    Parameters
    ----------
    data : dask.dataframe.DataFrame, dask.dataframe.Series or dask.bag.Bag
        Partitioned collection. Persisted collections are measured where
        they live; others are computed on the cluster first.
    client : distributed.Client, optional
        Dask distributed client. If None, a local client is created.
    rounding : {"nearest", "truncate"}, default "nearest"
        Rounding of the final skew percentage.
    split_every : int, default 8
        Fan-in of the cross-worker tree reduction.
    combine_local : bool, default True
        Combine histograms on each worker before the cross-worker merge.

    Returns
    -------
    SkewResult
        One row per worker of the cluster, ordered by worker ID. Worker
        IDs are the positions of the worker addresses in sorted order.
    """
    logging.getLogger("distributed.shuffle").setLevel(logging.ERROR)

    validate_dask_input(data)
    config = SkewConfig(rounding=rounding, split_every=split_every, combine_local=combine_local)
    client = get_or_create_client(client)

    topology = DaskTopology.from_client(client)
    n_workers = query_worker_count(topology)

    parts = partition_futures(client, data)
    holders = partition_holders(client, parts)
    log.info("dask_record_skew: %d partitions on %d workers", len(parts), n_workers)

    def _on_holder(func, future, holder, *args):
        return client.submit(func, future, *args, workers=[holder], allow_other_workers=False)

    tag_futures = [_on_holder(tag_partition, f, h, topology) for f, h in zip(parts, holders, strict=True)]
    len_futures = [_on_holder(len, f, h) for f, h in zip(parts, holders, strict=True)]
    hist_futures = [_on_holder(partition_histogram, f, h) for f, h in zip(tag_futures, holders, strict=True)]

    if config.combine_local:
        hist_futures = combine_on_holders(client, hist_futures, holders, merge_histograms)

    counts = tree_reduce(client, hist_futures, merge_histograms, split_every=config.split_every)
    total = sum(client.gather(len_futures))

    if DaskTopology.from_client(client) != topology:
        raise TopologyUnavailable("Dask workers joined or left while records were being counted.")

    worker_ids, filled = fill_gaps(n_workers, counts)
    return build_result(worker_ids, filled, total, n_workers, config, n_partitions=len(parts), backend="dask")
