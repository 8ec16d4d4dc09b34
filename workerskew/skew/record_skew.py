"""Entry point for record distribution skew."""

from __future__ import annotations

import logging
import warnings

from workerskew.core.config import SkewConfig
from workerskew.core.dataset import PartitionedDataset
from workerskew.core.exceptions import TopologyUnavailable
from workerskew.core.parallel import parallel_map
from workerskew.core.topology import query_worker_count

from .counting import count_by_worker, partition_histogram
from .gaps import fill_gaps
from .projection import ideal_share, project_skew
from .results import SkewResult
from .tagging import tag_records

log = logging.getLogger("workerskew.skew.record_skew")


def record_skew(
    data,
    topology=None,
    rounding="nearest",
    n_jobs=1,
    split_every=8,
    combine_local=True,
    client=None,
):
    """Measure how evenly a dataset's records are spread across workers.

    The computation runs in four steps:

    1. **Tag**: every partition, on the worker that holds it, marks each of
       its records with that worker's ID.
    2. **Count**: each partition histograms its tags by worker ID; the
       partial histograms are combined per worker and then summed across
       workers.
    3. **Fill gaps**: workers that hold no records, and so appear in no
       histogram, are added with a count of zero.
    4. **Project**: each count is compared with the ideal share
       :math:`T / N` to give a signed percentage.

    Passing a Dask collection dispatches to
    :func:`~workerskew.dask.dask_record_skew`.

    Parameters
    ----------
    data : PartitionedDataset or dask collection
        Partitioned dataset of arbitrary records.
    topology : Topology, optional
        Cluster topology. Defaults to ``data.topology``. Not accepted for
        Dask collections, whose topology comes from the client.
    rounding : {"nearest", "truncate"}, default "nearest"
        Rounding of the final skew percentage.
    n_jobs : int, default 1
        Thread parallelism for partition-local steps. -1 uses all cores.
        Must stay 1 for Dask collections.
    split_every : int, default 8
        Fan-in of the histogram tree reduction.
    combine_local : bool, default True
        Combine histograms per worker before the cross-worker merge.
    client : distributed.Client, optional
        Dask client, used only for Dask collections.

    Returns
    -------
    SkewResult
        One row per worker ID in ``[0, N)``, ascending.

    Raises
    ------
    TopologyUnavailable
        If the topology cannot be read or changes during the call.
    InvalidTopology
        If the topology reports no workers.
    CountOverflow
        If a per-worker count overflows.

    Examples
    --------
    .. code-block:: python

        from workerskew import PartitionedDataset, record_skew

        data = PartitionedDataset.from_counts([0, 20, 10, 10])
        record_skew(data).skew  # array([-100, 100, 0, 0])
    """
    from workerskew.dask._utils import is_dask_collection

    if is_dask_collection(data):
        from workerskew.dask import dask_record_skew

        if topology is not None or n_jobs != 1:
            raise ValueError("topology and n_jobs apply to PartitionedDataset only; Dask reads both from the client.")

        return dask_record_skew(
            data,
            client=client,
            rounding=rounding,
            split_every=split_every,
            combine_local=combine_local,
        )

    if not isinstance(data, PartitionedDataset):
        raise TypeError(f"data must be a PartitionedDataset or a Dask collection, got {type(data).__name__}.")

    config = SkewConfig(rounding=rounding, n_jobs=n_jobs, split_every=split_every, combine_local=combine_local)
    if topology is None:
        topology = data.topology

    n_workers = query_worker_count(topology)
    log.info("record_skew: %d partitions over %d workers", data.n_partitions, n_workers)

    tags = tag_records(data, topology, n_jobs=config.n_jobs)
    histograms = parallel_map(partition_histogram, [(t,) for t in tags], n_jobs=config.n_jobs)
    holders = [p.worker for p in data.partitions] if config.combine_local else None
    counts = count_by_worker(histograms, holders=holders, split_every=config.split_every)

    if query_worker_count(topology) != n_workers:
        raise TopologyUnavailable("Worker count changed while records were being counted.")

    worker_ids, filled = fill_gaps(n_workers, counts)
    total = len(data)
    return build_result(worker_ids, filled, total, n_workers, config, n_partitions=data.n_partitions, backend="local")


def build_result(worker_ids, filled, total, n_workers, config, n_partitions=None, backend="local"):
    """Project gap-filled counts to skew and assemble the result.

    Parameters
    ----------
    worker_ids, filled : ndarray
        Output of :func:`~workerskew.skew.gaps.fill_gaps`.
    total : int
        Records in the input dataset, counted independently of the tags.
    n_workers : int
        Worker count.
    config : SkewConfig
        Rounding configuration.
    n_partitions : int, optional
        Partitions scanned.
    backend : str, default "local"
        Engine name recorded on the result.

    Returns
    -------
    SkewResult
    """
    counted = int(filled.sum())
    if counted != total:
        raise TopologyUnavailable(f"Counted {counted} tagged records but the dataset holds {total}.")

    if total == 0:
        warnings.warn("Dataset is empty; reporting zero skew for every worker.", UserWarning)

    share = ideal_share(total, n_workers)
    skew = project_skew(filled, total, n_workers, config.rounding)
    log.debug("record_skew: ideal share %.3f, max |skew| %d", share, int(abs(skew).max()))

    return SkewResult(
        worker_ids=worker_ids,
        counts=filled,
        skew=skew,
        n_workers=n_workers,
        total=total,
        ideal_share=share,
        rounding=config.rounding.value,
        n_partitions=n_partitions,
        backend=backend,
    )
