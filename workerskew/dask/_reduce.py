"""Distributed merge of partial histograms via tree-reduce."""

from __future__ import annotations

import logging
from collections import defaultdict

log = logging.getLogger("workerskew.dask.reduce")


def tree_reduce(client, futures, combine_fn, split_every=8):
    """Merge partial ``{worker_id: count}`` histograms into one.

    Each round submits one task per ``split_every`` partials, each task
    folding its group with ``combine_fn``. Rounds repeat until a single
    histogram is left, so the driver only ever fetches the final merge.
    A group of one is passed on unchanged.

    Parameters
    ----------
    client : distributed.Client
        Dask distributed client.
    futures : list of Future
        Futures of partial histograms. Must not be empty.
    combine_fn : callable
        Histogram merge ``(a, b) -> c``, normally
        :func:`~workerskew.skew.counting.merge_histograms`.
    split_every : int, default 8
        Partial histograms merged per task.

    Returns
    -------
    dict
        Merged ``{worker_id: count}`` histogram, fetched to the driver.
    """
    if not futures:
        raise ValueError("tree_reduce needs at least one future.")
    while len(futures) > 1:
        new_futures = []
        for i in range(0, len(futures), split_every):
            group = futures[i : i + split_every]
            if len(group) == 1:
                new_futures.append(group[0])
            else:
                new_futures.append(client.submit(_reduce_group, combine_fn, *group))
        futures = new_futures
    return futures[0].result()


def combine_on_holders(client, futures, holders, combine_fn):
    """Combine the futures held by each worker on that worker.

    Every group is reduced by one task pinned to the worker that already
    holds all of its inputs, so no data crosses the network.

    Parameters
    ----------
    client : distributed.Client
        Dask distributed client.
    futures : list of Future
        Futures to combine.
    holders : list of str
        Address of the worker holding each future.
    combine_fn : callable
        Pairwise combiner ``(a, b) -> c``.

    Returns
    -------
    list of Future
        One future per distinct holder.
    """
    groups = defaultdict(list)
    for future, holder in zip(futures, holders, strict=True):
        groups[holder].append(future)

    combined = []
    for holder, group in groups.items():
        if len(group) == 1:
            combined.append(group[0])
        else:
            combined.append(
                client.submit(_reduce_group, combine_fn, *group, workers=[holder], allow_other_workers=False)
            )
    log.debug("combine_on_holders: %d futures -> %d per-worker partials", len(futures), len(combined))
    return combined


def _reduce_group(combine_fn, *items):
    """Fold a group of partial histograms left to right with ``combine_fn``."""
    result = items[0]
    for item in items[1:]:
        result = combine_fn(result, item)
    return result
