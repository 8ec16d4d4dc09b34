"""Partitioned counting of tagged records by worker ID.

Counting is two-phase. Each partition first builds a local histogram
``{worker_id: count}`` from its own tags; the histograms are then merged
by summing matching keys. Summation is associative and commutative, so
the merge may run in any grouping and order, which lets the distributed
backend tree-reduce partial histograms without caring how partitions
map to workers.

Workers that tagged no records are absent from every histogram.
"""

from __future__ import annotations

import logging
from collections import defaultdict

import numpy as np

from workerskew.core.constants import COUNT_MAX, DEFAULT_SPLIT_EVERY
from workerskew.core.exceptions import CountOverflow

log = logging.getLogger("workerskew.skew.counting")


def partition_histogram(tags):
    """Count the tags of one partition by worker ID.

    Parameters
    ----------
    tags : array_like of int
        Worker IDs produced by :func:`~workerskew.skew.tagging.tag_partition`.

    Returns
    -------
    dict of int to int
        Partial count per worker ID present in ``tags``.
    """
    tags = np.asarray(tags, dtype=np.int64)
    if tags.size == 0:
        return {}
    ids, counts = np.unique(tags, return_counts=True)
    return {int(i): int(c) for i, c in zip(ids, counts, strict=True)}


def merge_histograms(a, b):
    """Sum two partial histograms key by key.

    Parameters
    ----------
    a, b : dict of int to int or None
        Partial histograms. ``None`` is treated as empty.

    Returns
    -------
    dict of int to int
        Merged histogram.

    Raises
    ------
    CountOverflow
        If a merged count exceeds ``COUNT_MAX``.
    """
    if a is None:
        return dict(b or {})
    if b is None:
        return dict(a)
    result = dict(a)
    for worker_id, count in b.items():
        total = result.get(worker_id, 0) + count
        if total > COUNT_MAX:
            raise CountOverflow(f"Record count for worker {worker_id} exceeds {COUNT_MAX}.")
        result[worker_id] = total
    return result


def reduce_histograms(histograms, split_every=DEFAULT_SPLIT_EVERY):
    """Tree-reduce a list of partial histograms with fan-in ``split_every``.

    Parameters
    ----------
    histograms : list of dict
        Partial histograms.
    split_every : int, default 8
        Number of histograms merged per reduction step.

    Returns
    -------
    dict of int to int
        Fully merged histogram; empty if there is nothing to merge.
    """
    histograms = list(histograms)
    if not histograms:
        return {}
    while len(histograms) > 1:
        histograms = [
            _merge_group(histograms[i : i + split_every]) for i in range(0, len(histograms), split_every)
        ]
    return dict(histograms[0])


def combine_by_holder(histograms, holders):
    """Merge the histograms of partitions that live on the same worker.

    This is the fully-local aggregation step: no histogram leaves the
    worker that produced it.

    Parameters
    ----------
    histograms : list of dict
        Partial histograms, one per partition.
    holders : list
        Worker (or worker address) holding each partition.

    Returns
    -------
    list of dict
        One combined histogram per distinct holder, in first-seen order.
    """
    if len(histograms) != len(holders):
        raise ValueError("histograms and holders must have the same length.")
    groups = defaultdict(list)
    for hist, holder in zip(histograms, holders, strict=True):
        groups[holder].append(hist)
    return [_merge_group(group) for group in groups.values()]


def count_by_worker(histograms, holders=None, split_every=DEFAULT_SPLIT_EVERY):
    """Merge per-partition histograms into one count per observed worker ID.

    Parameters
    ----------
    histograms : list of dict
        Partial histograms, one per partition.
    holders : list, optional
        Holder of each partition. When given, histograms are first combined
        per holder with :func:`combine_by_holder`.
    split_every : int, default 8
        Fan-in of the final tree reduction.

    Returns
    -------
    dict of int to int
        ``COUNT(*) GROUP BY worker_id``; workers with no records are absent.
    """
    if holders is not None:
        histograms = combine_by_holder(histograms, holders)
    log.debug("count_by_worker: merging %d partial histograms", len(histograms))
    return reduce_histograms(histograms, split_every=split_every)


def _merge_group(group):
    result = {}
    for hist in group:
        result = merge_histograms(result, hist)
    return result
