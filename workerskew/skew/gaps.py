"""Gap filling: one count per worker, including workers with no records."""

from __future__ import annotations

import numpy as np

from workerskew.core.constants import COUNT_MAX
from workerskew.core.exceptions import CountOverflow, TopologyUnavailable
from workerskew.core.topology import validate_worker_count


def fill_gaps(n_workers, counts):
    """Complete observed per-worker counts to exactly ``n_workers`` rows.

    An identity table with ``count = 0`` for every worker ID in
    ``[0, n_workers)`` is left-merged against the observed counts; each
    row keeps ``max(identity, observed)``, which is the observed count
    where one exists and zero otherwise.

    Parameters
    ----------
    n_workers : int
        Worker count reported by the topology.
    counts : dict of int to int
        Observed counts from :func:`~workerskew.skew.counting.count_by_worker`.

    Returns
    -------
    worker_ids : ndarray of shape (n_workers,)
        ``0 .. n_workers - 1``.
    filled : ndarray of shape (n_workers,)
        ``int64`` count per worker.

    Raises
    ------
    InvalidTopology
        If ``n_workers`` is not a positive integer.
    TopologyUnavailable
        If an observed worker ID lies outside ``[0, n_workers)``, meaning the
        topology changed between tagging and counting.
    """
    n_workers = validate_worker_count(n_workers)

    unknown = sorted(w for w in counts if not 0 <= w < n_workers)
    if unknown:
        raise TopologyUnavailable(
            f"Records were tagged with worker IDs {unknown} outside the {n_workers}-worker topology."
        )
    if any(c < 0 or c > COUNT_MAX for c in counts.values()):
        raise CountOverflow(f"Observed counts must lie in [0, {COUNT_MAX}].")

    worker_ids = np.arange(n_workers, dtype=np.int64)
    identity = np.zeros(n_workers, dtype=np.int64)
    observed = np.array([counts.get(int(w), 0) for w in worker_ids], dtype=np.int64)
    return worker_ids, np.maximum(identity, observed)
