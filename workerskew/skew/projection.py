r"""Skew projection.

For worker :math:`i` with :math:`c_i` records, :math:`N` workers and
:math:`T` records in total, the ideal share is :math:`s = T / N` and

.. math::

    \text{skew}_i = \operatorname{round}\left(100 \cdot \frac{c_i - s}{s}\right)
                  = \operatorname{round}\left(\frac{100\,(c_i N - T)}{T}\right).

The right-hand form is evaluated in exact integer arithmetic, so the only
rounding is the final one and the boundary values ``-100`` (empty worker),
``0`` (ideal share) and ``100 * (N - 1)`` (one worker holds everything)
come out exactly.
"""

from __future__ import annotations

import numpy as np

from workerskew.core.constants import RoundingMode
from workerskew.core.topology import validate_worker_count


def ideal_share(total, n_workers):
    """Return the per-worker record count of a perfectly even distribution."""
    n_workers = validate_worker_count(n_workers)
    return total / n_workers


def skew_value(count, total, n_workers, rounding=RoundingMode.NEAREST):
    """Signed percentage deviation of ``count`` from the ideal share.

    Parameters
    ----------
    count : int
        Records held by the worker.
    total : int
        Records in the whole dataset.
    n_workers : int
        Number of workers.
    rounding : {"nearest", "truncate"}, default "nearest"
        ``"nearest"`` rounds halves away from zero, ``"truncate"`` rounds
        toward zero.

    Returns
    -------
    int
        The skew; 0 when ``total`` is 0.
    """
    rounding = RoundingMode(rounding)
    count = int(count)
    total = int(total)
    if total == 0:
        return 0

    numerator = 100 * (count * int(n_workers) - total)
    quotient, remainder = divmod(abs(numerator), total)
    if rounding is RoundingMode.NEAREST and 2 * remainder >= total:
        quotient += 1
    return quotient if numerator >= 0 else -quotient


def project_skew(counts, total, n_workers, rounding=RoundingMode.NEAREST):
    """Compute the skew of every worker.

    Parameters
    ----------
    counts : array_like of int
        Gap-filled count per worker, indexed by worker ID.
    total : int
        Records in the whole dataset.
    n_workers : int
        Number of workers.
    rounding : {"nearest", "truncate"}, default "nearest"
        Final rounding rule.

    Returns
    -------
    ndarray of shape (n_workers,)
        ``int64`` skew per worker. All zeros for an empty dataset.
    """
    n_workers = validate_worker_count(n_workers)
    counts = np.asarray(counts, dtype=np.int64)
    if len(counts) != n_workers:
        raise ValueError(f"Expected {n_workers} counts, got {len(counts)}.")
    if total == 0:
        return np.zeros(n_workers, dtype=np.int64)
    return np.array([skew_value(c, total, n_workers, rounding) for c in counts], dtype=np.int64)
