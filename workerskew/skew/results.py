"""Result containers for record distribution skew."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
import polars as pl

from workerskew.core.constants import COUNT_COL, SKEW_COL, WORKER_ID_COL
from workerskew.core.format import (
    adjust_separators,
    attach_format,
    format_footer,
    format_kv_line,
    format_signed_percent,
    format_title,
    make_table,
)


class SkewEntry(NamedTuple):
    """Skew of a single worker.

    Attributes
    ----------
    worker_id : int
        Worker ordinal.
    count : int
        Records held by the worker.
    skew : int
        Signed percentage deviation from the ideal share.
    """

    worker_id: int
    count: int
    skew: int


class SkewResult(NamedTuple):
    """Container for per-worker record distribution skew.

    Attributes
    ----------
    worker_ids : ndarray
        Worker IDs ``0 .. n_workers - 1`` in ascending order.
    counts : ndarray
        Records held by each worker. Sums to ``total``.
    skew : ndarray
        Signed skew percentage of each worker. ``0`` is perfectly balanced,
        ``100`` is twice the ideal share and ``-100`` is an empty worker.
    n_workers : int
        Worker count reported by the topology.
    total : int
        Records in the dataset.
    ideal_share : float
        ``total / n_workers``.
    rounding : str
        Rounding rule applied to the skew.
    n_partitions : int, optional
        Physical partitions scanned.
    backend : str
        Engine that produced the result.
    """

    worker_ids: np.ndarray
    counts: np.ndarray
    skew: np.ndarray
    n_workers: int
    total: int
    ideal_share: float
    rounding: str = "nearest"
    n_partitions: int | None = None
    backend: str = "local"

    @property
    def entries(self):
        """List of :class:`SkewEntry`, ordered by worker ID."""
        return [
            SkewEntry(int(w), int(c), int(s)) for w, c, s in zip(self.worker_ids, self.counts, self.skew, strict=True)
        ]

    @property
    def max_skew(self):
        """Largest absolute skew over all workers."""
        return int(np.max(np.abs(self.skew)))

    def to_polars(self):
        """Return the per-worker rows as a polars DataFrame."""
        return pl.DataFrame(
            {
                WORKER_ID_COL: self.worker_ids,
                COUNT_COL: self.counts,
                SKEW_COL: self.skew,
            },
            schema={WORKER_ID_COL: pl.Int64, COUNT_COL: pl.Int64, SKEW_COL: pl.Int64},
        )


def format_skew_result(result):
    """Format a skew result for display."""
    lines = format_title("Record Distribution Skew")

    lines.append(format_kv_line("Workers", result.n_workers))
    lines.append(format_kv_line("Records", result.total))
    lines.append(format_kv_line("Ideal share", f"{result.ideal_share:.2f}"))
    if result.n_partitions is not None:
        lines.append(format_kv_line("Partitions", result.n_partitions))
    lines.append("")

    rows = [
        [int(w), int(c), format_signed_percent(s)]
        for w, c, s in zip(result.worker_ids, result.counts, result.skew, strict=True)
    ]
    table = make_table(["Worker", "Records", "Skew"], rows)
    lines.extend(table.split("\n"))

    lines.extend(format_footer(f"Backend: {result.backend}; skew rounded to {result.rounding}"))
    return "\n".join(adjust_separators(lines))


attach_format(SkewResult, format_skew_result)
