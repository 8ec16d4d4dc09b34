"""Cluster topology accessors.

A topology answers two questions: how many workers the cluster has, and,
when asked from inside a worker's local execution context, which worker
is asking. Worker IDs are ordinals in ``[0, worker_count())``.

The in-process :class:`StaticTopology` keeps the current worker in a
``ContextVar``. :func:`worker_context` sets it for the duration of a
block, and :func:`~workerskew.core.parallel.parallel_map` copies it into
each thread it runs, so partition tasks see the identity of the worker
that holds their partition.
"""

from __future__ import annotations

import contextlib
import numbers
from contextvars import ContextVar
from typing import Protocol

from .exceptions import InvalidTopology, TopologyUnavailable

__all__ = [
    "StaticTopology",
    "Topology",
    "current_worker",
    "query_current_worker",
    "query_worker_count",
    "validate_worker_count",
    "worker_context",
]

_current_worker: ContextVar[int | None] = ContextVar("workerskew_current_worker", default=None)


class Topology(Protocol):
    """Cluster topology accessor."""

    def worker_count(self) -> int:
        """Return the total number of workers."""

    def current_worker_id(self) -> int:
        """Return the ID of the worker running the caller."""


def validate_worker_count(n_workers):
    """Check a reported worker count and return it as an ``int``.

    Parameters
    ----------
    n_workers : int
        Worker count reported by a topology.

    Returns
    -------
    int
        The validated worker count.

    Raises
    ------
    InvalidTopology
        If the count is not an integer or is smaller than one.
    """
    if isinstance(n_workers, bool) or not isinstance(n_workers, numbers.Integral):
        raise InvalidTopology(f"Worker count must be an integer, got {n_workers!r}.")
    n_workers = int(n_workers)
    if n_workers < 1:
        raise InvalidTopology(f"Worker count must be at least 1, got {n_workers}. Skew is undefined with no workers.")
    return n_workers


def current_worker():
    """Return the worker ID set by the innermost :func:`worker_context`, or None."""
    return _current_worker.get()


@contextlib.contextmanager
def worker_context(worker_id):
    """Context manager that marks the enclosed code as running on ``worker_id``.

    The previous worker is restored when the context exits, even if an
    exception is raised.

    Parameters
    ----------
    worker_id : int
        Ordinal of the worker.
    """
    token = _current_worker.set(int(worker_id))
    try:
        yield
    finally:
        _current_worker.reset(token)


class StaticTopology:
    """Fixed-size topology for the in-process engine.

    Parameters
    ----------
    n_workers : int
        Number of workers in the cluster.
    """

    def __init__(self, n_workers):
        self._n_workers = validate_worker_count(n_workers)

    def __repr__(self):
        return f"StaticTopology(n_workers={self._n_workers})"

    def worker_count(self):
        """Return the total number of workers."""
        return self._n_workers

    def current_worker_id(self):
        """Return the ID of the worker running the caller.

        Raises
        ------
        TopologyUnavailable
            If called outside a :func:`worker_context`, or if the context
            names a worker this topology does not have.
        """
        worker_id = _current_worker.get()
        if worker_id is None:
            raise TopologyUnavailable("current_worker_id() called outside a worker context.")
        if not 0 <= worker_id < self._n_workers:
            raise TopologyUnavailable(f"Worker {worker_id} is not part of a {self._n_workers}-worker topology.")
        return worker_id

    @contextlib.contextmanager
    def worker(self, worker_id):
        """Run the enclosed block as ``worker_id`` after checking it is in range."""
        if not 0 <= int(worker_id) < self._n_workers:
            raise InvalidTopology(f"Worker ID {worker_id} is outside [0, {self._n_workers}).")
        with worker_context(worker_id):
            yield


def query_worker_count(topology):
    """Ask ``topology`` for its worker count and validate the answer.

    Raises
    ------
    TopologyUnavailable
        If the accessor cannot be reached.
    InvalidTopology
        If the reported count is not a positive integer.
    """
    try:
        n_workers = topology.worker_count()
    except (OSError, LookupError) as e:
        raise TopologyUnavailable(f"Could not read worker count from {topology!r}: {e}") from e
    return validate_worker_count(n_workers)


def query_current_worker(topology):
    """Ask ``topology`` which worker is running the caller.

    Raises
    ------
    TopologyUnavailable
        If the accessor cannot be reached or answers outside a worker context.
    """
    try:
        return int(topology.current_worker_id())
    except (OSError, LookupError) as e:
        raise TopologyUnavailable(f"Could not read current worker from {topology!r}: {e}") from e
