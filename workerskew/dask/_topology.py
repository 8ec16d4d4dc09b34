"""Topology of a Dask cluster."""

from __future__ import annotations

from workerskew.core.exceptions import TopologyUnavailable


class DaskTopology:
    """Snapshot of the workers of a Dask cluster.

    Worker IDs are the positions of the worker addresses in sorted order.
    The snapshot holds no client, so it can be shipped to workers, where
    :meth:`current_worker_id` resolves the running worker's address.

    Parameters
    ----------
    addresses : iterable of str
        Worker addresses.
    """

    def __init__(self, addresses):
        self.addresses = tuple(sorted(addresses))
        self._ordinals = {addr: i for i, addr in enumerate(self.addresses)}

    def __repr__(self):
        return f"DaskTopology(n_workers={len(self.addresses)})"

    def __eq__(self, other):
        return isinstance(other, DaskTopology) and self.addresses == other.addresses

    def __hash__(self):
        return hash(self.addresses)

    @classmethod
    def from_client(cls, client):
        """Read the current worker set from the scheduler.

        Raises
        ------
        TopologyUnavailable
            If the scheduler cannot be reached.
        """
        try:
            addresses = list(client.nthreads())
        except OSError as e:
            raise TopologyUnavailable(f"Could not reach the Dask scheduler: {e}") from e
        return cls(addresses)

    def worker_count(self):
        """Return the number of workers in the snapshot."""
        return len(self.addresses)

    def ordinal(self, address):
        """Return the worker ID of ``address``."""
        try:
            return self._ordinals[address]
        except KeyError:
            raise TopologyUnavailable(f"Worker {address} joined after the topology was read.") from None

    def current_worker_id(self):
        """Return the ID of the Dask worker running the caller.

        Raises
        ------
        TopologyUnavailable
            If not called from a task on a Dask worker, or if that worker is
            not part of the snapshot.
        """
        from distributed import get_worker

        try:
            worker = get_worker()
        except ValueError as e:
            raise TopologyUnavailable("current_worker_id() called outside a Dask worker.") from e
        return self.ordinal(worker.address)
