"""Shared Dask utilities and reusable helpers."""

from __future__ import annotations

from workerskew.core.exceptions import TopologyUnavailable


def is_dask_collection(data) -> bool:
    """Check if data is a partitioned Dask collection (DataFrame, Series or Bag).

    Parameters
    ----------
    data : object
        Input data to check.

    Returns
    -------
    bool
        True if data is a Dask collection exposing ``to_delayed()``.
    """
    try:
        import dask
        from dask.delayed import Delayed

        if isinstance(data, Delayed):
            return False
        return dask.is_dask_collection(data) and hasattr(data, "to_delayed")
    except ImportError:
        _type_name = type(data).__module__ + "." + type(data).__qualname__
        if _type_name.startswith("dask"):
            raise ImportError(
                f"Input data appears to be a Dask object ({_type_name}) but "
                "the dask extra is not installed. Install with: "
                "pip install 'workerskew[dask]'"
            ) from None
        return False


def validate_dask_input(data):
    """Validate that ``data`` is a Dask collection with at least one partition.

    Parameters
    ----------
    data : dask collection
        The collection to validate.

    Raises
    ------
    TypeError
        If ``data`` is not a partitioned Dask collection.
    ValueError
        If the collection has no partitions.
    """
    if not is_dask_collection(data):
        raise TypeError(f"Expected a Dask DataFrame, Series or Bag, got {type(data).__name__}.")
    if data.npartitions < 1:
        raise ValueError("Dask collection has no partitions.")


def get_or_create_client(client=None):
    """Get an existing Dask client or create a local one.

    Parameters
    ----------
    client : distributed.Client or None
        An existing Dask distributed client. If None, attempts to get
        the current client or creates a new ``LocalCluster`` client.

    Returns
    -------
    distributed.Client
        A Dask distributed client.
    """
    from distributed import Client

    if client is not None:
        return client
    try:
        return Client.current()
    except ValueError:
        return Client()


def partition_futures(client, data):
    """Return one future per partition of ``data``, computing it if needed.

    The collection is persisted, which leaves already persisted partitions
    where they are and computes any others on the cluster. Only futures of
    the collection's own keys are returned, never those of a persisted
    parent it was derived from.

    Parameters
    ----------
    client : distributed.Client
        Dask distributed client.
    data : dask collection
        Partitioned collection.

    Returns
    -------
    list of Future
        Finished futures, one per partition.
    """
    from dask.core import flatten
    from distributed import futures_of, wait

    persisted = client.persist(data)
    wait(persisted)

    own_keys = list(flatten(persisted.__dask_keys__()))
    by_key = {f.key: f for f in futures_of(persisted)}
    futures = [by_key[k] for k in own_keys if k in by_key]
    if len(futures) != len(own_keys):
        raise TopologyUnavailable(f"Found {len(futures)} of {len(own_keys)} partitions on the cluster.")
    return futures


def partition_holders(client, futures):
    """Return the address of the worker holding each future's data.

    Parameters
    ----------
    client : distributed.Client
        Dask distributed client.
    futures : list of Future
        Finished futures.

    Returns
    -------
    list of str
        One worker address per future. When a result is replicated the
        lowest address is used.

    Raises
    ------
    TopologyUnavailable
        If the scheduler does not know where a partition lives.
    """
    who_has = client.who_has(futures)
    holders = []
    for future in futures:
        addresses = who_has.get(future.key) or ()
        if not addresses:
            raise TopologyUnavailable(f"No worker holds partition {future.key!r}.")
        holders.append(sorted(addresses)[0])
    return holders
