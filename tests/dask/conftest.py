"""Shared fixtures for Dask backend tests."""

import pytest


@pytest.fixture(scope="module")
def dask_client():
    distributed = pytest.importorskip("distributed")

    cluster = distributed.LocalCluster(n_workers=2, threads_per_worker=1, memory_limit="512MB")
    client = distributed.Client(cluster)
    yield client
    client.close()
    cluster.close()


@pytest.fixture(scope="module")
def worker_addresses(dask_client):
    return sorted(dask_client.nthreads())
