"""Shared fixtures for workerskew tests."""

import numpy as np
import pytest

from workerskew import PartitionedDataset


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def balanced_dataset():
    return PartitionedDataset.from_counts([10, 10, 10, 10])


@pytest.fixture
def skewed_dataset():
    return PartitionedDataset.from_counts([0, 20, 10, 10], partitions_per_worker=3)


@pytest.fixture
def random_dataset(rng):
    counts = rng.integers(0, 50, size=6)
    return PartitionedDataset.from_counts(counts, partitions_per_worker=4), counts
