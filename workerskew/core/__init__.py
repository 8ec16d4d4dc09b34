"""Core building blocks: topology, partitioned datasets, configuration and errors."""

from .config import SkewConfig
from .constants import COUNT_MAX, PartitionLayout, RoundingMode
from .dataframe import to_polars
from .dataset import Partition, PartitionedDataset
from .exceptions import CountOverflow, InvalidTopology, TopologyUnavailable
from .parallel import parallel_map
from .topology import (
    StaticTopology,
    Topology,
    current_worker,
    query_current_worker,
    query_worker_count,
    validate_worker_count,
    worker_context,
)

__all__ = [
    "COUNT_MAX",
    "CountOverflow",
    "InvalidTopology",
    "Partition",
    "PartitionLayout",
    "PartitionedDataset",
    "RoundingMode",
    "SkewConfig",
    "StaticTopology",
    "Topology",
    "TopologyUnavailable",
    "current_worker",
    "parallel_map",
    "query_current_worker",
    "query_worker_count",
    "to_polars",
    "validate_worker_count",
    "worker_context",
]
