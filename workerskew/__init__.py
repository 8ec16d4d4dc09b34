"""Per-worker record distribution skew for partitioned datasets."""

from workerskew.core import (
    CountOverflow,
    InvalidTopology,
    Partition,
    PartitionedDataset,
    RoundingMode,
    SkewConfig,
    StaticTopology,
    Topology,
    TopologyUnavailable,
    worker_context,
)
from workerskew.skew import SkewEntry, SkewResult, format_skew_result, record_skew

__version__ = "0.1.0"

__all__ = [
    "CountOverflow",
    "InvalidTopology",
    "Partition",
    "PartitionedDataset",
    "RoundingMode",
    "SkewConfig",
    "SkewEntry",
    "SkewResult",
    "StaticTopology",
    "Topology",
    "TopologyUnavailable",
    "format_skew_result",
    "record_skew",
    "worker_context",
]
