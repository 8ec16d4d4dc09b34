"""Constants for the skew pipeline."""

from enum import Enum

COUNT_MAX = 2**63 - 1
DEFAULT_SPLIT_EVERY = 8
DEFAULT_N_JOBS = 1

WORKER_ID_COL = "worker_id"
COUNT_COL = "count"
SKEW_COL = "skew"


class RoundingMode(str, Enum):
    """How the final skew percentage is rounded to an integer."""

    NEAREST = "nearest"
    TRUNCATE = "truncate"


class PartitionLayout(str, Enum):
    """How records are laid out over partitions when building a dataset."""

    BLOCK = "block"
    ROUND_ROBIN = "round_robin"
