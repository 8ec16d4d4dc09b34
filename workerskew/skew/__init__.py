"""Record distribution skew: tagging, counting, gap filling and projection."""

from .counting import combine_by_holder, count_by_worker, merge_histograms, partition_histogram, reduce_histograms
from .gaps import fill_gaps
from .projection import ideal_share, project_skew, skew_value
from .record_skew import build_result, record_skew
from .results import SkewEntry, SkewResult, format_skew_result
from .tagging import tag_partition, tag_records

__all__ = [
    "SkewEntry",
    "SkewResult",
    "build_result",
    "combine_by_holder",
    "count_by_worker",
    "fill_gaps",
    "format_skew_result",
    "ideal_share",
    "merge_histograms",
    "partition_histogram",
    "project_skew",
    "record_skew",
    "reduce_histograms",
    "skew_value",
    "tag_partition",
    "tag_records",
]
