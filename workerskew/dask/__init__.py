"""Dask distributed backend for record distribution skew."""

from ._reduce import combine_on_holders, tree_reduce
from ._skew import dask_record_skew
from ._topology import DaskTopology
from ._utils import get_or_create_client, is_dask_collection, validate_dask_input

__all__ = [
    "DaskTopology",
    "combine_on_holders",
    "dask_record_skew",
    "get_or_create_client",
    "is_dask_collection",
    "tree_reduce",
    "validate_dask_input",
]
