"""Tests for skew result containers."""

import numpy as np
import polars as pl
import pytest

from workerskew import PartitionedDataset, SkewResult, format_skew_result, record_skew


def _result():
    return SkewResult(
        worker_ids=np.arange(4),
        counts=np.array([0, 20, 10, 10]),
        skew=np.array([-100, 100, 0, 0]),
        n_workers=4,
        total=40,
        ideal_share=10.0,
    )


def test_defaults():
    result = _result()
    assert result.rounding == "nearest"
    assert result.n_partitions is None
    assert result.backend == "local"


def test_max_skew():
    assert _result().max_skew == 100


def test_to_polars():
    df = _result().to_polars()
    assert isinstance(df, pl.DataFrame)
    assert df.columns == ["worker_id", "count", "skew"]
    assert df.schema["skew"] == pl.Int64
    assert df.rows() == [(0, 0, -100), (1, 20, 100), (2, 10, 0), (3, 10, 0)]


def test_format_contains_rows():
    text = format_skew_result(_result())
    assert "Record Distribution Skew" in text
    assert "Ideal share: 10.00" in text
    assert "+100%" in text
    assert "-100%" in text
    assert "Backend: local" in text


def test_repr_and_str_use_formatter():
    result = _result()
    assert repr(result) == format_skew_result(result)
    assert str(result) == repr(result)


def test_format_includes_partitions():
    result = record_skew(PartitionedDataset.from_counts([1, 1], partitions_per_worker=2))
    assert "Partitions: 4" in str(result)


def test_format_rejects_ragged_columns():
    result = _result()._replace(skew=np.array([-100, 100, 0]))
    with pytest.raises(ValueError):
        format_skew_result(result)
    with pytest.raises(ValueError):
        _ = result.entries
