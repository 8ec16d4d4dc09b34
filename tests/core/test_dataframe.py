"""Tests for the DataFrame compatibility layer."""

import polars as pl
import pytest

from workerskew.core.dataframe import is_dataframe, to_polars


def test_polars_frame_passes_through():
    df = pl.DataFrame({"x": [1, 2, 3]})
    assert is_dataframe(df)
    assert to_polars(df) is df


def test_pandas_frame_converted():
    pd = pytest.importorskip("pandas")
    pytest.importorskip("pyarrow")
    df = pd.DataFrame({"x": [1, 2, 3]})
    assert is_dataframe(df)
    out = to_polars(df)
    assert isinstance(out, pl.DataFrame)
    assert out["x"].to_list() == [1, 2, 3]


def test_non_frame_rejected():
    assert not is_dataframe([1, 2, 3])
    with pytest.raises(TypeError, match="__arrow_c_stream__"):
        to_polars([1, 2, 3])
