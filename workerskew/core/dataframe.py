"""DataFrame compatibility layer for pandas/polars interoperability."""

from typing import Any

import narwhals as nw
import polars as pl


def is_dataframe(obj: Any) -> bool:
    """Return True if ``obj`` is a polars frame or implements the Arrow stream interface."""
    return isinstance(obj, pl.DataFrame) or hasattr(obj, "__arrow_c_stream__")


def to_polars(df: Any) -> pl.DataFrame:
    """Convert any Arrow-compatible DataFrame to polars.

    Parameters
    ----------
    df : Any
        Input DataFrame. Supports any object implementing the Arrow PyCapsule
        Interface (__arrow_c_stream__), such as pandas (2.2+ with pyarrow),
        pyarrow tables and duckdb results.

    Returns
    -------
    pl.DataFrame
        Polars DataFrame.

    Raises
    ------
    TypeError
        If input doesn't implement __arrow_c_stream__.
    """
    if isinstance(df, pl.DataFrame):
        return df

    if hasattr(df, "__arrow_c_stream__"):
        return nw.from_arrow(df, backend=pl).to_native()

    msg = f"Expected object implementing '__arrow_c_stream__', got: {type(df).__name__}"
    raise TypeError(msg)
