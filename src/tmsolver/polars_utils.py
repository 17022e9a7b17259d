"""Utility functions for displaying Polars DataFrames in the terminal."""

from __future__ import annotations

import polars as pl


def to_markdown_table(df: pl.DataFrame, num_rows: int | None = None) -> str:
    """Convert a Polars DataFrame to a markdown table string.

    This function temporarily modifies global ``pl.Config`` state to render the
    table and is therefore not thread-safe.

    Args:
        df (pl.DataFrame): The DataFrame to convert.
        num_rows (int | None): Maximum number of rows to display. Defaults to
            all rows.

    Returns:
        str: Markdown-formatted table string.

    Raises:
        ValueError: If `num_rows` is less than 1.

    Examples:
        >>> df = pl.DataFrame({"a": [2, 3], "b": [0, 1]})
        >>> print(to_markdown_table(df))
        | a | b |
        |---|---|
        | 2 | 0 |
        | 3 | 1 |
    """
    if num_rows is not None and num_rows < 1:
        raise ValueError(f"num_rows must be at least 1, got {num_rows}")

    with pl.Config(
        tbl_formatting="MARKDOWN",
        tbl_hide_column_data_types=True,
        tbl_hide_column_names=False,
        tbl_hide_dataframe_shape=True,
        tbl_rows=-1 if num_rows is None else num_rows,
        tbl_cols=df.width,
    ):
        return str(df)
