"""pandas integration for TimeChunks.

Chunks live in object-dtype columns. These helpers turn them into ordered
categoricals for plotting and grouping, roll values up to academic years,
and expand chunks into a flat DataFrame.
"""

from dataclasses import fields
from typing import Any, Callable, Union

import pandas as pd

from timechunks.chunks.chunkapi import chunk_ay, start_date
from timechunks.chunks.chunkformat import format_chunk
from timechunks.chunks.chunkidentity import TimeChunk, as_chunk_list, is_listlike
from timechunks.errors import ChunkTypeError, RollupError

# Series reductions that accept skipna=
REDUCTIONS = ("sum", "mean", "median", "min", "max", "std", "var", "prod")


def _chunks(x: Any, label: str) -> list[TimeChunk]:
    if isinstance(x, TimeChunk):
        return [x]
    if is_listlike(x) and not isinstance(x, str):
        return as_chunk_list(x, ChunkTypeError)
    raise ChunkTypeError(
        f"{label}() expects a TimeChunk or a sequence of TimeChunks, not {type(x).__name__}"
    )


def as_chunk_factor(x: Any, labels: str = "code") -> pd.Categorical:
    """
    Ordered categorical with levels in chronological order.

    Levels are the formatted labels of the distinct chunks sorted by start
    date, deduplicated (so "ay" labels may collapse several chunks into one
    level). NA chunks stay missing.

    Args:
        x: TimeChunk or sequence of TimeChunks
        labels: Any format_chunk style (default: "code")

    Returns:
        pandas.Categorical with ordered=True

    Examples:
        >>> x = parse(["su27", "fa26", "sp27"], calendar="us_semester")
        >>> list(as_chunk_factor(x).categories)
        ['fa26', 'sp27', 'su27']
    """
    chunks = _chunks(x, "as_chunk_factor")
    if not chunks:
        return pd.Categorical([], categories=[], ordered=True)

    distinct = sorted({c for c in chunks if not c.is_na})
    levels = list(dict.fromkeys(format_chunk(c, labels) for c in distinct))
    values = [None if c.is_na else format_chunk(c, labels) for c in chunks]
    return pd.Categorical(values, categories=levels, ordered=True)


def rollup_to_ay(
    df: pd.DataFrame,
    value_col: str,
    chunk_col: str = "semester",
    fn: Union[str, Callable[[pd.Series], Any]] = "sum",
    skipna: bool = True,
) -> pd.DataFrame:
    """
    Aggregate a value column by academic/fiscal year.

    Args:
        df: DataFrame with a TimeChunk column and a value column
        value_col: Column to aggregate
        chunk_col: Column holding TimeChunks (default: "semester")
        fn: Reduction name (sum, mean, median, min, max, std, var, prod) or a
            callable taking a Series
        skipna: Drop missing values before aggregating

    Returns:
        DataFrame with columns ``ay`` and ``value_col``, one row per academic
        year, ordered by the earliest start date within each year. Rows whose
        chunk is NA are dropped.

    Raises:
        RollupError: Invalid frame, missing columns, non-chunk column or unknown fn

    Examples:
        >>> df = pd.DataFrame({
        ...     "semester": parse(["fa26", "sp27", "su27", "fa27", "sp28"], calendar="us_semester"),
        ...     "enrollment": [8200, 7100, 3400, 8500, 7300],
        ... })
        >>> rollup_to_ay(df, "enrollment")
                ay  enrollment
        0  2026-27       18700
        1  2027-28       15800
    """
    if not isinstance(df, pd.DataFrame):
        raise RollupError(f"`df` must be a pandas DataFrame, not {type(df).__name__}.")
    for col in (value_col, chunk_col):
        if col not in df.columns:
            raise RollupError(
                f"Column '{col}' not found in `df`. "
                f"Available columns: {', '.join(map(str, df.columns))}"
            )

    chunks = list(df[chunk_col])
    bad = next((c for c in chunks if not isinstance(c, TimeChunk)), None)
    if bad is not None:
        raise RollupError(
            f"Column '{chunk_col}' must hold TimeChunk values, found {type(bad).__name__}."
        )

    if isinstance(fn, str):
        if fn not in REDUCTIONS:
            raise RollupError(
                f"Unknown reduction '{fn}'. Available: {', '.join(REDUCTIONS)}, or pass a callable."
            )
        reduce = lambda s: getattr(s, fn)(skipna=skipna)  # noqa: E731
    elif callable(fn):
        reduce = lambda s: fn(s.dropna() if skipna else s)  # noqa: E731
    else:
        raise RollupError(f"`fn` must be a reduction name or a callable, not {type(fn).__name__}.")

    frame = pd.DataFrame({
        "ay": chunk_ay(chunks),
        "start": pd.to_datetime(start_date(chunks)),
        "value": df[value_col].to_numpy(),
    })
    frame = frame[frame["ay"].notna()]

    if frame.empty:
        return pd.DataFrame({"ay": pd.Series(dtype=object), value_col: pd.Series(dtype=float)})

    order = frame.groupby("ay")["start"].min().sort_values(kind="stable").index
    totals = frame.groupby("ay")["value"].agg(reduce).reindex(order)

    return pd.DataFrame({"ay": list(order), value_col: totals.to_numpy()})


def chunks_to_frame(x: Any) -> pd.DataFrame:
    """
    Expand chunks into a DataFrame: one column per TimeChunk field plus mid_date.

    Examples:
        >>> chunks_to_frame(parse(["fa26"], calendar="us_semester"))[["name", "ay"]]
           name       ay
        0  Fall  2026-27
    """
    chunks = _chunks(x, "chunks_to_frame")
    columns = [f.name for f in fields(TimeChunk)]
    frame = pd.DataFrame(
        [[getattr(c, name) for name in columns] + [c.mid_date] for c in chunks],
        columns=columns + ["mid_date"],
    )
    for col in ("year", "period_index"):
        frame[col] = frame[col].astype("Int64")
    return frame


__all__ = [
    "as_chunk_factor",
    "rollup_to_ay",
    "chunks_to_frame",
]
