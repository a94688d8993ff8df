"""Frames module: pandas helpers for TimeChunk columns.

Public API:
    as_chunk_factor(x, labels="code") -> pandas.Categorical
        Ordered categorical with chronological levels

    rollup_to_ay(df, value_col, chunk_col="semester", fn="sum") -> DataFrame
        Aggregate a value column per academic/fiscal year

    chunks_to_frame(x) -> DataFrame
        One row per chunk, one column per field
"""

from timechunks.frames.frameapi import (
    as_chunk_factor,
    rollup_to_ay,
    chunks_to_frame,
)

__all__ = [
    "as_chunk_factor",
    "rollup_to_ay",
    "chunks_to_frame",
]
