"""Shared utilities for the timechunks package."""

from timechunks.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_yaml_file,
)
from timechunks.utils.normalize import (
    normalize_text,
    normalize_name,
)
from timechunks.utils.resolver import (
    topk_matches,
    suggest_match,
    did_you_mean,
)

__all__ = [
    # Data loading
    "find_data_file",
    "format_not_found_error",
    "load_yaml_file",
    # Normalization
    "normalize_text",
    "normalize_name",
    # Matching
    "topk_matches",
    "suggest_match",
    "did_you_mean",
]
