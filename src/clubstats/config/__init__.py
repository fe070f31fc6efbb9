"""Static reference data: column aliases and body-fat benchmarks."""

from .benchmarks import (
    DEFAULT_SEASON,
    FAT_BENCHMARKS,
    PLAYER_ALIASES,
    Benchmark,
    merge_benchmarks,
)
from .fields import FIELD_ALIASES, IDENTITY_ALIASES, get_aliases, identity_columns, iter_fields

__all__ = [
    "Benchmark",
    "DEFAULT_SEASON",
    "FAT_BENCHMARKS",
    "FIELD_ALIASES",
    "IDENTITY_ALIASES",
    "PLAYER_ALIASES",
    "get_aliases",
    "identity_columns",
    "iter_fields",
    "merge_benchmarks",
]
