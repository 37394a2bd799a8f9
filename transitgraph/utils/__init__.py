"""Utility helpers used across transitgraph.

Small, self-contained helpers for statistics, type checks, and rank reporting.
"""

from transitgraph.utils.stats import check_type, log_ranks, mean, rank_table, stdev

__all__ = [
    "mean",
    "stdev",
    "check_type",
    "log_ranks",
    "rank_table",
]
