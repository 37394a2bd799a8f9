"""Statistics and reporting helpers for rank distributions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

import numpy as np
import pandas as pd

from transitgraph.logging import get_logger

if TYPE_CHECKING:
    from transitgraph.model.graph import TransitGraph

logger = get_logger(__name__)


def mean(values: Sequence[float]) -> float:
    """Return the arithmetic mean, or 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def stdev(values: Sequence[float]) -> float:
    """Return the population standard deviation, or 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.std(values))


def check_type(value: Any, expected: type) -> None:
    """Raise TypeError unless `value` is an instance of `expected`.

    Raises:
        TypeError: If `value` has the wrong type.
    """
    if not isinstance(value, expected):
        raise TypeError(
            f"Expected {expected.__name__}, got {type(value).__name__}"
        )


def rank_table(graph: TransitGraph, ranks: Sequence[float]) -> pd.DataFrame:
    """Tabulate ranks against stop records, highest rank first.

    Args:
        graph: Graph the ranks were computed on.
        ranks: One rank per node.

    Returns:
        DataFrame with columns ``node``, ``stop_id``, ``name``, ``rank``.

    Raises:
        ValueError: If the number of ranks differs from the node count.
    """
    if len(ranks) != graph.length():
        raise ValueError(
            f"Got {len(ranks)} ranks for a graph of {graph.length()} nodes"
        )
    frame = pd.DataFrame(
        {
            "node": range(graph.length()),
            "stop_id": [stop.id for stop in graph.stops],
            "name": [stop.name for stop in graph.stops],
            "rank": [float(r) for r in ranks],
        }
    )
    return frame.sort_values("rank", ascending=False, kind="stable").reset_index(
        drop=True
    )


def log_ranks(
    algorithm: str, graph: TransitGraph, ranks: Sequence[float], top: int = 5
) -> None:
    """Log a summary of a rank distribution and its top stops at DEBUG level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        f"{algorithm}: {len(ranks)} ranks, mean={mean(ranks):.6g}, "
        f"stdev={stdev(ranks):.6g}"
    )
    for row in rank_table(graph, ranks).head(top).itertuples(index=False):
        logger.debug(f"{algorithm}: {row.name} ({row.stop_id}) rank={row.rank:.6g}")
