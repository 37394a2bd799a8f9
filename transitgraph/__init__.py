"""transitgraph: structural analysis of transit networks.

Stops are nodes and routes, transfers, and hypothetical links are typed,
weighted edges of an adjacency-matrix graph. The package ranks stops by
centrality, collapses transfer-connected stops into single logical stops, and
searches for new connections that improve a centrality-derived score.

Primary API:
    TransitGraph, Stop, Route, Edge, EdgeList, EdgeType - graph model
    dfs(), bfs() - traversals reporting to an optional Traverser
    closeness_centrality(), page_rank(), katz_centrality(),
    outward_accessibility() - per-node ranks
    merge_transfer_nodes() - transfer-cluster contraction
    find_critical_edges() - evolutionary search for new edges

Example:
    from transitgraph import Edge, EdgeType, TransitGraph, page_rank

    graph = TransitGraph(
        [Edge(EdgeType.ROUTE, 0, 1, 2.0), Edge(EdgeType.ROUTE, 1, 2, 3.0)],
        num_nodes=3,
    )
    ranks = page_rank(graph)
"""

from __future__ import annotations

from transitgraph import logging
from transitgraph._version import __version__
from transitgraph.algorithms import (
    BasicTraverser,
    LoggingTraverser,
    Traverser,
    bfs,
    closeness_centrality,
    dfs,
    find_critical_edges,
    katz_centrality,
    merge_edges,
    merge_transfer_nodes,
    outward_accessibility,
    page_rank,
)
from transitgraph.model import Edge, EdgeList, Path, Route, Stop, TransitGraph
from transitgraph.types.base import EdgeType

__all__ = [
    # Version
    "__version__",
    # Model
    "TransitGraph",
    "Stop",
    "Route",
    "Edge",
    "EdgeList",
    "EdgeType",
    "Path",
    # Traversal
    "dfs",
    "bfs",
    "Traverser",
    "BasicTraverser",
    "LoggingTraverser",
    # Centrality
    "closeness_centrality",
    "page_rank",
    "katz_centrality",
    "outward_accessibility",
    # Contraction and search
    "merge_edges",
    "merge_transfer_nodes",
    "find_critical_edges",
    # Utilities
    "logging",
]
