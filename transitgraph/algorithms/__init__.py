"""Graph algorithms: traversal, centrality, contraction, and critical-edge search."""

from transitgraph.algorithms.centrality import (
    closeness_centrality,
    katz_centrality,
    outward_accessibility,
    page_rank,
)
from transitgraph.algorithms.contraction import (
    merge_edges,
    merge_node_pair,
    merge_transfer_nodes,
)
from transitgraph.algorithms.critical_edges import find_critical_edges
from transitgraph.algorithms.evolution import Population, PopulationConfig
from transitgraph.algorithms.traversal import bfs, connected_components, dfs
from transitgraph.algorithms.traverser import (
    BasicTraverser,
    LoggingTraverser,
    Traverser,
)

__all__ = [
    # Traversal
    "dfs",
    "bfs",
    "connected_components",
    "Traverser",
    "BasicTraverser",
    "LoggingTraverser",
    # Centrality
    "closeness_centrality",
    "page_rank",
    "katz_centrality",
    "outward_accessibility",
    # Contraction
    "merge_edges",
    "merge_node_pair",
    "merge_transfer_nodes",
    # Critical edges
    "find_critical_edges",
    "Population",
    "PopulationConfig",
]
