"""Observers notified of traversal and ranking events.

Every traversal and centrality algorithm accepts an optional traverser. The
base `Traverser` implements each hook as a no-op, so algorithms call hooks
unconditionally and run identically with or without reporting.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from transitgraph.logging import get_logger
from transitgraph.model.edge import Edge
from transitgraph.types.base import NodeIndex

logger = get_logger(__name__)


class Traverser:
    """No-op observer. Subclass and override the hooks of interest."""

    def visit_node(self, node: NodeIndex) -> None:
        """Called when `node` is discovered."""

    def visit(self, edge: Edge) -> None:
        """Called when `edge` is traversed toward a newly discovered node."""

    def leave(self, edge: Edge) -> None:
        """Called when DFS backtracks along `edge`."""

    def summary(self, stats: Dict[str, Any]) -> None:
        """Called once when a traversal completes."""

    def record_ranks(self, ranks: List[float]) -> None:
        """Called once by a centrality algorithm with its final ranks."""


class BasicTraverser(Traverser):
    """Records discovery order, traversed edges, the summary, and ranks.

    Attributes:
        visited_nodes: Nodes in discovery order.
        visited_edges: Edges reported through `visit`.
        left_edges: Edges reported through `leave`.
        stats: The last summary received.
        ranks: The last ranks received.
    """

    def __init__(self) -> None:
        self.visited_nodes: List[NodeIndex] = []
        self.visited_edges: List[Edge] = []
        self.left_edges: List[Edge] = []
        self.stats: Dict[str, Any] = {}
        self.ranks: Optional[List[float]] = None

    def visit_node(self, node: NodeIndex) -> None:
        self.visited_nodes.append(node)

    def visit(self, edge: Edge) -> None:
        self.visited_edges.append(edge)

    def leave(self, edge: Edge) -> None:
        self.left_edges.append(edge)

    def summary(self, stats: Dict[str, Any]) -> None:
        self.stats = dict(stats)

    def record_ranks(self, ranks: List[float]) -> None:
        self.ranks = list(ranks)


class LoggingTraverser(BasicTraverser):
    """BasicTraverser that also logs every event at DEBUG level."""

    def visit_node(self, node: NodeIndex) -> None:
        super().visit_node(node)
        logger.debug(f"visit node {node}")

    def visit(self, edge: Edge) -> None:
        super().visit(edge)
        logger.debug(f"visit {edge.type.name} edge {edge.origin}->{edge.destination}")

    def leave(self, edge: Edge) -> None:
        super().leave(edge)
        logger.debug(f"leave {edge.type.name} edge {edge.origin}->{edge.destination}")

    def summary(self, stats: Dict[str, Any]) -> None:
        super().summary(stats)
        logger.debug(f"traversal summary: {stats}")

    def record_ranks(self, ranks: List[float]) -> None:
        super().record_ranks(ranks)
        logger.debug(f"recorded {len(ranks)} ranks")


#: Shared no-op instance used when no traverser is supplied.
NULL_TRAVERSER = Traverser()


def resolve_traverser(traverser: Optional[Traverser]) -> Traverser:
    """Return `traverser`, or the shared no-op traverser when it is None."""
    return traverser if traverser is not None else NULL_TRAVERSER
