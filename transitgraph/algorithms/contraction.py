"""Transfer-node contraction.

Collapses every cluster of stops connected by TRANSFER edges into a single
synthetic stop, producing a graph without TRANSFER edges.

Each outer iteration merges exactly one pair of nodes: the first two nodes of
the first multi-node component of the transfer-only subgraph. The pair is
merged on a working copy of the adjacency matrix, after which a fresh graph
with one node fewer is rebuilt from the surviving cells. The loop repeats
until no TRANSFER edge remains.

The pairwise merge follows Ostrovsky, "Efficiently Merging Graph Nodes With
Application to Cluster Analysis" (2007).
"""

from __future__ import annotations

from typing import List, Optional, Set

from transitgraph.algorithms.traversal import connected_components
from transitgraph.logging import get_logger
from transitgraph.model.edge import Edge
from transitgraph.model.graph import Matrix, TransitGraph
from transitgraph.model.stop import Stop
from transitgraph.types.base import EdgeType, NodeIndex

logger = get_logger(__name__)


def merge_edges(edge_a: Optional[Edge], edge_b: Optional[Edge]) -> Optional[Edge]:
    """Combine the two edges linking a node to a merged pair.

    - Both absent: None.
    - Either is TRANSFER: TRANSFER with the larger weight.
    - Otherwise: ROUTE with the larger weight. THEORETICAL edges are recoded
      to ROUTE.

    An absent edge counts as weight 0. The endpoints of the result are
    placeholders; the rebuild step assigns them from the cell position.
    """
    if edge_a is None and edge_b is None:
        return None

    weight = max(
        edge_a.weight if edge_a is not None else 0,
        edge_b.weight if edge_b is not None else 0,
    )
    if any(e is not None and e.type == EdgeType.TRANSFER for e in (edge_a, edge_b)):
        return Edge(EdgeType.TRANSFER, 0, 0, weight)
    return Edge(EdgeType.ROUTE, 0, 0, weight)


class _MergeArena:
    """Working copy of a graph's matrix and stops for one pairwise merge.

    Rows and stops keep their original indices while the merged node is
    appended at the end. Merged-away indices are marked retired rather than
    spliced out, and `compact` renumbers the survivors when building the next
    graph.
    """

    def __init__(self, graph: TransitGraph) -> None:
        self.graph = graph
        self.rows: Matrix = graph.make_copy()
        self.stops: List[Stop] = list(graph.stops)
        self.retired: Set[NodeIndex] = set()

    def cell(self, i: NodeIndex, j: NodeIndex) -> Optional[Edge]:
        return self.rows[i][j]

    def merge(self, lo: NodeIndex, hi: NodeIndex) -> NodeIndex:
        """Append a node combining `lo` and `hi` (``lo < hi``) and retire both.

        Returns:
            The arena index of the merged node.
        """
        if not lo < hi:
            raise ValueError(f"Expected lo < hi, got lo={lo}, hi={hi}")

        union = len(self.rows)
        union_row: List[Optional[Edge]] = [None] * union

        for k in range(union):
            if k in (lo, hi) or k in self.retired:
                continue
            if k < lo:
                union_row[k] = merge_edges(self.cell(lo, k), self.cell(hi, k))
            elif k < hi:
                union_row[k] = merge_edges(self.cell(hi, k), self.cell(k, lo))
            else:
                union_row[k] = merge_edges(self.cell(k, lo), self.cell(k, hi))

        self.rows.append(union_row)
        self.stops.append(self.stops[lo].merge_with(self.stops[hi]))
        self.retired.update((lo, hi))
        return union

    def compact(self) -> TransitGraph:
        """Build a graph from the surviving rows, renumbered in order."""
        survivors = [k for k in range(len(self.rows)) if k not in self.retired]
        position = {old: new for new, old in enumerate(survivors)}

        matrix: Matrix = [[None] * new for new in range(len(survivors))]
        for old_i in survivors:
            row = self.rows[old_i]
            for old_j in range(old_i):
                if old_j in position and row[old_j] is not None:
                    matrix[position[old_i]][position[old_j]] = row[old_j]

        stops = [self.stops[k] for k in survivors]
        return TransitGraph.from_matrix(matrix, stops, self.graph.config)


def merge_node_pair(graph: TransitGraph, index_a: NodeIndex, index_b: NodeIndex) -> TransitGraph:
    """Return a new graph where nodes `index_a` and `index_b` are one node.

    Surviving nodes keep their relative order; the merged node is last.
    Edges from another node to the pair are combined with `merge_edges`.
    """
    lo, hi = min(index_a, index_b), max(index_a, index_b)
    arena = _MergeArena(graph)
    arena.merge(lo, hi)
    return arena.compact()


def merge_transfer_nodes(graph: TransitGraph) -> Optional[TransitGraph]:
    """Collapse transfer-connected stops until no TRANSFER edge remains.

    Args:
        graph: Input graph; it is not modified.

    Returns:
        The contracted graph, or None when the input has no TRANSFER edges.
    """
    if graph.get_transfer_edges().length() == 0:
        logger.debug("No transfer edges, nothing to merge")
        return None

    start_nodes = graph.length()
    merges = 0
    while graph.get_transfer_edges().length() > 0:
        groupings = connected_components(graph.get_transfer_graph())
        nodes_to_merge = [group for group in groupings if len(group) > 1]

        first, second = nodes_to_merge[0][0], nodes_to_merge[0][1]
        logger.debug(
            f"Merging transfer nodes {first} ({graph.stops[first].name}) and "
            f"{second} ({graph.stops[second].name})"
        )
        graph = merge_node_pair(graph, first, second)
        merges += 1

    logger.info(
        f"Merged {merges} transfer node pairs: {start_nodes} -> {graph.length()} nodes"
    )
    return graph
