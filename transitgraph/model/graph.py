"""Adjacency-matrix transit graph.

`TransitGraph` stores typed, weighted edges in a lower-triangular matrix:
row ``i`` holds one cell per ``j < i``, each either ``None`` or an `Edge`.
The matrix is read as undirected, so ``edge_exists(i, j)`` looks at cell
``(max(i, j), min(i, j))``. Stops are aligned 1:1 with node indices.

Instances are immutable once constructed. Derived views such as the
all-pairs shortest-path table and the random-walk transition matrix are
computed lazily and cached on the instance.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Set

import networkx as nx
import numpy as np

from transitgraph.config import GRAPH_CONFIG, GraphConfig
from transitgraph.logging import get_logger
from transitgraph.model.edge import Edge, EdgeList
from transitgraph.model.path import Path
from transitgraph.model.stop import Stop
from transitgraph.types.base import Cost, EdgeType, NodeIndex

logger = get_logger(__name__)

Matrix = List[List[Optional[Edge]]]


class TransitGraph:
    """Weighted, typed, undirected graph of transit stops.

    Attributes:
        num_nodes: Number of nodes.
        stops: Stop records, index-aligned with nodes.
        G: Lower-triangular adjacency matrix. ``G[i][j]`` for ``j < i``.
        incoming_nodes: For each node, the set of neighbor indices with an
            edge into it.
    """

    def __init__(
        self,
        edges: Iterable[Edge] = (),
        num_nodes: int = 0,
        stops: Optional[Sequence[Stop]] = None,
        config: Optional[GraphConfig] = None,
    ) -> None:
        """Build the matrix from an edge collection.

        Self-loops are skipped. When two edges land on the same cell the one
        with the smaller weight is kept.

        Args:
            edges: Edges to place (an `EdgeList` or any iterable of `Edge`).
            num_nodes: Number of nodes.
            stops: Stop records; defaults to placeholder stops named by index.
            config: Graph defaults; falls back to the global `GRAPH_CONFIG`.

        Raises:
            ValueError: If ``num_nodes`` is negative, the stop count differs
                from ``num_nodes``, or an edge endpoint is out of range.
        """
        if num_nodes < 0:
            raise ValueError(f"num_nodes must be non-negative, got {num_nodes}")
        if stops is None:
            stops = [Stop(k, str(k), 0.0, 0.0, []) for k in range(num_nodes)]
        if len(stops) != num_nodes:
            raise ValueError(
                f"Expected {num_nodes} stops, got {len(stops)}"
            )

        self.num_nodes = num_nodes
        self.stops: List[Stop] = list(stops)
        self.config = config or GRAPH_CONFIG
        self.G: Matrix = [[None] * i for i in range(num_nodes)]

        for edge in edges:
            self._place(edge)

        self.incoming_nodes: List[Set[NodeIndex]] = [set() for _ in range(num_nodes)]
        for i, row in enumerate(self.G):
            for j, cell in enumerate(row):
                if cell is not None:
                    self.incoming_nodes[i].add(j)
                    self.incoming_nodes[j].add(i)

        self._path_lengths: Optional[np.ndarray] = None
        self._transition: Optional[np.ndarray] = None
        self._nx_graph: Optional[nx.Graph] = None

    @classmethod
    def from_matrix(
        cls,
        matrix: Matrix,
        stops: Sequence[Stop],
        config: Optional[GraphConfig] = None,
    ) -> TransitGraph:
        """Build a graph from a lower-triangular matrix of edge cells.

        Only the type and weight of each cell are used; endpoints are taken
        from the cell position.
        """
        edges = EdgeList()
        for i, row in enumerate(matrix):
            for j in range(i):
                cell = row[j]
                if cell is not None:
                    edges.add(Edge(cell.type, i, j, cell.weight))
        return cls(edges, len(matrix), stops, config)

    def _in_range(self, edge: Edge) -> bool:
        n = self.num_nodes
        return 0 <= edge.origin < n and 0 <= edge.destination < n

    def _place(self, edge: Edge) -> None:
        n = self.num_nodes
        if not self._in_range(edge):
            raise ValueError(
                f"Edge {edge.origin}->{edge.destination} is outside a graph "
                f"of {n} nodes"
            )
        if edge.origin == edge.destination:
            logger.debug(f"Skipping self-loop on node {edge.origin}")
            return

        hi, lo = max(edge.origin, edge.destination), min(edge.origin, edge.destination)
        existing = self.G[hi][lo]
        if existing is None or edge.weight < existing.weight:
            self.G[hi][lo] = Edge(edge.type, hi, lo, edge.weight)

    #
    # Basic accessors
    #
    def length(self) -> int:
        """Return the number of nodes."""
        return self.num_nodes

    def __len__(self) -> int:
        return self.num_nodes

    def get_edge(self, i: NodeIndex, j: NodeIndex) -> Optional[Edge]:
        """Return the raw matrix cell for the unordered pair, or None."""
        if i == j:
            return None
        return self.G[max(i, j)][min(i, j)]

    def edge_exists(self, i: NodeIndex, j: NodeIndex) -> bool:
        """Return True if nodes `i` and `j` are connected."""
        return self.get_edge(i, j) is not None

    def get_weight(self, i: NodeIndex, j: NodeIndex) -> Cost:
        """Return the weight between `i` and `j`, or 0 when not connected."""
        cell = self.get_edge(i, j)
        return cell.weight if cell is not None else 0

    def create_edge(self, i: NodeIndex, j: NodeIndex) -> Optional[Edge]:
        """Return an `Edge` from `i` to `j` built from the matrix contents.

        Returns:
            The edge oriented as requested, or None when not connected.
        """
        cell = self.get_edge(i, j)
        if cell is None:
            return None
        return Edge(cell.type, i, j, cell.weight)

    def out_degree(self, node: NodeIndex) -> int:
        """Return the number of neighbors of `node`."""
        return len(self.incoming_nodes[node])

    #
    # Edge views
    #
    def get_edges(self) -> EdgeList:
        """Return every edge, ordered by row then column."""
        edges = EdgeList()
        for row in self.G:
            for cell in row:
                if cell is not None:
                    edges.add(cell)
        return edges

    def get_transfer_edges(self) -> EdgeList:
        """Return all TRANSFER edges."""
        return self.get_edges().of_type(EdgeType.TRANSFER)

    def get_transfer_graph(self) -> TransitGraph:
        """Return a graph with the same nodes and only the TRANSFER edges."""
        return TransitGraph(
            self.get_transfer_edges(), self.num_nodes, self.stops, self.config
        )

    def make_copy(self) -> Matrix:
        """Return a copy of the adjacency matrix safe for in-place surgery."""
        return [list(row) for row in self.G]

    def create_new_graph_with_edges(self, edge_list: Iterable[Edge]) -> TransitGraph:
        """Return a new graph with the receiver's edges plus `edge_list`.

        Every edge of the receiver is kept as is. A candidate only fills a
        cell that is empty in the receiver; one that lands on an existing
        edge is dropped, so the lighter-wins rule of construction applies
        among candidates only. The receiver is left untouched.

        Raises:
            ValueError: If a candidate endpoint is out of range.
        """
        edges = self.get_edges()
        for edge in edge_list:
            if self._in_range(edge) and self.edge_exists(edge.origin, edge.destination):
                logger.debug(
                    f"Keeping existing edge {edge.origin}-{edge.destination} "
                    f"over candidate {edge.type.name}"
                )
                continue
            edges.add(edge)
        return TransitGraph(edges, self.num_nodes, self.stops, self.config)

    def create_random_edge(self, rng: Optional[random.Random] = None) -> Edge:
        """Return a THEORETICAL edge between two distinct random nodes.

        Args:
            rng: Random source; a fresh unseeded one is used when omitted.

        Raises:
            ValueError: If the graph has fewer than two nodes.
        """
        if self.num_nodes < 2:
            raise ValueError("A random edge needs at least two nodes")
        rng = rng or random.Random()

        origin = rng.randrange(self.num_nodes)
        destination = rng.randrange(self.num_nodes - 1)
        if destination >= origin:
            destination += 1
        return Edge(
            EdgeType.THEORETICAL,
            origin,
            destination,
            self.config.theoretical_edge_weight,
        )

    #
    # Shortest paths
    #
    def to_networkx(self) -> nx.Graph:
        """Return the graph as a `networkx.Graph` with `weight` and `type` attributes."""
        if self._nx_graph is None:
            nx_graph = nx.Graph()
            nx_graph.add_nodes_from(range(self.num_nodes))
            for edge in self.get_edges():
                nx_graph.add_edge(
                    edge.origin, edge.destination, weight=edge.weight, type=edge.type
                )
            self._nx_graph = nx_graph
        return self._nx_graph

    def calculate_path_lengths(self) -> np.ndarray:
        """Compute and cache all-pairs shortest-path distances.

        Unreachable pairs hold ``inf``.

        Returns:
            An ``N x N`` array of distances.
        """
        if self.num_nodes == 0:
            self._path_lengths = np.zeros((0, 0))
        else:
            self._path_lengths = nx.floyd_warshall_numpy(
                self.to_networkx(), nodelist=list(range(self.num_nodes)), weight="weight"
            )
        logger.debug(f"Calculated path lengths for {self.num_nodes} nodes")
        return self._path_lengths

    def get_shortest_path(self, i: NodeIndex, j: NodeIndex) -> float:
        """Return the shortest-path distance from `i` to `j`.

        Computes the all-pairs table on first use.
        """
        if self._path_lengths is None:
            self.calculate_path_lengths()
        return float(self._path_lengths[i][j])

    def get_path(self, i: NodeIndex, j: NodeIndex) -> Path:
        """Return the nodes along one shortest path from `i` to `j`.

        Returns:
            A `Path` starting at `i` and ending at `j`; empty when unreachable.
        """
        try:
            nodes = nx.shortest_path(self.to_networkx(), i, j, weight="weight")
        except nx.NetworkXNoPath:
            return Path()
        return Path(nodes)

    #
    # Accessibility
    #
    def _transition_matrix(self) -> np.ndarray:
        if self._transition is None:
            n = self.num_nodes
            adjacency = np.zeros((n, n))
            for node, neighbors in enumerate(self.incoming_nodes):
                for neighbor in neighbors:
                    adjacency[node, neighbor] = 1.0
            degree = adjacency.sum(axis=1)
            transition = np.divide(
                adjacency,
                degree[:, np.newaxis],
                out=np.zeros_like(adjacency),
                where=degree[:, np.newaxis] > 0,
            )
            # Isolated nodes keep the walker in place
            for node in np.flatnonzero(degree == 0):
                transition[node, node] = 1.0
            self._transition = transition
        return self._transition

    def get_node_accessibilities(
        self, node: NodeIndex, max_walk_length: Optional[int] = None
    ) -> List[float]:
        """Return the outward accessibility of `node` for each walk length.

        For walk length ``h`` the accessibility is the exponential of the
        entropy of the ``h``-step random-walk distribution starting at `node`
        (Travencolo and Costa, "Accessibility in complex networks"). It equals
        the effective number of nodes reachable in ``h`` steps.

        Args:
            node: Start node.
            max_walk_length: Largest walk length; defaults to the configured
                `accessibility_walk_length`.

        Returns:
            One value per walk length ``1..max_walk_length``.
        """
        if max_walk_length is None:
            max_walk_length = self.config.accessibility_walk_length
        transition = self._transition_matrix()

        distribution = np.zeros(self.num_nodes)
        distribution[node] = 1.0
        accessibilities = []
        for _ in range(max_walk_length):
            distribution = distribution @ transition
            p = distribution[distribution > 0]
            accessibilities.append(float(np.exp(-np.sum(p * np.log(p)))))
        return accessibilities

    def __repr__(self) -> str:
        return (
            f"TransitGraph(num_nodes={self.num_nodes}, "
            f"num_edges={self.get_edges().length()})"
        )
