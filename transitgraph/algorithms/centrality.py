"""Per-node centrality ranks over a `TransitGraph`.

Each algorithm takes ``(graph, traverser=None)`` and returns one float per
node. The final ranks are handed to ``traverser.record_ranks`` and summarized
in the debug log.
"""

from __future__ import annotations

from typing import List, Optional

from transitgraph.algorithms.traverser import Traverser, resolve_traverser
from transitgraph.config import CENTRALITY_CONFIG, CentralityConfig
from transitgraph.logging import get_logger
from transitgraph.model.graph import TransitGraph
from transitgraph.utils.stats import log_ranks, mean

logger = get_logger(__name__)


def _report(
    name: str, graph: TransitGraph, ranks: List[float], traverser: Optional[Traverser]
) -> List[float]:
    resolve_traverser(traverser).record_ranks(list(ranks))
    log_ranks(name, graph, ranks)
    return ranks


def closeness_centrality(
    graph: TransitGraph, traverser: Optional[Traverser] = None
) -> List[float]:
    """Closeness: ``N / sum of shortest-path distances to every other node``.

    Uses the graph's cached all-pairs distances, computing them if needed.
    A node with a zero distance sum (the only node of the graph) ranks 0.0; a
    node that cannot reach some other node has an infinite sum and ranks 0.0.
    """
    length = graph.length()
    ranks: List[float] = []
    for origin in range(length):
        total = 0.0
        for destination in range(length):
            if destination != origin:
                total += graph.get_shortest_path(origin, destination)
        ranks.append(length / total if total > 0 else 0.0)
    return _report("closeness", graph, ranks, traverser)


def page_rank(
    graph: TransitGraph,
    traverser: Optional[Traverser] = None,
    config: Optional[CentralityConfig] = None,
) -> List[float]:
    """PageRank by a fixed number of synchronous power-iteration rounds.

    Per round: ``rank'[v] = (1 - d) / N + d * sum(rank[u] / outdeg(u))`` over
    the neighbors ``u`` of ``v``. With the default damping of 1 there is no
    teleportation term. The iteration count is fixed; there is no tolerance.
    """
    config = config or CENTRALITY_CONFIG
    damping = config.page_rank_damping
    length = graph.length()

    out_degrees = [graph.out_degree(node) for node in range(length)]
    ranks = [config.page_rank_initial_rank] * length

    for _ in range(config.page_rank_iterations):
        next_ranks = []
        for node in range(length):
            summation = sum(
                ranks[incoming] / out_degrees[incoming]
                for incoming in graph.incoming_nodes[node]
            )
            next_ranks.append((1 - damping) / length + damping * summation)
        ranks = next_ranks

    return _report("page rank", graph, ranks, traverser)


def katz_centrality(
    graph: TransitGraph,
    traverser: Optional[Traverser] = None,
    config: Optional[CentralityConfig] = None,
) -> List[float]:
    """Katz centrality by fixed iteration.

    Each round starts from the current ranks, adds
    ``rank[origin] * weight(origin, dest)`` to ``dest`` for every connected
    ordered pair, then rescales every node to ``(alpha * x + beta) / N``.
    """
    config = config or CENTRALITY_CONFIG
    alpha, beta = config.katz_alpha, config.katz_beta
    length = graph.length()
    ranks = [config.katz_initial_rank] * length

    for _ in range(config.katz_iterations):
        next_ranks = list(ranks)
        for node in range(length):
            for inner in range(length):
                if graph.edge_exists(node, inner):
                    next_ranks[inner] += ranks[node] * graph.get_weight(node, inner)
        ranks = [(alpha * value + beta) / length for value in next_ranks]

    return _report("katz", graph, ranks, traverser)


def outward_accessibility(
    graph: TransitGraph, traverser: Optional[Traverser] = None
) -> List[float]:
    """Mean outward accessibility of each node over the graph's walk lengths.

    Based on Travencolo and Costa, "Accessibility in complex networks",
    Physics Letters A. The per-walk-length values come from
    `TransitGraph.get_node_accessibilities`, whose walk lengths are set by
    the graph's `GraphConfig.accessibility_walk_length`.
    """
    ranks = [
        mean(graph.get_node_accessibilities(node))
        for node in range(graph.length())
    ]
    return _report("accessibility", graph, ranks, traverser)
