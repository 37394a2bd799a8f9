"""Depth-first and breadth-first search over a `TransitGraph`.

Both searches explore neighbors in ascending index order and report events to
an optional `Traverser`. DFS is synchronous. BFS is a coroutine that yields to
the event loop after each queue level, so long traversals do not starve other
tasks sharing the loop.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Callable, List, Optional

from transitgraph.algorithms.traverser import (
    BasicTraverser,
    Traverser,
    resolve_traverser,
)
from transitgraph.logging import get_logger
from transitgraph.model.graph import TransitGraph
from transitgraph.types.base import NodeIndex

logger = get_logger(__name__)


def dfs(
    graph: TransitGraph,
    start_node: NodeIndex,
    traverser: Optional[Traverser] = None,
) -> List[NodeIndex]:
    """Depth-first search from `start_node`.

    Entering a node through ``(parent, node)`` reports
    ``visit(create_edge(parent, node))`` followed by ``visit_node(node)``;
    finishing its subtree reports ``leave(create_edge(node, parent))``. The
    root only reports ``visit_node``. A final ``summary`` carries
    ``stationsVisited``.

    An explicit stack replaces recursion so long route chains do not hit the
    interpreter recursion limit; the event order is that of the recursive form.

    Args:
        graph: Graph to explore.
        start_node: Root node.
        traverser: Optional observer.

    Returns:
        Visited nodes in discovery order.
    """
    traverser = resolve_traverser(traverser)
    n = graph.length()
    visited = [False] * n
    order: List[NodeIndex] = []

    def enter(node: NodeIndex, parent: Optional[NodeIndex]) -> None:
        visited[node] = True
        order.append(node)
        if parent is not None:
            traverser.visit(graph.create_edge(parent, node))
        traverser.visit_node(node)

    enter(start_node, None)
    # Each frame: (node, parent, next neighbor index to scan)
    stack = [(start_node, None, 0)]
    while stack:
        node, parent, i = stack.pop()
        while i < n and not (graph.edge_exists(node, i) and not visited[i]):
            i += 1
        if i < n:
            stack.append((node, parent, i + 1))
            enter(i, node)
            stack.append((i, node, 0))
        elif parent is not None:
            traverser.leave(graph.create_edge(node, parent))

    traverser.summary({"stationsVisited": len(order)})
    return order


async def bfs(
    graph: TransitGraph,
    start_node: NodeIndex,
    traverser: Optional[Traverser] = None,
    callback: Optional[Callable[[], None]] = None,
) -> List[NodeIndex]:
    """Breadth-first search from `start_node`.

    The root is marked and reported immediately. Each dequeued node scans its
    unvisited neighbors in ascending order, marking each at discovery and
    reporting ``visit(create_edge(node, neighbor))`` then
    ``visit_node(neighbor)``. After every level the coroutine awaits
    ``asyncio.sleep(0)``. On completion it reports ``summary`` and then calls
    `callback`. Errors propagate and abort the traversal.

    Args:
        graph: Graph to explore.
        start_node: Root node.
        traverser: Optional observer.
        callback: Optional zero-argument callable invoked after the summary.

    Returns:
        Visited nodes in discovery order.
    """
    traverser = resolve_traverser(traverser)
    n = graph.length()
    visited = [False] * n
    order: List[NodeIndex] = [start_node]

    visited[start_node] = True
    traverser.visit_node(start_node)
    queue = deque([start_node])

    while queue:
        for _ in range(len(queue)):
            node = queue.popleft()
            for i in range(n):
                if graph.edge_exists(node, i) and not visited[i]:
                    visited[i] = True
                    queue.append(i)
                    order.append(i)
                    traverser.visit(graph.create_edge(node, i))
                    traverser.visit_node(i)
        await asyncio.sleep(0)

    logger.info(f"bfs done: {len(order)} stations visited from node {start_node}")
    traverser.summary({"stationsVisited": len(order)})
    if callback is not None:
        callback()
    return order


def connected_components(graph: TransitGraph) -> List[List[NodeIndex]]:
    """Partition the nodes into connected components.

    Runs DFS from every node not yet seen, in ascending order.

    Returns:
        One list of nodes per component, each in DFS discovery order.
    """
    seen = [False] * graph.length()
    groupings: List[List[NodeIndex]] = []
    for node in range(graph.length()):
        if not seen[node]:
            traverser = BasicTraverser()
            dfs(graph, node, traverser)
            groupings.append(traverser.visited_nodes)
            for visited in traverser.visited_nodes:
                seen[visited] = True
    return groupings
