"""Transit network model.

Defines stops and routes, typed edges and edge lists, the node path container,
and the adjacency-matrix `TransitGraph` consumed by every algorithm.
"""

from transitgraph.model.edge import Edge, EdgeList
from transitgraph.model.graph import TransitGraph
from transitgraph.model.path import Path
from transitgraph.model.stop import Route, Stop

__all__ = [
    "TransitGraph",
    "Stop",
    "Route",
    "Edge",
    "EdgeList",
    "Path",
]
