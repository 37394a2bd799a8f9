"""Shared typing constructs for transitgraph.

Defines the closed edge-type enumeration and numeric aliases used across the
graph model and algorithms. Contains no runtime logic beyond enum parsing.
"""

from transitgraph.types.base import Cost, EdgeType, NodeIndex

__all__ = [
    "EdgeType",
    "Cost",
    "NodeIndex",
]
