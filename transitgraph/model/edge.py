"""Edge records and ordered edge lists."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional

from transitgraph.types.base import Cost, EdgeType, NodeIndex


@dataclass(frozen=True)
class Edge:
    """A typed, weighted connection between two node indices.

    Edges are immutable; use `with_origin` / `with_destination` to derive a
    moved copy.

    Attributes:
        type: Kind of connection.
        origin: Node index the edge starts from.
        destination: Node index the edge ends at.
        weight: Non-negative edge weight.
    """

    type: EdgeType
    origin: NodeIndex
    destination: NodeIndex
    weight: Cost = 0

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(
                f"Edge {self.origin}->{self.destination} has negative weight {self.weight}"
            )

    def with_origin(self, origin: NodeIndex) -> Edge:
        """Return a copy of this edge starting at `origin`."""
        return replace(self, origin=origin)

    def with_destination(self, destination: NodeIndex) -> Edge:
        """Return a copy of this edge ending at `destination`."""
        return replace(self, destination=destination)


class EdgeList:
    """Ordered sequence of `Edge` records.

    Serves both as the serialized edge set of a graph and as a candidate
    solution in the critical-edge search.
    """

    def __init__(self, edges: Optional[Iterable[Edge]] = None) -> None:
        self.edges: List[Edge] = list(edges) if edges is not None else []

    def add(self, edge: Edge) -> None:
        """Append an edge."""
        self.edges.append(edge)

    def get(self, index: int) -> Edge:
        """Return the edge at `index`."""
        return self.edges[index]

    def length(self) -> int:
        """Return the number of edges."""
        return len(self.edges)

    def copy(self) -> EdgeList:
        """Return a shallow copy; edges themselves are immutable."""
        return EdgeList(self.edges)

    def replace(self, index: int, edge: Edge) -> EdgeList:
        """Return a copy with the edge at `index` replaced by `edge`."""
        new_list = self.copy()
        new_list.edges[index] = edge
        return new_list

    def of_type(self, edge_type: EdgeType) -> EdgeList:
        """Return the edges of the given type, in order."""
        return EdgeList(e for e in self.edges if e.type == edge_type)

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.edges)

    def __getitem__(self, index: int) -> Edge:
        return self.edges[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdgeList):
            return NotImplemented
        return self.edges == other.edges

    def __repr__(self) -> str:
        return f"EdgeList({self.edges!r})"
