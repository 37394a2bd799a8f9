"""Ordered node sequence used to describe walks through the graph."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional

from transitgraph.types.base import NodeIndex


class Path:
    """A sequence of node indices.

    Attributes:
        nodes: Node indices in walk order.
    """

    def __init__(self, nodes: Optional[List[NodeIndex]] = None) -> None:
        self.nodes: List[Any] = list(nodes) if nodes is not None else []

    def length(self) -> int:
        """Return the number of nodes in the path."""
        return len(self.nodes)

    def reverse(self) -> List[Any]:
        """Reverse the path in place and return the node list."""
        self.nodes.reverse()
        return self.nodes

    def add(self, node: Any) -> None:
        """Append a node."""
        self.nodes.append(node)

    def contains(self, node: Any) -> bool:
        """Return True if `node` appears in the path."""
        return node in self.nodes

    def at(self, index: int) -> Any:
        """Return the node at `index`."""
        return self.nodes[index]

    def fill_to(self, length: int, value: Any) -> None:
        """Pad the path with `value` until it holds `length` entries.

        Args:
            length: Target length.
            value: Padding value.

        Raises:
            ValueError: If `length` is shorter than the current length. The
                path is never truncated.
        """
        if length < self.length():
            raise ValueError(
                f"Path cannot be filled to {length}, shorter than its current "
                f"length {self.length()}"
            )
        self.nodes.extend([value] * (length - self.length()))

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.nodes == other.nodes

    def __repr__(self) -> str:
        return f"Path({self.nodes!r})"
