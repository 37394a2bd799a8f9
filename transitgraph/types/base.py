"""Base enums and aliases for the transit graph model."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

#: Represents a numeric edge weight (travel time, distance, etc.).
Cost = Union[int, float]

#: Position of a stop in the adjacency matrix.
NodeIndex = int


class EdgeType(IntEnum):
    """Kind of connection between two stops."""

    #: Scheduled transit link between consecutive stops of a route.
    ROUTE = 1
    #: Walking or interchange link between nearby stops.
    TRANSFER = 2
    #: Hypothetical candidate link under evaluation.
    THEORETICAL = 3

    @classmethod
    def from_string(cls, value: str) -> "EdgeType":
        """Parse a string into an EdgeType enum value.

        Args:
            value: Case-insensitive member name (e.g., "route", "TRANSFER").

        Returns:
            The corresponding EdgeType member.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid edge type '{value}'. Valid values are: {valid}"
            ) from None
