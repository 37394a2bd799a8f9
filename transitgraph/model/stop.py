"""Stop and route records.

A `Stop` is the physical record aligned with a node index of the transit graph.
Merging stops is how transfer contraction builds the synthetic stop that
replaces a pair of transfer-connected nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence, Union

StopID = Union[str, int]

#: Separator between the component names of a merged stop.
NAME_SEPARATOR = " / "


@dataclass(frozen=True)
class Route:
    """A scheduled transit route serving one or more stops.

    Attributes:
        id: Route identifier.
        name: Human-readable route name.
    """

    id: str
    name: str = ""


@dataclass
class Stop:
    """A physical stop.

    Attributes:
        id: Stop identifier. Merged stops carry the ids of their parts joined by "-".
        name: Stop name. Merged stops carry distinct component names joined by " / ".
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        routes: Route references serving the stop, in first-seen order.
    """

    id: StopID
    name: str
    latitude: float
    longitude: float
    routes: List[Any] = field(default_factory=list)

    @property
    def name_parts(self) -> List[str]:
        """Component names of this stop."""
        return self.name.split(NAME_SEPARATOR)

    def merge_with(self, other: Stop) -> Stop:
        """Return a new stop representing this stop and `other` as one.

        The other's name is appended only when it is not already one of this
        stop's component names, so chained merges of same-named stops keep the
        name unchanged. Coordinates are averaged and routes are unioned without
        duplicates.

        Args:
            other: Stop to merge into this one.

        Returns:
            The merged stop. Neither input is modified.
        """
        if other.name in self.name_parts:
            name = self.name
        else:
            name = f"{self.name}{NAME_SEPARATOR}{other.name}"

        return Stop(
            id=f"{self.id}-{other.id}",
            name=name,
            latitude=(self.latitude + other.latitude) / 2,
            longitude=(self.longitude + other.longitude) / 2,
            routes=_unique_routes(self.routes, other.routes),
        )


def _unique_routes(first: Sequence[Any], second: Sequence[Any]) -> List[Any]:
    # Equality-based so unhashable route references (e.g. dicts) work too
    merged: List[Any] = []
    for route in list(first) + list(second):
        if route not in merged:
            merged.append(route)
    return merged
