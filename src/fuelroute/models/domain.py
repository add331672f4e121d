"""Domain models for road maps and their segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True, frozen=True)
class Segment:
    """A directed road leg between two named points.

    Two segments are considered equal when they join the same origin to the
    same destination; ``id`` and ``distance_km`` are ignored so duplicates can
    be detected regardless of numbering.
    """

    id: int
    origin: str
    destination: str
    distance_km: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.origin == other.origin and self.destination == other.destination

    def __hash__(self) -> int:
        return hash((self.origin, self.destination))


@dataclass(slots=True, frozen=True)
class RouteMap:
    """A named road map. Segments keep the order in which they were stored."""

    id: Optional[int]
    name: str
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    def matches_name(self, name: str) -> bool:
        return self.name.strip().casefold() == name.strip().casefold()
