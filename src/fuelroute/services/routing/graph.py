"""Adjacency index over the segments of a road map."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ...models.domain import RouteMap, Segment


@dataclass(slots=True, frozen=True)
class BranchIndex:
    """Segment ids leaving each point, in map storage order.

    ``max_branch_count`` is the largest out-degree of any point and sizes the
    gene domain of the genetic search.
    """

    links: Mapping[str, tuple[int, ...]]
    segments: Mapping[int, Segment]
    max_branch_count: int

    def branches(self, point: str) -> tuple[int, ...]:
        return self.links.get(point, ())

    def segment(self, segment_id: int) -> Segment:
        return self.segments[segment_id]

    def has_origin(self, point: str) -> bool:
        return bool(self.links.get(point))

    def has_destination(self, point: str) -> bool:
        return any(segment.destination == point for segment in self.segments.values())


def build_branch_index(route_map: RouteMap) -> BranchIndex:
    links: dict[str, list[int]] = {}
    segments: dict[int, Segment] = {}
    for segment in route_map.segments:
        links.setdefault(segment.origin, []).append(segment.id)
        segments[segment.id] = segment

    frozen_links = {point: tuple(ids) for point, ids in links.items()}
    max_branch_count = max((len(ids) for ids in frozen_links.values()), default=0)
    return BranchIndex(
        links=MappingProxyType(frozen_links),
        segments=MappingProxyType(segments),
        max_branch_count=max_branch_count,
    )
