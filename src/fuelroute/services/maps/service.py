"""Map store business rules."""

from __future__ import annotations

import math

from ...exceptions import MapValidationError
from ...models.domain import RouteMap, Segment
from ...persistence.maps import MapRepository
from ...schemas.maps import RouteMapModel, RouteMapRequest, RouteMapSummary
from ...schemas.routing import RouteSegmentModel


def build_route_map(payload: RouteMapRequest) -> RouteMap:
    """Validate a map payload and number its segments 1..N in payload order."""
    name = payload.name.strip()
    if not name:
        raise MapValidationError("Map name is required.")

    segments: list[Segment] = []
    seen: set[Segment] = set()
    for position, item in enumerate(payload.segments, start=1):
        origin = item.origin.strip()
        destination = item.destination.strip()
        if not origin or not destination:
            raise MapValidationError(f"Segment {position} must name both its origin and destination.")
        if not (math.isfinite(item.distance_km) and item.distance_km > 0):
            raise MapValidationError(
                f"Segment {position} ({origin} -> {destination}) must have a positive distance."
            )
        segment = Segment(id=position, origin=origin, destination=destination, distance_km=float(item.distance_km))
        if segment in seen:
            raise MapValidationError(f"Segment {origin} -> {destination} appears more than once.")
        seen.add(segment)
        segments.append(segment)

    return RouteMap(id=payload.id, name=name, segments=tuple(segments))


def route_map_to_model(route_map: RouteMap) -> RouteMapModel:
    return RouteMapModel(
        id=route_map.id,
        name=route_map.name,
        segments=[
            RouteSegmentModel(
                id=segment.id,
                origin=segment.origin,
                destination=segment.destination,
                distance_km=segment.distance_km,
            )
            for segment in route_map.segments
        ],
    )


def _summarize(route_map: RouteMap) -> RouteMapSummary:
    points: list[str] = []
    for segment in route_map.segments:
        for point in (segment.origin, segment.destination):
            if point not in points:
                points.append(point)
    return RouteMapSummary(
        id=route_map.id,
        name=route_map.name,
        segment_count=len(route_map.segments),
        points=points,
    )


def store_map(payload: RouteMapRequest) -> RouteMapModel:
    route_map = build_route_map(payload)
    stored = MapRepository().save_map(route_map)
    return route_map_to_model(stored)


def list_maps() -> list[RouteMapSummary]:
    return [_summarize(route_map) for route_map in MapRepository().read_all_maps()]


def get_map(name: str) -> RouteMapModel | None:
    route_map = MapRepository().get_map_by_name(name)
    return route_map_to_model(route_map) if route_map else None


def remove_map(name: str) -> bool:
    return MapRepository().remove_map_by_name(name)
