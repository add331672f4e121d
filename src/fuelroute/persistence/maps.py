"""JSON file repository for stored road maps."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from ..config import settings
from ..exceptions import MapStorageError
from ..models.domain import RouteMap, Segment
from .filesystem import FileStorage

STORE_VERSION = 1

logger = logging.getLogger(__name__)


def _segment_to_record(segment: Segment) -> dict[str, Any]:
    return {
        "id": segment.id,
        "origin": segment.origin,
        "destination": segment.destination,
        "distance_km": segment.distance_km,
    }


def _map_to_record(route_map: RouteMap) -> dict[str, Any]:
    return {
        "id": route_map.id,
        "name": route_map.name,
        "segments": [_segment_to_record(segment) for segment in route_map.segments],
    }


def _map_from_record(record: dict[str, Any]) -> RouteMap:
    return RouteMap(
        id=int(record["id"]),
        name=str(record["name"]),
        segments=tuple(
            Segment(
                id=int(row["id"]),
                origin=str(row["origin"]),
                destination=str(row["destination"]),
                distance_km=float(row["distance_km"]),
            )
            for row in record.get("segments") or []
        ),
    )


def _next_id(ids: set[int]) -> int:
    return max(ids) + 1 if ids else 1


class MapRepository:
    """Reads and writes every map as one JSON document under the data root."""

    def __init__(self, storage: FileStorage | None = None, file_name: str | None = None) -> None:
        try:
            self.storage = storage or FileStorage()
        except OSError as exc:
            raise MapStorageError(f"Failed to open the map store data root: {exc}") from exc
        self.path: Path = self.storage.path_for(file_name or settings.maps_file_name)

    def read_all_maps(self) -> list[RouteMap]:
        """All stored maps ordered by id."""
        try:
            document = self.storage.read_json(self.path, default={})
        except (OSError, json.JSONDecodeError) as exc:
            raise MapStorageError(f"Failed to read the map store at {self.path}: {exc}") from exc

        if not isinstance(document, dict):
            raise MapStorageError(f"Map store at {self.path} is malformed: expected a JSON object.")
        records = document.get("maps") or []
        try:
            maps = [_map_from_record(record) for record in records]
        except (KeyError, TypeError, ValueError) as exc:
            raise MapStorageError(f"Map store at {self.path} is malformed: {exc}") from exc
        return sorted(maps, key=lambda route_map: route_map.id)

    def get_map_by_name(self, name: str) -> RouteMap | None:
        for route_map in self.read_all_maps():
            if route_map.matches_name(name):
                return route_map
        return None

    def save_map(self, route_map: RouteMap) -> RouteMap:
        """Insert or replace a map and return it with its assigned id.

        A map without an id takes over the id of a stored map with the same
        name (ignoring case), otherwise the next free id.
        """
        maps = self.read_all_maps()
        map_id = route_map.id
        if map_id is None:
            same_name = next((stored for stored in maps if stored.matches_name(route_map.name)), None)
            map_id = same_name.id if same_name else _next_id({stored.id for stored in maps})
        stored_map = replace(route_map, id=map_id)

        remaining = [
            stored
            for stored in maps
            if stored.id != map_id and not stored.matches_name(route_map.name)
        ]
        replaced = len(maps) - len(remaining)
        remaining.append(stored_map)
        self._write(remaining)
        logger.info(
            f"{'Replaced' if replaced else 'Stored'} map '{stored_map.name}' (id={map_id}) "
            f"with {len(stored_map.segments)} segments"
        )
        return stored_map

    def remove_map_by_name(self, name: str) -> bool:
        maps = self.read_all_maps()
        remaining = [route_map for route_map in maps if not route_map.matches_name(name)]
        if len(remaining) == len(maps):
            return False
        self._write(remaining)
        logger.info(f"Removed map '{name}'")
        return True

    def _write(self, maps: list[RouteMap]) -> None:
        document = {
            "version": STORE_VERSION,
            "maps": [_map_to_record(route_map) for route_map in sorted(maps, key=lambda m: m.id)],
        }
        try:
            self.storage.write_json(self.path, document)
        except OSError as exc:
            raise MapStorageError(f"Failed to write the map store at {self.path}: {exc}") from exc
