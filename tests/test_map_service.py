from pathlib import Path

import pytest

from fuelroute.exceptions import MapValidationError
from fuelroute.models.domain import Segment
from fuelroute.persistence.filesystem import FileStorage
from fuelroute.persistence.maps import MapRepository
from fuelroute.schemas.maps import RouteMapRequest, SegmentInput
from fuelroute.services.maps import service as maps_service


def _request(name: str = "Brasil", legs=None) -> RouteMapRequest:
    legs = legs or [
        ("Belo Horizonte", "Montes Claros", 426.0),
        ("Montes Claros", "Salvador", 1014.0),
    ]
    return RouteMapRequest(
        name=name,
        segments=[SegmentInput(origin=o, destination=d, distance_km=km) for o, d, km in legs],
    )


@pytest.fixture
def repository(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> MapRepository:
    repo = MapRepository(storage=FileStorage(root=tmp_path))
    monkeypatch.setattr(maps_service, "MapRepository", lambda: repo)
    return repo


def test_segments_are_numbered_in_payload_order():
    route_map = maps_service.build_route_map(_request(legs=[
        ("C", "D", 3.0),
        ("A", "B", 1.0),
        ("B", "C", 2.0),
    ]))

    assert [segment.id for segment in route_map.segments] == [1, 2, 3]
    assert [segment.origin for segment in route_map.segments] == ["C", "A", "B"]


def test_segment_equality_ignores_id_and_distance():
    assert Segment(1, "A", "B", 10.0) == Segment(7, "A", "B", 99.0)
    assert Segment(1, "A", "B", 10.0) != Segment(1, "B", "A", 10.0)


@pytest.mark.parametrize(
    "request_payload, message",
    [
        (_request(name="   "), "name"),
        (_request(legs=[("A", " ", 1.0)]), "origin and destination"),
        (_request(legs=[("A", "B", 0.0)]), "positive distance"),
        (_request(legs=[("A", "B", float("nan"))]), "positive distance"),
        (_request(legs=[("A", "B", float("inf"))]), "positive distance"),
        (_request(legs=[("A", "B", 1.0), ("A", "B", 2.0)]), "more than once"),
    ],
)
def test_invalid_maps_are_rejected(request_payload: RouteMapRequest, message: str):
    with pytest.raises(MapValidationError, match=message):
        maps_service.build_route_map(request_payload)


def test_store_map_returns_assigned_ids(repository: MapRepository):
    stored = maps_service.store_map(_request())

    assert stored.id == 1
    assert [segment.id for segment in stored.segments] == [1, 2]
    assert repository.get_map_by_name("brasil") is not None


def test_list_maps_summarizes_points(repository: MapRepository):
    maps_service.store_map(_request())

    summaries = maps_service.list_maps()

    assert len(summaries) == 1
    assert summaries[0].segment_count == 2
    assert summaries[0].points == ["Belo Horizonte", "Montes Claros", "Salvador"]


def test_get_and_remove_map(repository: MapRepository):
    maps_service.store_map(_request())

    assert maps_service.get_map("BRASIL").name == "Brasil"
    assert maps_service.remove_map("Brasil") is True
    assert maps_service.get_map("Brasil") is None
    assert maps_service.remove_map("Brasil") is False
