"""Routing orchestration service."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...config import settings
from ...exceptions import RouteConfigurationError, RouteNotFoundError
from ...models.domain import RouteMap
from ...persistence.maps import MapRepository
from ...schemas.routing import CheapestRouteRequest, CheapestRouteResponse, RouteSegmentModel
from .genetic import GeneticRouteSearch
from .models import EvolutionSettings, FuelProfile, RouteQuery, RouteResult

logger = logging.getLogger(__name__)


def _build_evolution(payload: CheapestRouteRequest) -> EvolutionSettings:
    return EvolutionSettings(
        max_generations=payload.max_generations
        if payload.max_generations is not None
        else settings.search_max_generations,
        timeout_ms=payload.timeout_ms if payload.timeout_ms is not None else settings.search_timeout_ms,
        crossover_rate=settings.crossover_rate,
        mutation_rate=settings.mutation_rate,
        tournament_size=settings.tournament_size,
        elite_count=settings.elite_count,
        random_seed=payload.random_seed if payload.random_seed is not None else settings.random_seed,
    )


def build_route_query(payload: CheapestRouteRequest) -> RouteQuery:
    query = RouteQuery(
        origin=payload.origin.strip(),
        destination=payload.destination.strip(),
        fuel=FuelProfile(
            km_per_liter=payload.fuel_economy_km_per_liter,
            cost_per_liter=payload.fuel_cost_per_liter,
        ),
        evolution=_build_evolution(payload),
    )
    validate_route_query(query)
    return query


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def validate_route_query(query: RouteQuery) -> None:
    """Reject inputs that would make every map search fail."""
    if not query.origin:
        raise RouteConfigurationError("Origin is required.")
    if not query.destination:
        raise RouteConfigurationError("Destination is required.")
    if not _is_positive(query.fuel.km_per_liter):
        raise RouteConfigurationError("Fuel economy must be greater than zero.")
    if not _is_positive(query.fuel.cost_per_liter):
        raise RouteConfigurationError("Fuel cost must be greater than zero.")
    if query.evolution.max_generations < 0:
        raise RouteConfigurationError("Maximum generations cannot be negative.")
    if query.evolution.timeout_ms < 0:
        raise RouteConfigurationError("Timeout cannot be negative.")


def search_map(route_map: RouteMap, query: RouteQuery) -> RouteResult | None:
    search = GeneticRouteSearch(
        route_map,
        origin=query.origin,
        destination=query.destination,
        fuel=query.fuel,
        evolution=query.evolution,
    )
    return search.run()


def search_maps(maps: Sequence[RouteMap], query: RouteQuery) -> RouteResult | None:
    """Run one genetic search per map and keep the cheapest route.

    A map that cannot be searched or yields no route contributes no candidate;
    ties keep the route from the map evaluated first.
    """
    validate_route_query(query)

    best: RouteResult | None = None
    for route_map in maps:
        try:
            result = search_map(route_map, query)
        except RouteConfigurationError as exc:
            logger.warning(f"Skipping map '{route_map.name}': {exc}")
            continue
        except Exception as exc:
            logger.exception(f"Route search failed for map '{route_map.name}': {exc}")
            continue

        if result is None:
            continue
        if best is None or result.total_cost < best.total_cost:
            best = result

    return best


def route_result_to_response(result: RouteResult) -> CheapestRouteResponse:
    return CheapestRouteResponse(
        segments=[
            RouteSegmentModel(
                id=segment.id,
                origin=segment.origin,
                destination=segment.destination,
                distance_km=segment.distance_km,
            )
            for segment in result.segments
        ],
        waypoints=list(result.waypoints),
        total_cost=result.total_cost,
    )


def find_cheapest_route(payload: CheapestRouteRequest) -> CheapestRouteResponse:
    query = build_route_query(payload)
    maps = MapRepository().read_all_maps()
    logger.info(
        f"Searching {len(maps)} maps for the cheapest route from '{query.origin}' to '{query.destination}'"
    )

    best = search_maps(maps, query)
    if best is None:
        raise RouteNotFoundError(
            f"No route found from '{query.origin}' to '{query.destination}' for the given parameters."
        )
    return route_result_to_response(best)
