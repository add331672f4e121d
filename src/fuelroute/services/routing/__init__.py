"""Genetic route search."""

from .genetic import GeneticRouteSearch
from .models import EvolutionSettings, FuelProfile, RouteQuery, RouteResult
from .service import find_cheapest_route, search_maps

__all__ = [
    "GeneticRouteSearch",
    "EvolutionSettings",
    "FuelProfile",
    "RouteQuery",
    "RouteResult",
    "find_cheapest_route",
    "search_maps",
]
