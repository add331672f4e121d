"""Fuel-cost fitness function for candidate routes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from ...exceptions import RouteConfigurationError
from ...models.domain import Segment
from .encoder import DecodedPath, PathDecoder
from .models import FuelProfile

# Costs are divided by this before being subtracted from 1, so any realistic
# route scores just below 1 and cheaper routes score higher.
FITNESS_COST_SCALE = 10.0**12
# Lowest score a route reaching the destination can get. Zero is reserved for
# genomes that never arrive.
MIN_VALID_FITNESS = 1e-12
NO_ROUTE_FITNESS = 0.0


@dataclass(slots=True, frozen=True)
class Evaluation:
    """Score of one genome together with the path it decoded to."""

    fitness: float
    path: DecodedPath
    total_cost: float | None = None

    @property
    def reaches_destination(self) -> bool:
        return self.total_cost is not None


def route_cost(segments: Iterable[Segment], fuel: FuelProfile) -> float:
    distance_km = sum(segment.distance_km for segment in segments)
    return (distance_km / fuel.km_per_liter) * fuel.cost_per_liter


def cost_to_fitness(total_cost: float) -> float:
    return max(1.0 - total_cost / FITNESS_COST_SCALE, MIN_VALID_FITNESS)


class FuelCostFitness:
    """Scores genomes so the cheapest route to ``destination`` ranks highest."""

    def __init__(
        self,
        decoder: PathDecoder,
        *,
        origin: str,
        destination: str,
        fuel: FuelProfile,
    ) -> None:
        if not (math.isfinite(fuel.km_per_liter) and fuel.km_per_liter > 0):
            raise RouteConfigurationError("Fuel economy must be greater than zero.")
        if not (math.isfinite(fuel.cost_per_liter) and fuel.cost_per_liter > 0):
            raise RouteConfigurationError("Fuel cost must be greater than zero.")
        self.decoder = decoder
        self.origin = origin
        self.destination = destination
        self.fuel = fuel

    def evaluate(self, genes: Sequence[int]) -> Evaluation:
        path = self.decoder.decode(self.origin, genes)
        if path.is_empty or path.final_destination != self.destination:
            return Evaluation(fitness=NO_ROUTE_FITNESS, path=path)
        total_cost = route_cost(path.segments, self.fuel)
        return Evaluation(fitness=cost_to_fitness(total_cost), path=path, total_cost=total_cost)

    def __call__(self, genes: Sequence[int]) -> float:
        return self.evaluate(genes).fitness
