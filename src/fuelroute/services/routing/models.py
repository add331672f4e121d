"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...config import settings
from ...models.domain import Segment


@dataclass(slots=True, frozen=True)
class FuelProfile:
    """Vehicle consumption and fuel price used to cost a route."""

    km_per_liter: float
    cost_per_liter: float


@dataclass(slots=True)
class EvolutionSettings:
    max_generations: int = settings.search_max_generations
    timeout_ms: int = settings.search_timeout_ms
    crossover_rate: float = settings.crossover_rate
    mutation_rate: float = settings.mutation_rate
    tournament_size: int = settings.tournament_size
    elite_count: int = settings.elite_count
    random_seed: Optional[int] = settings.random_seed


@dataclass(slots=True)
class RouteQuery:
    origin: str
    destination: str
    fuel: FuelProfile
    evolution: EvolutionSettings


@dataclass(slots=True, frozen=True)
class RouteResult:
    segments: List[Segment]
    waypoints: List[str]
    total_cost: float
