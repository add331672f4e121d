"""
Genetic Route Search
====================

Evolves a population of fixed-length integer genomes towards the cheapest
route between two points of a single road map.

Each genome has one gene per segment of the map (see ``encoder`` for how genes
become paths). The population holds ``segment_count ** 2`` individuals so that
larger maps get proportionally more search breadth. Every generation keeps the
best ``elite_count`` individuals, fills the rest through tournament selection,
single-point crossover and per-gene mutation, and re-scores the offspring.

The loop stops after ``max_generations`` generations or once the elapsed time
exceeds ``timeout_ms``. The deadline is only checked between generations.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ...exceptions import RouteConfigurationError
from ...models.domain import RouteMap
from .encoder import PathDecoder
from .fitness import NO_ROUTE_FITNESS, Evaluation, FuelCostFitness, route_cost
from .graph import build_branch_index
from .models import EvolutionSettings, FuelProfile, RouteResult

logger = logging.getLogger(__name__)


@dataclass
class Individual:
    """
    Candidate solution in the population.

    ``evaluation`` carries the decoded path of the last scoring, so the valid
    genes and the segment ids they resolved to are known without decoding
    the genome again.
    """
    genes: List[int]
    fitness: float = NO_ROUTE_FITNESS
    evaluation: Optional[Evaluation] = None

    @property
    def valid_gene_count(self) -> int:
        return self.evaluation.path.valid_gene_count if self.evaluation else 0

    @property
    def segment_ids(self) -> Tuple[int, ...]:
        return self.evaluation.path.segment_ids if self.evaluation else ()

    def copy(self) -> 'Individual':
        return Individual(genes=list(self.genes), fitness=self.fitness, evaluation=self.evaluation)

    def __repr__(self) -> str:
        return f"Individual(genes={self.genes}, fitness={self.fitness!r})"


class GeneticOperators:
    """
    Variation operators over integer genomes.

    Operators:
    - Tournament selection (with replacement)
    - Single-point crossover
    - Per-gene mutation, resampling from the gene's own domain
    """

    def __init__(self,
                 gene_bounds: Sequence[Tuple[int, int]],
                 *,
                 mutation_rate: float,
                 crossover_rate: float,
                 tournament_size: int,
                 rng: np.random.Generator):
        """
        Args:
            gene_bounds: Inclusive (low, high) domain for every gene position
            mutation_rate: Probability of resampling each gene
            crossover_rate: Probability of recombining a pair of parents
            tournament_size: Individuals drawn per tournament
            rng: Random generator shared by every operator of one search
        """
        self.gene_bounds = list(gene_bounds)
        self._lows = np.array([low for low, _ in self.gene_bounds], dtype=np.int64)
        # exclusive upper bounds, as rng.integers expects
        self._highs = np.array([high for _, high in self.gene_bounds], dtype=np.int64) + 1
        self.mutation_rate = mutation_rate
        self.crossover_rate = crossover_rate
        self.tournament_size = tournament_size
        self.rng = rng

    def random_population(self, size: int) -> List[Individual]:
        """Draw ``size`` genomes at once, each gene from its own domain."""
        draws = self.rng.integers(self._lows, self._highs, size=(size, len(self.gene_bounds)))
        return [Individual(genes=row) for row in draws.tolist()]

    def mutate(self, ind: Individual) -> Individual:
        mutant = ind.copy()
        mask = self.rng.random(len(mutant.genes)) < self.mutation_rate
        if mask.any():
            draws = self.rng.integers(self._lows, self._highs)
            for i in np.flatnonzero(mask):
                mutant.genes[i] = int(draws[i])
            mutant.fitness = NO_ROUTE_FITNESS
            mutant.evaluation = None
        return mutant

    def crossover(self, parent1: Individual,
                  parent2: Individual) -> Tuple[Individual, Individual]:
        if self.rng.random() > self.crossover_rate:
            return parent1.copy(), parent2.copy()

        n_genes = len(parent1.genes)
        if n_genes < 2:
            return parent1.copy(), parent2.copy()

        cut = int(self.rng.integers(1, n_genes))
        child1 = Individual(genes=parent1.genes[:cut] + parent2.genes[cut:])
        child2 = Individual(genes=parent2.genes[:cut] + parent1.genes[cut:])
        return child1, child2

    def tournament_select(self, population: Sequence[Individual]) -> Individual:
        picks = self.rng.integers(0, len(population), size=self.tournament_size)
        # max() keeps the first of equally fit contenders
        return max((population[int(i)] for i in picks), key=lambda ind: ind.fitness)


class GeneticRouteSearch:
    """
    Genetic search for the cheapest route inside one road map.

    Raises ``RouteConfigurationError`` on construction when the map or the
    search inputs cannot produce a route at all.
    """

    def __init__(self,
                 route_map: RouteMap,
                 *,
                 origin: str,
                 destination: str,
                 fuel: FuelProfile,
                 evolution: Optional[EvolutionSettings] = None):
        self.route_map = route_map
        self.evolution = evolution or EvolutionSettings()
        _validate_evolution(self.evolution)

        if not route_map.segments:
            raise RouteConfigurationError(f"Map '{route_map.name}' has no segments.")

        self.index = build_branch_index(route_map)
        if not self.index.has_origin(origin):
            raise RouteConfigurationError(
                f"Origin '{origin}' has no outgoing segment in map '{route_map.name}'."
            )
        if not self.index.has_destination(destination):
            raise RouteConfigurationError(
                f"Destination '{destination}' has no incoming segment in map '{route_map.name}'."
            )

        self.decoder = PathDecoder(self.index)
        self.fitness = FuelCostFitness(
            self.decoder, origin=origin, destination=destination, fuel=fuel
        )
        self.rng = np.random.default_rng(self.evolution.random_seed)
        self.operators = GeneticOperators(
            [self.decoder.gene_bounds(i) for i in range(self.decoder.genome_length)],
            mutation_rate=self.evolution.mutation_rate,
            crossover_rate=self.evolution.crossover_rate,
            tournament_size=self.evolution.tournament_size,
            rng=self.rng,
        )
        self.population_size = len(route_map.segments) ** 2
        self.generations_run = 0

    def evaluate(self, ind: Individual) -> Individual:
        evaluation = self.fitness.evaluate(ind.genes)
        ind.fitness = evaluation.fitness
        ind.evaluation = evaluation
        return ind

    def initialize_population(self) -> List[Individual]:
        return [self.evaluate(ind)
                for ind in self.operators.random_population(self.population_size)]

    def evolve(self, population: List[Individual]) -> List[Individual]:
        """Produce and score the next generation."""
        ranked = sorted(population, key=lambda ind: ind.fitness, reverse=True)
        elite_n = min(self.evolution.elite_count, len(ranked))
        new_pop = [ranked[i].copy() for i in range(elite_n)]

        while len(new_pop) < self.population_size:
            p1 = self.operators.tournament_select(population)
            p2 = self.operators.tournament_select(population)
            c1, c2 = self.operators.crossover(p1, p2)
            new_pop.append(self.evaluate(self.operators.mutate(c1)))
            if len(new_pop) < self.population_size:
                new_pop.append(self.evaluate(self.operators.mutate(c2)))

        return new_pop

    def run(self) -> Optional[RouteResult]:
        """
        Evolve the population and return the best route found.

        Returns:
            The cheapest route of the final population, or ``None`` when no
            individual reaches the destination.
        """
        started = time.monotonic()
        population = self.initialize_population()
        self.generations_run = 0

        for gen in range(self.evolution.max_generations):
            population = self.evolve(population)
            self.generations_run += 1
            elapsed_ms = (time.monotonic() - started) * 1000.0
            if logger.isEnabledFor(logging.DEBUG):
                best_fitness = max(ind.fitness for ind in population)
                logger.debug(
                    f"Map '{self.route_map.name}' generation {gen + 1}: "
                    f"best fitness {best_fitness!r} after {elapsed_ms:.0f} ms"
                )
            if elapsed_ms > self.evolution.timeout_ms:
                logger.info(
                    f"Map '{self.route_map.name}': time budget of {self.evolution.timeout_ms} ms "
                    f"exhausted after {self.generations_run} generations"
                )
                break

        fittest = self.fittest(population)
        elapsed_ms = (time.monotonic() - started) * 1000.0
        if fittest.evaluation is None or not fittest.evaluation.reaches_destination:
            logger.info(
                f"Map '{self.route_map.name}': no route from '{self.fitness.origin}' to "
                f"'{self.fitness.destination}' after {self.generations_run} generations ({elapsed_ms:.0f} ms)"
            )
            return None

        result = self._to_result(fittest)
        logger.info(
            f"Map '{self.route_map.name}': best cost {result.total_cost:.2f} via "
            f"{' -> '.join(result.waypoints)} after {self.generations_run} generations ({elapsed_ms:.0f} ms)"
        )
        return result

    @staticmethod
    def fittest(population: Sequence[Individual]) -> Individual:
        return max(population, key=lambda ind: ind.fitness)

    def _to_result(self, ind: Individual) -> RouteResult:
        segments = [self.index.segment(segment_id) for segment_id in ind.segment_ids]
        waypoints = [segment.origin for segment in segments]
        waypoints.append(segments[-1].destination)
        return RouteResult(
            segments=segments,
            waypoints=waypoints,
            total_cost=route_cost(segments, self.fitness.fuel),
        )


def _validate_evolution(evolution: EvolutionSettings) -> None:
    if evolution.max_generations < 0:
        raise RouteConfigurationError("Maximum generations cannot be negative.")
    if evolution.timeout_ms < 0:
        raise RouteConfigurationError("Timeout cannot be negative.")
    if evolution.tournament_size < 1:
        raise RouteConfigurationError("Tournament size must be at least 1.")
    if evolution.elite_count < 0:
        raise RouteConfigurationError("Elite count cannot be negative.")
    if not 0.0 <= evolution.crossover_rate <= 1.0:
        raise RouteConfigurationError("Crossover rate must be between 0 and 1.")
    if not 0.0 <= evolution.mutation_rate <= 1.0:
        raise RouteConfigurationError("Mutation rate must be between 0 and 1.")
