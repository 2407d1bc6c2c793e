"""
Population Management Module

Holds the individuals of one generation and derives fitness statistics
from their cached fitness values.

Features:
- Random population initialization
- Total, mean, min and max fitness
- Stable top-N ranking
- Diversity and duplicate analysis
"""

import random
from typing import Dict, Iterable, List

from ga_constants import GAConstants, TOP_N
from ga_exceptions import InvalidArgument, PopulationError
from ga_components.genome import Individual, validate_gene_count


class Population:
    """
    Ordered collection of individuals.

    Statistics read the cached fitness values, so the population must have
    been evaluated before they are meaningful.
    """

    def __init__(self, individuals: Iterable[Individual] = None):
        self.individuals: List[Individual] = list(individuals) if individuals is not None else []

    @classmethod
    def random(cls, size: int, gene_count: int, rng: random.Random = None) -> "Population":
        """
        Create a population of random individuals.

        Args:
            size: Number of individuals, must be even and at least 2
            gene_count: Genes per individual, must be even and at least 2
            rng: Random source shared by all gene draws

        Raises:
            InvalidArgument: If size or gene_count is invalid
        """
        validate_population_size(size)
        validate_gene_count(gene_count)
        rng = rng or random
        return cls(Individual(gene_count, rng) for _ in range(size))

    @property
    def size(self) -> int:
        return len(self.individuals)

    @property
    def gene_count(self) -> int:
        self._require_individuals('gene_count')
        return self.individuals[0].gene_count

    def add(self, individual: Individual):
        self.individuals.append(individual)

    def extend(self, individuals: Iterable[Individual]):
        self.individuals.extend(individuals)

    @property
    def elites(self) -> List[Individual]:
        return [individual for individual in self.individuals if individual.is_elite]

    # Statistics -----------------------------------------------------------

    @property
    def total_fitness(self) -> float:
        self._require_individuals('total_fitness')
        return sum(individual.fitness for individual in self.individuals)

    @property
    def mean_fitness(self) -> float:
        return self.total_fitness / self.size

    @property
    def min_fitness(self) -> float:
        self._require_individuals('min_fitness')
        return min(individual.fitness for individual in self.individuals)

    @property
    def max_fitness(self) -> float:
        self._require_individuals('max_fitness')
        return max(individual.fitness for individual in self.individuals)

    def top(self, n: int = TOP_N) -> List[Individual]:
        """
        Return the n fittest individuals, best first.

        Ties keep population order. Returns every individual when the
        population holds fewer than n.
        """
        if n < 0:
            raise InvalidArgument(f"n ({n}) must not be negative")
        ranked = sorted(self.individuals, key=lambda individual: individual.fitness, reverse=True)
        return ranked[:n]

    @property
    def top_five(self) -> List[Individual]:
        return self.top(TOP_N)

    def best(self) -> Individual:
        self._require_individuals('best')
        return self.top(1)[0]

    def diversity(self) -> float:
        """Share of distinct genotypes in the population (0.0 to 1.0)."""
        if not self.individuals:
            return 0.0
        signatures = {individual.bit_string for individual in self.individuals}
        return len(signatures) / len(self.individuals)

    def find_duplicates(self) -> Dict[str, List[int]]:
        """Map each repeated genotype to the indices carrying it."""
        signature_map: Dict[str, List[int]] = {}
        for i, individual in enumerate(self.individuals):
            signature_map.setdefault(individual.bit_string, []).append(i)
        return {sig: indices for sig, indices in signature_map.items() if len(indices) > 1}

    def get_statistics(self) -> dict:
        return {
            'size': self.size,
            'total_fitness': self.total_fitness,
            'mean_fitness': self.mean_fitness,
            'min_fitness': self.min_fitness,
            'max_fitness': self.max_fitness,
            'elite_count': len(self.elites),
            'diversity': self.diversity()
        }

    def _require_individuals(self, statistic: str):
        if not self.individuals:
            raise PopulationError(f"Cannot compute {statistic} of an empty population")

    def __iter__(self):
        return iter(self.individuals)

    def __len__(self) -> int:
        return len(self.individuals)

    def __getitem__(self, index) -> Individual:
        return self.individuals[index]

    def __repr__(self) -> str:
        return f"Population(size={self.size})"


def validate_population_size(size: int) -> int:
    """Raise InvalidArgument unless size is an even integer >= 2."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgument(f"Population size must be an integer, got {size!r}")
    if size < GAConstants.MIN_POPULATION_SIZE:
        raise InvalidArgument(f"Population size ({size}) must be at least {GAConstants.MIN_POPULATION_SIZE}")
    if size % 2 != 0:
        raise InvalidArgument(f"Population size ({size}) must be even")
    return size
