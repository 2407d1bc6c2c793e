"""
Genetic Operations Module

Core genetic algorithm operations: single-point crossover and bit-flip
mutation on binary individuals.
"""

import random
from typing import Tuple

from ga_constants import DEFAULT_FITNESS
from ga_exceptions import CrossoverError, MutationError, validate_probability
from ga_components.genome import Individual


class GeneticOperations:
    """
    Crossover and mutation driven by one shared random source.
    """

    def __init__(self, rng: random.Random = None):
        """
        Initialize genetic operations.

        Args:
            rng: Random source for crossover points and mutation draws
        """
        self.rng = rng or random.Random()

        # Statistics tracking
        self.crossover_count = 0
        self.mutation_count = 0
        self.bits_flipped = 0

    def crossover_single_point(self, parent_a: Individual,
                               parent_b: Individual) -> Tuple[Individual, Individual]:
        """
        Perform single-point crossover.

        A point k is drawn uniformly from [0, gene_count). Child A takes
        parent B's genes at positions 0..k and parent A's after k; child B is
        the complement. Genes are copied, so children never share gene objects
        with their parents or with each other.

        Args:
            parent_a: First parent
            parent_b: Second parent

        Returns:
            Two new individuals with default fitness and no elite flag

        Raises:
            CrossoverError: If the parents have different gene counts or no genes
        """
        gene_count = parent_a.gene_count
        if gene_count != parent_b.gene_count:
            raise CrossoverError(
                f"Parents must have the same gene count ({gene_count} != {parent_b.gene_count})",
                parent1_name=parent_a.short_id, parent2_name=parent_b.short_id)
        if gene_count == 0:
            raise CrossoverError("Cannot cross over empty individuals",
                                 parent1_name=parent_a.short_id, parent2_name=parent_b.short_id)

        point = self.rng.randrange(gene_count)
        child_a = Individual()
        child_b = Individual()

        for i in range(gene_count):
            if i <= point:
                child_a.append_gene(parent_b.genes[i].copy())
                child_b.append_gene(parent_a.genes[i].copy())
            else:
                child_a.append_gene(parent_a.genes[i].copy())
                child_b.append_gene(parent_b.genes[i].copy())

        self.crossover_count += 1
        return child_a, child_b

    def mutate(self, individual: Individual, probability: float) -> int:
        """
        Apply independent bit-flip mutation in place.

        Elites are left untouched. Otherwise fitness is reset and every gene
        is replaced by its flipped counterpart with the given probability.

        Args:
            individual: Individual to mutate
            probability: Per-gene flip probability in [0, 1]

        Returns:
            Number of genes flipped

        Raises:
            MutationError: If probability is outside [0, 1]
        """
        validate_probability(probability, "Mutation probability", MutationError)

        if individual.is_elite:
            return 0

        individual.fitness = DEFAULT_FITNESS
        flipped = 0
        for i in range(individual.gene_count):
            if self.rng.random() < probability:
                individual.replace_gene(i, individual.genes[i].flipped())
                flipped += 1

        if flipped:
            self.mutation_count += 1
            self.bits_flipped += flipped
        return flipped

    def get_statistics(self) -> dict:
        """Get statistics about genetic operations performed."""
        return {
            'crossover_count': self.crossover_count,
            'mutation_count': self.mutation_count,
            'bits_flipped': self.bits_flipped
        }

    def reset_statistics(self):
        """Reset operation counters."""
        self.crossover_count = 0
        self.mutation_count = 0
        self.bits_flipped = 0
