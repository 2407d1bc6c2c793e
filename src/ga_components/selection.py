"""
Selection Methods Module

Parent selection by tournament and survivor selection by elitism.

Features:
- Tournament selection with replacement (first-seen wins ties)
- Binary tournament parent pairs
- Elite tagging with even elite counts
"""

import random
from typing import Tuple

from ga_constants import GAConstants
from ga_exceptions import SelectionError, validate_probability
from ga_components.genome import Individual


class SelectionMethods:
    """
    Selection operators driven by one shared random source.
    """

    def __init__(self, rng: random.Random = None, tournament_size: int = GAConstants.TOURNAMENT_SIZE):
        """
        Initialize selection methods.

        Args:
            rng: Random source for tournament draws
            tournament_size: Number of individuals drawn per tournament
        """
        if tournament_size < 1:
            raise SelectionError(f"Tournament size ({tournament_size}) must be at least 1",
                                 selection_type='tournament')
        self.rng = rng or random.Random()
        self.tournament_size = tournament_size

        self.selection_stats = {
            'tournaments_held': 0,
            'elites_tagged': 0
        }

    def tournament_selection(self, population, tournament_size: int = None) -> Individual:
        """
        Select an individual using tournament selection.

        Draws ``tournament_size`` individuals uniformly with replacement and
        returns the fittest. On equal fitness the earlier draw wins.

        Args:
            population: Evaluated population
            tournament_size: Tournament size (uses instance default if None)

        Returns:
            The tournament winner
        """
        if tournament_size is None:
            tournament_size = self.tournament_size
        if tournament_size < 1:
            raise SelectionError(f"Tournament size ({tournament_size}) must be at least 1",
                                 selection_type='tournament')

        individuals = population.individuals if hasattr(population, 'individuals') else list(population)
        if not individuals:
            raise SelectionError("Cannot select from an empty population",
                                 population_size=0, selection_type='tournament')

        best = None
        for _ in range(tournament_size):
            candidate = individuals[self.rng.randrange(len(individuals))]
            if best is None or candidate.fitness > best.fitness:
                best = candidate

        self.selection_stats['tournaments_held'] += 1
        return best

    def binary_tournament_selection(self, population) -> Tuple[Individual, Individual]:
        """
        Select a parent pair with two independent binary tournaments.

        Both parents may be the same individual.
        """
        parent_a = self.tournament_selection(population, GAConstants.TOURNAMENT_SIZE)
        parent_b = self.tournament_selection(population, GAConstants.TOURNAMENT_SIZE)
        return parent_a, parent_b

    @staticmethod
    def elite_count(population_size: int, percent: float) -> int:
        """
        Number of elites for a population: round(size * percent), bumped to
        the next even number when odd.
        """
        validate_probability(percent, "Elitism percentage", SelectionError)
        selected = round(population_size * percent)
        if selected % 2 != 0:
            selected += 1
        return selected

    def tag_elites(self, population, percent: float) -> int:
        """
        Mark the fittest individuals as elite.

        Ranking is by fitness descending with ties kept in population order.
        Flags of the other individuals are left untouched; the evaluation step
        clears them once per generation.

        Args:
            population: Evaluated population
            percent: Elitism percentage in [0, 1]

        Returns:
            Number of individuals tagged
        """
        selected = min(self.elite_count(population.size, percent), population.size)
        for individual in population.top(selected):
            individual.is_elite = True

        self.selection_stats['elites_tagged'] += selected
        return selected

    def get_statistics(self) -> dict:
        """Get selection statistics."""
        return self.selection_stats.copy()

    def reset_statistics(self):
        """Reset selection statistics."""
        self.selection_stats = {
            'tournaments_held': 0,
            'elites_tagged': 0
        }
