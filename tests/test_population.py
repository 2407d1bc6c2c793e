"""
Population Tests

Tests population construction, fitness statistics and top-N ranking.
"""

import os
import sys
import random
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from test_fixtures import TestFixtures
from ga_components.population_management import Population
from ga_exceptions import InvalidArgument, PopulationError
from ga_logging import setup_logging


class TestPopulationConstruction(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_random_population_shape(self):
        population = Population.random(10, 8, random.Random(3))
        self.assertEqual(population.size, 10)
        self.assertEqual(len(population), 10)
        self.assertEqual(population.gene_count, 8)
        for individual in population:
            self.assertEqual(individual.gene_count, 8)
            self.assertEqual(individual.fitness, 0.0)
            self.assertFalse(individual.is_elite)

    def test_individuals_are_distinct_objects(self):
        population = Population.random(6, 4, random.Random(3))
        self.assertEqual(len({individual.id for individual in population}), 6)

    def test_invalid_sizes_rejected(self):
        with self.assertRaises(InvalidArgument):
            Population.random(3, 4)
        with self.assertRaises(InvalidArgument):
            Population.random(0, 4)
        with self.assertRaises(InvalidArgument):
            Population.random(4, 5)

    def test_empty_population(self):
        population = Population()
        self.assertEqual(population.size, 0)
        self.assertEqual(population.top(5), [])
        self.assertEqual(population.diversity(), 0.0)

    def test_add_keeps_order(self):
        population = TestFixtures.population_from_bit_strings(['00', '01', '10'])
        self.assertEqual([individual.bit_string for individual in population], ['00', '01', '10'])
        self.assertEqual(population[1].bit_string, '01')


class TestPopulationStatistics(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)
        self.population = TestFixtures.population_with_fitness([0.2, 0.8, 0.5, 0.5])

    def test_fitness_statistics(self):
        self.assertAlmostEqual(self.population.total_fitness, 2.0)
        self.assertAlmostEqual(self.population.mean_fitness, 0.5)
        self.assertEqual(self.population.min_fitness, 0.2)
        self.assertEqual(self.population.max_fitness, 0.8)

    def test_statistics_bounds(self):
        population = TestFixtures.population_with_fitness([0.31, 0.07, 0.99, 0.42, 0.42, 0.6])
        self.assertLessEqual(population.min_fitness, population.mean_fitness)
        self.assertLessEqual(population.mean_fitness, population.max_fitness)
        self.assertAlmostEqual(population.mean_fitness * population.size, population.total_fitness)

    def test_single_fitness_value(self):
        population = TestFixtures.population_with_fitness([0.4, 0.4])
        self.assertEqual(population.min_fitness, population.max_fitness)
        self.assertAlmostEqual(population.mean_fitness, 0.4)

    def test_empty_population_statistics_raise(self):
        empty = Population()
        with self.assertRaises(PopulationError):
            empty.total_fitness
        with self.assertRaises(PopulationError):
            empty.mean_fitness
        with self.assertRaises(PopulationError):
            empty.max_fitness
        with self.assertRaises(PopulationError):
            empty.min_fitness

    def test_top_orders_by_fitness_descending(self):
        top = self.population.top(4)
        self.assertEqual([individual.fitness for individual in top], [0.8, 0.5, 0.5, 0.2])

    def test_top_keeps_population_order_on_ties(self):
        top = self.population.top(3)
        self.assertIs(top[1], self.population[2])
        self.assertIs(top[2], self.population[3])

    def test_top_with_fewer_individuals(self):
        self.assertEqual(len(self.population.top(10)), 4)
        self.assertEqual(len(self.population.top_five), 4)

    def test_top_zero_and_negative(self):
        self.assertEqual(self.population.top(0), [])
        with self.assertRaises(InvalidArgument):
            self.population.top(-1)

    def test_best(self):
        self.assertIs(self.population.best(), self.population[1])

    def test_statistics_use_cached_fitness(self):
        self.population[0].fitness = 1.0
        self.assertEqual(self.population.max_fitness, 1.0)


class TestPopulationAnalysis(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_diversity(self):
        population = TestFixtures.population_from_bit_strings(['0101', '0101', '1111', '0000'])
        self.assertAlmostEqual(population.diversity(), 0.75)

    def test_find_duplicates(self):
        population = TestFixtures.population_from_bit_strings(['0101', '1111', '0101', '0000'])
        self.assertEqual(population.find_duplicates(), {'0101': [0, 2]})

    def test_elites(self):
        population = TestFixtures.population_with_fitness([0.1, 0.2, 0.3, 0.4])
        population[2].is_elite = True
        self.assertEqual(population.elites, [population[2]])

    def test_get_statistics(self):
        population = TestFixtures.population_with_fitness([0.25, 0.75])
        stats = population.get_statistics()
        self.assertEqual(stats['size'], 2)
        self.assertAlmostEqual(stats['mean_fitness'], 0.5)
        self.assertEqual(stats['elite_count'], 0)


if __name__ == '__main__':
    unittest.main()
