"""
Selection and Genetic Operator Tests

Tests tournament selection, elite tagging, single-point crossover and
bit-flip mutation, using scripted random draws where the exact outcome
matters.
"""

import os
import sys
import random
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from test_fixtures import TestFixtures, ScriptedRandom
from ga_components.genetic_operations import GeneticOperations
from ga_components.genome import Individual
from ga_components.population_management import Population
from ga_components.selection import SelectionMethods
from ga_exceptions import CrossoverError, MutationError, SelectionError, InvalidArgument
from ga_logging import setup_logging


class TestTournamentSelection(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)
        self.population = TestFixtures.population_with_fitness([0.5, 0.5, 0.9, 0.1])

    def test_fitter_draw_wins(self):
        rng = ScriptedRandom(randrange_values=[0, 2])
        winner = SelectionMethods(rng).tournament_selection(self.population)
        self.assertIs(winner, self.population[2])
        self.assertEqual(rng.randrange_calls, [4, 4])

    def test_first_seen_wins_ties(self):
        rng = ScriptedRandom(randrange_values=[1, 0])
        winner = SelectionMethods(rng).tournament_selection(self.population)
        self.assertIs(winner, self.population[1])

    def test_draws_with_replacement(self):
        rng = ScriptedRandom(randrange_values=[3, 3])
        winner = SelectionMethods(rng).tournament_selection(self.population)
        self.assertIs(winner, self.population[3])

    def test_binary_tournament_returns_pair(self):
        rng = ScriptedRandom(randrange_values=[0, 3, 2, 1])
        selection = SelectionMethods(rng)
        parent_a, parent_b = selection.binary_tournament_selection(self.population)
        self.assertIs(parent_a, self.population[0])
        self.assertIs(parent_b, self.population[2])
        self.assertEqual(selection.get_statistics()['tournaments_held'], 2)

    def test_winner_belongs_to_population(self):
        selection = SelectionMethods(random.Random(11))
        for _ in range(50):
            self.assertIn(selection.tournament_selection(self.population), self.population.individuals)

    def test_empty_population_rejected(self):
        with self.assertRaises(SelectionError):
            SelectionMethods(random.Random(1)).tournament_selection(Population())

    def test_invalid_tournament_size(self):
        with self.assertRaises(SelectionError):
            SelectionMethods(random.Random(1), tournament_size=0)


class TestElitism(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_elite_count_rounds_then_bumps_to_even(self):
        self.assertEqual(SelectionMethods.elite_count(10, 0.1), 2)
        self.assertEqual(SelectionMethods.elite_count(10, 0.25), 2)
        self.assertEqual(SelectionMethods.elite_count(10, 0.3), 4)
        self.assertEqual(SelectionMethods.elite_count(10, 0.0), 0)
        self.assertEqual(SelectionMethods.elite_count(50, 0.05), 2)
        self.assertEqual(SelectionMethods.elite_count(1000, 0.02), 20)

    def test_elite_count_is_always_even(self):
        for size in range(2, 40, 2):
            for percent in (0.0, 0.05, 0.1, 0.15, 0.33, 0.5, 1.0):
                self.assertEqual(SelectionMethods.elite_count(size, percent) % 2, 0)

    def test_elite_count_rejects_bad_percentage(self):
        with self.assertRaises(SelectionError):
            SelectionMethods.elite_count(10, 1.5)
        with self.assertRaises(SelectionError):
            SelectionMethods.elite_count(10, -0.1)

    def test_tag_elites_marks_fittest(self):
        population = TestFixtures.population_with_fitness([0.1, 0.9, 0.5, 0.9, 0.3])
        tagged = SelectionMethods(random.Random(1)).tag_elites(population, 0.4)
        self.assertEqual(tagged, 2)
        self.assertEqual(population.elites, [population[1], population[3]])

    def test_tag_elites_ties_follow_population_order(self):
        population = TestFixtures.population_with_fitness([0.5, 0.5, 0.5, 0.5])
        SelectionMethods(random.Random(1)).tag_elites(population, 0.5)
        self.assertEqual([individual.is_elite for individual in population], [True, True, False, False])

    def test_tag_elites_caps_at_population_size(self):
        population = TestFixtures.population_with_fitness([0.1, 0.2, 0.3, 0.4, 0.5])
        tagged = SelectionMethods(random.Random(1)).tag_elites(population, 1.0)
        self.assertEqual(tagged, 5)
        self.assertTrue(all(individual.is_elite for individual in population))

    def test_zero_percentage_tags_nothing(self):
        population = TestFixtures.population_with_fitness([0.1, 0.2])
        self.assertEqual(SelectionMethods(random.Random(1)).tag_elites(population, 0.0), 0)
        self.assertEqual(population.elites, [])


class TestCrossover(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)
        self.parent_a = Individual.from_bit_string('000000')
        self.parent_b = Individual.from_bit_string('111111')

    def test_prefix_through_point_comes_from_other_parent(self):
        operations = GeneticOperations(ScriptedRandom(randrange_values=[2]))
        child_a, child_b = operations.crossover_single_point(self.parent_a, self.parent_b)
        self.assertEqual(child_a.bit_string, '111000')
        self.assertEqual(child_b.bit_string, '000111')

    def test_point_at_zero_swaps_first_gene(self):
        operations = GeneticOperations(ScriptedRandom(randrange_values=[0]))
        child_a, child_b = operations.crossover_single_point(self.parent_a, self.parent_b)
        self.assertEqual(child_a.bit_string, '100000')
        self.assertEqual(child_b.bit_string, '011111')

    def test_point_at_last_gene_swaps_everything(self):
        operations = GeneticOperations(ScriptedRandom(randrange_values=[5]))
        child_a, child_b = operations.crossover_single_point(self.parent_a, self.parent_b)
        self.assertEqual(child_a.bit_string, '111111')
        self.assertEqual(child_b.bit_string, '000000')

    def test_point_drawn_over_gene_count(self):
        rng = ScriptedRandom(randrange_values=[1])
        GeneticOperations(rng).crossover_single_point(self.parent_a, self.parent_b)
        self.assertEqual(rng.randrange_calls, [6])

    def test_children_are_complementary(self):
        parent_a = Individual.from_bit_string('0110100111')
        parent_b = Individual.from_bit_string('1100011010')
        operations = GeneticOperations(random.Random(5))
        for _ in range(20):
            child_a, child_b = operations.crossover_single_point(parent_a, parent_b)
            self.assertEqual(child_a.gene_count, 10)
            self.assertEqual(child_b.gene_count, 10)
            for i in range(10):
                pair = {child_a.genes[i].value, child_b.genes[i].value}
                self.assertEqual(pair, {parent_a.genes[i].value, parent_b.genes[i].value})

    def test_children_have_fresh_state(self):
        self.parent_a.fitness = 0.7
        self.parent_a.is_elite = True
        child_a, child_b = GeneticOperations(random.Random(1)).crossover_single_point(
            self.parent_a, self.parent_b)
        for child in (child_a, child_b):
            self.assertEqual(child.fitness, 0.0)
            self.assertFalse(child.is_elite)

    def test_children_do_not_share_genes(self):
        child_a, child_b = GeneticOperations(random.Random(1)).crossover_single_point(
            self.parent_a, self.parent_b)
        parent_gene_ids = {gene.id for gene in self.parent_a.genes + self.parent_b.genes}
        child_gene_ids = {gene.id for gene in child_a.genes + child_b.genes}
        self.assertFalse(parent_gene_ids & child_gene_ids)

    def test_parents_are_unchanged(self):
        GeneticOperations(random.Random(1)).crossover_single_point(self.parent_a, self.parent_b)
        self.assertEqual(self.parent_a.bit_string, '000000')
        self.assertEqual(self.parent_b.bit_string, '111111')

    def test_self_crossover_reproduces_parent(self):
        parent = Individual.from_bit_string('101100')
        child_a, child_b = GeneticOperations(random.Random(2)).crossover_single_point(parent, parent)
        self.assertEqual(child_a.bit_string, '101100')
        self.assertEqual(child_b.bit_string, '101100')

    def test_mismatched_parents_rejected(self):
        with self.assertRaises(CrossoverError):
            GeneticOperations(random.Random(1)).crossover_single_point(
                self.parent_a, Individual.from_bit_string('1111'))

    def test_empty_parents_rejected(self):
        with self.assertRaises(CrossoverError):
            GeneticOperations(random.Random(1)).crossover_single_point(Individual(), Individual())


class TestMutation(unittest.TestCase):

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)
        self.operations = GeneticOperations(random.Random(9))

    def test_zero_probability_changes_nothing(self):
        individual = Individual.from_bit_string('10110010')
        genes_before = list(individual.genes)
        flipped = self.operations.mutate(individual, 0.0)
        self.assertEqual(flipped, 0)
        self.assertEqual(individual.bit_string, '10110010')
        for before, after in zip(genes_before, individual.genes):
            self.assertIs(before, after)

    def test_full_probability_flips_every_gene(self):
        individual = Individual.from_bit_string('10110010')
        flipped = self.operations.mutate(individual, 1.0)
        self.assertEqual(flipped, 8)
        self.assertEqual(individual.bit_string, '01001101')

    def test_mutation_resets_fitness(self):
        individual = Individual.from_bit_string('1100')
        individual.fitness = 0.9
        self.operations.mutate(individual, 0.0)
        self.assertEqual(individual.fitness, 0.0)

    def test_elites_are_skipped(self):
        individual = Individual.from_bit_string('1100')
        individual.fitness = 0.9
        individual.is_elite = True
        self.assertEqual(self.operations.mutate(individual, 1.0), 0)
        self.assertEqual(individual.bit_string, '1100')
        self.assertEqual(individual.fitness, 0.9)

    def test_flip_uses_per_gene_draws(self):
        rng = ScriptedRandom(random_values=[0.01, 0.5, 0.04, 0.9])
        individual = Individual.from_bit_string('0000')
        flipped = GeneticOperations(rng).mutate(individual, 0.05)
        self.assertEqual(flipped, 2)
        self.assertEqual(individual.bit_string, '1010')

    def test_flip_rate_roughly_matches_probability(self):
        individual = Individual(1000, random.Random(4))
        flipped = self.operations.mutate(individual, 0.1)
        self.assertGreater(flipped, 50)
        self.assertLess(flipped, 150)

    def test_statistics(self):
        self.operations.mutate(Individual.from_bit_string('0000'), 1.0)
        stats = self.operations.get_statistics()
        self.assertEqual(stats['mutation_count'], 1)
        self.assertEqual(stats['bits_flipped'], 4)
        self.operations.reset_statistics()
        self.assertEqual(self.operations.get_statistics()['bits_flipped'], 0)

    def test_invalid_probability_rejected(self):
        individual = Individual.from_bit_string('0000')
        for probability in (-0.1, 1.1, True, '0.5'):
            with self.assertRaises(MutationError):
                self.operations.mutate(individual, probability)

    def test_mutation_error_is_invalid_argument(self):
        with self.assertRaises(InvalidArgument):
            self.operations.mutate(Individual.from_bit_string('00'), 2.0)


if __name__ == '__main__':
    unittest.main()
