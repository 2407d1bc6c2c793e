"""
GA Components Module

Modular components for the Genetic Algorithm implementation.
Each component handles a specific aspect of the GA process:

- Gene, Individual: Binary genotype data model
- BinaryDomainEncoder: Maps bit strings to real-valued parameters
- FitnessFunction, SchafferF6: Fitness contract and reference landscape
- EvaluationEngine: Applies a fitness function to a population
- Population: Individuals of one generation plus fitness statistics
- SelectionMethods: Tournament selection and elite tagging
- GeneticOperations: Single-point crossover and bit-flip mutation
- GAReporter: Generation reports and run summaries

Usage:
    from ga_components import Population, SchafferF6
    from ga_components.selection import SelectionMethods
"""

from .genome import Gene, Individual
from .parameter_encoding import BinaryDomainEncoder
from .evaluation import FitnessFunction, SchafferF6, EvaluationEngine
from .population_management import Population
from .selection import SelectionMethods
from .genetic_operations import GeneticOperations
from .reporting import GAReporter, population_metrics

__all__ = [
    'Gene',
    'Individual',
    'BinaryDomainEncoder',
    'FitnessFunction',
    'SchafferF6',
    'EvaluationEngine',
    'Population',
    'SelectionMethods',
    'GeneticOperations',
    'GAReporter',
    'population_metrics'
]

__version__ = '1.0.0'
