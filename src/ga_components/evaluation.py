"""
Evaluation Module

Fitness functions and the engine that applies them to a population.

Features:
- Abstract fitness function contract (evaluate + decode)
- Schaffer F6 reference landscape
- Sequential or thread-pooled evaluation with in-order assignment
- Memory sampling and evaluation statistics
"""

import concurrent.futures
import math
import time
from abc import ABC, abstractmethod
from typing import List, Tuple

import psutil

from ga_constants import LandscapeConstants, bytes_to_mb
from ga_exceptions import InvalidArgument, validate_fitness
from ga_logging import get_logger
from ga_components.genome import Individual
from ga_components.parameter_encoding import BinaryDomainEncoder


class FitnessFunction(ABC):
    """
    Contract for fitness functions. Higher fitness is always better.

    Implementations must be deterministic for a fixed genotype, free of side
    effects and defined for every genotype the solver can produce, because
    the engine may call them concurrently on different individuals.
    """

    @abstractmethod
    def evaluate(self, individual: Individual) -> float:
        """Return the scalar fitness of an individual."""

    @abstractmethod
    def decode(self, individual: Individual) -> List[float]:
        """Return the real-valued phenotype encoded by an individual."""

    @property
    def name(self) -> str:
        return type(self).__name__


class SchafferF6(FitnessFunction):
    """
    Schaffer's binary F6 landscape, inverted so that the global optimum is 1.

    The genotype's first half encodes x and the second half y, both mapped
    into [-100, 100]. The surface has concentric rings of local optima around
    the peak at the origin.
    """

    def __init__(self, encoder: BinaryDomainEncoder = None):
        self.encoder = encoder or BinaryDomainEncoder(
            arity=LandscapeConstants.ARITY,
            domain_width=LandscapeConstants.DOMAIN_WIDTH,
            domain_offset=LandscapeConstants.DOMAIN_OFFSET
        )

    def decode(self, individual: Individual) -> List[float]:
        return self.encoder.decode(individual.bit_string)

    def evaluate(self, individual: Individual) -> float:
        x, y = self.decode(individual)
        return self.evaluate_point(x, y)

    @staticmethod
    def evaluate_point(x: float, y: float) -> float:
        squared = x * x + y * y
        numerator = math.sin(math.sqrt(squared)) ** 2
        denominator = (1 + LandscapeConstants.SCALE * squared) ** 2
        return 1 - (0.5 + (numerator - 0.5) / denominator)


class EvaluationEngine:
    """
    Applies a fitness function to every individual of a population.

    Evaluations may run on a thread pool, but results are always written
    back in population order so the outcome matches a sequential pass.
    """

    def __init__(self, fitness_function: FitnessFunction, max_workers: int = 1):
        """
        Initialize evaluation engine.

        Args:
            fitness_function: Function used to score individuals
            max_workers: Thread count; 1 evaluates sequentially
        """
        if not isinstance(fitness_function, FitnessFunction):
            raise InvalidArgument(
                f"fitness_function must implement FitnessFunction, got {type(fitness_function).__name__}")
        if max_workers < 1:
            raise InvalidArgument(f"max_workers ({max_workers}) must be at least 1")

        self.fitness_function = fitness_function
        self.max_workers = max_workers
        self.logger = get_logger("EvaluationEngine")
        self._process = psutil.Process()

        self.stats = {
            'evaluations_performed': 0,
            'populations_evaluated': 0,
            'total_evaluation_time': 0.0,
            'peak_memory_mb': 0.0
        }

    def evaluate_fitness(self, individual: Individual) -> float:
        """Evaluate and validate the fitness of one individual."""
        fitness = self.fitness_function.evaluate(individual)
        return validate_fitness(fitness, individual.short_id)

    def evaluate_population(self, population) -> Tuple[List[float], float]:
        """
        Set fitness and clear the elite flag on every individual.

        Args:
            population: Population (or sequence of individuals) to evaluate

        Returns:
            Tuple of (fitness values in population order, peak RSS in MB)
        """
        individuals = list(population)
        start_time = time.time()

        if self.max_workers > 1 and len(individuals) > 1:
            self.logger.debug("Starting threaded evaluation",
                              workers=self.max_workers, tasks=len(individuals))
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                fitness_values = list(executor.map(self.evaluate_fitness, individuals))
        else:
            fitness_values = [self.evaluate_fitness(individual) for individual in individuals]

        for individual, fitness in zip(individuals, fitness_values):
            individual.fitness = fitness
            individual.is_elite = False

        peak_memory = self._sample_memory()
        self.stats['evaluations_performed'] += len(individuals)
        self.stats['populations_evaluated'] += 1
        self.stats['total_evaluation_time'] += time.time() - start_time

        return fitness_values, peak_memory

    def _sample_memory(self) -> float:
        try:
            memory_mb = bytes_to_mb(self._process.memory_info().rss)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return self.stats['peak_memory_mb']
        self.stats['peak_memory_mb'] = max(self.stats['peak_memory_mb'], memory_mb)
        return memory_mb

    def get_statistics(self) -> dict:
        """Get evaluation statistics."""
        return self.stats.copy()
