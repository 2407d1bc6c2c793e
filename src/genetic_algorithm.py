import random
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import List, Optional

from tqdm import tqdm

from ga_config import GAConfig
from ga_exceptions import GAException, InvalidArgument
from ga_logging import get_logger
from ga_components.evaluation import EvaluationEngine
from ga_components.genome import Individual
from ga_components.genetic_operations import GeneticOperations
from ga_components.population_management import Population, validate_population_size
from ga_components.reporting import GAReporter, population_metrics
from ga_components.selection import SelectionMethods


class SolverState(Enum):
    INITIALIZED = "initialized"
    EVALUATING = "evaluating"
    BREEDING = "breeding"
    MUTATING = "mutating"
    TERMINATED = "terminated"


@dataclass
class GenerationStats:
    """Fitness statistics of one evaluated generation."""
    generation: int
    total_fitness: float
    mean_fitness: float
    min_fitness: float
    max_fitness: float
    elite_count: int
    diversity: float
    elapsed_seconds: float
    peak_memory_mb: float

    def to_dict(self) -> dict:
        return asdict(self)


class GeneticSolver:
    """
    Generational genetic algorithm over binary genotypes.

    Each generation is evaluated, its elites are tagged and copied forward,
    the remaining slots are filled with single-point crossover children of
    binary tournament winners, and the outgoing population's non-elites are
    mutated before the new population replaces it. Generation 0 is the
    initial population; the run stops after evaluating generation
    ``config.generations``.
    """

    def __init__(self, config: GAConfig, initial_population: Population = None,
                 rng: random.Random = None, reporter: GAReporter = None) -> None:

        self.config = config
        self.fitness_function = config.fitness_function
        self.logger = get_logger("GeneticSolver")

        # One random source shared by every stochastic step
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.evaluation_engine = EvaluationEngine(self.fitness_function, config.max_workers)
        self.selection_methods = SelectionMethods(self.rng)
        self.genetic_operations = GeneticOperations(self.rng)

        if reporter is None and config.output_dir:
            reporter = GAReporter(output_dir=config.output_dir)
        self.reporter = reporter

        if initial_population is None:
            self._population = Population.random(config.population_size, config.gene_count, self.rng)
        else:
            self._population = self._validate_initial_population(initial_population)

        self.state = SolverState.INITIALIZED
        self.generation = 0
        self.history: List[GenerationStats] = []
        self.best_individual: Optional[Individual] = None

    def _validate_initial_population(self, population: Population) -> Population:
        validate_population_size(population.size)
        for individual in population:
            if individual.gene_count != self.config.gene_count:
                raise InvalidArgument(
                    f"Initial population individual {individual.short_id} has "
                    f"{individual.gene_count} genes, expected {self.config.gene_count}")
        return population

    @property
    def population(self) -> Population:
        return self._population

    @property
    def best_fitness(self) -> Optional[float]:
        return self.best_individual.fitness if self.best_individual is not None else None

    def evaluate(self, population: Population = None) -> Population:
        """Evaluate a population (the current one by default) without breeding."""
        population = population if population is not None else self._population
        self.evaluation_engine.evaluate_population(population)
        return population

    def metrics(self) -> str:
        """Metrics block for the current population."""
        return population_metrics(self._population, self.fitness_function)

    def run(self, show_progress: bool = True) -> Population:
        """
        Run the generational loop and return the final population.

        Raises:
            GAException: If the solver has already run
        """
        if self.state is not SolverState.INITIALIZED:
            raise GAException(f"Solver cannot run from state '{self.state.value}'")

        run_start = time.time()
        self.logger.log_config_summary(self.config)
        if self.reporter:
            self.reporter.start_run(self._run_config())

        current = self._population
        generations = self.config.generations

        with tqdm(total=generations + 1, desc="Evolving", disable=not show_progress) as progress:
            while True:
                generation_start = time.time()
                self.state = SolverState.EVALUATING
                self.logger.log_generation_start(self.generation, current.size)
                _, peak_memory = self.evaluation_engine.evaluate_population(current)
                self._track_best(current)

                if self.generation == generations:
                    self._record_generation(current, generation_start, peak_memory)
                    progress.update(1)
                    break

                self.state = SolverState.BREEDING
                next_population = self._breed(current)
                self._record_generation(current, generation_start, peak_memory)

                # Mutation targets the outgoing population, not the new children
                self.state = SolverState.MUTATING
                for individual in current:
                    self.genetic_operations.mutate(individual, self.config.mutation_rate)

                current = next_population
                self._population = current
                self.generation += 1
                progress.update(1)

        self.state = SolverState.TERMINATED
        self._finish_run(time.time() - run_start)
        return current

    def _breed(self, current: Population) -> Population:
        """Build the next population: elites first, then crossover children."""
        next_population = Population()

        if self.config.elitism_percentage > 0:
            self.selection_methods.tag_elites(current, self.config.elitism_percentage)
            next_population.extend(current.elites)

        while next_population.size < current.size:
            parent_a, parent_b = self.selection_methods.binary_tournament_selection(current)
            child_a, child_b = self.genetic_operations.crossover_single_point(parent_a, parent_b)
            next_population.add(child_a)
            next_population.add(child_b)

        return next_population

    def _track_best(self, population: Population):
        best = population.best()
        if self.best_individual is None or best.fitness > self.best_individual.fitness:
            # Copy by value; outgoing non-elites are mutated in place
            self.best_individual = best.clone()

    def _record_generation(self, population: Population, generation_start: float,
                           peak_memory: float):
        stats = GenerationStats(
            generation=self.generation,
            total_fitness=population.total_fitness,
            mean_fitness=population.mean_fitness,
            min_fitness=population.min_fitness,
            max_fitness=population.max_fitness,
            elite_count=len(population.elites),
            diversity=population.diversity(),
            elapsed_seconds=time.time() - generation_start,
            peak_memory_mb=peak_memory
        )
        self.history.append(stats)

        self.logger.log_generation_complete(self.generation, stats.max_fitness, stats.mean_fitness,
                                            stats.elapsed_seconds, stats.peak_memory_mb)

        interval = self.config.report_interval
        if interval and self.generation % interval == 0:
            rows = population_metrics(population, self.fitness_function).splitlines()
            self.logger.log_top_individuals(self.generation, rows)

        if self.reporter:
            self.reporter.save_generation_data(
                self.generation, population, self.fitness_function,
                additional_data={'elite_count': stats.elite_count, 'diversity': stats.diversity})

    def _finish_run(self, runtime: float):
        self.logger.log_run_complete(self.generation, self.best_fitness, runtime)
        self.logger.debug("Component statistics",
                          selection=self.selection_methods.get_statistics(),
                          operations=self.genetic_operations.get_statistics(),
                          evaluation=self.evaluation_engine.get_statistics())

        if self.reporter:
            self.reporter.export_fitness_history()
            self.reporter.save_run_summary(
                self.best_individual, self.fitness_function,
                extra_info={'history': [stats.to_dict() for stats in self.history]})
            self.reporter.cleanup()

    def _run_config(self) -> dict:
        config = self.config.to_dict()
        config['fitness_function'] = self.fitness_function.name
        return config
