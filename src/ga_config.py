"""
Configuration Management for Genetic Algorithm

Validates and organizes solver parameters into a single immutable record.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from ga_constants import GAConstants, SolverDefaults
from ga_exceptions import ConfigurationError
from ga_components.evaluation import FitnessFunction


@dataclass(frozen=True)
class GAConfig:
    """
    Genetic solver configuration.

    Read-only once constructed; ``update`` returns a validated copy.
    """

    # Core GA Parameters
    gene_count: int = SolverDefaults.GENE_COUNT
    population_size: int = SolverDefaults.POPULATION_SIZE
    generations: int = SolverDefaults.GENERATIONS
    mutation_rate: float = SolverDefaults.MUTATION_RATE
    elitism_percentage: float = SolverDefaults.ELITISM_PERCENTAGE
    fitness_function: Any = None

    # Run options
    crossover_rate: float = SolverDefaults.CROSSOVER_RATE  # recorded, not applied
    seed: Optional[int] = None
    max_workers: int = SolverDefaults.MAX_WORKERS
    report_interval: int = SolverDefaults.REPORT_INTERVAL
    output_dir: Optional[str] = None

    def __post_init__(self):
        """Validate parameters after initialization."""
        self._validate()

    def _validate(self):
        """Collect every violation and raise them together."""
        errors = []

        if not _is_int(self.gene_count):
            errors.append(f"Gene count ({self.gene_count!r}) must be an integer")
        else:
            if self.gene_count < GAConstants.MIN_GENE_COUNT:
                errors.append(f"Gene count ({self.gene_count}) must be at least {GAConstants.MIN_GENE_COUNT}")
            if self.gene_count % 2 != 0:
                errors.append(f"Gene count ({self.gene_count}) must be even")

        if not _is_int(self.population_size):
            errors.append(f"Population size ({self.population_size!r}) must be an integer")
        else:
            if self.population_size < GAConstants.MIN_POPULATION_SIZE:
                errors.append(f"Population size ({self.population_size}) must be at least "
                              f"{GAConstants.MIN_POPULATION_SIZE}")
            if self.population_size % 2 != 0:
                errors.append(f"Population size ({self.population_size}) must be even for crossover")

        if not _is_int(self.generations) or self.generations < 0:
            errors.append(f"Generations ({self.generations!r}) must be a non-negative integer")

        for name, value in (("Mutation rate", self.mutation_rate),
                            ("Elitism percentage", self.elitism_percentage),
                            ("Crossover rate", self.crossover_rate)):
            if not _is_number(value) or not 0.0 <= value <= 1.0:
                errors.append(f"{name} ({value!r}) must be between 0.0 and 1.0")

        if not isinstance(self.fitness_function, FitnessFunction):
            errors.append("Fitness function must implement FitnessFunction "
                          f"(got {type(self.fitness_function).__name__})")

        if self.seed is not None and not _is_int(self.seed):
            errors.append(f"Seed ({self.seed!r}) must be an integer or None")
        if not _is_int(self.max_workers) or self.max_workers < 1:
            errors.append(f"Max workers ({self.max_workers!r}) must be a positive integer")
        if not _is_int(self.report_interval) or self.report_interval < 0:
            errors.append(f"Report interval ({self.report_interval!r}) must be a non-negative integer")
        if self.output_dir is not None and not str(self.output_dir).strip():
            errors.append("Output directory cannot be empty")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors),
                errors=errors)

    @classmethod
    def from_args(cls, args, fitness_function) -> 'GAConfig':
        """
        Create configuration from parsed CLI arguments.

        Args:
            args: argparse.Namespace from CLI parsing
            fitness_function: Fitness function to inject

        Returns:
            Validated GAConfig instance
        """
        return cls(
            gene_count=args.gene_count,
            population_size=args.population_size,
            generations=args.generations,
            mutation_rate=args.mutation_rate,
            elitism_percentage=args.elitism_percentage,
            fitness_function=fitness_function,
            seed=getattr(args, 'seed', None),
            max_workers=getattr(args, 'max_workers', SolverDefaults.MAX_WORKERS),
            report_interval=getattr(args, 'report_interval', SolverDefaults.REPORT_INTERVAL),
            output_dir=getattr(args, 'output_dir', None)
        )

    @property
    def num_elites(self) -> int:
        """Elite count per generation: round(size * percentage), bumped to even."""
        selected = round(self.population_size * self.elitism_percentage)
        if selected % 2 != 0:
            selected += 1
        return selected

    @property
    def num_offspring(self) -> int:
        """Offspring bred per generation to fill the slots left after elites."""
        return self.population_size - self.num_elites

    def summary(self) -> str:
        """Generate human-readable configuration summary."""
        function_name = getattr(self.fitness_function, 'name', type(self.fitness_function).__name__)
        summary = f"""GA Configuration:
  Genes: {self.gene_count}
  Population: {self.population_size} (offspring: {self.num_offspring}, elites: {self.num_elites})
  Generations: {self.generations}
  Rates: mutation={self.mutation_rate:.3f}, elitism={self.elitism_percentage:.3f}
  Fitness function: {function_name}
  Seed: {self.seed if self.seed is not None else 'random'}"""
        if self.max_workers > 1:
            summary += f"\n  Evaluation threads: {self.max_workers}"
        if self.output_dir:
            summary += f"\n  Output: {self.output_dir}"
        return summary

    def __str__(self) -> str:
        return (f"GAConfig(genes={self.gene_count}, pop={self.population_size}, "
                f"gen={self.generations})")

    def to_dict(self) -> dict:
        """Convert config to dictionary; the fitness function is kept as an object."""
        return {field.name: getattr(self, field.name) for field in fields(self)}

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'GAConfig':
        """Create config from dictionary."""
        return cls(**config_dict)

    def update(self, **kwargs) -> 'GAConfig':
        """Create a new config with updated values."""
        return replace(self, **kwargs)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
