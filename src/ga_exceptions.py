"""
Custom Exception Classes for Genetic Algorithm

Provides specific, meaningful exceptions for different GA failure modes.
Argument and configuration violations derive from InvalidArgument, which is
also a ValueError so callers can catch either.
"""

import math


class GAException(Exception):
    """Base exception for all genetic algorithm related errors."""
    pass


class InvalidArgument(GAException, ValueError):
    """Raised when a constructor or operator receives an invalid argument."""
    pass


class ConfigurationError(InvalidArgument):
    """Raised when GA configuration is invalid or inconsistent."""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidFitnessError(GAException):
    """Raised when fitness evaluation returns invalid results."""

    def __init__(self, fitness_value, individual_name: str = None):
        message = f"Invalid fitness value: {fitness_value}"
        if individual_name:
            message += f" (individual: {individual_name})"
        super().__init__(message)
        self.fitness_value = fitness_value
        self.individual_name = individual_name


class PopulationError(GAException):
    """Raised when population operations fail."""
    pass


class SelectionError(InvalidArgument):
    """Raised when selection operations fail."""

    def __init__(self, message: str, population_size: int = None,
                 selection_type: str = None):
        super().__init__(message)
        self.population_size = population_size
        self.selection_type = selection_type


class CrossoverError(InvalidArgument):
    """Raised when crossover operations fail."""

    def __init__(self, message: str, parent1_name: str = None,
                 parent2_name: str = None):
        super().__init__(message)
        self.parent1_name = parent1_name
        self.parent2_name = parent2_name


class MutationError(InvalidArgument):
    """Raised when mutation operations fail."""

    def __init__(self, message: str, individual_name: str = None,
                 mutation_rate: float = None):
        super().__init__(message)
        self.individual_name = individual_name
        self.mutation_rate = mutation_rate


class ParameterEncodingError(InvalidArgument):
    """Raised when parameter encoding/decoding fails."""

    def __init__(self, message: str, bit_string: str = None,
                 encoding_type: str = None):
        super().__init__(message)
        self.bit_string = bit_string
        self.encoding_type = encoding_type


class ReportingError(GAException):
    """Raised when result reporting/saving fails."""

    def __init__(self, message: str, output_dir: str = None,
                 file_type: str = None):
        super().__init__(message)
        self.output_dir = output_dir
        self.file_type = file_type


def validate_probability(value: float, name: str = "probability",
                         error_cls: type = InvalidArgument) -> float:
    """
    Validate that a value lies in the closed interval [0, 1].

    Args:
        value: Value to validate
        name: Parameter name for the error message
        error_cls: InvalidArgument subclass to raise

    Returns:
        The validated value

    Raises:
        InvalidArgument: If value is not numeric or outside [0, 1]
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error_cls(f"{name} must be numeric, got {type(value).__name__}")
    if not 0.0 <= value <= 1.0:
        raise error_cls(f"{name} ({value}) must be between 0.0 and 1.0")
    return value


def validate_fitness(fitness: float, individual_name: str = None) -> float:
    """
    Validate fitness value and raise appropriate exception if invalid.

    Args:
        fitness: Fitness value to validate
        individual_name: Name of individual for error context

    Returns:
        Validated fitness value as float

    Raises:
        InvalidFitnessError: If fitness is None, non-numeric or NaN
    """
    if fitness is None:
        raise InvalidFitnessError("None", individual_name=individual_name)

    if isinstance(fitness, bool) or not isinstance(fitness, (int, float)):
        raise InvalidFitnessError(
            f"{fitness!r} ({type(fitness).__name__})",
            individual_name=individual_name
        )

    if math.isnan(fitness):
        raise InvalidFitnessError(fitness, individual_name=individual_name)

    return float(fitness)
