"""
Configuration Constants for Genetic Algorithm

Centralizes all magic numbers and hard-coded values for better maintainability.
All constants are organized by category with clear documentation.
"""


class GAConstants:
    """Configuration constants for genetic algorithm components."""

    # Genotype layout
    MIN_GENE_COUNT = 2                   # Smallest genotype that can be split in two halves
    BINARY_VALUES = (0, 1)               # Allowed gene values

    # Population Management
    MIN_POPULATION_SIZE = 2              # Smallest population that can breed a pair
    TOURNAMENT_SIZE = 2                  # Binary tournament
    TOP_N = 5                            # Individuals listed in reports

    # Fitness defaults
    DEFAULT_FITNESS = 0.0                # Fitness before first evaluation / after mutation


class SolverDefaults:
    """Default solver parameters used by the CLI and GAConfig."""

    GENE_COUNT = 44
    POPULATION_SIZE = 50
    GENERATIONS = 100
    MUTATION_RATE = 0.02
    CROSSOVER_RATE = 0.85                # Recorded only; single-point crossover always applies
    ELITISM_PERCENTAGE = 0.05
    MAX_WORKERS = 1                      # Sequential evaluation
    REPORT_INTERVAL = 5                  # Log top individuals every N generations


class LandscapeConstants:
    """Constants for the reference Schaffer F6 landscape."""

    ARITY = 2                            # Phenotype is (x, y)
    DOMAIN_WIDTH = 200.0                 # [-100, 100]
    DOMAIN_OFFSET = 100.0
    SCALE = 0.001                        # Denominator damping factor


class MemoryConstants:
    """Memory-related configuration constants."""

    BYTES_PER_MB = 1024 * 1024


# Convenient access to commonly used constants
DEFAULT_FITNESS = GAConstants.DEFAULT_FITNESS
TOP_N = GAConstants.TOP_N


def bytes_to_mb(bytes_value: int) -> float:
    """Convert bytes to megabytes."""
    return bytes_value / MemoryConstants.BYTES_PER_MB
