"""
Genetic Algorithm for Binary Function Optimization

This module provides a command-line interface for evolving binary-encoded
candidate solutions on the Schaffer F6 landscape.

Features:
- Configurable gene count, population size, generations and rates
- Seedable runs for reproducible results
- Optional per-generation CSV reports and fitness plots
- Structured console and file logging

Usage:
    python main.py --gene_count 44 --population_size 100 --generations 100 --seed 7
"""

import argparse
import sys
from typing import List, Optional

from genetic_algorithm import GeneticSolver
from ga_config import GAConfig
from ga_constants import SolverDefaults
from ga_exceptions import InvalidArgument, GAException
from ga_logging import setup_logging
from ga_components.evaluation import SchafferF6


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run a genetic algorithm on the Schaffer F6 landscape.')

    # GA parameters
    parser.add_argument('--gene_count', '-gc', type=int, default=SolverDefaults.GENE_COUNT,
                        help=f"Genes per individual, even (default: {SolverDefaults.GENE_COUNT})")
    parser.add_argument('--population_size', '-ps', type=int, default=SolverDefaults.POPULATION_SIZE,
                        help=f"Population size, even (default: {SolverDefaults.POPULATION_SIZE})")
    parser.add_argument('--generations', '-g', type=int, default=SolverDefaults.GENERATIONS,
                        help=f"Number of generations (default: {SolverDefaults.GENERATIONS})")
    parser.add_argument('--mutation_rate', '-mr', type=float, default=SolverDefaults.MUTATION_RATE,
                        help=f"Per-gene mutation probability (default: {SolverDefaults.MUTATION_RATE})")
    parser.add_argument('--elitism_percentage', '-ep', type=float, default=SolverDefaults.ELITISM_PERCENTAGE,
                        help=f"Share of the population kept as elites (default: {SolverDefaults.ELITISM_PERCENTAGE})")
    parser.add_argument('--seed', '-s', type=int, default=None,
                        help="Random seed for reproducible runs")

    # Evaluation
    parser.add_argument('--max_workers', '-mw', type=int, default=SolverDefaults.MAX_WORKERS,
                        help="Threads used to evaluate fitness (default: 1)")
    parser.add_argument('--report_interval', '-ri', type=int, default=SolverDefaults.REPORT_INTERVAL,
                        help="Log the top individuals every N generations, 0 disables (default: 5)")

    # Output
    parser.add_argument('--output_dir', '-o', type=str, default=None,
                        help="Folder for CSV reports and logs (no reports when omitted)")
    parser.add_argument('--log_level', type=str, default="INFO",
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help="Console log level (default: INFO)")
    parser.add_argument('--no_log_file', action='store_true',
                        help="Do not write a log file into the output folder")
    parser.add_argument('--no_progress', action='store_true',
                        help="Hide the progress bar")
    parser.add_argument('--plot', action='store_true',
                        help="Save a fitness history plot (requires --output_dir)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the genetic algorithm.

    Parses command-line arguments, builds the configuration, runs the solver
    and logs the final population metrics.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.plot and not args.output_dir:
        parser.error("--plot requires --output_dir")

    logger = setup_logging(
        level=args.log_level,
        log_to_file=bool(args.output_dir) and not args.no_log_file,
        output_dir=args.output_dir or "logs",
        console_colors=True
    )

    try:
        config = GAConfig.from_args(args, SchafferF6())
    except InvalidArgument as e:
        logger.error("Invalid configuration", exception=e)
        return 2

    logger.info(config.summary())

    solver = GeneticSolver(config)
    try:
        solver.run(show_progress=not args.no_progress)
    except GAException as e:
        logger.critical("GA execution failed", exception=e)
        raise

    logger.info(f"Final population (generation {solver.generation}):")
    for line in solver.metrics().splitlines():
        logger.info(line)
    best = solver.best_individual
    logger.info(f"Best individual: {best.bit_string} -> {config.fitness_function.decode(best)}",
                fitness=f"{best.fitness:.6f}")

    if args.plot:
        from plot_maker import EvolutionVisualizer
        visualizer = EvolutionVisualizer(solver.reporter.fitness_history_path)
        plot_path = visualizer.plot_fitness_history()
        logger.info(f"Fitness plot saved: {plot_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
