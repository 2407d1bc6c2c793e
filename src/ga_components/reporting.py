"""
Reporting and I/O Module

Handles data persistence and progress reporting for genetic algorithm runs.

Features:
- Per-generation CSV export with decoded phenotypes
- Fitness history export
- JSON run summary
- Text metrics block for console output
"""

import os
import csv
import json
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from ga_constants import TOP_N
from ga_exceptions import ReportingError
from ga_logging import get_logger


def population_metrics(population, fitness_function, top_n: int = TOP_N) -> str:
    """
    Render the decoded top individuals and fitness statistics of a population.

    Args:
        population: Evaluated population
        fitness_function: Function used to decode phenotypes
        top_n: Number of individuals to list

    Returns:
        Multi-line metrics block
    """
    lines = [f"Top {top_n}:"]
    for rank, individual in enumerate(population.top(top_n), start=1):
        phenotype = ", ".join(f"{value:.6f}" for value in fitness_function.decode(individual))
        lines.append(f"  {rank}. [{phenotype}] fitness={individual.fitness:.6f}"
                     f"{' (elite)' if individual.is_elite else ''}")
    lines.append(f"Min Fitness: {population.min_fitness:.6f}")
    lines.append(f"Max Fitness: {population.max_fitness:.6f}")
    lines.append(f"Average Fitness: {population.mean_fitness:.6f}")
    lines.append(f"Total Fitness: {population.total_fitness:.6f}")
    return "\n".join(lines)


class GAReporter:
    """
    Reporting and I/O manager for genetic algorithm runs.

    Writes one CSV per generation, the fitness history and a JSON summary
    into ``output_dir``.
    """

    def __init__(self, output_dir: str = "ga_results", experiment_name: str = None):
        """
        Initialize GA reporter.

        Args:
            output_dir: Directory for output files
            experiment_name: Name of the experiment (auto-generated if None)
        """
        self.log_file = None
        self.output_dir = output_dir
        self.experiment_name = experiment_name or f"ga_run_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.logger = get_logger("Reporter")

        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise ReportingError(f"Cannot create output directory: {e}",
                                 output_dir=output_dir) from e

        self.start_time = None
        self.generation_data: List[Dict[str, Any]] = []
        self.best_fitness_history: List[float] = []
        self.statistics = {
            'total_generations': 0,
            'total_evaluations': 0,
            'best_overall_fitness': None,
            'total_runtime': 0.0
        }

    def start_run(self, run_config: Dict[str, Any]):
        """
        Start a new GA run and open the run log.

        Args:
            run_config: Configuration parameters for the run
        """
        self.start_time = time.time()

        log_filename = os.path.join(self.output_dir, f"{self.experiment_name}_log.txt")
        try:
            self.log_file = open(log_filename, 'w')
        except OSError as e:
            raise ReportingError(f"Cannot open run log: {e}",
                                 output_dir=self.output_dir, file_type='log') from e

        self.log(f"Starting GA run: {self.experiment_name}")
        self.log(f"Start time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        self.log("Configuration:")
        for key, value in run_config.items():
            self.log(f"  {key}: {value}")
        self.log("-" * 50)

    def log(self, message: str, also_print: bool = False):
        """
        Log a message to the run log.

        Args:
            message: Message to log
            also_print: Whether to also send it to the console logger
        """
        timestamp = datetime.now().strftime('%H:%M:%S')
        log_message = f"[{timestamp}] {message}"

        if self.log_file:
            self.log_file.write(log_message + '\n')
            self.log_file.flush()

        if also_print:
            self.logger.info(message)

    def save_generation_data(self, generation: int, population, fitness_function,
                             additional_data: Dict[str, Any] = None) -> str:
        """
        Save generation data to CSV and update tracking.

        Args:
            generation: Generation number
            population: Evaluated population
            fitness_function: Function used to decode phenotypes
            additional_data: Additional metrics to record

        Returns:
            Path of the written CSV file
        """
        csv_filename = os.path.join(self.output_dir, f"generation_{generation}.csv")

        generation_info = {
            'generation': generation,
            'timestamp': datetime.now().isoformat(),
            'population_size': population.size,
            'best_fitness': population.max_fitness,
            'avg_fitness': population.mean_fitness,
            'worst_fitness': population.min_fitness,
            'total_fitness': population.total_fitness
        }
        if additional_data:
            generation_info.update(additional_data)

        self.generation_data.append(generation_info)
        self.best_fitness_history.append(generation_info['best_fitness'])

        self.statistics['total_generations'] = generation
        self.statistics['total_evaluations'] += population.size
        if (self.statistics['best_overall_fitness'] is None
                or generation_info['best_fitness'] > self.statistics['best_overall_fitness']):
            self.statistics['best_overall_fitness'] = generation_info['best_fitness']

        try:
            with open(csv_filename, mode='w', newline='') as csv_file:
                writer = csv.writer(csv_file)
                arity = len(fitness_function.decode(population[0])) if population.size else 0
                header = ['Individual_Id', 'Fitness', 'Elite', 'Genotype'] + \
                         [f'Param_{i}' for i in range(arity)]
                writer.writerow(header)

                for individual in population:
                    row = [individual.id.hex, individual.fitness, int(individual.is_elite),
                           individual.bit_string] + fitness_function.decode(individual)
                    writer.writerow(row)
        except OSError as e:
            raise ReportingError(f"Cannot write generation CSV: {e}",
                                 output_dir=self.output_dir, file_type='csv') from e

        self.log(f"Generation {generation}: Best={generation_info['best_fitness']:.6f}, "
                 f"Avg={generation_info['avg_fitness']:.6f}, Pop={generation_info['population_size']}")
        return csv_filename

    def save_run_summary(self, best_individual, fitness_function,
                         extra_info: Optional[Dict[str, Any]] = None) -> str:
        """
        Save run summary as JSON.

        Args:
            best_individual: Best individual seen during the run
            fitness_function: Function used to decode its phenotype
            extra_info: Additional information to include

        Returns:
            Path of the written JSON file
        """
        if self.start_time:
            self.statistics['total_runtime'] = time.time() - self.start_time

        summary_filename = os.path.join(self.output_dir, f"{self.experiment_name}_summary.json")

        best = None
        if best_individual is not None:
            best = {
                'id': best_individual.id.hex,
                'genotype': best_individual.bit_string,
                'phenotype': fitness_function.decode(best_individual),
                'fitness': best_individual.fitness
            }

        summary_data = {
            'experiment_name': self.experiment_name,
            'end_time': datetime.now().isoformat(),
            'statistics': self.statistics,
            'best_individual': best,
            'generation_summary': self.generation_data,
            'fitness_history': self.best_fitness_history
        }
        if extra_info:
            summary_data.update(extra_info)

        try:
            with open(summary_filename, 'w') as f:
                json.dump(summary_data, f, indent=2)
        except OSError as e:
            raise ReportingError(f"Cannot write run summary: {e}",
                                 output_dir=self.output_dir, file_type='json') from e

        self.log("=" * 50)
        self.log("RUN SUMMARY")
        self.log("=" * 50)
        for key, value in self.statistics.items():
            self.log(f"{key}: {value}")

        return summary_filename

    def export_fitness_history(self, filename: str = None) -> str:
        """
        Export fitness history to CSV.

        Args:
            filename: Output filename (auto-generated if None)

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = self.fitness_history_path

        try:
            with open(filename, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(['Generation', 'Best_Fitness', 'Avg_Fitness', 'Worst_Fitness'])
                for gen_data in self.generation_data:
                    writer.writerow([
                        gen_data['generation'],
                        gen_data['best_fitness'],
                        gen_data['avg_fitness'],
                        gen_data['worst_fitness']
                    ])
        except OSError as e:
            raise ReportingError(f"Cannot write fitness history: {e}",
                                 output_dir=self.output_dir, file_type='csv') from e

        return filename

    @property
    def fitness_history_path(self) -> str:
        return os.path.join(self.output_dir, f"{self.experiment_name}_fitness_history.csv")

    def cleanup(self):
        """Close the run log."""
        if self.log_file:
            self.log("Run completed.")
            self.log_file.close()
            self.log_file = None

    def __del__(self):
        self.cleanup()
