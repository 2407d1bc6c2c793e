"""
Centralized Logging System for Genetic Algorithm

Replaces scattered print statements with structured logging.
Provides consistent formatting, log levels, and file output.
"""

import logging
import sys
from datetime import datetime
from typing import Optional, Sequence
from pathlib import Path


class GAFormatter(logging.Formatter):
    """Custom formatter for GA logging with color support and structured output."""

    # Color codes for console output
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, use_colors: bool = True, include_timestamp: bool = True):
        self.use_colors = use_colors and hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
        self.include_timestamp = include_timestamp

        if include_timestamp:
            fmt = '[%(asctime)s] %(levelname)-8s | %(name)s | %(message)s'
            datefmt = '%H:%M:%S'
        else:
            fmt = '%(levelname)-8s | %(name)s | %(message)s'
            datefmt = None

        super().__init__(fmt, datefmt)

    def format(self, record):
        if self.use_colors:
            color = self.COLORS.get(record.levelname, '')
            reset = self.COLORS['RESET']
            # Copy so other handlers see the plain level name
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{reset}"

        return super().format(record)


class GALogger:
    """
    Centralized logger for genetic algorithm with console and file output.

    Manages log levels, file output, and provides GA-specific logging methods.
    """

    def __init__(self, name: str = "GA", level: str = "INFO",
                 log_to_file: bool = False, output_dir: str = "logs",
                 console_colors: bool = True):
        """
        Initialize GA logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Whether to log to file
            output_dir: Directory for log files
            console_colors: Whether to use colors in console output
        """
        self.name = name
        self.log_file = None
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # Clear any existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.logger.level)
        console_formatter = GAFormatter(use_colors=console_colors, include_timestamp=False)
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        if log_to_file:
            self._setup_file_logging(output_dir)

    def _setup_file_logging(self, output_dir: str):
        """Setup file logging to a timestamped run log."""
        log_dir = Path(output_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"ga_run_{timestamp}.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # File gets all levels
        file_formatter = GAFormatter(use_colors=False, include_timestamp=True)
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        self.log_file = str(log_file)

    def child(self, name: str) -> "GALogger":
        """Return a component logger sharing this logger's handlers."""
        component = GALogger.__new__(GALogger)
        component.name = f"{self.name}.{name}"
        component.log_file = self.log_file
        component.logger = self.logger.getChild(name)
        return component

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, exception: Exception = None, **kwargs):
        """Log error message with optional exception details."""
        formatted_msg = self._format_message(message, **kwargs)
        if exception:
            formatted_msg += f" | Exception: {type(exception).__name__}: {str(exception)}"
        self.logger.error(formatted_msg)

    def critical(self, message: str, exception: Exception = None, **kwargs):
        """Log critical message with optional exception details."""
        formatted_msg = self._format_message(message, **kwargs)
        if exception:
            formatted_msg += f" | Exception: {type(exception).__name__}: {str(exception)}"
        self.logger.critical(formatted_msg)

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with optional context parameters."""
        if kwargs:
            context = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            return f"{message} | {context}"
        return message

    # GA-specific logging methods
    def log_generation_start(self, generation: int, population_size: int):
        """Log generation start."""
        self.debug(f"Starting generation {generation}",
                   population_size=population_size)

    def log_generation_complete(self, generation: int, best_fitness: float,
                                mean_fitness: float, time_taken: float,
                                peak_memory: float):
        """Log generation completion."""
        self.debug(f"Generation {generation} complete",
                   best_fitness=f"{best_fitness:.6f}",
                   mean_fitness=f"{mean_fitness:.6f}",
                   time_taken=f"{time_taken:.3f}s",
                   peak_memory=f"{peak_memory:.1f}MB")

    def log_top_individuals(self, generation: int, rows: Sequence[str]):
        """Log the metrics block of a generation line by line."""
        self.info(f"Generation {generation} metrics")
        for row in rows:
            self.info(f"  {row}")

    def log_config_summary(self, config):
        """Log configuration summary."""
        self.info("GA Configuration loaded",
                  genes=config.gene_count,
                  population=config.population_size,
                  generations=config.generations,
                  mutation_rate=config.mutation_rate,
                  elitism=config.elitism_percentage,
                  seed=config.seed)

    def log_run_complete(self, generations: int, best_fitness: float, runtime: float):
        """Log end of run."""
        self.info("Run complete",
                  generations=generations,
                  best_fitness=f"{best_fitness:.6f}",
                  runtime=f"{runtime:.2f}s")


# Global logger instance
_global_logger: Optional[GALogger] = None


def get_logger(name: str = None) -> GALogger:
    """Get the global logger, or a named component logger under it."""
    global _global_logger
    if _global_logger is None:
        _global_logger = GALogger("GA")
    if name is None:
        return _global_logger
    return _global_logger.child(name)


def setup_logging(level: str = "INFO", log_to_file: bool = False,
                  output_dir: str = "logs", console_colors: bool = True) -> GALogger:
    """
    Setup global logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        output_dir: Directory for log files
        console_colors: Whether to use colors in console output

    Returns:
        Configured GALogger instance
    """
    global _global_logger
    _global_logger = GALogger(
        level=level,
        log_to_file=log_to_file,
        output_dir=output_dir,
        console_colors=console_colors
    )
    return _global_logger
