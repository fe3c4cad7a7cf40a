"""Logging system for knapsack algorithm experiments.

This module provides structured logging for tracking algorithm runs,
including runtime metrics, guarantee outcomes, bound violations and
reference solver failures.
"""

import logging
import json
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional


class ExperimentLogger:
    """Logger for a batch of algorithm runs with performance metrics.

    Tracks:
    - Standard log messages (debug, info, warning, error)
    - Runs per algorithm and their runtime
    - Guarantee outcomes (consistent / inconsistent / failed)
    - Evidence for every violated bound
    """

    def __init__(self, log_dir: str = "logs", instance_name: str = "default", console: bool = True):
        """Initialize the logger.

        Args:
            log_dir: Directory for log files
            instance_name: Name of the experiment or instance being solved
            console: Whether to also log INFO messages to the console
        """
        self.instance_name = instance_name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        # Create timestamp for this run
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_id = f"{instance_name}_{self.timestamp}"

        self.metrics = {
            "instance_name": instance_name,
            "timestamp": self.timestamp,
            "start_time": None,
            "end_time": None,
            "total_runtime": None,
            "runs_executed": 0,
            "runs_per_algorithm": {},
            "outcomes": {},  # algorithm -> {status: count}
            "violations": [],  # evidence of Inconsistent outcomes
            "reference_failures": [],  # Failed outcomes
            "run_times": [],
        }

        self._setup_file_logger(console)
        self.metrics_file = self.log_dir / f"{self.run_id}_metrics.json"

        self.logger.info(f"Initialized logger for: {instance_name}")
        self.logger.info(f"Run ID: {self.run_id}")

    def _setup_file_logger(self, console: bool):
        """Setup standard file logger for text messages."""
        log_file = self.log_dir / f"{self.run_id}.log"

        self.logger = logging.getLogger(f"knapsack_{self.run_id}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # Remove existing handlers to avoid duplicates
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
            self.logger.addHandler(console_handler)

    def start_run(self, experiment_data: Optional[Dict[str, Any]] = None):
        """Mark the start of an experiment.

        Args:
            experiment_data: Dictionary with experiment settings
                             (item counts, capacity range, epsilons, etc.)
        """
        self.metrics["start_time"] = time.time()
        if experiment_data:
            self.metrics["experiment_data"] = experiment_data
        self.logger.info("=" * 60)
        self.logger.info("Starting knapsack experiment")
        if experiment_data:
            self.logger.info(f"Settings: {experiment_data}")
        self.logger.info("=" * 60)

    def end_run(self, final_result: Optional[Dict[str, Any]] = None):
        """Mark the end of the experiment and save metrics.

        Args:
            final_result: Dictionary with summary info
        """
        self.metrics["end_time"] = time.time()
        if self.metrics["start_time"] is not None:
            self.metrics["total_runtime"] = self.metrics["end_time"] - self.metrics["start_time"]

        if final_result:
            self.metrics["final_result"] = final_result

        self._save_metrics()

        self.logger.info("=" * 60)
        self.logger.info("Experiment completed")
        if self.metrics["total_runtime"] is not None:
            self.logger.info(f"Total runtime: {self.metrics['total_runtime']:.3f} seconds")
        self.logger.info(f"Runs executed: {self.metrics['runs_executed']}")
        for algorithm, counts in self.metrics["outcomes"].items():
            self.logger.info(f"  {algorithm}: {counts}")
        self.logger.info(f"Violations: {len(self.metrics['violations'])}")
        self.logger.info("=" * 60)

    def log_algorithm_run(self, algorithm: str, instance_info: Dict[str, Any],
                          cost, runtime: Optional[float] = None):
        """Log one algorithm call.

        Args:
            algorithm: Algorithm description, e.g. "FPTAS(epsilon=0.5)"
            instance_info: Dict with instance details (n_items, capacity, seed)
            cost: Cost of the returned solution, None if not solved
            runtime: Time taken by the algorithm (seconds)
        """
        self.metrics["runs_executed"] += 1
        per_alg = self.metrics["runs_per_algorithm"]
        per_alg[algorithm] = per_alg.get(algorithm, 0) + 1
        if runtime is not None:
            self.metrics["run_times"].append({"algorithm": algorithm, "time": runtime})
            self.logger.debug(f"{algorithm} on {instance_info}: cost={cost} in {runtime:.4f}s")
        else:
            self.logger.debug(f"{algorithm} on {instance_info}: cost={cost}")

    def log_guarantee(self, algorithm: str, guarantee, instance_info: Optional[Dict[str, Any]] = None):
        """Log a theoretic validation outcome.

        Args:
            algorithm: Algorithm description
            guarantee: TheoreticGuarantee returned by validate()
            instance_info: Optional dict with instance details
        """
        status = guarantee.status.value
        counts = self.metrics["outcomes"].setdefault(algorithm, {})
        counts[status] = counts.get(status, 0) + 1

        record = {"algorithm": algorithm, "explanation": guarantee.explanation, "instance": instance_info}
        if status == "inconsistent":
            self.metrics["violations"].append(record)
            self.logger.warning(f"BOUND VIOLATED by {algorithm}: {guarantee.explanation}")
        elif status == "failed":
            self.metrics["reference_failures"].append(record)
            self.logger.warning(f"Validation of {algorithm} could not run: {guarantee.explanation}")
        else:
            self.logger.debug(f"{algorithm}: consistent")

    def _save_metrics(self):
        """Save metrics dictionary to JSON file."""
        with open(self.metrics_file, 'w') as f:
            json.dump(self.metrics, f, indent=2, default=str)

        self.logger.info(f"Metrics saved to: {self.metrics_file}")

    def get_metrics(self) -> Dict[str, Any]:
        """Get current metrics dictionary."""
        return self.metrics.copy()

    def close(self):
        """Close and detach all handlers (releases the log file)."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def debug(self, msg: str):
        self.logger.debug(msg)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def error(self, msg: str):
        self.logger.error(msg)


def create_logger(instance_name: str = "default", log_dir: str = "logs", console: bool = True) -> ExperimentLogger:
    """Factory function to create an ExperimentLogger.

    Args:
        instance_name: Name of the experiment
        log_dir: Directory for log files
        console: Whether to echo INFO messages to the console

    Returns:
        Configured ExperimentLogger instance
    """
    return ExperimentLogger(log_dir=log_dir, instance_name=instance_name, console=console)
