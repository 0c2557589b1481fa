"""Utility functions for batch runs and reports."""

from .experiments import (
    ExperimentResult,
    run_experiment,
    run_all_experiments,
    save_results_csv,
    print_results_summary,
)

__all__ = [
    "ExperimentResult",
    "run_experiment",
    "run_all_experiments",
    "save_results_csv",
    "print_results_summary",
]
