"""
K-Means Sweeps Module

Runs K-Means across a range of k on one set of observations and collects the
tidied results (per-cluster, per-observation and per-fit tables) into CSV
reports.

Main Components:
- config: YAML-backed sweep configuration
- dataset_loader: CSV or synthetic observations to cluster
- sweep_generator: Values of k to run, minus those already reported
- clustering_executor: Fitting each k and stacking the tidy tables
- report_manager: Appending and reading back the CSV reports
- run: Command-line entry point

Usage:
    python -m kmtidy.scripts.kmeans_sweeps.run --config config.yaml --verbose
"""

from .config import KMeansSweepConfig, KMeansHyperparameters, SyntheticDataConfig
from .dataset_loader import load_observations
from .clustering_executor import KResult, SweepTables, run_kmeans_for_k, run_sweep, stack_tidy_tables
from .sweep_generator import generate_k_values, filter_completed_ks, get_sweep_statistics
from .report_manager import ReportManager

__all__ = [
    "KMeansSweepConfig",
    "KMeansHyperparameters",
    "SyntheticDataConfig",
    "load_observations",
    "KResult",
    "SweepTables",
    "run_kmeans_for_k",
    "run_sweep",
    "stack_tidy_tables",
    "generate_k_values",
    "filter_completed_ks",
    "get_sweep_statistics",
    "ReportManager",
]
