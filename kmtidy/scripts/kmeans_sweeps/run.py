#!/usr/bin/env python3
"""
K-Means Sweep Script

Runs K-Means for several values of k on one set of observations and writes
three tidy reports that make it easy to compare the fits:

- clusters.csv: one row per cluster per k (center coordinates, size, withinss)
- assignments.csv: every observation per k with its ``.cluster`` assignment
- summaries.csv: one row per k (totss, tot_withinss, betweenss, iter)

Plotting tot_withinss against k from summaries.csv gives the elbow curve.
Runs are resumable: values of k already present in summaries.csv are skipped.

Usage:
    python -m kmtidy.scripts.kmeans_sweeps.run --config path/to/config.yaml [--verbose]

Example config structure:
    output_dir: "results/kmeans_sweep"

    # Either a CSV file ...
    dataset_path: "data/points.csv"
    feature_columns: ["x1", "x2"]   # optional, defaults to all numeric columns

    # ... or synthetic Gaussian blobs (the default when dataset_path is omitted)
    synthetic:
      centers: [[5, -1], [0, 1], [-3, -2]]
      num_points: [100, 150, 50]
      sd: 1.0

    ks: {start: 1, stop: 9}         # or an explicit list, e.g. [2, 3, 4]
    kmeans:
      init: "k-means++"
      n_init: 10
    random_state: 42
    n_jobs: 1
"""

import logging
import multiprocessing
import sys
import traceback

import click

from kmtidy.scripts.kmeans_sweeps.clustering_executor import run_sweep, stack_tidy_tables
from kmtidy.scripts.kmeans_sweeps.config import KMeansSweepConfig
from kmtidy.scripts.kmeans_sweeps.dataset_loader import load_observations
from kmtidy.scripts.kmeans_sweeps.report_manager import ReportManager
from kmtidy.scripts.kmeans_sweeps.sweep_generator import (
    filter_completed_ks,
    generate_k_values,
    get_sweep_statistics,
)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def execute(config: KMeansSweepConfig, dry_run: bool = False) -> None:
    """Run the configured sweep and append its tidy tables to the reports"""
    logger = logging.getLogger(__name__)

    observations, features, feature_names, metadata = load_observations(config)
    logger.info(
        f"Loaded {metadata['n_samples']} observations with {metadata['n_features']} features "
        f"from {metadata['source']}"
    )

    k_values = generate_k_values(config.ks)
    report_manager = ReportManager(config.output_dir)

    completed_ks = report_manager.get_completed_ks()
    logger.info(f"Found {len(completed_ks)} completed values of k")
    remaining_ks = filter_completed_ks(k_values, completed_ks)

    sweep_stats = get_sweep_statistics(remaining_ks, metadata["n_samples"])
    logger.info(f"Remaining runs: {sweep_stats['total_runs']} (k = {remaining_ks})")

    if sweep_stats["infeasible_ks"]:
        raise ValueError(
            f"Values of k exceed the number of observations ({metadata['n_samples']}): "
            f"{sweep_stats['infeasible_ks']}"
        )

    if dry_run:
        logger.info("Dry run completed - no clustering executed")
        return

    if not remaining_ks:
        logger.info("All values of k already completed!")
        return

    k_results = run_sweep(
        features=features,
        k_values=remaining_ks,
        hyperparameters=config.kmeans.as_dict(),
        random_state=config.random_state,
        feature_names=feature_names,
        n_jobs=config.n_jobs,
    )
    for k_result in k_results:
        logger.info(
            f"  k={k_result.k}: tot_withinss={k_result.result.total_within_ss:.3f}, "
            f"{k_result.result.iterations} iterations, {k_result.execution_time:.2f}s"
        )

    tables = stack_tidy_tables(observations, k_results)
    report_manager.append_tables(tables)

    report_summary = report_manager.get_report_summary()
    logger.info("=" * 60)
    logger.info("K-MEANS SWEEP COMPLETED")
    logger.info("=" * 60)
    logger.info(f"Completed values of k: {report_summary['completed_ks']}")
    for k, ss in report_summary["elbow"].items():
        logger.info(f"  k={k}: {ss:.3f}")
    logger.info(f"Results saved to: {config.output_dir}")


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    required=True,
    help="Path to YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--dry-run", is_flag=True, help="Load data and plan the sweep without clustering")
def main(config: str, verbose: bool, dry_run: bool):
    """
    Sweep K-Means over several values of k and write tidy CSV reports.

    Examples:

        python run.py --config config.yaml

        python run.py --config config.yaml --verbose --dry-run
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        logger.info(f"Loading configuration from: {config}")
        config_obj = KMeansSweepConfig.from_yaml(config)
        config_obj.validate()
        logger.info("Configuration loaded and validated successfully")

        execute(config_obj, dry_run=dry_run)

    except Exception as e:
        logger.error(f"Fatal error: {str(e)}")
        if verbose:
            logger.error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)


if __name__ == "__main__":
    # Set multiprocessing start method if not already set
    try:
        multiprocessing.set_start_method("spawn")
    except RuntimeError:
        pass
    main()
