import logging
import multiprocessing
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from kmtidy.shared.clustering.factory import ClusteringFactory
from kmtidy.shared.clustering.result import ClusteringResult
from kmtidy.shared.tidying import ColumnCollisionError, augment_observations, glance_result, tidy_clusters

logger = logging.getLogger(__name__)

K_COLUMN = "k"


@dataclass(frozen=True)
class KResult:
    """Clustering result for one value of k"""
    k: int
    result: ClusteringResult
    execution_time: float


@dataclass(frozen=True)
class SweepTables:
    """Tidy tables of a whole sweep, each with a leading ``k`` column"""
    clusters: pd.DataFrame
    assignments: pd.DataFrame
    summaries: pd.DataFrame


def run_kmeans_for_k(
    features: np.ndarray,
    k: int,
    hyperparameters: Dict[str, Any],
    random_state: int = 42,
    feature_names: Optional[Sequence[str]] = None,
) -> KResult:
    """
    Fit K-Means with k clusters and summarize the fit.

    Args:
        features: Feature matrix (n_samples, n_features)
        k: Number of clusters
        hyperparameters: Remaining KMeansConfig fields
        random_state: Random state for reproducible results
        feature_names: Optional names of the feature columns

    Returns:
        KResult with the clustering result and the time spent fitting

    Raises:
        RuntimeError: If clustering fails
    """
    try:
        algorithm = ClusteringFactory.create_with_defaults(
            "kmeans", n_clusters=k, random_state=random_state, **hyperparameters
        )

        start_time = time.time()
        algorithm.fit(features)
        execution_time = time.time() - start_time

        result = algorithm.to_result(features, feature_names=feature_names)
        return KResult(k=k, result=result, execution_time=execution_time)

    except Exception as e:
        raise RuntimeError(f"Failed to execute kmeans clustering with k={k}: {str(e)}") from e


def _run_kmeans_task(task: Dict[str, Any]) -> KResult:
    return run_kmeans_for_k(**task)


def run_sweep(
    features: np.ndarray,
    k_values: List[int],
    hyperparameters: Dict[str, Any],
    random_state: int = 42,
    feature_names: Optional[Sequence[str]] = None,
    n_jobs: int = 1,
) -> List[KResult]:
    """
    Run K-Means for every k.

    Runs are independent. With n_jobs > 1 they are spread over a process
    pool; results are always returned in the order of k_values.
    """
    tasks = [
        {
            "features": features,
            "k": k,
            "hyperparameters": hyperparameters,
            "random_state": random_state,
            "feature_names": list(feature_names) if feature_names is not None else None,
        }
        for k in k_values
    ]

    if n_jobs == 1 or len(tasks) <= 1:
        logger.info("Running in sequential mode (n_jobs=1)")
        return [_run_kmeans_task(task) for task in tqdm(tasks, desc="Clustering", unit="k")]

    logger.info(f"Running in parallel mode with {n_jobs} processes")
    with multiprocessing.Pool(n_jobs) as pool:
        with tqdm(total=len(tasks), desc="Clustering", unit="k") as pbar:
            k_results = []
            for k_result in pool.imap(_run_kmeans_task, tasks):
                k_results.append(k_result)
                pbar.update(1)
    return k_results


def stack_tidy_tables(observations: pd.DataFrame, k_results: List[KResult]) -> SweepTables:
    """
    Tidy every result and stack the tables across values of k.

    Args:
        observations: The clustered observations, passed to augment_observations
        k_results: One result per k

    Returns:
        SweepTables ordered by k, with ``k`` as the first column of each table

    Raises:
        ColumnCollisionError: If the observations already have a ``k`` column
    """
    if K_COLUMN in observations.columns:
        raise ColumnCollisionError(
            f"Observations already have a '{K_COLUMN}' column, rename it before stacking tables across k"
        )

    clusters, assignments, summaries = [], [], []
    for k_result in sorted(k_results, key=lambda item: item.k):
        for tables, table in (
            (clusters, tidy_clusters(k_result.result)),
            (assignments, augment_observations(k_result.result, observations)),
            (summaries, glance_result(k_result.result)),
        ):
            table.insert(0, K_COLUMN, k_result.k)
            tables.append(table)

    return SweepTables(
        clusters=_concat(clusters),
        assignments=_concat(assignments),
        summaries=_concat(summaries),
    )


def _concat(tables: List[pd.DataFrame]) -> pd.DataFrame:
    if not tables:
        return pd.DataFrame()
    return pd.concat(tables, axis=0, ignore_index=True)
