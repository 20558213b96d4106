"""
Tidiers for clustering results.

Each function turns a ClusteringResult into a fresh pandas DataFrame with one
row per meaningful unit:

- tidy_clusters: one row per cluster (center coordinates, size, withinss)
- augment_observations: the original observations plus a ``.cluster`` column
- glance_result: a single row of whole-result statistics
"""

from typing import Union

import numpy as np
import pandas as pd

from kmtidy.shared.clustering.result import ClusteringResult, ShapeMismatchError

CLUSTER_COLUMN = "cluster"
ASSIGNMENT_COLUMN = ".cluster"
SUMMARY_COLUMNS = ["totss", "tot_withinss", "betweenss", "iter"]
CLUSTER_STAT_COLUMNS = ("size", "withinss", CLUSTER_COLUMN)


class ColumnCollisionError(ValueError):
    """Raised when a tidy table would overwrite one of its own columns"""


def tidy_clusters(result: ClusteringResult) -> pd.DataFrame:
    """
    Summarize each cluster as one row.

    Args:
        result: Clustering result to tidy

    Returns:
        DataFrame with one column per center coordinate followed by
        ``size``, ``withinss`` and ``cluster``, ordered by cluster index

    Raises:
        ShapeMismatchError: If centers, sizes and withinss disagree in length
        ColumnCollisionError: If a coordinate is named like a per-cluster column
    """
    result.validate()

    clashing = [name for name in result.coordinate_names if name in CLUSTER_STAT_COLUMNS]
    if clashing:
        raise ColumnCollisionError(
            f"Coordinate names {clashing} clash with the per-cluster columns {list(CLUSTER_STAT_COLUMNS)}"
        )

    table = pd.DataFrame(np.array(result.centers), columns=list(result.coordinate_names))
    table["size"] = np.array(result.sizes)
    table["withinss"] = np.array(result.within_ss)
    table[CLUSTER_COLUMN] = np.arange(result.n_clusters)
    return table


def augment_observations(result: ClusteringResult, observations: Union[pd.DataFrame, np.ndarray]) -> pd.DataFrame:
    """
    Append the cluster assignment of every observation.

    Args:
        result: Clustering result whose assignments are appended
        observations: The observations that were clustered, as a DataFrame
            or 2D array. Arrays are labelled with the result's coordinate names.

    Returns:
        Copy of the observations, row order and index preserved, with a
        ``.cluster`` column. An existing ``.cluster`` column is overwritten.

    Raises:
        ShapeMismatchError: If the number of assignments differs from the
            number of observations
    """
    if isinstance(observations, pd.DataFrame):
        augmented = observations.copy()
    else:
        values = np.asarray(observations)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        if values.ndim != 2:
            raise ShapeMismatchError(f"Observations must be 2D, got shape {values.shape}")
        columns = list(result.coordinate_names) if values.shape[1] == result.n_features else None
        augmented = pd.DataFrame(values, columns=columns)

    if len(augmented) != result.n_samples:
        raise ShapeMismatchError(
            f"Got {result.n_samples} assignments for {len(augmented)} observations"
        )

    augmented[ASSIGNMENT_COLUMN] = np.array(result.assignments)
    return augmented


def glance_result(result: ClusteringResult) -> pd.DataFrame:
    """Summarize the whole result as a single row of sums of squares and the iteration count"""
    return pd.DataFrame(
        [
            {
                "totss": result.total_ss,
                "tot_withinss": result.total_within_ss,
                "betweenss": result.between_ss,
                "iter": result.iterations,
            }
        ],
        columns=SUMMARY_COLUMNS,
    )
