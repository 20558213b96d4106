"""Conversion of clustering results into tidy tables"""

from .tidiers import (
    ASSIGNMENT_COLUMN,
    CLUSTER_COLUMN,
    CLUSTER_STAT_COLUMNS,
    SUMMARY_COLUMNS,
    ColumnCollisionError,
    augment_observations,
    glance_result,
    tidy_clusters,
)

__all__ = [
    "tidy_clusters",
    "augment_observations",
    "glance_result",
    "ASSIGNMENT_COLUMN",
    "CLUSTER_COLUMN",
    "SUMMARY_COLUMNS",
    "CLUSTER_STAT_COLUMNS",
    "ColumnCollisionError",
]
