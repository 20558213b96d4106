"""
Clustering module

Wraps scikit-learn clustering routines behind a small interface and turns
their fitted state into an immutable ClusteringResult record that the
tidying functions consume.
"""

from .factory import ClusteringFactory
from .base import ClusteringAlgorithm, ClusteringConfig
from .result import ClusteringResult, ShapeMismatchError

# Algorithm imports
from .algorithms.kmeans import KMeansClustering, KMeansConfig

__all__ = [
    # Factory and base classes
    "ClusteringFactory",
    "ClusteringAlgorithm",
    "ClusteringConfig",
    # Result record
    "ClusteringResult",
    "ShapeMismatchError",
    # Specific algorithms
    "KMeansClustering",
    "KMeansConfig",
]
