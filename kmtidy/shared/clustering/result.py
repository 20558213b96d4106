from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np


class ShapeMismatchError(ValueError):
    """Raised when the components of a clustering result disagree in length"""


@dataclass(frozen=True, eq=False)
class ClusteringResult:
    """
    Immutable record of a fitted clustering.

    Arrays are copied and marked read-only on construction. The record is
    validated eagerly, so any instance that exists satisfies:

        len(centers) == len(sizes) == len(within_ss) == n_clusters
        sum(sizes) == len(assignments)
    """

    assignments: np.ndarray
    centers: np.ndarray
    sizes: np.ndarray
    within_ss: np.ndarray
    total_ss: float
    total_within_ss: float
    between_ss: float
    iterations: int
    method: str = "kmeans"
    feature_names: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        centers = np.array(self.centers, dtype=float)
        if centers.ndim == 1:
            centers = centers.reshape(-1, 1)

        object.__setattr__(self, "assignments", _frozen(_as_whole_numbers(self.assignments, "assignments")))
        object.__setattr__(self, "centers", _frozen(centers))
        object.__setattr__(self, "sizes", _frozen(_as_whole_numbers(self.sizes, "sizes")))
        object.__setattr__(self, "within_ss", _frozen(np.array(self.within_ss, dtype=float)))
        object.__setattr__(self, "total_ss", float(self.total_ss))
        object.__setattr__(self, "total_within_ss", float(self.total_within_ss))
        object.__setattr__(self, "between_ss", float(self.between_ss))
        object.__setattr__(self, "iterations", int(self.iterations))
        if self.feature_names is not None:
            object.__setattr__(self, "feature_names", tuple(str(name) for name in self.feature_names))

        self.validate()

    @property
    def n_clusters(self) -> int:
        return int(self.centers.shape[0])

    @property
    def n_samples(self) -> int:
        return int(self.assignments.shape[0])

    @property
    def n_features(self) -> int:
        return int(self.centers.shape[1])

    @property
    def coordinate_names(self) -> Tuple[str, ...]:
        """Column names for the center coordinates, ``x1..xd`` when no names were given"""
        if self.feature_names is not None:
            return self.feature_names
        return tuple(f"x{i + 1}" for i in range(self.n_features))

    def validate(self) -> None:
        """
        Check that all components describe the same clusters and observations.

        Raises:
            ShapeMismatchError: If any component lengths disagree
        """
        if self.assignments.ndim != 1:
            raise ShapeMismatchError(f"Assignments must be 1D, got shape {self.assignments.shape}")

        if self.centers.ndim != 2:
            raise ShapeMismatchError(f"Centers must be 2D, got shape {self.centers.shape}")

        n_clusters = self.centers.shape[0]
        if len(self.sizes) != n_clusters or len(self.within_ss) != n_clusters:
            raise ShapeMismatchError(
                f"Per-cluster lengths disagree: {n_clusters} centers, "
                f"{len(self.sizes)} sizes, {len(self.within_ss)} within-cluster sums of squares"
            )

        total_size = int(np.sum(self.sizes))
        if total_size != len(self.assignments):
            raise ShapeMismatchError(
                f"Cluster sizes sum to {total_size} but there are {len(self.assignments)} assignments"
            )

        if len(self.assignments) > 0:
            lowest, highest = int(self.assignments.min()), int(self.assignments.max())
            if lowest < 0 or highest >= n_clusters:
                raise ShapeMismatchError(
                    f"Assignments must lie in [0, {n_clusters}), found values in [{lowest}, {highest}]"
                )

        if self.feature_names is not None and len(self.feature_names) != self.centers.shape[1]:
            raise ShapeMismatchError(
                f"Got {len(self.feature_names)} feature names for {self.centers.shape[1]} center coordinates"
            )

    @classmethod
    def from_kmeans(
        cls, model, features: np.ndarray, feature_names: Optional[Sequence[str]] = None
    ) -> "ClusteringResult":
        """
        Build a result from a fitted scikit-learn KMeans model

        Args:
            model: Fitted ``sklearn.cluster.KMeans`` instance
            features: Matrix the model was fit on, shape (n_samples, n_features)
            feature_names: Optional names for the feature columns

        Returns:
            ClusteringResult with per-cluster and whole-result statistics
        """
        features = np.asarray(features, dtype=float)
        if features.ndim != 2:
            raise ValueError("Features must be 2D array of shape (n_samples, n_features)")

        labels = np.asarray(model.labels_, dtype=int)
        if len(labels) != features.shape[0]:
            raise ShapeMismatchError(
                f"Model has {len(labels)} labels but features have {features.shape[0]} rows"
            )

        centers = np.asarray(model.cluster_centers_, dtype=float)
        n_clusters = centers.shape[0]

        sizes = np.bincount(labels, minlength=n_clusters)
        squared_distances = np.sum((features - centers[labels]) ** 2, axis=1)
        within_ss = np.bincount(labels, weights=squared_distances, minlength=n_clusters)

        total_ss = float(np.sum((features - features.mean(axis=0)) ** 2))
        total_within_ss = float(np.sum(within_ss))

        return cls(
            assignments=labels,
            centers=centers,
            sizes=sizes,
            within_ss=within_ss,
            total_ss=total_ss,
            total_within_ss=total_within_ss,
            between_ss=total_ss - total_within_ss,
            iterations=int(model.n_iter_),
            method="kmeans",
            feature_names=tuple(feature_names) if feature_names is not None else None,
        )


def _as_whole_numbers(values, name: str) -> np.ndarray:
    array = np.asarray(values)
    if array.dtype.kind not in "iub":
        numeric = np.asarray(array, dtype=float)
        if not np.all(np.isfinite(numeric)) or not np.all(numeric == np.round(numeric)):
            raise ValueError(f"{name} must hold whole numbers")
    return array.astype(int, copy=True)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array
