import logging
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from kmtidy.shared.data.synthetic import generate_labeled_points
from kmtidy.shared.tidying import ASSIGNMENT_COLUMN, CLUSTER_STAT_COLUMNS
from kmtidy.shared.utils.numpy_helpers import as_feature_matrix

from .config import KMeansSweepConfig

logger = logging.getLogger(__name__)

# columns the tidy tables write themselves, never picked as default features
RESERVED_COLUMNS = set(CLUSTER_STAT_COLUMNS) | {ASSIGNMENT_COLUMN, "k"}


def load_observations(config: KMeansSweepConfig) -> Tuple[pd.DataFrame, np.ndarray, List[str], Dict[str, Any]]:
    """
    Load the observations to cluster.

    Args:
        config: Sweep configuration naming either a CSV file or synthetic blobs

    Returns:
        - observations: Observation rows as read or generated, passed on to augment
        - features: Float matrix of the feature columns (n_samples, n_features)
        - feature_names: Names of the feature columns
        - metadata: Source description and sizes

    Raises:
        ValueError: If feature columns are missing, non-numeric or contain NaN values
    """
    if config.uses_synthetic_data:
        synthetic = config.synthetic
        if synthetic is None:
            observations = generate_labeled_points(random_state=config.random_state)
        else:
            observations = generate_labeled_points(
                centers=synthetic.centers,
                num_points=synthetic.num_points,
                sd=synthetic.sd,
                random_state=config.random_state,
            )
        # the true cluster column is kept for comparison but not clustered on
        feature_columns = [column for column in observations.columns if column != "cluster"]
        source = "synthetic"
    else:
        observations = pd.read_csv(config.dataset_path)
        feature_columns = config.feature_columns
        if feature_columns is None:
            numeric_columns = observations.select_dtypes(include="number").columns.tolist()
            feature_columns = [column for column in numeric_columns if column not in RESERVED_COLUMNS]
            skipped = [column for column in numeric_columns if column in RESERVED_COLUMNS]
            if skipped:
                logger.info(f"Not clustering on reserved columns: {skipped}")
        source = config.dataset_path

    missing = [column for column in feature_columns if column not in observations.columns]
    if missing:
        raise ValueError(f"Feature columns not found in dataset: {missing}")

    if not feature_columns:
        raise ValueError("No numeric feature columns available for clustering")

    try:
        features, feature_names = as_feature_matrix(observations, columns=list(feature_columns))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Feature columns must be numeric: {e}") from e

    if not np.isfinite(features).all():
        raise ValueError("Features contain NaN or infinite values")

    metadata = {
        "source": source,
        "n_samples": int(features.shape[0]),
        "n_features": int(features.shape[1]),
        "feature_names": feature_names,
    }
    logger.debug(f"Loaded observations from {source}: {metadata['n_samples']} rows")
    return observations, features, feature_names, metadata
