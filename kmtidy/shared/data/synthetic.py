from typing import Optional, Sequence
import numpy as np
import pandas as pd

DEFAULT_CENTERS = ((5.0, -1.0), (0.0, 1.0), (-3.0, -2.0))
DEFAULT_NUM_POINTS = (100, 150, 50)


def generate_labeled_points(
    centers: Sequence[Sequence[float]] = DEFAULT_CENTERS,
    num_points: Sequence[int] = DEFAULT_NUM_POINTS,
    sd: float = 1.0,
    random_state: Optional[int] = 42,
) -> pd.DataFrame:
    """
    Draw Gaussian blobs around the given centers.

    Args:
        centers: One coordinate vector per true cluster
        num_points: Number of points drawn around each center
        sd: Standard deviation of every coordinate
        random_state: Seed for numpy's default_rng

    Returns:
        DataFrame with a 0-based ``cluster`` column holding the true cluster,
        followed by coordinate columns ``x1..xd``. Points are grouped by
        cluster in center order.
    """
    centers_arr = np.asarray(centers, dtype=float)
    if centers_arr.ndim != 2:
        raise ValueError("centers must be a sequence of coordinate vectors")

    if len(num_points) != len(centers_arr):
        raise ValueError(f"Got {len(num_points)} cluster sizes for {len(centers_arr)} centers")

    if any(int(n) < 0 for n in num_points):
        raise ValueError("num_points must be non-negative")

    if sd < 0:
        raise ValueError("sd must be non-negative")

    rng = np.random.default_rng(random_state)
    n_features = centers_arr.shape[1]
    coordinate_columns = [f"x{i + 1}" for i in range(n_features)]

    blocks = []
    for cluster_idx, (center, n) in enumerate(zip(centers_arr, num_points)):
        points = rng.normal(loc=center, scale=sd, size=(int(n), n_features))
        block = pd.DataFrame(points, columns=coordinate_columns)
        block.insert(0, "cluster", cluster_idx)
        blocks.append(block)

    return pd.concat(blocks, axis=0, ignore_index=True)
