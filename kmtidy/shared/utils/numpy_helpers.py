from typing import List, Optional, Tuple
import numpy as np
import pandas as pd


def as_feature_matrix(data, columns: Optional[List[str]] = None) -> Tuple[np.ndarray, List[str]]:
    """
    Convert tabular input to a 2D float matrix and its column names.

    Args:
        data: A pandas DataFrame, a 2D numpy array or a nested list of rows.
        columns: Columns to select when data is a DataFrame. All columns are used when omitted.

    Returns:
        Tuple[np.ndarray, List[str]]: The (n_samples, n_features) matrix and one name per column.
            Arrays without names get x1..xd.
    """
    if isinstance(data, pd.DataFrame):
        frame = data[columns] if columns is not None else data
        names = [str(name) for name in frame.columns]
        matrix = frame.to_numpy(dtype=float)
    else:
        if columns is not None:
            raise ValueError("columns can only be selected from a DataFrame")
        matrix = np.asarray(data, dtype=float)
        if matrix.ndim == 1:
            matrix = matrix.reshape(-1, 1)
        names = [f"x{i + 1}" for i in range(matrix.shape[1])] if matrix.ndim == 2 else []

    if matrix.ndim != 2:
        raise ValueError(f"Features must be 2D array of shape (n_samples, n_features), got {matrix.ndim}D")

    return matrix, names


def convert_to_primitives_nested(obj: list | dict | np.ndarray | np.number) -> list | dict:
    """
    Convert numpy arrays in a nested structure (list or dict) to Python primitives.
    Numpy scalar dict keys are converted as well.

    Args:
        obj (list | dict | np.ndarray): The input object which can be a list, dict, or numpy array.

    Returns:
        list | dict: The input object with numpy arrays converted to Python primitives.
    """
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, (list, tuple)):
        return [convert_to_primitives_nested(item) for item in obj]
    elif isinstance(obj, dict):
        return {
            (key.item() if isinstance(key, np.generic) else key): convert_to_primitives_nested(value)
            for key, value in obj.items()
        }
    elif isinstance(obj, np.generic):
        return obj.item()
    else:
        return obj
