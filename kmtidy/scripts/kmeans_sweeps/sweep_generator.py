from typing import Any, Dict, Iterable, List, Set


def generate_k_values(ks: Iterable[int]) -> List[int]:
    """
    Normalize the configured values of k into the execution order.

    Args:
        ks: Configured values of k

    Returns:
        Sorted list of unique positive integers

    Raises:
        ValueError: If any value is not a positive integer or appears twice
    """
    k_values = set()
    for k in ks:
        if isinstance(k, bool) or int(k) != k or k <= 0:
            raise ValueError(f"Values of k must be positive integers, got {k!r}")
        if int(k) in k_values:
            raise ValueError(f"Values of k must be unique, got {int(k)} twice")
        k_values.add(int(k))
    return sorted(k_values)


def filter_completed_ks(k_values: List[int], completed_ks: Set[int]) -> List[int]:
    """Drop values of k whose results are already in the report"""
    return [k for k in k_values if k not in completed_ks]


def get_sweep_statistics(k_values: List[int], n_samples: int) -> Dict[str, Any]:
    """
    Get statistics about the planned sweep.

    Args:
        k_values: Values of k that will be run
        n_samples: Number of observations being clustered

    Returns:
        Dictionary with the number of runs, the k range and any k that
        exceeds the number of observations
    """
    if not k_values:
        return {"total_runs": 0, "min_k": None, "max_k": None, "infeasible_ks": []}

    return {
        "total_runs": len(k_values),
        "min_k": min(k_values),
        "max_k": max(k_values),
        "infeasible_ks": [k for k in k_values if k > n_samples],
    }
