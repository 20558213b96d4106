import pytest
from kmtidy.scripts.kmeans_sweeps.sweep_generator import (
    filter_completed_ks,
    generate_k_values,
    get_sweep_statistics,
)


class TestGenerateKValues:
    def test_sorted(self):
        assert generate_k_values([3, 1, 2]) == [1, 2, 3]

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError):
            generate_k_values([3, 1, 2, 3])

    def test_range(self):
        assert generate_k_values(range(1, 10)) == [1, 2, 3, 4, 5, 6, 7, 8, 9]

    def test_integral_floats_accepted(self):
        assert generate_k_values([2.0, 4]) == [2, 4]

    def test_zero_rejected(self):
        with pytest.raises(ValueError):
            generate_k_values([0, 1])

    def test_fraction_rejected(self):
        with pytest.raises(ValueError):
            generate_k_values([1.5])

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            generate_k_values([True])

    def test_empty(self):
        assert generate_k_values([]) == []


class TestFilterCompletedKs:
    def test_removes_completed(self):
        assert filter_completed_ks([1, 2, 3, 4], {2, 4}) == [1, 3]

    def test_nothing_completed(self):
        assert filter_completed_ks([1, 2], set()) == [1, 2]

    def test_all_completed(self):
        assert filter_completed_ks([1, 2], {1, 2, 3}) == []


class TestGetSweepStatistics:
    def test_basic(self):
        stats = get_sweep_statistics([1, 2, 3], n_samples=300)
        assert stats == {"total_runs": 3, "min_k": 1, "max_k": 3, "infeasible_ks": []}

    def test_infeasible(self):
        assert get_sweep_statistics([2, 5, 6], n_samples=5)["infeasible_ks"] == [6]

    def test_empty(self):
        assert get_sweep_statistics([], n_samples=10)["total_runs"] == 0
