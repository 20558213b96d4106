import numpy as np
import pytest
from kmtidy.shared.tidying import ColumnCollisionError
from kmtidy.scripts.kmeans_sweeps.clustering_executor import run_kmeans_for_k, run_sweep, stack_tidy_tables
from kmtidy.shared.data.synthetic import generate_labeled_points

HYPERPARAMETERS = {"init": "k-means++", "n_init": 5, "max_iter": 300, "tol": 1e-4}


@pytest.fixture
def observations():
    return generate_labeled_points(num_points=[30, 40, 20], random_state=3)


@pytest.fixture
def features(observations):
    return observations[["x1", "x2"]].to_numpy()


class TestRunKMeansForK:
    def test_result_for_k(self, features):
        k_result = run_kmeans_for_k(features, 3, HYPERPARAMETERS, random_state=0, feature_names=["x1", "x2"])
        assert k_result.k == 3
        assert k_result.result.n_clusters == 3
        assert k_result.result.feature_names == ("x1", "x2")
        assert k_result.execution_time >= 0.0

    def test_failure_wrapped(self, features):
        with pytest.raises(RuntimeError):
            run_kmeans_for_k(features[:2], 5, HYPERPARAMETERS)


class TestRunSweep:
    def test_sequential_order(self, features):
        k_results = run_sweep(features, [1, 2, 3], HYPERPARAMETERS, random_state=0)
        assert [k_result.k for k_result in k_results] == [1, 2, 3]

    def test_within_ss_decreases_with_k(self, features):
        k_results = run_sweep(features, [1, 2, 3, 4], HYPERPARAMETERS, random_state=0)
        within = [k_result.result.total_within_ss for k_result in k_results]
        assert within[0] > within[1] > within[2]

    def test_parallel_matches_sequential(self, features):
        sequential = run_sweep(features, [2, 3], HYPERPARAMETERS, random_state=0, n_jobs=1)
        parallel = run_sweep(features, [2, 3], HYPERPARAMETERS, random_state=0, n_jobs=2)
        assert [k_result.k for k_result in parallel] == [2, 3]
        for left, right in zip(sequential, parallel):
            assert np.allclose(left.result.centers, right.result.centers)
            assert left.result.total_within_ss == pytest.approx(right.result.total_within_ss)


class TestStackTidyTables:
    def test_row_counts_per_table(self, observations, features):
        k_results = run_sweep(features, [1, 2, 3], HYPERPARAMETERS, random_state=0, feature_names=["x1", "x2"])
        tables = stack_tidy_tables(observations, k_results)
        assert len(tables.clusters) == 1 + 2 + 3
        assert len(tables.assignments) == 3 * len(observations)
        assert len(tables.summaries) == 3

    def test_k_column_first_and_sorted(self, observations, features):
        k_results = run_sweep(features, [1, 2], HYPERPARAMETERS, random_state=0, feature_names=["x1", "x2"])
        tables = stack_tidy_tables(observations, list(reversed(k_results)))
        for table in (tables.clusters, tables.assignments, tables.summaries):
            assert table.columns[0] == "k"
            assert table["k"].is_monotonic_increasing
        assert tables.summaries["k"].tolist() == [1, 2]

    def test_cluster_sizes_sum_per_k(self, observations, features):
        k_results = run_sweep(features, [2, 3], HYPERPARAMETERS, random_state=0, feature_names=["x1", "x2"])
        tables = stack_tidy_tables(observations, k_results)
        assert tables.clusters.groupby("k")["size"].sum().tolist() == [90, 90]

    def test_assignments_keep_true_cluster(self, observations, features):
        k_results = run_sweep(features, [3], HYPERPARAMETERS, random_state=0, feature_names=["x1", "x2"])
        tables = stack_tidy_tables(observations, k_results)
        assert list(tables.assignments.columns) == ["k", "cluster", "x1", "x2", ".cluster"]
        assert tables.assignments["cluster"].tolist() == observations["cluster"].tolist()

    def test_empty(self, observations):
        tables = stack_tidy_tables(observations, [])
        assert tables.clusters.empty and tables.assignments.empty and tables.summaries.empty

    def test_observations_with_k_column(self, observations, features):
        k_results = run_sweep(features, [2], HYPERPARAMETERS, random_state=0, feature_names=["x1", "x2"])
        with pytest.raises(ColumnCollisionError):
            stack_tidy_tables(observations.assign(k=1), k_results)
