import numpy as np
import pytest
from sklearn.cluster import KMeans
from kmtidy.shared.clustering.result import ClusteringResult, ShapeMismatchError


def _three_cluster_result(**overrides):
    fields = dict(
        assignments=[0] * 100 + [1] * 150 + [2] * 50,
        centers=[[5, -1], [0, 1], [-3, -2]],
        sizes=[100, 150, 50],
        within_ss=[10.0, 12.0, 8.0],
        total_ss=100.0,
        total_within_ss=30.0,
        between_ss=70.0,
        iterations=3,
    )
    fields.update(overrides)
    return ClusteringResult(**fields)


class TestClusteringResultConstruction:
    def test_counts(self):
        result = _three_cluster_result()
        assert result.n_clusters == 3
        assert result.n_samples == 300
        assert result.n_features == 2
        assert result.method == "kmeans"

    def test_default_coordinate_names(self):
        assert _three_cluster_result().coordinate_names == ("x1", "x2")

    def test_feature_names(self):
        result = _three_cluster_result(feature_names=["lat", "lon"])
        assert result.coordinate_names == ("lat", "lon")

    def test_arrays_are_read_only(self):
        result = _three_cluster_result()
        with pytest.raises(ValueError):
            result.sizes[0] = 1
        with pytest.raises(ValueError):
            result.centers[0, 0] = 1.0

    def test_input_is_copied(self):
        sizes = np.array([100, 150, 50])
        result = _three_cluster_result(sizes=sizes)
        sizes[0] = 0
        assert result.sizes[0] == 100

    def test_fields_cannot_be_reassigned(self):
        result = _three_cluster_result()
        with pytest.raises(AttributeError):
            result.iterations = 10


class TestClusteringResultValidation:
    def test_fewer_sizes_than_centers(self):
        with pytest.raises(ShapeMismatchError):
            _three_cluster_result(sizes=[100, 150])

    def test_fewer_withinss_than_centers(self):
        with pytest.raises(ShapeMismatchError):
            _three_cluster_result(within_ss=[10.0, 12.0])

    def test_sizes_do_not_sum_to_assignments(self):
        with pytest.raises(ShapeMismatchError):
            _three_cluster_result(sizes=[100, 150, 49])

    def test_assignment_out_of_range(self):
        with pytest.raises(ShapeMismatchError):
            _three_cluster_result(assignments=[0] * 100 + [1] * 150 + [3] * 50)

    def test_wrong_number_of_feature_names(self):
        with pytest.raises(ShapeMismatchError):
            _three_cluster_result(feature_names=["only_one"])

    def test_fractional_assignments_rejected(self):
        with pytest.raises(ValueError):
            _three_cluster_result(assignments=[0.0] * 99 + [1.7] + [1.0] * 150 + [2.0] * 50)

    def test_fractional_sizes_rejected(self):
        with pytest.raises(ValueError):
            _three_cluster_result(sizes=[100.5, 149.5, 50])

    def test_whole_float_assignments_accepted(self):
        result = _three_cluster_result(assignments=np.array([0.0] * 100 + [1.0] * 150 + [2.0] * 50))
        assert result.assignments.dtype.kind == "i"

    def test_shape_mismatch_is_value_error(self):
        assert issubclass(ShapeMismatchError, ValueError)


class TestFromKMeans:
    @pytest.fixture
    def fitted(self):
        features = np.array(
            [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [10.0, 10.0], [10.0, 11.0], [11.0, 10.0]]
        )
        model = KMeans(n_clusters=2, n_init=10, random_state=0).fit(features)
        return model, features

    def test_sizes_and_assignments(self, fitted):
        model, features = fitted
        result = ClusteringResult.from_kmeans(model, features)
        assert sorted(result.sizes.tolist()) == [3, 3]
        assert result.assignments.tolist() == model.labels_.tolist()

    def test_sums_of_squares(self, fitted):
        model, features = fitted
        result = ClusteringResult.from_kmeans(model, features)
        # each blob is an L of three points: 2/9 + 5/9 + 5/9 around its centroid
        assert np.allclose(result.within_ss, [4.0 / 3.0, 4.0 / 3.0])
        assert result.total_within_ss == pytest.approx(8.0 / 3.0)
        assert result.total_within_ss == pytest.approx(model.inertia_)
        expected_total = np.sum((features - features.mean(axis=0)) ** 2)
        assert result.total_ss == pytest.approx(expected_total)
        assert result.between_ss == pytest.approx(result.total_ss - result.total_within_ss)

    def test_iterations(self, fitted):
        model, features = fitted
        assert ClusteringResult.from_kmeans(model, features).iterations == model.n_iter_

    def test_feature_names_passed_through(self, fitted):
        model, features = fitted
        result = ClusteringResult.from_kmeans(model, features, feature_names=["a", "b"])
        assert result.feature_names == ("a", "b")

    def test_row_count_mismatch(self, fitted):
        model, features = fitted
        with pytest.raises(ShapeMismatchError):
            ClusteringResult.from_kmeans(model, features[:4])
