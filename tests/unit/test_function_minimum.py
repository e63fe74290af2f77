"""Tests for FunctionMinimum."""

import io

import pytest

import numpy as np

from likely.core.algorithms.linear_algebra import pack_symmetric, unpack_upper
from likely.core.fitting.minimum import FunctionMinimum
from likely.core.random import Random
from likely.core.shared.exceptions import (
    InvalidCovarianceError,
    InvalidShapeError,
    MissingCovarianceError,
)


class TestConstruction:
    """Tests for building minima."""

    def test_without_covariance(self):
        """Should store the point and value without covariance."""
        fmin = FunctionMinimum(1.5, [1.0, 2.0])
        assert fmin.min_value == 1.5
        np.testing.assert_array_equal(fmin.where, [1.0, 2.0])
        assert fmin.n_parameters == 2
        assert fmin.have_covariance() is False

    def test_default_random_is_shared_instance(self):
        """Should use the shared Random when none is injected."""
        fmin = FunctionMinimum(0.0, [0.0])
        assert fmin.random is Random.instance()

    def test_with_full_covariance(self):
        """Should accept a positive-definite covariance."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0], [4.0, 1.0, 9.0])
        assert fmin.have_covariance() is True

    def test_with_errors(self):
        """Should accept an error vector."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0], [2.0, 3.0], errors_only=True)
        np.testing.assert_array_equal(fmin.get_errors(), [2.0, 3.0])

    def test_rejected_covariance_raises(self):
        """Should raise InvalidCovarianceError for a non-PD covariance."""
        with pytest.raises(InvalidCovarianceError):
            FunctionMinimum(0.0, [0.0, 0.0], [1.0, 2.0, 1.0])

    def test_rejected_errors_raise(self):
        """Should raise InvalidCovarianceError for non-positive errors."""
        with pytest.raises(InvalidCovarianceError):
            FunctionMinimum(0.0, [0.0, 0.0], [1.0, 0.0], errors_only=True)

    def test_infinite_errors_raise(self):
        """Should raise InvalidCovarianceError for infinite errors."""
        with pytest.raises(InvalidCovarianceError):
            FunctionMinimum(0.0, [0.0], [np.inf], errors_only=True)

    def test_wrong_size_raises(self):
        """Should raise InvalidShapeError for a mis-sized covariance."""
        with pytest.raises(InvalidShapeError):
            FunctionMinimum(0.0, [0.0, 0.0], [1.0, 0.0])

    def test_where_is_copied(self):
        """Should not alias the caller's array."""
        where = np.array([1.0, 2.0])
        fmin = FunctionMinimum(0.0, where)
        where[0] = 99.0
        fmin.where[1] = 99.0
        np.testing.assert_array_equal(fmin.where, [1.0, 2.0])

    def test_repr(self):
        """Should have readable string representation."""
        fmin = FunctionMinimum(2.5, [1.0, 2.0])
        repr_str = repr(fmin)
        assert "2.5" in repr_str
        assert "no covariance" in repr_str


class TestUpdateCovariance:
    """Tests for covariance ingest."""

    def test_errors_only_builds_diagonal(self):
        """Should store squared errors on the packed diagonal."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        assert fmin.update_covariance([2.0, 3.0], errors_only=True) is True
        np.testing.assert_array_equal(fmin.get_errors(), [2.0, 3.0])
        np.testing.assert_array_equal(fmin.get_covariance(), [4.0, 0.0, 9.0])
        np.testing.assert_array_equal(fmin.get_cholesky(), [2.0, 0.0, 3.0])

    def test_errors_only_recovers_errors(self):
        """Should return the same errors that were stored."""
        errors = np.array([0.1, 1e-3, 7.0, 2.5e4])
        fmin = FunctionMinimum(0.0, np.zeros(4))
        assert fmin.update_covariance(errors, errors_only=True)
        np.testing.assert_array_equal(fmin.get_errors(), errors)

    @pytest.mark.parametrize(
        "bad", [[1.0, 0.0], [-1.0, 2.0], [1.0, np.nan], [np.inf, 1.0], [1.0, -np.inf]]
    )
    def test_errors_only_rejects_non_positive(self, bad):
        """Should return False and leave the state unchanged."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        assert fmin.update_covariance(bad, errors_only=True) is False
        assert fmin.have_covariance() is False

    def test_errors_only_wrong_length(self):
        """Should raise InvalidShapeError on length mismatch."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        with pytest.raises(InvalidShapeError):
            fmin.update_covariance([1.0, 2.0, 3.0], errors_only=True)

    def test_rejected_covariance(self):
        """Should reject an indefinite matrix without mutation."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        assert fmin.update_covariance([1.0, 2.0, 1.0]) is False
        assert fmin.have_covariance() is False

    def test_rejected_covariance_keeps_previous(self):
        """Should keep an earlier covariance after a rejected update."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0], [4.0, 1.0, 9.0])
        assert fmin.update_covariance([1.0, 2.0, 1.0]) is False
        assert fmin.have_covariance() is True
        np.testing.assert_array_equal(fmin.get_covariance(), [4.0, 1.0, 9.0])

    def test_accepted_covariance(self):
        """Should store the covariance and a matching Cholesky factor."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        assert fmin.update_covariance([4.0, 1.0, 9.0]) is True
        np.testing.assert_allclose(fmin.get_errors(), [2.0, 3.0], rtol=1e-15)
        upper = unpack_upper(fmin.get_cholesky())
        np.testing.assert_allclose(upper.T @ upper, [[4.0, 1.0], [1.0, 9.0]], rtol=1e-14)

    def test_errors_match_diagonal(self, spd_covariance):
        """Should return square roots of the diagonal."""
        matrix, packed = spd_covariance
        fmin = FunctionMinimum(0.0, np.zeros(3), packed)
        np.testing.assert_allclose(fmin.get_errors(), np.sqrt(np.diag(matrix)), rtol=1e-15)
        np.testing.assert_array_equal(fmin.get_covariance_matrix(), matrix)

    def test_full_wrong_length(self):
        """Should raise InvalidShapeError on length mismatch."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        with pytest.raises(InvalidShapeError):
            fmin.update_covariance([1.0, 0.0, 1.0, 0.0])

    def test_covariance_is_copied(self):
        """Should own a private copy of the input covariance."""
        covar = np.array([4.0, 1.0, 9.0])
        fmin = FunctionMinimum(0.0, [0.0, 0.0], covar)
        covar[0] = -100.0
        np.testing.assert_array_equal(fmin.get_covariance(), [4.0, 1.0, 9.0])

    def test_missing_covariance(self):
        """Should raise MissingCovarianceError without covariance."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0])
        with pytest.raises(MissingCovarianceError):
            fmin.get_errors()
        with pytest.raises(MissingCovarianceError):
            fmin.get_covariance()
        with pytest.raises(MissingCovarianceError):
            fmin.set_random_parameters(np.zeros(2))


class TestUpdateParameters:
    """Tests for replacing the point."""

    def test_update_parameters_keeps_covariance(self):
        """Should replace point and value but keep the covariance."""
        fmin = FunctionMinimum(1.0, [0.0, 0.0], [4.0, 1.0, 9.0])
        fmin.update_parameters([5.0, 6.0], 0.25)
        assert fmin.min_value == 0.25
        np.testing.assert_array_equal(fmin.where, [5.0, 6.0])
        assert fmin.have_covariance() is True
        np.testing.assert_array_equal(fmin.get_covariance(), [4.0, 1.0, 9.0])

    def test_resized_point_invalidates_queries(self):
        """Should refuse covariance queries once the sizes disagree."""
        fmin = FunctionMinimum(1.0, [0.0, 0.0], [4.0, 1.0, 9.0])
        fmin.update_parameters([5.0, 6.0, 7.0], 0.25)
        with pytest.raises(InvalidShapeError):
            fmin.get_errors()
        assert fmin.update_covariance([1.0, 2.0, 3.0], errors_only=True) is True
        np.testing.assert_array_equal(fmin.get_errors(), [1.0, 2.0, 3.0])


class TestRandomParameters:
    """Tests for correlated Gaussian sampling."""

    def test_deterministic_sample(self, sequence_normals):
        """Should compute where + U.T @ g and return half the squared norm."""
        fmin = FunctionMinimum(
            0.0, [10.0, 20.0], [4.0, 0.0, 9.0], random=sequence_normals([1.0, 0.0])
        )
        dst = np.zeros(2)
        weight = fmin.set_random_parameters(dst)
        np.testing.assert_array_equal(dst, [12.0, 20.0])
        assert weight == 0.5

    def test_correlated_deterministic_sample(self, sequence_normals):
        """Should mix normals through the off-diagonal factor entries."""
        normals = [0.5, -1.5]
        fmin = FunctionMinimum(0.0, [1.0, -1.0], [4.0, 1.0, 9.0], random=sequence_normals(normals))
        dst = np.full(2, np.nan)
        weight = fmin.set_random_parameters(dst)

        upper = unpack_upper(fmin.get_cholesky())
        expected = np.array([1.0, -1.0]) + upper.T @ np.array(normals)
        np.testing.assert_allclose(dst, expected, rtol=1e-14)
        assert weight == pytest.approx(0.5 * (0.25 + 2.25))

    def test_overwrites_destination(self, sequence_normals):
        """Should start from where regardless of the previous contents."""
        fmin = FunctionMinimum(
            0.0, [1.0, 2.0], [1.0, 1.0], errors_only=True, random=sequence_normals([0.0])
        )
        dst = np.array([100.0, -100.0])
        assert fmin.set_random_parameters(dst) == 0.0
        np.testing.assert_array_equal(dst, [1.0, 2.0])

    def test_wrong_destination_size(self, sequence_normals):
        """Should raise InvalidShapeError for a mis-sized destination."""
        fmin = FunctionMinimum(0.0, [0.0, 0.0], [4.0, 1.0, 9.0], random=sequence_normals([1.0]))
        with pytest.raises(InvalidShapeError):
            fmin.set_random_parameters(np.zeros(3))

    def test_get_random_parameters(self, sequence_normals):
        """Should return a new sample and its weight."""
        fmin = FunctionMinimum(
            0.0, [10.0, 20.0], [4.0, 0.0, 9.0], random=sequence_normals([0.0, 2.0])
        )
        sample, weight = fmin.get_random_parameters()
        np.testing.assert_array_equal(sample, [10.0, 26.0])
        assert weight == 2.0

    def test_reseeding_reproduces_draws(self):
        """Should repeat draws after reseeding the random source."""
        rng = Random(seed=123)
        fmin = FunctionMinimum(0.0, [0.0, 0.0], [4.0, 1.0, 9.0], random=rng)
        first, weight_first = fmin.get_random_parameters()
        rng.set_seed(123)
        second, weight_second = fmin.get_random_parameters()
        np.testing.assert_array_equal(first, second)
        assert weight_first == weight_second

    def test_sample_covariance_converges(self, spd_covariance):
        """Should produce samples with the stored mean and covariance."""
        matrix, packed = spd_covariance
        where = np.array([1.0, -2.0, 0.5])
        fmin = FunctionMinimum(0.0, where, packed, random=Random(seed=2024))

        n_samples = 100_000
        samples = np.empty((n_samples, 3))
        for row in samples:
            fmin.set_random_parameters(row)

        np.testing.assert_allclose(samples.mean(axis=0), where, atol=0.05)
        empirical = np.cov(samples, rowvar=False)
        np.testing.assert_allclose(pack_symmetric(empirical), packed, atol=0.15)


class TestCopyAndFormat:
    """Tests for copying and text rendering."""

    def test_copy_is_independent(self):
        """Should copy arrays and share the random source."""
        fmin = FunctionMinimum(1.0, [0.0, 0.0], [4.0, 1.0, 9.0])
        copy = fmin.copy()
        copy.update_parameters([1.0, 1.0], 0.0)
        copy.update_covariance([1.0, 1.0], errors_only=True)
        assert copy.random is fmin.random
        np.testing.assert_array_equal(fmin.where, [0.0, 0.0])
        np.testing.assert_array_equal(fmin.get_covariance(), [4.0, 1.0, 9.0])

    def test_format_without_covariance(self):
        """Should render only the function value line."""
        fmin = FunctionMinimum(0.5, [1.0, 2.0])
        assert fmin.format(".2f") == "F(1.00,2.00) = 0.50"

    def test_format_with_covariance(self):
        """Should render errors and the full symmetric covariance."""
        fmin = FunctionMinimum(0.5, [1.0, 2.0], [4.0, 1.0, 9.0])
        lines = fmin.format(".1f").splitlines()
        assert lines[0] == "F(1.0,2.0) = 0.5"
        assert lines[1] == "ERRORS: 2.0 3.0"
        assert lines[2] == "COVARIANCE:"
        assert lines[3] == " 4.0 1.0"
        assert lines[4] == " 1.0 9.0"

    def test_print_to_stream(self):
        """Should write the rendering to a stream."""
        fmin = FunctionMinimum(0.5, [1.0], [2.0], errors_only=True)
        stream = io.StringIO()
        fmin.print_to_stream(stream, ".3g")
        assert stream.getvalue() == "F(1) = 0.5\nERRORS: 2\nCOVARIANCE:\n 4\n"

    def test_str_uses_default_format(self):
        """Should render with the default number format."""
        fmin = FunctionMinimum(0.5, [1.0, 2.0])
        assert str(fmin) == "F(1,2) = 0.5"
