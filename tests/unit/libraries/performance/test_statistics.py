"""Tests for statistical primitives."""

import math

import pytest

from tradestats.libraries.performance.statistics import (
    correlation,
    covariance,
    downside_deviation,
    kurtosis,
    lower_partial_moment,
    mean,
    median,
    rank_index,
    skewness,
    standard_deviation,
    value_at_rank,
    variance,
)


class TestMoments:
    """Test mean/variance/standard deviation."""

    def test_mean(self):
        assert mean([1.0, 2.0, 3.0, 4.0]) == 2.5

    def test_empty_input_is_zero(self):
        assert mean([]) == 0.0
        assert variance([]) == 0.0
        assert standard_deviation([]) == 0.0

    def test_population_variance(self):
        """Variance divides by n, not n - 1."""
        # Arrange
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]

        # Act & Assert
        assert variance(values) == pytest.approx(4.0)
        assert standard_deviation(values) == pytest.approx(2.0)

    def test_constant_series_has_zero_deviation(self):
        assert standard_deviation([0.5, 0.5, 0.5]) == 0.0


class TestDownsideDeviation:
    """Test downside deviation below a target."""

    def test_averages_over_full_sample(self):
        """Periods above target contribute zeros to the mean."""
        # Arrange - shortfalls 0.02 and 0.04 over 4 periods
        returns = [0.01, -0.02, 0.03, -0.04]

        # Act
        result = downside_deviation(returns)

        # Assert
        assert result == pytest.approx(math.sqrt((0.02**2 + 0.04**2) / 4))

    def test_no_downside_is_zero(self):
        assert downside_deviation([0.01, 0.02]) == 0.0

    def test_target_shifts_shortfall(self):
        assert downside_deviation([0.01, 0.01], target=0.02) == pytest.approx(0.01)


class TestHigherMoments:
    """Test skewness and excess kurtosis."""

    def test_skewness_requires_three_observations(self):
        assert skewness([0.1, -0.1]) == 0.0

    def test_symmetric_sample_has_zero_skew(self):
        assert skewness([-2.0, -1.0, 0.0, 1.0, 2.0]) == pytest.approx(0.0)

    def test_right_tail_is_positive_skew(self):
        assert skewness([0.0, 0.0, 0.0, 0.0, 10.0]) > 0

    def test_kurtosis_requires_four_observations(self):
        assert kurtosis([1.0, 2.0, 3.0]) == 0.0

    def test_kurtosis_is_excess(self):
        """Two-point symmetric distribution: m4 / m2^2 = 1, excess = -2."""
        assert kurtosis([-1.0, 1.0, -1.0, 1.0]) == pytest.approx(-2.0)

    def test_zero_variance_is_zero(self):
        assert skewness([1.0, 1.0, 1.0]) == 0.0
        assert kurtosis([1.0, 1.0, 1.0, 1.0]) == 0.0


class TestCovarianceAndCorrelation:
    """Test co-moments over aligned series."""

    def test_perfect_positive_correlation(self):
        assert correlation([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_perfect_negative_correlation(self):
        assert correlation([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == pytest.approx(-1.0)

    def test_uses_aligned_leading_elements(self):
        """Extra trailing elements of the longer series are ignored."""
        assert covariance([1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 100.0]) == pytest.approx(variance([1.0, 2.0, 3.0]))

    def test_zero_variance_correlation_is_zero(self):
        assert correlation([1.0, 1.0, 1.0], [1.0, 2.0, 3.0]) == 0.0

    def test_empty_is_zero(self):
        assert covariance([], [1.0]) == 0.0
        assert correlation([], []) == 0.0


class TestRankHelpers:
    """Test median, lower partial moment and rank helpers."""

    def test_median_odd_and_even(self):
        assert median([3.0, 1.0, 2.0]) == 2.0
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5
        assert median([]) == 0.0

    def test_lower_partial_moment_order_three(self):
        assert lower_partial_moment([-2.0, 1.0], threshold=0.0, order=3) == pytest.approx(4.0)

    def test_rank_index_floors(self):
        assert rank_index(0.05, 20) == 1
        assert rank_index(0.05, 10) == 0

    def test_value_at_rank_out_of_range_is_zero(self):
        assert value_at_rank([1.0, 2.0], 5) == 0.0
        assert value_at_rank([1.0, 2.0], -1) == 0.0
        assert value_at_rank([1.0, 2.0], 1) == 2.0
