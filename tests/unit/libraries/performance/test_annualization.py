"""Tests for sampling-frequency inference and annualization."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from tradestats.libraries.performance.annualization import (
    SECONDS_PER_YEAR,
    annualize_ratio,
    calculate_annualized_ratios,
    infer_periods_per_year,
    to_epoch_seconds,
)
from tradestats.libraries.performance.models import SENTINEL_CAP
from tradestats.libraries.performance.ratios import calculate_sharpe_ratio


class TestToEpochSeconds:
    """Test timestamp conversion."""

    def test_iso_string_with_z_suffix(self):
        assert to_epoch_seconds("1970-01-01T00:01:00Z") == 60.0

    def test_numeric_epoch_passthrough(self):
        assert to_epoch_seconds(1_700_000_000) == 1_700_000_000.0

    def test_unparseable_string_is_none(self):
        assert to_epoch_seconds("not-a-date") is None


class TestInferPeriodsPerYear:
    """Test median-gap frequency inference."""

    def test_hourly_snapshots(self):
        # Arrange
        hourly = [datetime(2025, 1, 1, h, tzinfo=timezone.utc) for h in range(24)]

        # Act
        ppy = infer_periods_per_year(hourly)

        # Assert
        assert ppy == pytest.approx(8766.0)

    def test_daily_snapshots(self):
        t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
        daily = [t0 + timedelta(days=d) for d in range(10)]

        assert infer_periods_per_year(daily) == pytest.approx(365.25)

    def test_median_ignores_single_gap_outlier(self):
        """One long gap does not change the inferred hourly frequency."""
        # Arrange
        t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
        stamps = [t0, t0 + timedelta(hours=1), t0 + timedelta(hours=2), t0 + timedelta(days=5)]

        # Act & Assert
        assert infer_periods_per_year(stamps) == pytest.approx(SECONDS_PER_YEAR / 3600)

    def test_unsorted_input_is_sorted_first(self):
        t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
        stamps = [t0 + timedelta(days=2), t0, t0 + timedelta(days=1)]

        assert infer_periods_per_year(stamps) == pytest.approx(365.25)

    def test_fewer_than_two_timestamps_falls_back_to_hourly(self):
        assert infer_periods_per_year([]) == pytest.approx(8766.0)
        assert infer_periods_per_year([datetime(2025, 1, 1)]) == pytest.approx(8766.0)

    def test_identical_timestamps_fall_back_to_hourly(self):
        t0 = datetime(2025, 1, 1)
        assert infer_periods_per_year([t0, t0, t0]) == pytest.approx(8766.0)

    def test_result_is_at_least_one(self):
        stamps = ["2020-01-01T00:00:00Z", "2025-01-01T00:00:00Z"]

        assert infer_periods_per_year(stamps) == 1.0


class TestAnnualizedRatios:
    """Test per-period vs annualized Sharpe/Sortino."""

    def test_annualize_scales_by_sqrt(self):
        assert annualize_ratio(0.5, 365) == pytest.approx(0.5 * math.sqrt(365))

    def test_non_positive_frequency_leaves_ratio_unscaled(self):
        assert annualize_ratio(0.5, 0) == 0.5

    def test_per_period_and_annualized(self):
        # Arrange
        returns = [0.01, -0.02, 0.03, 0.01, -0.01]
        t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
        stamps = [t0 + timedelta(days=d) for d in range(6)]

        # Act
        result = calculate_annualized_ratios(returns, stamps)

        # Assert
        assert result.sharpe == pytest.approx(calculate_sharpe_ratio(returns, 0, 1))
        assert result.sharpe_annualized == pytest.approx(result.sharpe * math.sqrt(365.25))
        assert result.sortino_annualized == pytest.approx(result.sortino * math.sqrt(365.25))
        assert result.periods_per_year == pytest.approx(365.25)

    def test_saturated_sortino_is_not_scaled(self):
        t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
        stamps = [t0 + timedelta(days=d) for d in range(4)]

        result = calculate_annualized_ratios([0.01, 0.02, 0.03], stamps)

        assert result.sortino == SENTINEL_CAP
        assert result.sortino_annualized == SENTINEL_CAP
