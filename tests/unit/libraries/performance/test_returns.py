"""Tests for equity normalization and return derivation."""

from datetime import datetime, timedelta, timezone

import pytest

from tradestats.libraries.performance.models import EquityPoint
from tradestats.libraries.performance.returns import (
    calculate_returns,
    epoch_seconds,
    equity_value,
    equity_values,
    sort_equity_history,
)


class TestEquityValues:
    """Test equity series normalization."""

    def test_accepts_numbers_records_and_mappings(self):
        # Arrange
        series = [100, 101.5, EquityPoint(equity=102), {"equity": "103"}]

        # Act
        result = equity_values(series)

        # Assert
        assert result == [100.0, 101.5, 102.0, 103.0]

    def test_mapping_without_equity_is_zero(self):
        assert equity_value({"totalPnl": 5}) == 0.0

    def test_none_is_empty(self):
        assert equity_values(None) == []


class TestCalculateReturns:
    """Test per-period return derivation."""

    def test_fractional_returns(self):
        result = calculate_returns([100, 110, 99])

        assert result == pytest.approx([0.10, -0.10])

    def test_percentage_returns(self):
        result = calculate_returns([100, 110, 99], as_percentage=True)

        assert result == pytest.approx([10.0, -10.0])

    def test_skips_pairs_with_non_positive_previous_value(self):
        """A zero equity cannot be a return base; the pair is dropped."""
        result = calculate_returns([100, 0, 50, 55])

        assert result == pytest.approx([-1.0, 0.10])

    def test_skips_non_finite_values(self):
        result = calculate_returns([100, float("nan"), 100, 120])

        assert result == pytest.approx([0.20])

    def test_fewer_than_two_points_is_empty(self):
        assert calculate_returns([100]) == []
        assert calculate_returns([]) == []

    def test_does_not_mutate_input(self):
        # Arrange
        equity = [100, 110, 99]
        snapshot = list(equity)

        # Act
        calculate_returns(equity)

        # Assert
        assert equity == snapshot


class TestSortEquityHistory:
    """Test chronological ordering of snapshots."""

    def test_sorts_by_timestamp(self):
        # Arrange
        t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
        points = [
            EquityPoint(equity=3, created_at=t0 + timedelta(hours=2)),
            EquityPoint(equity=1, created_at=t0),
            EquityPoint(equity=2, created_at=t0 + timedelta(hours=1)),
        ]

        # Act
        ordered = sort_equity_history(points)

        # Assert
        assert [p.equity for p in ordered] == [1, 2, 3]

    def test_naive_and_aware_epoch_agree_for_utc(self):
        naive = datetime(2025, 1, 1, 12)
        aware = datetime(2025, 1, 1, 12, tzinfo=timezone.utc)

        assert epoch_seconds(naive) == epoch_seconds(aware)
