"""Tests for risk-adjusted performance ratios."""

import math

import pytest

from tradestats.libraries.performance.models import SENTINEL_CAP
from tradestats.libraries.performance.ratios import (
    calculate_alpha,
    calculate_beta,
    calculate_burke_ratio,
    calculate_cagr,
    calculate_calmar_ratio,
    calculate_gain_to_pain_ratio,
    calculate_information_ratio,
    calculate_kappa3_ratio,
    calculate_kelly_criterion,
    calculate_mar_ratio,
    calculate_omega_ratio,
    calculate_r_squared,
    calculate_risk_adjusted_return,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_sterling_ratio,
    calculate_treynor_ratio,
)

RETURNS = [0.01, -0.02, 0.03, 0.01, -0.01]


class TestSharpeRatio:
    """Test Sharpe ratio calculation."""

    def test_per_period_sharpe(self):
        """mean 0.004 / population stddev 0.017436."""
        assert calculate_sharpe_ratio(RETURNS, 0, 1) == pytest.approx(0.2294, abs=1e-4)

    def test_annualized_by_sqrt_periods(self):
        per_period = calculate_sharpe_ratio(RETURNS, 0, 1)

        assert calculate_sharpe_ratio(RETURNS, 0, 252) == pytest.approx(per_period * math.sqrt(252))

    def test_risk_free_rate_lowers_sharpe(self):
        assert calculate_sharpe_ratio(RETURNS, 0.001, 1) < calculate_sharpe_ratio(RETURNS, 0, 1)

    def test_zero_volatility_is_zero(self):
        assert calculate_sharpe_ratio([0.5, 0.5, 0.5]) == 0.0

    def test_empty_is_zero(self):
        assert calculate_sharpe_ratio([]) == 0.0

    def test_idempotent_and_input_unchanged(self):
        # Arrange
        returns = list(RETURNS)

        # Act
        first = calculate_sharpe_ratio(returns)
        second = calculate_sharpe_ratio(returns)

        # Assert
        assert first == second
        assert returns == RETURNS


class TestSortinoRatio:
    """Test Sortino ratio calculation."""

    def test_per_period_sortino(self):
        """Downside deviation sqrt((0.02^2 + 0.01^2) / 5) = 0.01."""
        assert calculate_sortino_ratio(RETURNS, 0, 1) == pytest.approx(0.4)

    def test_no_downside_saturates(self):
        assert calculate_sortino_ratio([0.01, 0.02, 0.03]) == SENTINEL_CAP

    def test_no_downside_below_target_is_zero(self):
        assert calculate_sortino_ratio([0.0, 0.0], target_return=0.0) == 0.0

    def test_empty_is_zero(self):
        assert calculate_sortino_ratio([]) == 0.0


class TestCalmarRatio:
    """Test Calmar ratio calculation."""

    def test_annual_return_over_drawdown(self):
        """0.004 * 252 / 0.1."""
        assert calculate_calmar_ratio(RETURNS, 0.1, 252) == pytest.approx(10.08)

    def test_sign_follows_annual_return(self):
        assert calculate_calmar_ratio([-0.01, -0.02], 0.05, 252) < 0

    def test_zero_drawdown_saturates_on_positive_return(self):
        assert calculate_calmar_ratio([0.01, 0.02], 0.0) == SENTINEL_CAP
        assert calculate_calmar_ratio([-0.01, -0.02], 0.0) == 0.0


class TestOmegaAndKappa:
    """Test Omega and Kappa-3 ratios."""

    def test_omega(self):
        assert calculate_omega_ratio([0.02, -0.01, 0.03, -0.02]) == pytest.approx(0.05 / 0.03)

    def test_omega_saturates_without_losses(self):
        assert calculate_omega_ratio([0.01, 0.02]) == SENTINEL_CAP

    def test_omega_all_at_threshold_is_zero(self):
        assert calculate_omega_ratio([0.0, 0.0]) == 0.0

    def test_omega_empty_is_zero(self):
        assert calculate_omega_ratio([]) == 0.0

    def test_kappa3(self):
        """LPM3 = 0.01^3 / 2; mean 0.005."""
        expected = 0.005 / (0.01**3 / 2) ** (1 / 3)

        assert calculate_kappa3_ratio([0.02, -0.01]) == pytest.approx(expected)

    def test_kappa3_without_downside_is_zero(self):
        assert calculate_kappa3_ratio([0.01, 0.02]) == 0.0


class TestDrawdownRatios:
    """Test Sterling and Burke ratios."""

    def test_sterling(self):
        assert calculate_sterling_ratio(RETURNS, 0.05, 0.0, 252) == pytest.approx(20.16)

    def test_sterling_without_drawdown(self):
        assert calculate_sterling_ratio([0.01], 0.0) == SENTINEL_CAP
        assert calculate_sterling_ratio([-0.01], 0.0) == 0.0

    def test_burke(self):
        """0.004 / sqrt(0.03^2 + 0.04^2)."""
        assert calculate_burke_ratio(RETURNS, [0.03, 0.04]) == pytest.approx(0.08)

    def test_burke_without_drawdowns(self):
        assert calculate_burke_ratio([0.01], []) == SENTINEL_CAP
        assert calculate_burke_ratio([], [0.1]) == 0.0


class TestBenchmarkRatios:
    """Test beta, alpha, R-squared, Treynor and information ratio."""

    MARKET = [0.01, -0.02, 0.03]
    LEVERED = [0.02, -0.04, 0.06]

    def test_beta_of_levered_series(self):
        assert calculate_beta(self.LEVERED, self.MARKET) == pytest.approx(2.0)

    def test_beta_constant_market_is_zero(self):
        assert calculate_beta(self.LEVERED, [0.5, 0.5, 0.5]) == 0.0

    def test_beta_uses_aligned_prefix(self):
        assert calculate_beta(self.LEVERED, [*self.MARKET, 0.5, -0.5]) == pytest.approx(2.0)

    def test_alpha_of_pure_beta_is_zero(self):
        assert calculate_alpha(self.LEVERED, self.MARKET) == pytest.approx(0.0, abs=1e-12)

    def test_r_squared(self):
        assert calculate_r_squared(self.LEVERED, self.MARKET) == pytest.approx(1.0)
        assert calculate_r_squared([], self.MARKET) == 0.0

    def test_treynor(self):
        assert calculate_treynor_ratio(self.LEVERED, self.MARKET) == pytest.approx(0.04 / 3 / 2)

    def test_treynor_zero_beta_is_zero(self):
        assert calculate_treynor_ratio(self.LEVERED, [0.0, 0.0, 0.0]) == 0.0

    def test_information_ratio_pads_missing_benchmark(self):
        """Excess returns [0.01, 0.01, 0.03]."""
        expected = (0.05 / 3) / math.sqrt(((0.01 - 0.05 / 3) ** 2 * 2 + (0.03 - 0.05 / 3) ** 2) / 3)

        assert calculate_information_ratio([0.02, 0.01, 0.03], [0.01]) == pytest.approx(expected)

    def test_information_ratio_zero_tracking_error(self):
        assert calculate_information_ratio([0.02, 0.03], [0.02, 0.03]) == 0.0


class TestOtherRatios:
    """Test gain-to-pain, CAGR, MAR, Kelly and risk-adjusted return."""

    def test_gain_to_pain(self):
        assert calculate_gain_to_pain_ratio([0.02, -0.01, 0.03, -0.02]) == pytest.approx(0.25)
        assert calculate_gain_to_pain_ratio([0.0, 0.0]) == 0.0

    def test_cagr(self):
        assert calculate_cagr(100, 121, 2) == pytest.approx(10.0)

    def test_cagr_wiped_out(self):
        assert calculate_cagr(100, 0, 1) == -100.0

    def test_cagr_invalid_inputs(self):
        assert calculate_cagr(0, 100, 1) == 0.0
        assert calculate_cagr(100, 110, 0) == 0.0

    def test_mar(self):
        assert calculate_mar_ratio(100, 121, 2, 20) == pytest.approx(0.5)
        assert calculate_mar_ratio(100, 121, 2, 0) == 0.0

    def test_kelly_capped_at_25(self):
        assert calculate_kelly_criterion(60, 2, 1) == 25.0

    def test_kelly_uncapped_value(self):
        assert calculate_kelly_criterion(55, 1, 1) == pytest.approx(10.0)

    def test_kelly_negative_edge_floors_at_zero(self):
        assert calculate_kelly_criterion(30, 1, 1) == 0.0

    def test_kelly_degenerate_inputs(self):
        assert calculate_kelly_criterion(60, 2, 0) == 0.0
        assert calculate_kelly_criterion(60, 0, 1) == 0.0

    def test_risk_adjusted_return_by_volatility(self):
        result = calculate_risk_adjusted_return(RETURNS, "volatility")

        assert result == pytest.approx(calculate_sharpe_ratio(RETURNS, 0, 1))

    def test_risk_adjusted_return_saturates(self):
        assert calculate_risk_adjusted_return([0.01, 0.01], "volatility") == SENTINEL_CAP

    def test_risk_adjusted_return_by_cvar(self):
        returns = [-0.05, -0.02, 0.01, 0.03, 0.04] * 4

        assert calculate_risk_adjusted_return(returns, "cvar") == pytest.approx(0.002 / 0.05)
