"""Performance metrics library for trading record analysis.

This library provides the pure analytics core:

1. **Models** (`models.py`): Pydantic data structures
   - Fill, Position, EquityPoint, FundingPayment: Input records
   - MaxDrawdown, DrawdownPeriod: Drawdown analysis
   - MarketStats, FundingSummary: Per-market breakdowns
   - MetricsBundle: Complete metrics report

2. **Statistics** (`statistics.py`): Population moments and rank helpers

3. **Returns** (`returns.py`, `annualization.py`): Return series derivation
   and sampling-frequency inference for irregular snapshots

4. **Metrics**: Pure calculation functions
   - Trades (`trades.py`): P&L, win rate, profit factor, streaks, hold times
   - Ratios (`ratios.py`): Sharpe, Sortino, Calmar, Omega, Kappa-3, ...
   - Drawdown (`drawdown.py`): Max drawdown, periods, Ulcer index
   - Tail risk (`tail_risk.py`): VaR, CVaR, volatility, tail ratio

Usage:
    >>> from tradestats.libraries.performance import calculate_sharpe_ratio
    >>> sharpe = calculate_sharpe_ratio(returns, risk_free_rate=0.0, periods_per_year=365)

Design Principles:
    - Stateless pure functions (testable, composable)
    - Degenerate input resolves to 0, favourable infinities to 999
    - Frozen models; caller records are never mutated
"""

from tradestats.libraries.performance.annualization import calculate_annualized_ratios, infer_periods_per_year
from tradestats.libraries.performance.drawdown import (
    calculate_average_drawdown,
    calculate_drawdown_periods,
    calculate_max_drawdown,
    calculate_ulcer_index,
)
from tradestats.libraries.performance.models import (
    SENTINEL_CAP,
    DrawdownPeriod,
    EquityPoint,
    Fill,
    FundingPayment,
    FundingSummary,
    MarketStats,
    MaxDrawdown,
    MetricsBundle,
    Position,
    is_capped,
)
from tradestats.libraries.performance.ratios import (
    calculate_calmar_ratio,
    calculate_information_ratio,
    calculate_kelly_criterion,
    calculate_omega_ratio,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
)
from tradestats.libraries.performance.returns import calculate_returns
from tradestats.libraries.performance.tail_risk import calculate_cvar, calculate_var, calculate_volatility
from tradestats.libraries.performance.trades import (
    calculate_expectancy,
    calculate_profit_factor,
    calculate_stats_by_market,
    calculate_win_rate,
)

__all__ = [
    # Models
    "Fill",
    "Position",
    "EquityPoint",
    "FundingPayment",
    "MaxDrawdown",
    "DrawdownPeriod",
    "MarketStats",
    "FundingSummary",
    "MetricsBundle",
    "SENTINEL_CAP",
    "is_capped",
    # Returns
    "calculate_returns",
    "infer_periods_per_year",
    "calculate_annualized_ratios",
    # Trades
    "calculate_win_rate",
    "calculate_profit_factor",
    "calculate_expectancy",
    "calculate_stats_by_market",
    # Ratios
    "calculate_sharpe_ratio",
    "calculate_sortino_ratio",
    "calculate_calmar_ratio",
    "calculate_omega_ratio",
    "calculate_information_ratio",
    "calculate_kelly_criterion",
    # Drawdown and tail risk
    "calculate_max_drawdown",
    "calculate_drawdown_periods",
    "calculate_average_drawdown",
    "calculate_ulcer_index",
    "calculate_var",
    "calculate_cvar",
    "calculate_volatility",
]
