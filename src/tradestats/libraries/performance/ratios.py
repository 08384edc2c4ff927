"""Risk-adjusted performance ratios.

Pure functions over per-period return sequences. Returns may be fractional
(0.01 = 1%) or percentage points (1.0 = 1%); callers must keep returns,
risk-free rate, thresholds and drawdowns in the same unit.

Zero-denominator policy (outputs are always numeric):

    Ratio              Degenerate denominator
    -----------------  ----------------------------------------------
    Sharpe             stddev = 0           -> 0
    Sortino            downside dev = 0     -> 999 if mean > target else 0
    Calmar             max drawdown = 0     -> 999 if annual return > 0 else 0
    Omega              losses = 0           -> 999 if gains > 0 else 0
    Kappa-3            LPM3 = 0             -> 0
    Sterling           avg drawdown = 0     -> 999 if excess > 0 else 0
    Burke              sqrt(sum dd^2) = 0   -> 999 if excess > 0 else 0
    Treynor            beta = 0             -> 0
    Information        tracking error = 0   -> 0
    Beta               market variance = 0  -> 0
    Gain-to-Pain       sum |r| = 0          -> 0
    MAR                bad capital/years/dd -> 0
    Kelly              avg loss or odds = 0 -> 0 (result clamped to [0, 25])

Every function returns 0.0 on empty input unless noted otherwise.

Usage:
    >>> from tradestats.libraries.performance import ratios
    >>> ratios.calculate_sharpe_ratio([0.01, -0.02, 0.03, 0.01, -0.01], 0, 1)
    0.2294...
    >>> ratios.calculate_kelly_criterion(win_rate=60, avg_win_ratio=2, avg_loss_ratio=1)
    25.0
"""

import math
from typing import Literal, Sequence

from tradestats.libraries.performance.models import SENTINEL_CAP
from tradestats.libraries.performance.statistics import (
    correlation,
    covariance,
    downside_deviation,
    lower_partial_moment,
    mean,
    standard_deviation,
    variance,
)
from tradestats.libraries.performance.tail_risk import calculate_cvar, calculate_var, calculate_volatility

DEFAULT_PERIODS_PER_YEAR = 252


def _saturate(favourable: bool) -> float:
    return SENTINEL_CAP if favourable else 0.0


def calculate_sharpe_ratio(
    returns: Sequence[float],
    risk_free_rate: float = 0.0,
    periods_per_year: float = DEFAULT_PERIODS_PER_YEAR,
) -> float:
    """
    Calculate Sharpe ratio.

    Sharpe = (mean(r) - rf) / stddev(r) * sqrt(periods_per_year)

    Args:
        returns: Per-period returns
        risk_free_rate: Per-period risk-free rate
        periods_per_year: Annualization periods (1 = no scaling)

    Returns:
        Annualized Sharpe ratio, 0.0 for empty input or zero volatility
    """
    if not returns:
        return 0.0

    std_dev = standard_deviation(returns)
    if std_dev == 0:
        return 0.0

    sharpe = (mean(returns) - risk_free_rate) / std_dev
    return sharpe * math.sqrt(periods_per_year)


def calculate_sortino_ratio(
    returns: Sequence[float],
    target_return: float = 0.0,
    periods_per_year: float = DEFAULT_PERIODS_PER_YEAR,
) -> float:
    """
    Calculate Sortino ratio (penalizes downside volatility only).

    Sortino = (mean(r) - target) / downside_deviation(r, target) * sqrt(periods_per_year)

    Returns:
        Annualized Sortino ratio; 999 when there is no downside and the mean
        beats the target, 0.0 when there is no downside otherwise
    """
    if not returns:
        return 0.0

    avg_return = mean(returns)
    down_dev = downside_deviation(returns, target_return)

    if down_dev == 0:
        return _saturate(avg_return > target_return)

    sortino = (avg_return - target_return) / down_dev
    return sortino * math.sqrt(periods_per_year)


def calculate_calmar_ratio(
    returns: Sequence[float],
    max_drawdown: float,
    periods_per_year: float = DEFAULT_PERIODS_PER_YEAR,
) -> float:
    """
    Calculate Calmar ratio (annualized mean return / |max drawdown|).

    Args:
        returns: Per-period returns
        max_drawdown: Maximum drawdown in the same unit as returns
        periods_per_year: Periods used to annualize the mean return

    Returns:
        Calmar ratio; 999 when max drawdown is 0 and the annual return is positive
    """
    if not returns:
        return 0.0

    annual_return = mean(returns) * periods_per_year

    if max_drawdown == 0:
        return _saturate(annual_return > 0)

    return annual_return / abs(max_drawdown)


def calculate_omega_ratio(returns: Sequence[float], threshold: float = 0.0) -> float:
    """
    Calculate Omega ratio: sum of gains above threshold / sum of shortfalls below it.

    Returns at exactly the threshold contribute to neither side.
    """
    if not returns:
        return 0.0

    sum_gains = 0.0
    sum_losses = 0.0
    for r in returns:
        if r > threshold:
            sum_gains += r - threshold
        else:
            sum_losses += threshold - r

    if sum_losses == 0:
        return _saturate(sum_gains > 0)

    return sum_gains / sum_losses


def calculate_kappa3_ratio(returns: Sequence[float], threshold: float = 0.0) -> float:
    """
    Calculate Kappa-3: (mean(r) - threshold) / LPM(r, threshold, 3) ** (1/3).

    Like Sortino but with the third lower partial moment, so large losses
    weigh more heavily.
    """
    if not returns:
        return 0.0

    lpm3 = lower_partial_moment(returns, threshold, 3)
    if lpm3 == 0:
        return 0.0

    return (mean(returns) - threshold) / lpm3 ** (1 / 3)


def calculate_sterling_ratio(
    returns: Sequence[float],
    avg_drawdown: float,
    risk_free_rate: float = 0.0,
    periods_per_year: float = DEFAULT_PERIODS_PER_YEAR,
) -> float:
    """
    Calculate Sterling ratio: |annual return - rf| / average drawdown.

    Args:
        returns: Per-period returns
        avg_drawdown: Average drawdown depth in the same unit as returns
        risk_free_rate: Annual risk-free rate
        periods_per_year: Periods used to annualize the mean return
    """
    if not returns:
        return 0.0

    excess_return = mean(returns) * periods_per_year - risk_free_rate

    if avg_drawdown == 0:
        return _saturate(excess_return > 0)

    return abs(excess_return / avg_drawdown)


def calculate_burke_ratio(
    returns: Sequence[float],
    drawdowns: Sequence[float],
    risk_free_rate: float = 0.0,
) -> float:
    """
    Calculate Burke ratio: (mean(r) - rf) / sqrt(sum of squared drawdowns).

    Args:
        returns: Per-period returns
        drawdowns: Depth of each drawdown period, same unit as returns
        risk_free_rate: Per-period risk-free rate
    """
    if not returns:
        return 0.0

    excess_return = mean(returns) - risk_free_rate
    denominator = math.sqrt(sum(dd * dd for dd in drawdowns))

    if denominator == 0:
        return _saturate(excess_return > 0)

    return excess_return / denominator


def calculate_beta(returns: Sequence[float], market_returns: Sequence[float]) -> float:
    """
    Calculate beta (systematic risk): cov(r, market) / var(market).

    Computed over the aligned leading elements of both series.
    """
    n = min(len(returns), len(market_returns))
    if n == 0:
        return 0.0

    market_variance = variance(market_returns[:n])
    if market_variance == 0:
        return 0.0

    return covariance(returns, market_returns) / market_variance


def calculate_alpha(
    returns: Sequence[float],
    market_returns: Sequence[float],
    risk_free_rate: float = 0.0,
) -> float:
    """
    Calculate Jensen's alpha.

    alpha = mean(r) - (rf + beta * (mean(market) - rf))
    """
    if not returns:
        return 0.0

    beta = calculate_beta(returns, market_returns)
    return mean(returns) - (risk_free_rate + beta * (mean(market_returns) - risk_free_rate))


def calculate_r_squared(returns: Sequence[float], market_returns: Sequence[float]) -> float:
    """Calculate R-squared: correlation(r, market) ** 2."""
    if not returns or not market_returns:
        return 0.0
    return correlation(returns, market_returns) ** 2


def calculate_treynor_ratio(
    returns: Sequence[float],
    market_returns: Sequence[float],
    risk_free_rate: float = 0.0,
) -> float:
    """Calculate Treynor ratio: (mean(r) - rf) / beta; 0.0 when beta is 0."""
    if not returns:
        return 0.0

    beta = calculate_beta(returns, market_returns)
    if beta == 0:
        return 0.0

    return (mean(returns) - risk_free_rate) / beta


def calculate_information_ratio(returns: Sequence[float], benchmark_returns: Sequence[float]) -> float:
    """
    Calculate information ratio: mean(excess) / stddev(excess).

    Excess return is r_i - benchmark_i; a benchmark shorter than the return
    series contributes 0 for the missing periods.
    """
    if not returns:
        return 0.0

    excess = [r - (benchmark_returns[i] if i < len(benchmark_returns) else 0.0) for i, r in enumerate(returns)]

    tracking_error = standard_deviation(excess)
    if tracking_error == 0:
        return 0.0

    return mean(excess) / tracking_error


def calculate_gain_to_pain_ratio(returns: Sequence[float]) -> float:
    """Calculate gain-to-pain ratio: sum(r) / sum(|r|)."""
    if not returns:
        return 0.0

    sum_abs = sum(abs(r) for r in returns)
    if sum_abs == 0:
        return 0.0

    return sum(returns) / sum_abs


def calculate_cagr(initial_capital: float, final_capital: float, years: float) -> float:
    """
    Calculate Compound Annual Growth Rate as a percentage.

    CAGR = ((final / initial) ** (1 / years) - 1) * 100

    Returns:
        CAGR in percent; 0.0 for non-positive capital or years, -100.0 when
        the final capital is wiped out
    """
    if initial_capital <= 0 or years <= 0:
        return 0.0

    if final_capital <= 0:
        return -100.0

    return ((final_capital / initial_capital) ** (1 / years) - 1) * 100


def calculate_mar_ratio(
    initial_capital: float,
    final_capital: float,
    years: float,
    max_drawdown: float,
) -> float:
    """
    Calculate MAR ratio: |CAGR / max drawdown|.

    Args:
        initial_capital: Starting capital (must be positive)
        final_capital: Ending capital
        years: Length of the track record in years (must be positive)
        max_drawdown: Maximum drawdown in percent (must be nonzero)
    """
    if initial_capital <= 0 or years <= 0 or max_drawdown == 0:
        return 0.0

    return abs(calculate_cagr(initial_capital, final_capital, years) / max_drawdown)


def calculate_kelly_criterion(win_rate: float, avg_win_ratio: float, avg_loss_ratio: float) -> float:
    """
    Calculate Kelly criterion position size as a percentage of capital.

    kelly = (p * b - q) / b with p = win rate fraction, q = 1 - p,
    b = avg_win_ratio / avg_loss_ratio. The percentage is clamped to
    [0, 25]: full Kelly is too aggressive for leveraged perpetuals.

    Args:
        win_rate: Win rate in percent (0-100)
        avg_win_ratio: Average win size
        avg_loss_ratio: Average loss size (positive)

    Example:
        >>> calculate_kelly_criterion(60, 2, 1)  # raw 40% -> capped
        25.0
    """
    if avg_loss_ratio == 0:
        return 0.0

    p = win_rate / 100
    q = 1 - p
    b = avg_win_ratio / avg_loss_ratio

    if b == 0:
        return 0.0

    kelly = (p * b - q) / b
    return min(max(kelly * 100, 0.0), 25.0)


def calculate_risk_adjusted_return(
    returns: Sequence[float],
    risk_measure: Literal["volatility", "var", "cvar"] = "volatility",
) -> float:
    """
    Mean return divided by a chosen per-period risk proxy.

    Args:
        returns: Per-period returns
        risk_measure: "volatility" (unannualized stddev), "var" or "cvar" (95%)

    Returns:
        Ratio; 999 when risk is 0 and the mean is positive, else 0.0
    """
    if not returns:
        return 0.0

    if risk_measure == "var":
        risk = calculate_var(returns, 0.95)
    elif risk_measure == "cvar":
        risk = calculate_cvar(returns, 0.95)
    else:
        risk = calculate_volatility(returns, 1)

    avg_return = mean(returns)
    if risk == 0:
        return _saturate(avg_return > 0)

    return avg_return / risk
