"""Sampling-frequency inference and annualization.

Equity snapshots from the indexer are not daily: they can be hourly, daily
or irregular with gaps. Instead of assuming 252 trading days, the number of
periods per year is inferred from the median gap between timestamps and
per-period ratios are scaled by sqrt(periods_per_year).
"""

import math
from datetime import datetime
from typing import NamedTuple, Sequence

from tradestats.libraries.performance.models import SENTINEL_CAP
from tradestats.libraries.performance.ratios import calculate_sharpe_ratio, calculate_sortino_ratio
from tradestats.libraries.performance.returns import epoch_seconds
from tradestats.libraries.performance.statistics import median

SECONDS_PER_YEAR = 365.25 * 24 * 3600
DEFAULT_PERIOD_SECONDS = 3600.0

Timestamp = datetime | str | int | float


class AnnualizedRatios(NamedTuple):
    """Per-period and annualized Sharpe/Sortino with the scaling used."""

    sharpe: float
    sortino: float
    sharpe_annualized: float
    sortino_annualized: float
    periods_per_year: float


def to_epoch_seconds(value: Timestamp) -> float | None:
    """
    Convert a timestamp to epoch seconds.

    Accepts datetimes, ISO-8601 strings (a trailing "Z" is UTC) and epoch
    seconds. Returns None for unparseable strings. Naive datetimes are read
    on their wall-clock value.
    """
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return epoch_seconds(value)


def infer_periods_per_year(timestamps: Sequence[Timestamp]) -> float:
    """
    Infer sampling periods per year from a timestamp series.

    Takes the median gap (seconds) between sorted successive timestamps and
    returns max(1, SECONDS_PER_YEAR / median_gap). Falls back to a one-hour
    gap when fewer than two timestamps are usable or the median gap is 0.

    Example:
        >>> hourly = [datetime(2025, 1, 1, h) for h in range(24)]
        >>> infer_periods_per_year(hourly)
        8766.0
    """
    seconds = sorted(s for s in (to_epoch_seconds(t) for t in timestamps) if s is not None)

    gaps = [b - a for a, b in zip(seconds, seconds[1:])]
    median_gap = median(gaps) if gaps else 0.0
    if median_gap <= 0:
        median_gap = DEFAULT_PERIOD_SECONDS

    return max(1.0, SECONDS_PER_YEAR / median_gap)


def annualization_scale(periods_per_year: float) -> float:
    """sqrt(periods_per_year), or 1.0 when no positive frequency is known."""
    if periods_per_year <= 0:
        return 1.0
    return math.sqrt(periods_per_year)


def annualize_ratio(value: float, periods_per_year: float) -> float:
    """Scale a per-period ratio to its annualized equivalent."""
    return value * annualization_scale(periods_per_year)


def calculate_annualized_ratios(
    returns: Sequence[float],
    timestamps: Sequence[Timestamp],
    mar: float = 0.0,
) -> AnnualizedRatios:
    """
    Per-period and annualized Sharpe/Sortino for an irregularly sampled series.

    Args:
        returns: Fractional per-period returns
        timestamps: Timestamps of the equity snapshots the returns came from
        mar: Minimum acceptable return per period

    Returns:
        AnnualizedRatios; the Sortino saturates at 999 with no downside
    """
    ppy = infer_periods_per_year(timestamps)
    sharpe = calculate_sharpe_ratio(returns, risk_free_rate=mar, periods_per_year=1)
    sortino = calculate_sortino_ratio(returns, target_return=mar, periods_per_year=1)

    return AnnualizedRatios(
        sharpe=sharpe,
        sortino=sortino,
        sharpe_annualized=annualize_ratio(sharpe, ppy),
        sortino_annualized=sortino if sortino >= SENTINEL_CAP else annualize_ratio(sortino, ppy),
        periods_per_year=ppy,
    )
