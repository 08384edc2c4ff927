"""Drawdown analytics over equity series.

Equity entries may be bare numbers, EquityPoint records or mappings with an
``equity`` key; every function normalizes them first. Drawdowns are derived
artifacts, recomputed on each call.

Usage:
    >>> dd = calculate_max_drawdown([100, 80, 90, 70, 120])
    >>> dd.percentage, dd.peak_index, dd.trough_index, dd.duration
    (30.0, 0, 3, 3)
    >>> [p.depth_pct for p in calculate_drawdown_periods([100, 95, 100, 90, 92])]
    [5.0, 10.0]
"""

import math
from typing import Iterable, Sequence

from tradestats.libraries.performance.models import DrawdownPeriod, EquityInput, MaxDrawdown
from tradestats.libraries.performance.returns import equity_values
from tradestats.libraries.performance.statistics import mean


def _drawdown_pct(peak: float, value: float) -> float:
    if peak <= 0:
        return 0.0
    return (peak - value) / peak * 100


def calculate_max_drawdown(equity: Iterable[EquityInput] | None) -> MaxDrawdown:
    """
    Calculate the single worst drawdown in one pass over the series.

    Tracks the running peak; the worst drawdown is the largest absolute
    decline below it. ``duration`` is the number of samples between the
    peak preceding the trough and the trough.

    Args:
        equity: Equity series

    Returns:
        MaxDrawdown (all zeros for empty or never-declining series)
    """
    values = equity_values(equity)
    if not values:
        return MaxDrawdown()

    worst = MaxDrawdown()
    peak = values[0]
    peak_index = 0

    for i, value in enumerate(values):
        if value > peak:
            peak = value
            peak_index = i
            continue

        decline = peak - value
        if decline > worst.value:
            worst = MaxDrawdown(
                value=decline,
                percentage=_drawdown_pct(peak, value),
                duration=i - peak_index,
                peak_index=peak_index,
                trough_index=i,
                peak_value=peak,
                trough_value=value,
            )

    return worst


def calculate_drawdown_periods(
    equity: Iterable[EquityInput] | None,
    threshold: float = 0.0,
) -> list[DrawdownPeriod]:
    """
    Segment the equity series into drawdown periods.

    A period opens when equity falls below the running peak (its start is
    the sample before the fall), extends while equity stays below the
    peak, and closes when equity recovers to or above it. A period still
    open at the end of the series is reported unrecovered.

    Args:
        equity: Equity series
        threshold: Only periods deeper than this percentage are kept

    Returns:
        List of DrawdownPeriod in chronological order
    """
    values = equity_values(equity)
    if not values:
        return []

    periods: list[DrawdownPeriod] = []
    peak = values[0]
    start_index = 0
    trough_index = 0
    trough_value = peak
    in_drawdown = False

    def build(end_index: int, recovered: bool) -> DrawdownPeriod:
        return DrawdownPeriod(
            start_index=start_index,
            trough_index=trough_index,
            end_index=end_index,
            peak_value=peak,
            trough_value=trough_value,
            depth=peak - trough_value,
            depth_pct=_drawdown_pct(peak, trough_value),
            duration=trough_index - start_index,
            recovery=end_index - trough_index if recovered else None,
            recovered=recovered,
        )

    for i, value in enumerate(values):
        if value >= peak:
            if in_drawdown:
                period = build(i, recovered=True)
                if period.depth_pct > threshold:
                    periods.append(period)
                in_drawdown = False
            peak = value
        elif not in_drawdown:
            in_drawdown = True
            start_index = i - 1
            trough_index = i
            trough_value = value
        elif value < trough_value:
            trough_index = i
            trough_value = value

    if in_drawdown:
        period = build(len(values) - 1, recovered=False)
        if period.depth_pct > threshold:
            periods.append(period)

    return periods


def calculate_drawdown_series(equity: Iterable[EquityInput] | None) -> list[float]:
    """Percentage drawdown from the running peak at every sample."""
    values = equity_values(equity)
    if not values:
        return []

    series: list[float] = []
    peak = values[0]
    for value in values:
        peak = max(peak, value)
        series.append(_drawdown_pct(peak, value))

    return series


def calculate_ulcer_index(equity: Iterable[EquityInput] | None) -> float:
    """
    Calculate the Ulcer Index: root-mean-square of percentage drawdowns
    across the whole series, penalizing both depth and duration.
    """
    drawdowns = calculate_drawdown_series(equity)
    if not drawdowns:
        return 0.0
    return math.sqrt(mean([dd * dd for dd in drawdowns]))


def calculate_average_drawdown(periods: Sequence[DrawdownPeriod]) -> float:
    """Mean depth (percent) of the given drawdown periods, 0.0 if none."""
    return mean([p.depth_pct for p in periods])
