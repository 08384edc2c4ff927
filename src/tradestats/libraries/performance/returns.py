"""Equity series normalization and return derivation.

The equity series is the one input that arrives in mixed shapes: bare
numbers, EquityPoint records, or raw indexer mappings carrying an
``equity`` key. ``equity_values`` normalizes all of them to a plain list of
floats at the boundary so the statistical code only ever sees numbers.

Usage:
    >>> calculate_returns([100, 110, 99])  # ~[0.10, -0.10]
    >>> calculate_returns([100, 110, 99], as_percentage=True)  # ~[10.0, -10.0]
    >>> calculate_returns([100, 0, 50, 55])  # pair starting at 0 skipped: ~[-1.0, 0.10]
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Iterable, Sequence

from tradestats.libraries.performance.models import EquityInput, EquityPoint


def equity_value(point: EquityInput) -> float:
    """Numeric equity of a single series entry (missing ``equity`` key = 0)."""
    if isinstance(point, EquityPoint):
        return point.equity
    if isinstance(point, Mapping):
        return float(point.get("equity") or 0)
    return float(point)


def equity_values(series: Iterable[EquityInput] | None) -> list[float]:
    """Normalize an equity series of mixed entries to a list of floats."""
    if not series:
        return []
    return [equity_value(point) for point in series]


def calculate_returns(equity: Iterable[EquityInput] | None, as_percentage: bool = False) -> list[float]:
    """
    Calculate per-period returns from consecutive equity values.

    r_i = equity[i] / equity[i-1] - 1 (fractional), or
    r_i = (equity[i] - equity[i-1]) / equity[i-1] * 100 (percentage points).

    A pair is skipped whenever the previous value is not strictly positive
    or either value is not finite, so the return series can be shorter than
    ``len(equity) - 1``.

    Args:
        equity: Equity series (numbers, EquityPoints or mappings)
        as_percentage: Emit percentage points instead of fractions

    Returns:
        List of returns (empty for fewer than two usable points)
    """
    values = equity_values(equity)
    returns: list[float] = []

    for prev, curr in zip(values, values[1:]):
        if not (math.isfinite(prev) and math.isfinite(curr)) or prev <= 0:
            continue
        if as_percentage:
            returns.append((curr - prev) / prev * 100)
        else:
            returns.append(curr / prev - 1)

    return returns


def sort_equity_history(points: Sequence[EquityPoint]) -> list[EquityPoint]:
    """
    Order equity snapshots by time ascending.

    Snapshots without a timestamp keep their relative order and sort first.
    The sort is stable, so equal timestamps keep input order.
    """

    def sort_key(point: EquityPoint) -> tuple[int, float]:
        if point.created_at is None:
            return (0, 0.0)
        return (1, epoch_seconds(point.created_at))

    return sorted(points, key=sort_key)


def epoch_seconds(moment: datetime) -> float:
    """Epoch seconds of a datetime; naive values are read on their wall-clock value."""
    if moment.tzinfo is None:
        return (moment - datetime(1970, 1, 1)).total_seconds()
    return moment.timestamp()
