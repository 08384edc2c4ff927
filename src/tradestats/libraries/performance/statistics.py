"""Statistical primitives shared by every metric module.

Population moments (divisor n), not sample moments: the ratio formulas
built on top of these assume population standard deviation.

Every primitive returns 0.0 for empty or undefined input instead of
raising, so dashboard callers with partial data get neutral zeros.
Inputs are never mutated.
"""

import math
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean (0.0 for empty input)."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Population variance (divisor n)."""
    if not values:
        return 0.0
    avg = mean(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation."""
    return math.sqrt(variance(values))


def downside_deviation(returns: Sequence[float], target: float = 0.0) -> float:
    """
    Downside deviation below a target return.

    sqrt(mean(min(0, r - target)^2)) over the whole sample, so periods above
    target contribute zeros to the average.
    """
    if not returns:
        return 0.0
    return math.sqrt(mean([min(0.0, r - target) ** 2 for r in returns]))


def skewness(values: Sequence[float]) -> float:
    """
    Skewness (third standardized moment).

    Returns 0.0 for fewer than 3 observations or zero variance.
    """
    n = len(values)
    if n < 3:
        return 0.0

    avg = mean(values)
    m2 = sum((v - avg) ** 2 for v in values) / n
    m3 = sum((v - avg) ** 3 for v in values) / n

    std_dev = math.sqrt(m2)
    if std_dev == 0:
        return 0.0

    return m3 / std_dev**3


def kurtosis(values: Sequence[float]) -> float:
    """
    Excess kurtosis (fourth standardized moment minus 3).

    Returns 0.0 for fewer than 4 observations or zero variance.
    """
    n = len(values)
    if n < 4:
        return 0.0

    avg = mean(values)
    m2 = sum((v - avg) ** 2 for v in values) / n
    m4 = sum((v - avg) ** 4 for v in values) / n

    if m2 == 0:
        return 0.0

    return m4 / (m2 * m2) - 3.0


def covariance(x: Sequence[float], y: Sequence[float]) -> float:
    """Population covariance over the min(len(x), len(y)) aligned leading elements."""
    n = min(len(x), len(y))
    if n == 0:
        return 0.0

    xs, ys = x[:n], y[:n]
    avg_x, avg_y = mean(xs), mean(ys)
    return sum((a - avg_x) * (b - avg_y) for a, b in zip(xs, ys)) / n


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation over the aligned leading elements.

    Returns 0.0 if either side has zero variance.
    """
    n = min(len(x), len(y))
    if n == 0:
        return 0.0

    xs, ys = x[:n], y[:n]
    avg_x, avg_y = mean(xs), mean(ys)

    numerator = 0.0
    denom_x = 0.0
    denom_y = 0.0
    for a, b in zip(xs, ys):
        dx = a - avg_x
        dy = b - avg_y
        numerator += dx * dy
        denom_x += dx * dx
        denom_y += dy * dy

    denominator = math.sqrt(denom_x * denom_y)
    if denominator == 0:
        return 0.0

    return numerator / denominator


def lower_partial_moment(returns: Sequence[float], threshold: float = 0.0, order: int = 2) -> float:
    """Mean of max(0, threshold - r) ** order over the sample."""
    if not returns:
        return 0.0
    return mean([max(0.0, threshold - r) ** order for r in returns])


def median(values: Sequence[float]) -> float:
    """Median (average of the two middle values for even n)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def rank_index(fraction: float, n: int) -> int:
    """Sorted-sample rank used by VaR and tail ratio: floor(fraction * n)."""
    return math.floor(fraction * n)


def value_at_rank(sorted_values: Sequence[float], index: int) -> float:
    """Element at index of an ascending sample, 0.0 if the index falls outside it."""
    if 0 <= index < len(sorted_values):
        return sorted_values[index]
    return 0.0
