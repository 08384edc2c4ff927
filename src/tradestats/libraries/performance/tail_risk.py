"""Value-at-Risk and tail-risk measures.

VaR estimators:
- historical: empirical quantile of the sorted returns
- parametric: normal approximation |mean - z * stddev|
- montecarlo: historical VaR of simulated normal returns

The Monte Carlo estimator is the only non-deterministic computation in the
library. Its uniform draws come from an injectable ``RandomSource``; pass a
seed (or your own source) to get reproducible output.
"""

import math
import random
from typing import Literal, Protocol, Sequence

from tradestats.libraries.performance.models import SENTINEL_CAP
from tradestats.libraries.performance.statistics import mean, rank_index, standard_deviation, value_at_rank

VaRMethod = Literal["historical", "parametric", "montecarlo"]

DEFAULT_SIMULATIONS = 10_000

# One-sided standard normal quantiles for the supported confidence levels
Z_SCORES: dict[float, float] = {
    0.90: 1.282,
    0.95: 1.645,
    0.99: 2.326,
}
DEFAULT_Z_SCORE = 1.645


class RandomSource(Protocol):
    """Source of uniform floats in [0, 1). ``random.Random`` satisfies it."""

    def random(self) -> float: ...


def z_score(confidence: float) -> float:
    """Z-score lookup for 0.90/0.95/0.99; 1.645 for any other confidence."""
    return Z_SCORES.get(round(confidence, 6), DEFAULT_Z_SCORE)


def normal_sample(source: RandomSource, mu: float, sigma: float) -> float:
    """Draw one N(mu, sigma) sample with the Box-Muller transform."""
    u = 0.0
    v = 0.0
    while u == 0.0:  # log(0) is undefined; map [0, 1) to (0, 1)
        u = source.random()
    while v == 0.0:
        v = source.random()

    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    return z * sigma + mu


def historical_var(returns: Sequence[float], confidence: float) -> float:
    """|sorted(returns)[floor((1 - confidence) * n)]|, 0.0 if the rank is out of range."""
    ordered = sorted(returns)
    index = rank_index(1 - confidence, len(ordered))
    return abs(value_at_rank(ordered, index))


def parametric_var(returns: Sequence[float], confidence: float) -> float:
    """Normal-approximation VaR: |mean - z(confidence) * stddev|."""
    return abs(mean(returns) - z_score(confidence) * standard_deviation(returns))


def monte_carlo_var(
    returns: Sequence[float],
    confidence: float,
    simulations: int = DEFAULT_SIMULATIONS,
    random_source: RandomSource | None = None,
    seed: int | None = None,
) -> float:
    """
    Monte Carlo VaR: simulate normal returns with the sample's mean and
    (population) stddev, then apply historical VaR to the simulated sample.

    Args:
        returns: Per-period returns
        confidence: Confidence level
        simulations: Number of simulated returns
        random_source: Uniform source; defaults to random.Random(seed)
        seed: Seed for the default source (ignored when random_source is given)
    """
    source = random_source if random_source is not None else random.Random(seed)
    mu = mean(returns)
    sigma = standard_deviation(returns)

    simulated = [normal_sample(source, mu, sigma) for _ in range(simulations)]
    return historical_var(simulated, confidence)


def calculate_var(
    returns: Sequence[float],
    confidence: float = 0.95,
    method: VaRMethod | str = "historical",
    *,
    simulations: int = DEFAULT_SIMULATIONS,
    random_source: RandomSource | None = None,
    seed: int | None = None,
) -> float:
    """
    Calculate Value-at-Risk as a positive loss magnitude.

    Args:
        returns: Per-period returns
        confidence: Confidence level (e.g., 0.95)
        method: "historical", "parametric" or "montecarlo"; anything else
                falls back to historical
        simulations: Monte Carlo sample size (bounds its latency)
        random_source: Injectable uniform source for Monte Carlo
        seed: Seed for the default Monte Carlo source

    Returns:
        VaR (>= 0), 0.0 for empty input

    Example:
        >>> returns = [-0.05, -0.02, 0.01, 0.03, 0.04] * 4
        >>> calculate_var(returns, 0.95)  # rank floor(0.05 * 20) = 1
        0.05
    """
    if not returns:
        return 0.0

    if method == "parametric":
        return parametric_var(returns, confidence)
    if method == "montecarlo":
        return monte_carlo_var(returns, confidence, simulations, random_source, seed)
    return historical_var(returns, confidence)


def calculate_cvar(returns: Sequence[float], confidence: float = 0.95) -> float:
    """
    Calculate Conditional VaR (expected shortfall).

    Average of the sorted returns from the worst up to and including the
    historical VaR rank, as a positive magnitude.
    """
    if not returns:
        return 0.0

    ordered = sorted(returns)
    var_index = min(rank_index(1 - confidence, len(ordered)), len(ordered) - 1)
    if var_index < 0:
        return 0.0

    tail = ordered[: var_index + 1]
    return abs(sum(tail) / len(tail))


def calculate_volatility(returns: Sequence[float], annualization_factor: float = 252) -> float:
    """Population standard deviation of returns scaled by sqrt(annualization_factor)."""
    if not returns:
        return 0.0
    return standard_deviation(returns) * math.sqrt(annualization_factor)


def calculate_tail_ratio(returns: Sequence[float], percentile: float = 0.05) -> float:
    """
    Calculate tail ratio: |right tail| / |left tail|.

    The right tail is the return at rank floor(n * (1 - p)), the left tail
    the return at rank floor(n * p) of the ascending sample.

    Returns:
        Ratio; 999 if the left tail is 0 and the right tail is not, else 0.0
    """
    if not returns:
        return 0.0

    ordered = sorted(returns)
    n = len(ordered)
    left_tail = abs(value_at_rank(ordered, rank_index(percentile, n)))
    right_tail = abs(value_at_rank(ordered, rank_index(1 - percentile, n)))

    if left_tail == 0:
        return SENTINEL_CAP if right_tail > 0 else 0.0

    return right_tail / left_tail
