"""Metrics engine facade.

Combines the pure metric libraries into one MetricsBundle. The engine owns
the unit bookkeeping the individual functions leave to their callers:

- Returns are derived from the equity curve in the configured unit
  (fractional or percentage points).
- Drawdown depths handed to Calmar, Sterling and Burke are converted from
  percent into that same unit.
- Ratios are annualized with a fixed periods-per-year or one inferred from
  the equity timestamps.

compute_metrics() is deterministic for a given snapshot and config, except
for Monte Carlo VaR without a seed or an injected random source.
"""

from collections.abc import Sequence

from tradestats.engine.config import AnalysisConfig
from tradestats.engine.models import PortfolioSnapshot
from tradestats.libraries.performance import drawdown, ratios, statistics, tail_risk, trades
from tradestats.libraries.performance.annualization import infer_periods_per_year
from tradestats.libraries.performance.models import SENTINEL_CAP, EquityPoint, MetricsBundle, Position, Trade
from tradestats.libraries.performance.returns import calculate_returns, equity_values, sort_equity_history
from tradestats.libraries.performance.tail_risk import RandomSource
from tradestats.libraries.risk.models import LeverageProfile, LiquidationRisk
from tradestats.libraries.risk.tools.liquidation import assess_position, calculate_leverage
from tradestats.system import LoggerFactory

logger = LoggerFactory.get_logger()


def _ordered_equity(snapshot: PortfolioSnapshot) -> list[EquityPoint | float]:
    """Equity curve in time order when every entry is timestamped, else as given."""
    history = list(snapshot.equity_history)
    points = [p for p in history if isinstance(p, EquityPoint) and p.created_at is not None]
    if history and len(points) == len(history):
        return list(sort_equity_history(points))
    return history


def _trade_sample(snapshot: PortfolioSnapshot) -> tuple[Trade, ...]:
    """Fills when present, otherwise the position snapshots."""
    if snapshot.fills:
        return tuple(snapshot.fills)
    return tuple(snapshot.positions)


def _periods_per_year(history: Sequence[EquityPoint | float], config: AnalysisConfig) -> float:
    if config.periods_per_year is not None:
        return config.periods_per_year

    timestamps = [p.created_at for p in history if isinstance(p, EquityPoint) and p.created_at is not None]
    return infer_periods_per_year(timestamps)


def _mark_price(position: Position, current_prices: dict[str, float]) -> float:
    return current_prices.get(position.market) or position.entry_price


def _account_leverage(snapshot: PortfolioSnapshot, equity_curve: Sequence[float]) -> float:
    equity = snapshot.equity
    if equity is None:
        equity = equity_curve[-1] if equity_curve else 0.0

    notional = snapshot.notional_value
    if notional is None:
        notional = sum(
            p.size * _mark_price(p, snapshot.current_prices) for p in snapshot.positions if p.status == "OPEN"
        )

    return calculate_leverage(notional, equity)


def compute_metrics(
    snapshot: PortfolioSnapshot,
    config: AnalysisConfig | None = None,
    *,
    random_source: RandomSource | None = None,
) -> MetricsBundle:
    """
    Compute the complete metrics bundle for a portfolio snapshot.

    Args:
        snapshot: Trading records of one account
        config: Analysis parameters (defaults to AnalysisConfig())
        random_source: Uniform source for Monte Carlo VaR; overrides the
            configured seed

    Returns:
        MetricsBundle with every field populated (empty input yields the
        documented defaults)

    Example:
        >>> snapshot = PortfolioSnapshot(equity_history=[100, 110, 99, 120])
        >>> bundle = compute_metrics(snapshot, AnalysisConfig(periods_per_year=365))
        >>> bundle.max_drawdown.percentage
        10.0
    """
    config = config or AnalysisConfig()

    history = _ordered_equity(snapshot)
    equity_curve = equity_values(history)
    returns = calculate_returns(equity_curve, as_percentage=config.return_mode == "percentage")
    ppy = _periods_per_year(history, config)

    sample = _trade_sample(snapshot)
    positions = tuple(snapshot.positions)
    rf = config.risk_free_rate

    # Drawdowns, converted from percent into the return unit for the ratios
    max_dd = drawdown.calculate_max_drawdown(equity_curve)
    periods = drawdown.calculate_drawdown_periods(equity_curve, config.drawdown_threshold)
    avg_dd_pct = drawdown.calculate_average_drawdown(periods)
    unit = 1.0 if config.return_mode == "percentage" else 0.01

    sortino = ratios.calculate_sortino_ratio(returns, target_return=rf, periods_per_year=1)
    if sortino < SENTINEL_CAP:
        sortino = ratios.calculate_sortino_ratio(returns, target_return=rf, periods_per_year=ppy)

    has_benchmark = snapshot.has_benchmark
    benchmark = list(snapshot.benchmark_returns)
    win_rate = trades.calculate_win_rate(sample)
    average_win = trades.calculate_average_win(sample)
    average_loss = trades.calculate_average_loss(sample)

    bundle = MetricsBundle(
        # Trade statistics
        total_pnl=trades.calculate_pnl(sample),
        unrealized_pnl=trades.calculate_unrealized_pnl(positions, snapshot.current_prices),
        total_trades=len(sample),
        win_rate=win_rate,
        profit_factor=trades.calculate_profit_factor(sample),
        expectancy=trades.calculate_expectancy(sample),
        average_win=average_win,
        average_loss=average_loss,
        risk_reward_ratio=trades.calculate_risk_reward_ratio(sample),
        max_consecutive_wins=trades.calculate_max_consecutive_wins(sample),
        max_consecutive_losses=trades.calculate_max_consecutive_losses(sample),
        recovery_factor=trades.calculate_recovery_factor(sample, max_dd.value),
        kelly_criterion=ratios.calculate_kelly_criterion(win_rate, average_win, average_loss),
        total_fees=trades.calculate_total_fees(snapshot.fills),
        # Hold times
        avg_hold_time=trades.calculate_average_hold_time(positions),
        avg_win_hold_time=trades.calculate_average_hold_time(positions, "win"),
        avg_loss_hold_time=trades.calculate_average_hold_time(positions, "loss"),
        # Risk-adjusted ratios
        sharpe_ratio=ratios.calculate_sharpe_ratio(returns, risk_free_rate=rf, periods_per_year=ppy),
        sortino_ratio=sortino,
        calmar_ratio=ratios.calculate_calmar_ratio(returns, max_dd.percentage * unit, periods_per_year=ppy),
        omega_ratio=ratios.calculate_omega_ratio(returns, threshold=rf),
        kappa3_ratio=ratios.calculate_kappa3_ratio(returns, threshold=rf),
        sterling_ratio=ratios.calculate_sterling_ratio(
            returns, avg_dd_pct * unit, risk_free_rate=rf * ppy, periods_per_year=ppy
        ),
        burke_ratio=ratios.calculate_burke_ratio(returns, [p.depth_pct * unit for p in periods], risk_free_rate=rf),
        gain_to_pain_ratio=ratios.calculate_gain_to_pain_ratio(returns),
        # Benchmark-relative
        beta=ratios.calculate_beta(returns, benchmark) if has_benchmark else 0.0,
        alpha=ratios.calculate_alpha(returns, benchmark, risk_free_rate=rf) if has_benchmark else 0.0,
        r_squared=ratios.calculate_r_squared(returns, benchmark) if has_benchmark else 0.0,
        treynor_ratio=ratios.calculate_treynor_ratio(returns, benchmark, risk_free_rate=rf) if has_benchmark else 0.0,
        information_ratio=ratios.calculate_information_ratio(returns, benchmark) if has_benchmark else 0.0,
        # Drawdown and tail risk
        max_drawdown=max_dd,
        drawdown_periods=tuple(periods),
        average_drawdown_pct=avg_dd_pct,
        ulcer_index=drawdown.calculate_ulcer_index(equity_curve),
        value_at_risk=tail_risk.calculate_var(
            returns,
            config.confidence,
            config.var_method,
            simulations=config.monte_carlo_simulations,
            random_source=random_source,
            seed=config.monte_carlo_seed,
        ),
        conditional_var=tail_risk.calculate_cvar(returns, config.confidence),
        volatility=tail_risk.calculate_volatility(returns, config.annualization_factor),
        skewness=statistics.skewness(returns),
        kurtosis=statistics.kurtosis(returns),
        tail_ratio=tail_risk.calculate_tail_ratio(returns, config.tail_percentile),
        # Sampling and exposure
        return_count=len(returns),
        periods_per_year=ppy,
        leverage=_account_leverage(snapshot, equity_curve),
        market_stats=trades.calculate_stats_by_market(sample),
        funding=trades.summarize_funding(snapshot.funding),
    )

    logger.debug(
        "analytics.bundle_computed",
        equity_points=len(equity_curve),
        returns=len(returns),
        trades=len(sample),
        positions=len(positions),
        periods_per_year=round(ppy, 4),
        var_method=config.var_method,
        benchmark=has_benchmark,
    )

    return bundle


def assess_open_positions(
    snapshot: PortfolioSnapshot,
    config: AnalysisConfig | None = None,
) -> list[LiquidationRisk]:
    """
    Liquidation estimates for the snapshot's OPEN positions.

    Only markets listed in ``leverage_by_market`` are assessed; positions are
    marked at ``current_prices`` (entry price when missing).
    """
    config = config or AnalysisConfig()

    assessments: list[LiquidationRisk] = []
    for position in snapshot.positions:
        leverage = snapshot.leverage_by_market.get(position.market)
        if position.status != "OPEN" or not leverage:
            continue

        profile = LeverageProfile(leverage=leverage, maintenance_margin=config.maintenance_margin)
        assessments.append(assess_position(position, profile, _mark_price(position, snapshot.current_prices)))

    logger.debug("analytics.positions_assessed", assessed=len(assessments), positions=len(snapshot.positions))
    return assessments
