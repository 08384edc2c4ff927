"""Rich table formatters for CLI output."""

from typing import Sequence

from rich.table import Table

from tradestats.libraries.performance.models import DrawdownPeriod, MarketStats, MetricsBundle, is_capped
from tradestats.libraries.risk.models import LiquidationRisk

CAPPED_LABEL = ">999 (capped)"


def format_ratio(value: float, decimals: int = 2) -> str:
    """Format a ratio, showing the 999 sentinel as a capped marker."""
    if is_capped(value):
        return CAPPED_LABEL
    return f"{value:.{decimals}f}"


def format_currency(value: float, decimals: int = 2) -> str:
    """Format a signed USD amount (e.g., +$1,234.50, -$20.00, $0.00)."""
    formatted = f"${abs(value):,.{decimals}f}"
    if value > 0:
        return "+" + formatted
    if value < 0:
        return "-" + formatted
    return formatted


def format_percent(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds as its two most significant units.

    Examples: "2d 3h", "5h 12m", "4m 30s", "45s"; "-" when not positive.
    """
    if seconds <= 0:
        return "-"

    total = int(seconds)
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def create_summary_table(bundle: MetricsBundle) -> Table:
    """
    Create a Rich table with trade statistics and risk-adjusted ratios.

    Args:
        bundle: Computed metrics

    Returns:
        Configured Rich Table
    """
    table = Table(title="Performance Summary")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white", justify="right")

    table.add_row("Total P&L", format_currency(bundle.total_pnl))
    table.add_row("Unrealized P&L", format_currency(bundle.unrealized_pnl))
    table.add_row("Fees", format_currency(bundle.total_fees))
    table.add_row("Trades", str(bundle.total_trades))
    table.add_row("Win Rate", format_percent(bundle.win_rate))
    table.add_row("Profit Factor", format_ratio(bundle.profit_factor))
    table.add_row("Expectancy", format_currency(bundle.expectancy))
    table.add_row("Average Win", format_currency(bundle.average_win))
    table.add_row("Average Loss", format_currency(-bundle.average_loss))
    table.add_row("Risk/Reward", format_ratio(bundle.risk_reward_ratio))
    table.add_row("Max Consecutive Wins", str(bundle.max_consecutive_wins))
    table.add_row("Max Consecutive Losses", str(bundle.max_consecutive_losses))
    table.add_row("Recovery Factor", format_ratio(bundle.recovery_factor))
    table.add_row("Kelly Criterion", format_percent(bundle.kelly_criterion))
    table.add_row("Avg Hold Time", format_duration(bundle.avg_hold_time))
    table.add_row("Avg Win Hold Time", format_duration(bundle.avg_win_hold_time))
    table.add_row("Avg Loss Hold Time", format_duration(bundle.avg_loss_hold_time))

    table.add_section()
    table.add_row("Sharpe Ratio", format_ratio(bundle.sharpe_ratio))
    table.add_row("Sortino Ratio", format_ratio(bundle.sortino_ratio))
    table.add_row("Calmar Ratio", format_ratio(bundle.calmar_ratio))
    table.add_row("Omega Ratio", format_ratio(bundle.omega_ratio))
    table.add_row("Kappa-3 Ratio", format_ratio(bundle.kappa3_ratio))
    table.add_row("Sterling Ratio", format_ratio(bundle.sterling_ratio))
    table.add_row("Burke Ratio", format_ratio(bundle.burke_ratio))
    table.add_row("Gain-to-Pain", format_ratio(bundle.gain_to_pain_ratio))
    return table


def create_risk_table(bundle: MetricsBundle, confidence: float) -> Table:
    """
    Create a Rich table with drawdown, tail risk and benchmark metrics.

    Args:
        bundle: Computed metrics
        confidence: VaR confidence level used for the bundle

    Returns:
        Configured Rich Table
    """
    max_dd = bundle.max_drawdown
    level = f"{confidence:.0%}"

    table = Table(title="Risk")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white", justify="right")

    table.add_row("Max Drawdown", f"{format_percent(max_dd.percentage)} ({format_currency(-max_dd.value)})")
    table.add_row("Max Drawdown Span", f"{max_dd.duration} samples")
    table.add_row("Average Drawdown", format_percent(bundle.average_drawdown_pct))
    table.add_row("Ulcer Index", format_ratio(bundle.ulcer_index))
    table.add_row(f"VaR ({level})", format_ratio(bundle.value_at_risk, 4))
    table.add_row(f"CVaR ({level})", format_ratio(bundle.conditional_var, 4))
    table.add_row("Volatility", format_ratio(bundle.volatility, 4))
    table.add_row("Skewness", format_ratio(bundle.skewness))
    table.add_row("Excess Kurtosis", format_ratio(bundle.kurtosis))
    table.add_row("Tail Ratio", format_ratio(bundle.tail_ratio))
    table.add_row("Leverage", f"{bundle.leverage:.2f}x")
    table.add_row("Net Funding", format_currency(bundle.funding.net_funding))

    table.add_section()
    table.add_row("Beta", format_ratio(bundle.beta))
    table.add_row("Alpha", format_ratio(bundle.alpha, 4))
    table.add_row("R-Squared", format_ratio(bundle.r_squared))
    table.add_row("Treynor Ratio", format_ratio(bundle.treynor_ratio, 4))
    table.add_row("Information Ratio", format_ratio(bundle.information_ratio))

    table.add_section()
    table.add_row("Returns", str(bundle.return_count), style="dim")
    table.add_row("Periods / Year", f"{bundle.periods_per_year:,.1f}", style="dim")
    return table


def create_market_table(market_stats: dict[str, MarketStats]) -> Table:
    """
    Create a Rich table of per-market statistics, best market first.

    Args:
        market_stats: Statistics keyed by market

    Returns:
        Configured Rich Table
    """
    table = Table(title="By Market")
    table.add_column("Market", style="cyan", no_wrap=True)
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Profit Factor", justify="right")
    table.add_column("Volume", style="dim", justify="right")

    for stats in sorted(market_stats.values(), key=lambda s: s.total_pnl, reverse=True):
        pnl_style = "green" if stats.total_pnl >= 0 else "red"
        table.add_row(
            stats.market,
            str(stats.trade_count),
            f"[{pnl_style}]{format_currency(stats.total_pnl)}[/{pnl_style}]",
            format_percent(stats.win_rate),
            format_currency(stats.avg_pnl),
            format_ratio(stats.profit_factor),
            f"${stats.volume:,.0f}",
        )
    return table


def create_drawdown_table(periods: Sequence[DrawdownPeriod]) -> Table:
    """
    Create a Rich table listing drawdown periods in chronological order.

    Args:
        periods: Drawdown periods

    Returns:
        Configured Rich Table
    """
    table = Table(title="Drawdown Periods")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("Trough", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Depth", style="red", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Recovery", justify="right")
    table.add_column("Underwater", justify="right")

    for number, period in enumerate(periods, start=1):
        recovery = str(period.recovery) if period.recovered else "[yellow]open[/yellow]"
        underwater = period.samples_underwater
        table.add_row(
            str(number),
            str(period.start_index),
            str(period.trough_index),
            str(period.end_index),
            format_percent(period.depth_pct),
            str(period.duration),
            recovery,
            "-" if underwater is None else str(underwater),
        )
    return table


def create_liquidation_table(assessments: Sequence[LiquidationRisk]) -> Table:
    """
    Create a Rich table of liquidation estimates for open positions.

    Args:
        assessments: Liquidation assessments

    Returns:
        Configured Rich Table
    """
    table = Table(title="Liquidation Risk")
    table.add_column("Market", style="cyan", no_wrap=True)
    table.add_column("Side")
    table.add_column("Leverage", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Mark", justify="right")
    table.add_column("Liquidation", justify="right")
    table.add_column("Distance", justify="right")

    for risk in assessments:
        distance = format_percent(risk.distance_pct)
        if risk.breached:
            distance = f"[bold red]{distance}[/bold red]"
        table.add_row(
            risk.market,
            risk.side,
            f"{risk.leverage:.1f}x",
            f"{risk.entry_price:,.4f}",
            f"{risk.current_price:,.4f}",
            f"{risk.liquidation_price:,.4f}",
            distance,
        )
    return table
