"""Basic trade and position metrics.

Pure functions over fills and positions (anything carrying
``realized_pnl``). A missing realized P&L counts as 0 in sums; for the
win rate it marks the trade as still open, so it is left out of the
closed-trade denominator. A P&L of exactly 0 is neither a win nor a loss.

Usage:
    >>> from tradestats.libraries.performance.models import Fill
    >>> trades = [Fill(realized_pnl=100), Fill(realized_pnl=-50), Fill(realized_pnl=None)]
    >>> calculate_win_rate(trades)
    50.0
    >>> calculate_profit_factor(trades)
    2.0
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Literal, Sequence

from tradestats.libraries.performance.models import (
    SENTINEL_CAP,
    Fill,
    FundingPayment,
    FundingSummary,
    MarketFunding,
    MarketStats,
    Position,
    Trade,
)
from tradestats.libraries.performance.statistics import mean

Period = Literal["hourly", "daily", "weekly", "monthly"]
HoldOutcome = Literal["win", "loss"]


def _pnl(trade: Trade) -> float:
    return trade.realized_pnl or 0.0


def calculate_pnl(trades: Sequence[Trade]) -> float:
    """Sum of realized P&L (missing P&L counts as 0)."""
    return sum(_pnl(t) for t in trades)


def calculate_unrealized_pnl(positions: Sequence[Position], current_prices: Mapping[str, float] | None = None) -> float:
    """
    Mark-to-market P&L of OPEN positions.

    LONG: (price - entry) * size, SHORT: (entry - price) * size. Markets
    without a current price are marked at their entry price.
    """
    prices = current_prices or {}
    total = 0.0
    for position in positions:
        if position.status != "OPEN":
            continue
        price = prices.get(position.market) or position.entry_price
        if position.side == "LONG":
            total += (price - position.entry_price) * position.size
        else:
            total += (position.entry_price - price) * position.size
    return total


def calculate_total_fees(fills: Sequence[Fill]) -> float:
    """Sum of fees paid across fills."""
    return sum(f.fee for f in fills)


def calculate_win_rate(trades: Sequence[Trade]) -> float:
    """
    Win rate as a percentage of closed trades.

    Closed trades are those with a realized P&L; wins have P&L > 0.
    """
    closed = [t for t in trades if t.realized_pnl is not None]
    if not closed:
        return 0.0

    wins = sum(1 for t in closed if _pnl(t) > 0)
    return wins / len(closed) * 100


def calculate_profit_factor(trades: Sequence[Trade]) -> float:
    """
    Profit factor: gross profit / gross loss.

    Returns:
        Ratio; 999 when there are no losses but some profit, 0.0 when both
        sides are zero (including empty input)
    """
    gross_profit = 0.0
    gross_loss = 0.0
    for trade in trades:
        pnl = _pnl(trade)
        if pnl > 0:
            gross_profit += pnl
        else:
            gross_loss += abs(pnl)

    if gross_loss == 0:
        return SENTINEL_CAP if gross_profit > 0 else 0.0

    return gross_profit / gross_loss


def calculate_average_win(trades: Sequence[Trade]) -> float:
    """Mean P&L of winning trades (0.0 if none)."""
    return mean([_pnl(t) for t in trades if _pnl(t) > 0])


def calculate_average_loss(trades: Sequence[Trade]) -> float:
    """Mean absolute P&L of losing trades (0.0 if none)."""
    return mean([abs(_pnl(t)) for t in trades if _pnl(t) < 0])


def calculate_expectancy(trades: Sequence[Trade]) -> float:
    """
    Expected P&L per trade.

    Expectancy = p * avg_win - (1 - p) * avg_loss, p = win rate fraction.
    """
    if not trades:
        return 0.0

    p = calculate_win_rate(trades) / 100
    return p * calculate_average_win(trades) - (1 - p) * calculate_average_loss(trades)


def calculate_risk_reward_ratio(trades: Sequence[Trade]) -> float:
    """Average win / average loss; 999 with wins and no losses, else 0.0 when undefined."""
    avg_win = calculate_average_win(trades)
    avg_loss = calculate_average_loss(trades)

    if avg_loss == 0:
        return SENTINEL_CAP if avg_win > 0 else 0.0

    return avg_win / avg_loss


def calculate_max_consecutive_wins(trades: Sequence[Trade]) -> int:
    """Longest run of winning trades in input order (a zero P&L ends the run)."""
    longest = 0
    current = 0
    for trade in trades:
        if _pnl(trade) > 0:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def calculate_max_consecutive_losses(trades: Sequence[Trade]) -> int:
    """Longest run of losing trades in input order (a zero P&L ends the run)."""
    longest = 0
    current = 0
    for trade in trades:
        if _pnl(trade) < 0:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def get_best_trade(trades: Sequence[Trade]) -> Trade | None:
    """Trade with the highest realized P&L (first one on ties)."""
    if not trades:
        return None
    return max(trades, key=_pnl)


def get_worst_trade(trades: Sequence[Trade]) -> Trade | None:
    """Trade with the lowest realized P&L (first one on ties)."""
    if not trades:
        return None
    return min(trades, key=_pnl)


def calculate_recovery_factor(trades: Sequence[Trade], max_drawdown: float) -> float:
    """
    Recovery factor: |net profit / max drawdown|.

    Args:
        trades: Trades contributing to net profit
        max_drawdown: Maximum drawdown in currency units
    """
    net_profit = calculate_pnl(trades)

    if max_drawdown == 0:
        return SENTINEL_CAP if net_profit > 0 else 0.0

    return abs(net_profit / max_drawdown)


def calculate_average_hold_time(positions: Sequence[Position], outcome: HoldOutcome | None = None) -> float:
    """
    Average hold time in seconds of closed positions.

    Args:
        positions: Position snapshots
        outcome: None for all, "win" (P&L > 0) or "loss" (P&L < 0)

    Returns:
        Mean seconds from open to close, 0.0 if no position qualifies
    """
    durations: list[float] = []
    for position in positions:
        seconds = position.hold_seconds
        if seconds is None:
            continue
        pnl = _pnl(position)
        if outcome == "win" and pnl <= 0:
            continue
        if outcome == "loss" and pnl >= 0:
            continue
        durations.append(seconds)

    return mean(durations)


def week_number(moment: datetime) -> int:
    """
    Week-of-year used for weekly buckets.

    ceil((days since Jan 1 + weekday of Jan 1 + 1) / 7), with Sunday = 0 and
    fractional days included. Day-of-year based, not ISO 8601.
    """
    jan_first = moment.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    past_days = (moment - jan_first).total_seconds() / 86400
    jan_first_weekday = (jan_first.weekday() + 1) % 7
    return math.ceil((past_days + jan_first_weekday + 1) / 7)


def period_key(moment: datetime, period: Period | str = "daily") -> str:
    """
    Bucket key for a timestamp, from its own calendar components.

    hourly "2025-03-07-14", daily "2025-03-07", weekly "2025-W10",
    monthly "2025-03"; unknown periods fall back to daily.
    """
    if period == "hourly":
        return moment.strftime("%Y-%m-%d-%H")
    if period == "weekly":
        return f"{moment.year}-W{week_number(moment):02d}"
    if period == "monthly":
        return moment.strftime("%Y-%m")
    return moment.strftime("%Y-%m-%d")


def group_trades_by_period(trades: Sequence[Trade], period: Period | str = "daily") -> dict[str, list[Trade]]:
    """
    Group trades into time buckets by creation timestamp.

    Trades without a timestamp are skipped. Buckets keep input order.
    """
    grouped: dict[str, list[Trade]] = {}
    for trade in trades:
        if trade.created_at is None:
            continue
        grouped.setdefault(period_key(trade.created_at, period), []).append(trade)
    return grouped


def calculate_stats_by_market(trades: Sequence[Trade]) -> dict[str, MarketStats]:
    """
    Per-market trade statistics.

    Volume is traded notional (size * price for fills, size * entry price
    for positions). Win rate and average P&L are over all of the market's
    trades.
    """
    buckets: dict[str, list[Trade]] = {}
    for trade in trades:
        buckets.setdefault(trade.market, []).append(trade)

    stats: dict[str, MarketStats] = {}
    for market, market_trades in buckets.items():
        total_pnl = calculate_pnl(market_trades)
        wins = sum(1 for t in market_trades if _pnl(t) > 0)
        losses = sum(1 for t in market_trades if _pnl(t) < 0)
        count = len(market_trades)

        stats[market] = MarketStats(
            market=market,
            trades=tuple(market_trades),
            total_pnl=total_pnl,
            wins=wins,
            losses=losses,
            volume=sum(t.notional for t in market_trades),
            win_rate=wins / count * 100,
            avg_pnl=total_pnl / count,
            profit_factor=calculate_profit_factor(market_trades),
        )

    return stats


def summarize_funding(payments: Sequence[FundingPayment]) -> FundingSummary:
    """Funding received, paid and net, overall and per market."""
    totals: dict[str, dict[str, float]] = {}
    total_received = 0.0
    total_paid = 0.0

    for payment in payments:
        market = totals.setdefault(payment.market, {"received": 0.0, "paid": 0.0, "net": 0.0, "count": 0})
        amount = payment.payment
        if amount > 0:
            market["received"] += amount
            total_received += amount
        else:
            market["paid"] += abs(amount)
            total_paid += abs(amount)
        market["net"] += amount
        market["count"] += 1

    return FundingSummary(
        total_received=total_received,
        total_paid=total_paid,
        net_funding=total_received - total_paid,
        by_market={name: MarketFunding(**values) for name, values in totals.items()},
    )
