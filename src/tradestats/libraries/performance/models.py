"""Performance analytics data models.

Pydantic models for trading records consumed by the engine and for the
structured results it returns. All models are frozen value types: the
engine never mutates caller-supplied records.

Numeric fields accept strings (indexer APIs ship numbers as strings) and
default to zero when missing, so partial records degrade to zero-valued
fields instead of being rejected.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Side = Literal["LONG", "SHORT"]

# Sentinel for "effectively infinite" favourable ratios (keeps outputs numeric)
SENTINEL_CAP = 999.0


def is_capped(value: float) -> bool:
    """True if a ratio saturated to the 999 sentinel (not merely a large ratio)."""
    return value == SENTINEL_CAP


def _normalize_side(value: Any) -> Any:
    if isinstance(value, str):
        side = value.strip().upper()
        return {"BUY": "LONG", "SELL": "SHORT"}.get(side, side)
    return value


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Explicit nulls fall back to the field default (indexers send `exitPrice: null`)."""
        if not isinstance(data, Mapping):
            return data
        defaulted = set()
        for name, field in cls.model_fields.items():
            if not field.is_required() and field.default is not None:
                defaulted.update({name, field.alias or name})
        return {key: value for key, value in data.items() if value is not None or key not in defaulted}


class Fill(_Record):
    """
    Executed trade (fill).

    ``realized_pnl`` is None while the trade is still open/unresolved; such
    fills are excluded from the closed-trade denominator of the win rate.
    """

    market: str = ""
    side: Side = "LONG"
    price: float = 0.0
    size: float = 0.0
    fee: float = 0.0
    realized_pnl: float | None = Field(default=None, alias="realizedPnl")
    liquidity: str | None = None  # MAKER or TAKER
    created_at: datetime | None = Field(default=None, alias="createdAt")
    id: str | None = None
    order_id: str | None = Field(default=None, alias="orderId")

    @field_validator("side", mode="before")
    @classmethod
    def normalize_side(cls, value: Any) -> Any:
        return _normalize_side(value)

    @property
    def notional(self) -> float:
        """Traded notional (size * price)."""
        return self.size * self.price


class Position(_Record):
    """
    Position snapshot (open or closed).

    Mutated only by the upstream data source; the engine reads it as-is.
    """

    market: str = ""
    side: Side = "LONG"
    size: float = 0.0
    entry_price: float = Field(default=0.0, alias="entryPrice")
    exit_price: float = Field(default=0.0, alias="exitPrice")
    status: Literal["OPEN", "CLOSED"] = "OPEN"
    realized_pnl: float | None = Field(default=None, alias="realizedPnl")
    unrealized_pnl: float = Field(default=0.0, alias="unrealizedPnl")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    closed_at: datetime | None = Field(default=None, alias="closedAt")
    sum_open: float = Field(default=0.0, alias="sumOpen")
    sum_close: float = Field(default=0.0, alias="sumClose")
    net_funding: float = Field(default=0.0, alias="netFunding")

    @field_validator("side", mode="before")
    @classmethod
    def normalize_side(cls, value: Any) -> Any:
        return _normalize_side(value)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        # Terminal states (LIQUIDATED, ...) count as CLOSED
        if isinstance(value, str):
            return "OPEN" if value.strip().upper() == "OPEN" else "CLOSED"
        return value

    @property
    def is_closed(self) -> bool:
        """Position is closed and carries a close timestamp."""
        return self.status == "CLOSED" and self.closed_at is not None

    @property
    def hold_seconds(self) -> float | None:
        """Seconds between open and close (None if not closed)."""
        if not self.is_closed or self.created_at is None or self.closed_at is None:
            return None
        return (self.closed_at - self.created_at).total_seconds()

    @property
    def notional(self) -> float:
        """Position notional at entry (size * entry price)."""
        return self.size * self.entry_price


class EquityPoint(_Record):
    """Account equity at a point in time."""

    equity: float = 0.0
    created_at: datetime | None = Field(default=None, alias="createdAt")
    total_pnl: float | None = Field(default=None, alias="totalPnl")


class FundingPayment(_Record):
    """Funding payment on a perpetual position (positive = received)."""

    market: str = ""
    payment: float = 0.0
    rate: float = 0.0
    position_size: float = Field(default=0.0, alias="positionSize")
    effective_at: datetime | None = Field(default=None, alias="effectiveAt")


# Equity series entries: bare numbers, EquityPoint records or raw mappings with an "equity" key
EquityInput = Union[float, int, EquityPoint, Mapping[str, Any]]

Trade = Union[Fill, Position]


class MaxDrawdown(_Record):
    """
    Worst peak-to-trough decline of an equity curve.

    ``duration`` counts samples from the peak preceding the trough to the
    trough itself.
    """

    value: float = 0.0
    percentage: float = 0.0
    duration: int = 0
    peak_index: int = 0
    trough_index: int = 0
    peak_value: float = 0.0
    trough_value: float = 0.0


class DrawdownPeriod(_Record):
    """
    Record of a drawdown period (peak to trough to recovery).

    Indices refer to positions in the equity series. ``end_index`` is the
    recovery sample, or the last sample for a period still open at the end
    of the series (``recovered`` False, ``recovery`` None).
    """

    start_index: int
    trough_index: int
    end_index: int
    peak_value: float
    trough_value: float
    depth: float  # Absolute decline from peak
    depth_pct: float  # Decline as percentage of peak
    duration: int  # Samples from start to trough
    recovery: int | None  # Samples from trough to recovery (None if not recovered)
    recovered: bool

    @property
    def samples_underwater(self) -> int | None:
        """Total samples from start to recovery."""
        if not self.recovered:
            return None
        return self.end_index - self.start_index


class MarketStats(_Record):
    """Per-market trade statistics."""

    market: str
    trades: tuple[Trade, ...] = ()
    total_pnl: float = 0.0
    wins: int = 0
    losses: int = 0
    volume: float = 0.0
    win_rate: float = 0.0
    avg_pnl: float = 0.0
    profit_factor: float = 0.0

    @property
    def trade_count(self) -> int:
        return len(self.trades)


class MarketFunding(_Record):
    """Funding totals for one market."""

    received: float = 0.0
    paid: float = 0.0
    net: float = 0.0
    count: int = 0


class FundingSummary(_Record):
    """Funding received/paid across all markets."""

    total_received: float = 0.0
    total_paid: float = 0.0
    net_funding: float = 0.0
    by_market: dict[str, MarketFunding] = Field(default_factory=dict)


class MetricsBundle(_Record):
    """
    Complete metrics bundle handed to the presentation layer.

    Every field is present even for empty input, populated with the
    documented default (0, or 999 for saturated favourable ratios). Ratio
    fields are never None/NaN.
    """

    # Trade statistics
    total_pnl: float = 0.0
    unrealized_pnl: float = 0.0
    total_trades: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    risk_reward_ratio: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0
    recovery_factor: float = 0.0
    kelly_criterion: float = 0.0
    total_fees: float = 0.0

    # Hold times (seconds)
    avg_hold_time: float = 0.0
    avg_win_hold_time: float = 0.0
    avg_loss_hold_time: float = 0.0

    # Risk-adjusted ratios
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    omega_ratio: float = 0.0
    kappa3_ratio: float = 0.0
    sterling_ratio: float = 0.0
    burke_ratio: float = 0.0
    gain_to_pain_ratio: float = 0.0

    # Benchmark-relative (0 when no benchmark supplied)
    beta: float = 0.0
    alpha: float = 0.0
    r_squared: float = 0.0
    treynor_ratio: float = 0.0
    information_ratio: float = 0.0

    # Drawdown and tail risk
    max_drawdown: MaxDrawdown = Field(default_factory=MaxDrawdown)
    drawdown_periods: tuple[DrawdownPeriod, ...] = ()
    average_drawdown_pct: float = 0.0
    ulcer_index: float = 0.0
    value_at_risk: float = 0.0
    conditional_var: float = 0.0
    volatility: float = 0.0
    skewness: float = 0.0
    kurtosis: float = 0.0
    tail_ratio: float = 0.0

    # Sampling and exposure
    return_count: int = 0
    periods_per_year: float = 0.0
    leverage: float = 0.0

    market_stats: dict[str, MarketStats] = Field(default_factory=dict)
    funding: FundingSummary = Field(default_factory=FundingSummary)

    def as_dict(self) -> dict[str, Any]:
        """Flat mapping of metric name to value (structured metrics as dicts)."""
        return self.model_dump(mode="json", exclude={"market_stats": {"__all__": {"trades"}}})
