"""Engine input model."""

from pydantic import BaseModel, ConfigDict, Field

from tradestats.libraries.performance.models import EquityPoint, Fill, FundingPayment, Position


class PortfolioSnapshot(BaseModel):
    """
    Everything the engine needs about one trading account.

    All collections are stored as tuples, so a snapshot built from caller
    lists is independent of later changes to those lists. Equity history
    entries may be EquityPoint records (raw mappings are parsed into them)
    or bare numbers.

    Attributes:
        fills: Executed trades, used for trade statistics and fees
        positions: Position snapshots (open and closed)
        equity_history: Equity curve, oldest first
        funding: Funding payments
        benchmark_returns: Optional benchmark returns aligned with the
            equity-derived returns, same unit
        current_prices: Mark price by market, for unrealized P&L and leverage
        leverage_by_market: Leverage each market is traded at, for
            liquidation estimates
        equity: Account equity (defaults to the last equity point)
        notional_value: Open notional (defaults to the sum over open positions)
    """

    fills: tuple[Fill, ...] = ()
    positions: tuple[Position, ...] = ()
    equity_history: tuple[EquityPoint | float, ...] = Field(default=(), alias="equityHistory")
    funding: tuple[FundingPayment, ...] = ()
    benchmark_returns: tuple[float, ...] = Field(default=(), alias="benchmarkReturns")
    current_prices: dict[str, float] = Field(default_factory=dict, alias="currentPrices")
    leverage_by_market: dict[str, float] = Field(default_factory=dict, alias="leverageByMarket")
    equity: float | None = None
    notional_value: float | None = Field(default=None, alias="notionalValue")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def has_benchmark(self) -> bool:
        """Benchmark returns were supplied (enables beta, alpha, R², Treynor, IR)."""
        return bool(self.benchmark_returns)
