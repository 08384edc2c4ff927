"""Leverage and liquidation risk models.

Immutable data structures describing how a perpetual position is margined
and how close it sits to liquidation.

Design Principles:
- Immutable (frozen dataclasses)
- Pure data (no business logic beyond derived flags)
- Validation in __post_init__
"""

from dataclasses import dataclass

from tradestats.libraries.performance.models import Side

DEFAULT_MAINTENANCE_MARGIN = 0.006


@dataclass(frozen=True)
class LeverageProfile:
    """Margin terms of a leveraged position.

    Attributes:
        leverage: Position leverage (e.g., 10.0 = 10x, initial margin 10%)
        maintenance_margin: Maintenance margin fraction (e.g., 0.006 = 0.6%)

    Example:
        >>> profile = LeverageProfile(leverage=10.0)
        >>> profile.initial_margin
        0.1
    """

    leverage: float
    maintenance_margin: float = DEFAULT_MAINTENANCE_MARGIN

    def __post_init__(self) -> None:
        """Validate margin terms."""
        if self.leverage <= 0:
            raise ValueError(f"leverage must be positive, got {self.leverage}")

        if not 0.0 <= self.maintenance_margin < 1.0:
            raise ValueError(f"maintenance_margin must be in [0, 1), got {self.maintenance_margin}")

    @property
    def initial_margin(self) -> float:
        """Initial margin fraction (1 / leverage)."""
        return 1 / self.leverage


@dataclass(frozen=True)
class LiquidationRisk:
    """Liquidation assessment of one position at a given mark price.

    Attributes:
        market: Market identifier
        side: LONG or SHORT
        entry_price: Average entry price
        current_price: Mark price used for the assessment
        liquidation_price: Estimated liquidation price (0 if unknown)
        distance_pct: Percent move from current price to liquidation; negative
                      once the price has crossed the liquidation level
        leverage: Leverage the estimate was computed with
    """

    market: str
    side: Side
    entry_price: float
    current_price: float
    liquidation_price: float
    distance_pct: float
    leverage: float

    @property
    def breached(self) -> bool:
        """Mark price is at or beyond the liquidation price."""
        return self.liquidation_price > 0 and self.current_price > 0 and self.distance_pct <= 0
