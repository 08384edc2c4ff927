"""Liquidation and leverage tools.

Pure functions estimating where an isolated-margin perpetual position gets
liquidated and how far the market is from that level.

Formula:
    initial_margin = 1 / leverage
    LONG:  liq = entry * (1 - (initial_margin - maintenance_margin))
    SHORT: liq = entry * (1 + (initial_margin - maintenance_margin))

Missing inputs (zero entry price, size or leverage) yield 0 rather than an
error, matching how partial indexer records are treated elsewhere.
"""

from tradestats.libraries.performance.models import Position, Side
from tradestats.libraries.risk.models import DEFAULT_MAINTENANCE_MARGIN, LeverageProfile, LiquidationRisk


def calculate_liquidation_price(
    *,
    side: Side,
    entry_price: float,
    size: float,
    leverage: float,
    maintenance_margin: float = DEFAULT_MAINTENANCE_MARGIN,
) -> float:
    """Estimate the liquidation price of a leveraged position.

    Args:
        side: LONG or SHORT
        entry_price: Average entry price
        size: Position size (only checked for presence)
        leverage: Position leverage
        maintenance_margin: Maintenance margin fraction

    Returns:
        Liquidation price, 0.0 if entry price, size or leverage is missing

    Examples:
        >>> calculate_liquidation_price(side="LONG", entry_price=100, size=1, leverage=10)
        90.6  # 100 * (1 - (0.1 - 0.006))
        >>> calculate_liquidation_price(side="SHORT", entry_price=100, size=1, leverage=10)
        109.4  # 100 * (1 + (0.1 - 0.006))
    """
    if not entry_price or not size or not leverage:
        return 0.0

    cushion = 1 / leverage - maintenance_margin

    if side == "LONG":
        return entry_price * (1 - cushion)
    return entry_price * (1 + cushion)


def calculate_liquidation_distance(
    *,
    side: Side,
    entry_price: float,
    size: float,
    leverage: float,
    current_price: float,
    maintenance_margin: float = DEFAULT_MAINTENANCE_MARGIN,
) -> float:
    """Percent price move from the current price to liquidation.

    LONG: (current - liq) / current * 100
    SHORT: (liq - current) / current * 100

    Returns:
        Distance in percent, 0.0 if the liquidation or current price is unknown
    """
    liquidation_price = calculate_liquidation_price(
        side=side,
        entry_price=entry_price,
        size=size,
        leverage=leverage,
        maintenance_margin=maintenance_margin,
    )

    if not liquidation_price or not current_price:
        return 0.0

    if side == "LONG":
        return (current_price - liquidation_price) / current_price * 100
    return (liquidation_price - current_price) / current_price * 100


def calculate_leverage(notional_value: float, equity: float) -> float:
    """Account leverage: notional exposure / equity (0.0 if equity <= 0).

    Example:
        >>> calculate_leverage(50_000, 10_000)
        5.0
    """
    if equity <= 0:
        return 0.0
    return notional_value / equity


def assess_position(
    position: Position,
    leverage_profile: LeverageProfile,
    current_price: float | None = None,
) -> LiquidationRisk:
    """Assess the liquidation risk of a position.

    Args:
        position: Position snapshot
        leverage_profile: Margin terms to evaluate the position under
        current_price: Mark price; defaults to the position's entry price

    Returns:
        LiquidationRisk with liquidation price and distance
    """
    price = current_price if current_price else position.entry_price

    terms = {
        "side": position.side,
        "entry_price": position.entry_price,
        "size": position.size,
        "leverage": leverage_profile.leverage,
        "maintenance_margin": leverage_profile.maintenance_margin,
    }

    return LiquidationRisk(
        market=position.market,
        side=position.side,
        entry_price=position.entry_price,
        current_price=price,
        liquidation_price=calculate_liquidation_price(**terms),
        distance_pct=calculate_liquidation_distance(current_price=price, **terms),
        leverage=leverage_profile.leverage,
    )
