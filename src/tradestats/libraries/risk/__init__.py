"""
Risk Library.

Pure function-based tools for leverage and liquidation analysis of
perpetual futures positions. All tools are stateless and easy to test.

Architecture:
- tools/liquidation.py: Liquidation price, distance and leverage functions
- models.py: Margin-term and assessment dataclasses

Usage:
    >>> from tradestats.libraries.risk import LeverageProfile
    >>> from tradestats.libraries.risk.tools import liquidation
    >>>
    >>> liq = liquidation.calculate_liquidation_price(
    ...     side="LONG",
    ...     entry_price=2000.0,
    ...     size=1.5,
    ...     leverage=5.0,
    ... )
    >>>
    >>> risk = liquidation.assess_position(position, LeverageProfile(leverage=5.0), current_price=1950.0)
"""

from tradestats.libraries.risk.models import DEFAULT_MAINTENANCE_MARGIN, LeverageProfile, LiquidationRisk

__all__ = [
    "DEFAULT_MAINTENANCE_MARGIN",
    "LeverageProfile",
    "LiquidationRisk",
]
