"""CLI UI components - table formatters."""

from tradestats.cli.ui.formatters import (
    create_drawdown_table,
    create_liquidation_table,
    create_market_table,
    create_risk_table,
    create_summary_table,
)

__all__ = [
    "create_summary_table",
    "create_risk_table",
    "create_market_table",
    "create_drawdown_table",
    "create_liquidation_table",
]
