"""
TradeStats Metrics Engine.

Facade that turns a PortfolioSnapshot into a MetricsBundle using the pure
performance and risk libraries.
"""

from tradestats.engine.analyzer import assess_open_positions, compute_metrics
from tradestats.engine.config import AnalysisConfig
from tradestats.engine.loaders import RecordLoadError, load_snapshot
from tradestats.engine.models import PortfolioSnapshot

__all__ = [
    "AnalysisConfig",
    "PortfolioSnapshot",
    "RecordLoadError",
    "assess_open_positions",
    "compute_metrics",
    "load_snapshot",
]
