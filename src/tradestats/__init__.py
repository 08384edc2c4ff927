"""
TradeStats - Trading Performance & Risk Analytics

Public API for turning fills, positions and equity history into a
deterministic bundle of performance and risk metrics.
"""

from importlib.metadata import version

try:
    __version__ = version("tradestats")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
