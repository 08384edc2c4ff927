"""Trading record loader.

Reads an account export (JSON or YAML) into a PortfolioSnapshot for the
engine. Accepts both the flat layout

    fills: [...]
    positions: [...]
    equityHistory: [...]
    funding: [...]
    account: {equity: ..., notionalValue: ...}

and the raw indexer layout, where each collection is wrapped in its API
response object (``fills: {fills: [...]}``, ``historicalPnl:
{historicalPnl: [...]}``, ``funding: {fundingPayments: [...]}``,
``account: {subaccount: {...}}``).
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tradestats.engine.models import PortfolioSnapshot
from tradestats.system import LoggerFactory

logger = LoggerFactory.get_logger()

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class RecordLoadError(Exception):
    """Trading records could not be read or parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load records from {self.path}: {reason}")


def _unwrap(value: Any, key: str) -> Any:
    """Return the list inside an API response object, or the value itself."""
    if isinstance(value, dict):
        return value.get(key) or []
    return value or []


def _account_fields(account: Any) -> dict[str, Any]:
    if not isinstance(account, dict):
        return {}

    subaccount = account.get("subaccount", account)
    if not isinstance(subaccount, dict):
        return {}

    fields: dict[str, Any] = {}
    if subaccount.get("equity") is not None:
        fields["equity"] = subaccount["equity"]
    if subaccount.get("notionalValue") is not None:
        fields["notional_value"] = subaccount["notionalValue"]
    return fields


def parse_snapshot(data: dict[str, Any]) -> PortfolioSnapshot:
    """
    Build a PortfolioSnapshot from an already-decoded record mapping.

    Raises:
        ValidationError: If a record cannot be coerced into its model
    """
    equity_history = data.get("equityHistory", data.get("equity_history"))
    if equity_history is None:
        equity_history = _unwrap(data.get("historicalPnl"), "historicalPnl")

    return PortfolioSnapshot(
        fills=_unwrap(data.get("fills"), "fills"),
        positions=_unwrap(data.get("positions"), "positions"),
        equity_history=equity_history,
        funding=_unwrap(data.get("funding"), "fundingPayments"),
        benchmark_returns=data.get("benchmarkReturns", data.get("benchmark_returns")) or (),
        current_prices=data.get("currentPrices", data.get("current_prices")) or {},
        leverage_by_market=data.get("leverageByMarket", data.get("leverage_by_market")) or {},
        **_account_fields(data.get("account")),
    )


def load_snapshot(path: Path | str) -> PortfolioSnapshot:
    """
    Load trading records from a JSON or YAML file.

    Args:
        path: Record file (.json, .yaml or .yml)

    Returns:
        Parsed PortfolioSnapshot

    Raises:
        FileNotFoundError: If the file does not exist
        RecordLoadError: If the file cannot be decoded or a record is invalid

    Example:
        >>> snapshot = load_snapshot("exports/account.json")
        >>> len(snapshot.fills)
        128
    """
    record_path = Path(path)
    if not record_path.exists():
        raise FileNotFoundError(f"Record file not found: {record_path}")

    suffix = record_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise RecordLoadError(record_path, f"unsupported file type '{suffix}' (expected one of {SUPPORTED_SUFFIXES})")

    try:
        with open(record_path, "r") as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("records.decode_failed", path=str(record_path), error=str(e))
        raise RecordLoadError(record_path, str(e)) from e

    if not isinstance(data, dict):
        raise RecordLoadError(record_path, f"top level must be a mapping, got {type(data).__name__}")

    try:
        snapshot = parse_snapshot(data)
    except ValidationError as e:
        logger.error("records.invalid", path=str(record_path), errors=e.error_count())
        raise RecordLoadError(record_path, str(e)) from e

    logger.info(
        "records.loaded",
        path=str(record_path),
        fills=len(snapshot.fills),
        positions=len(snapshot.positions),
        equity_points=len(snapshot.equity_history),
        funding=len(snapshot.funding),
    )
    return snapshot
