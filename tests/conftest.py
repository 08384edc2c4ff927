"""Root conftest - shared trading record fixtures."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from tradestats.libraries.performance.models import EquityPoint, Fill, FundingPayment, Position

T0 = datetime(2025, 3, 3, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_fills():
    """Fills across two markets: 3 wins, 2 losses, 1 unresolved."""
    return [
        Fill(market="BTC-USD", side="BUY", price=60000, size=0.1, fee=3.0, realized_pnl=120.0, created_at=T0),
        Fill(
            market="BTC-USD",
            side="SELL",
            price=61000,
            size=0.1,
            fee=3.0,
            realized_pnl=-40.0,
            created_at=T0 + timedelta(hours=1),
        ),
        Fill(
            market="ETH-USD",
            side="BUY",
            price=3000,
            size=2,
            fee=1.5,
            realized_pnl=80.0,
            created_at=T0 + timedelta(hours=2),
        ),
        Fill(
            market="ETH-USD",
            side="SELL",
            price=3100,
            size=2,
            fee=1.5,
            realized_pnl=-60.0,
            created_at=T0 + timedelta(days=1),
        ),
        Fill(
            market="ETH-USD",
            side="BUY",
            price=3050,
            size=1,
            fee=0.5,
            realized_pnl=100.0,
            created_at=T0 + timedelta(days=1, hours=3),
        ),
        Fill(market="BTC-USD", side="BUY", price=62000, size=0.05, fee=1.0, realized_pnl=None, created_at=T0),
    ]


@pytest.fixture
def sample_positions():
    """Two closed positions (one win, one loss) and one open LONG."""
    return [
        Position(
            market="BTC-USD",
            side="LONG",
            size=0.1,
            entry_price=60000,
            exit_price=61200,
            status="CLOSED",
            realized_pnl=120.0,
            created_at=T0,
            closed_at=T0 + timedelta(hours=2),
        ),
        Position(
            market="ETH-USD",
            side="SHORT",
            size=2,
            entry_price=3000,
            exit_price=3030,
            status="CLOSED",
            realized_pnl=-60.0,
            created_at=T0,
            closed_at=T0 + timedelta(hours=4),
        ),
        Position(
            market="SOL-USD",
            side="LONG",
            size=10,
            entry_price=150,
            status="OPEN",
            created_at=T0 + timedelta(hours=5),
        ),
    ]


@pytest.fixture
def hourly_equity():
    """Hourly equity snapshots with one recovered and one open drawdown."""
    values = [1000, 1010, 990, 1020, 1030, 1000, 980, 1005]
    return [EquityPoint(equity=v, created_at=T0 + timedelta(hours=i)) for i, v in enumerate(values)]


@pytest.fixture
def sample_funding():
    return [
        FundingPayment(market="BTC-USD", payment=2.5, rate=0.0001),
        FundingPayment(market="BTC-USD", payment=-1.0, rate=-0.00004),
        FundingPayment(market="ETH-USD", payment=-0.5, rate=0.00002),
    ]


@pytest.fixture
def records_payload():
    """Raw record mapping in the indexer's camelCase layout."""
    return {
        "fills": {
            "fills": [
                {
                    "market": "BTC-USD",
                    "side": "BUY",
                    "price": "60000",
                    "size": "0.1",
                    "fee": "3",
                    "realizedPnl": "150",
                    "createdAt": "2025-03-03T00:00:00Z",
                },
                {
                    "market": "BTC-USD",
                    "side": "SELL",
                    "price": "59000",
                    "size": "0.1",
                    "fee": "3",
                    "realizedPnl": "-50",
                    "createdAt": "2025-03-03T01:00:00Z",
                },
            ]
        },
        "positions": {
            "positions": [
                {
                    "market": "ETH-USD",
                    "side": "LONG",
                    "size": "1",
                    "entryPrice": "3000",
                    "status": "OPEN",
                    "createdAt": "2025-03-03T00:00:00Z",
                }
            ]
        },
        "historicalPnl": {
            "historicalPnl": [
                {"equity": "1000", "createdAt": "2025-03-03T00:00:00Z"},
                {"equity": "1100", "createdAt": "2025-03-04T00:00:00Z"},
                {"equity": "990", "createdAt": "2025-03-05T00:00:00Z"},
                {"equity": "1050", "createdAt": "2025-03-06T00:00:00Z"},
            ]
        },
        "funding": {"fundingPayments": [{"market": "ETH-USD", "payment": "1.25"}]},
        "account": {"subaccount": {"equity": "1050", "notionalValue": "3150"}},
        "currentPrices": {"ETH-USD": 3150},
        "leverageByMarket": {"ETH-USD": 5},
    }


@pytest.fixture
def records_file(tmp_path, records_payload):
    """records_payload written to a JSON file."""
    path = tmp_path / "records.json"
    path.write_text(json.dumps(records_payload))
    return path
