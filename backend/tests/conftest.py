# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Test environment settings (UTC calendar days)
- Sample data factories for holdings, price events and curves
- Calculator and service fixtures
"""

import os

# Must be set before goldfolio.config is imported anywhere
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("APP_NAME", "Test App")

from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

import pytest

from goldfolio.services.constants import MS_PER_DAY, MS_PER_SECOND
from goldfolio.services.curve import (
    ChangeCalculator,
    ChartPreparer,
    CurveBuilder,
    CurvePoint,
    HistoricalStatsCalculator,
    Holding,
    PortfolioCurveService,
    PriceEvent,
)


# =============================================================================
# TIME HELPERS
# =============================================================================

def ts(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    """Epoch milliseconds of a UTC wall-clock time."""
    moment = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    return int(moment.timestamp() * MS_PER_SECOND)


# 2025-01-15 12:00:00 UTC
BASE_TS = ts(2025, 1, 15, 12)


# =============================================================================
# SAMPLE DATA FACTORIES
# =============================================================================

def make_holding(
        id: int = 1,
        quantity: str | int = "1",
        cost_basis: str | int = "100",
        name: str | None = None,
) -> Holding:
    """Factory function for creating Holding test data."""
    return Holding(
        id=id,
        quantity=Decimal(str(quantity)),
        cost_basis=Decimal(str(cost_basis)),
        name=name,
    )


def make_event(
        asset_id: int = 1,
        timestamp: int = BASE_TS,
        sell_price: str | int = "100",
        buy_price: str | int = "0",
        is_manual: bool = True,
) -> PriceEvent:
    """Factory function for creating PriceEvent test data."""
    return PriceEvent(
        asset_id=asset_id,
        timestamp=timestamp,
        sell_price=Decimal(str(sell_price)),
        buy_price=Decimal(str(buy_price)),
        is_manual=is_manual,
    )


def make_curve(
        values: Sequence[str | int],
        start: int = BASE_TS,
        step: int = MS_PER_DAY,
) -> list[CurvePoint]:
    """Factory function for a curve with evenly spaced points."""
    return [
        CurvePoint(timestamp=start + i * step, total_value=Decimal(str(value)))
        for i, value in enumerate(values)
    ]


# =============================================================================
# CALCULATOR FIXTURES
# =============================================================================

@pytest.fixture
def builder() -> CurveBuilder:
    return CurveBuilder()


@pytest.fixture
def change_calculator() -> ChangeCalculator:
    """Change calculator with UTC calendar days."""
    return ChangeCalculator(timezone.utc)


@pytest.fixture
def stats_calculator() -> HistoricalStatsCalculator:
    return HistoricalStatsCalculator()


@pytest.fixture
def chart_preparer() -> ChartPreparer:
    """Chart preparer with UTC calendar days."""
    return ChartPreparer(timezone.utc)


@pytest.fixture
def curve_service() -> PortfolioCurveService:
    """Curve service with UTC calendar days and default chart size."""
    return PortfolioCurveService(tz=timezone.utc)


# =============================================================================
# SAMPLE PORTFOLIO FIXTURES
# =============================================================================

@pytest.fixture
def two_asset_holdings() -> list[Holding]:
    """A: 2 units @ 100, B: 1 unit @ 50."""
    return [
        make_holding(id=1, quantity="2", cost_basis="100", name="Asset A"),
        make_holding(id=2, quantity="1", cost_basis="50", name="Asset B"),
    ]


@pytest.fixture
def two_asset_history() -> list[PriceEvent]:
    """
    A priced at t0 (100) and t2 (120), B priced at t1 (50), one day apart.

    Expected curve: t0=250, t1=250, t2=290.
    """
    return [
        make_event(asset_id=1, timestamp=BASE_TS, sell_price="100"),
        make_event(asset_id=2, timestamp=BASE_TS + MS_PER_DAY, sell_price="50"),
        make_event(asset_id=1, timestamp=BASE_TS + 2 * MS_PER_DAY, sell_price="120"),
    ]


# =============================================================================
# API FIXTURES
# =============================================================================

@pytest.fixture
def client():
    """Create TestClient for the FastAPI app."""
    from fastapi.testclient import TestClient

    from goldfolio.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def snapshot_payload() -> dict:
    """
    Request body matching two_asset_holdings / two_asset_history.

    Expected curve: 250, 250, 290 (one day apart).
    """
    return {
        "assets": [
            {"id": 1, "quantity": "2", "cost_basis": "100", "name": "Asset A"},
            {"id": 2, "quantity": "1", "cost_basis": "50", "name": "Asset B"},
        ],
        "history": [
            {"asset_id": 1, "timestamp": BASE_TS, "sell_price": "100"},
            {"asset_id": 2, "timestamp": BASE_TS + MS_PER_DAY, "sell_price": "50"},
            {"asset_id": 1, "timestamp": BASE_TS + 2 * MS_PER_DAY, "sell_price": "120"},
        ],
    }
