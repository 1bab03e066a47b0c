# backend/goldfolio/services/curve/__init__.py
"""
Portfolio Curve Package.

This package turns per-asset price observations into a portfolio
valuation curve and derived statistics:
- Valuation curve (carry-forward of last known prices, grouped by minute)
- Daily change (against the last point of a prior calendar day)
- Historical stats (ATH/ATL, best/worst step, max drawdown, total return)
- Display-ready charts (time-range filter, per-day points, downsampling)

Architecture:
    curve/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Data classes for inputs and results
    ├── builder.py               # CurveBuilder (Rolling State fold)
    ├── change.py                # ChangeCalculator (daily + per-asset)
    ├── stats.py                 # HistoricalStatsCalculator
    ├── chart.py                 # ChartPreparer
    ├── summary.py               # PortfolioSummaryCalculator
    ├── formatters.py            # Axis, marker and currency labels
    ├── sample_data.py           # Deterministic demo portfolio
    └── service.py               # PortfolioCurveService (orchestrator)

Usage:
    from goldfolio.services.curve import PortfolioCurveService, TimeRange

    service = PortfolioCurveService()
    overview = service.get_overview(holdings, history, TimeRange.ONE_YEAR)

Data Flow:
    (holdings, history)
        ↓
    CurveBuilder → list[CurvePoint]
        ↓
    ┌────────────────────────────────────────────┐
    │  ChangeCalculator   HistoricalStats   Chart │
    └────────────────────────────────────────────┘
        ↓
    PortfolioOverview
"""

from goldfolio.services.curve.builder import CurveBuilder
from goldfolio.services.curve.change import ChangeCalculator
from goldfolio.services.curve.chart import ChartPreparer
from goldfolio.services.curve.service import PortfolioCurveService
from goldfolio.services.curve.stats import HistoricalStatsCalculator
from goldfolio.services.curve.summary import PortfolioSummaryCalculator
from goldfolio.services.curve.types import (
    AssetPriceChange,
    CurvePoint,
    DailyChange,
    HistoricalStats,
    Holding,
    PortfolioOverview,
    PortfolioSummary,
    PreparedChart,
    PriceEvent,
    TimeRange,
)

__all__ = [
    # Service
    "PortfolioCurveService",
    # Calculators
    "CurveBuilder",
    "ChangeCalculator",
    "HistoricalStatsCalculator",
    "ChartPreparer",
    "PortfolioSummaryCalculator",
    # Types
    "Holding",
    "PriceEvent",
    "CurvePoint",
    "DailyChange",
    "AssetPriceChange",
    "HistoricalStats",
    "TimeRange",
    "PreparedChart",
    "PortfolioSummary",
    "PortfolioOverview",
]
