# backend/goldfolio/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

Usage:
    from goldfolio.schemas import PortfolioSnapshotRequest, CurveResponse
"""

from goldfolio.schemas.curve import (
    AssetInput,
    PriceEventInput,
    PortfolioSnapshotRequest,
    CurvePointResponse,
    CurveResponse,
    DailyChangeResponse,
    AssetPriceChangeResponse,
    HistoricalStatsResponse,
    ChartPointResponse,
    ChartResponse,
    PortfolioSummaryResponse,
    PortfolioOverviewResponse,
)
from goldfolio.schemas.errors import ErrorDetail, ValidationErrorDetail

__all__ = [
    # Request
    "AssetInput",
    "PriceEventInput",
    "PortfolioSnapshotRequest",
    # Curve
    "CurvePointResponse",
    "CurveResponse",
    "DailyChangeResponse",
    "AssetPriceChangeResponse",
    # Stats
    "HistoricalStatsResponse",
    # Chart
    "ChartPointResponse",
    "ChartResponse",
    # Overview
    "PortfolioSummaryResponse",
    "PortfolioOverviewResponse",
    # Errors
    "ErrorDetail",
    "ValidationErrorDetail",
]
