# backend/goldfolio/services/curve/service.py
"""
Portfolio Curve Service orchestrator.

This is the main entry point for the curve engine. It:
1. Builds the valuation curve from a (holdings, history) snapshot
2. Delegates to specialized calculators
3. Aggregates results into PortfolioOverview

Nothing is cached: every call recomputes from the snapshot it is given.

Architecture:
    PortfolioCurveService
        ├── uses → CurveBuilder (curve + latest prices)
        ├── uses → ChangeCalculator (daily + per-asset change)
        ├── uses → HistoricalStatsCalculator (ATH/ATL, steps, drawdown)
        ├── uses → ChartPreparer (filter, downsample, axis)
        └── uses → PortfolioSummaryCalculator (value, invested, profit)

Usage:
    from goldfolio.services.curve import PortfolioCurveService, TimeRange

    service = PortfolioCurveService(tz=ZoneInfo("Europe/Zurich"))

    overview = service.get_overview(holdings, history, TimeRange.ONE_MONTH)
    print(f"Daily: {overview.daily_change.percent}%")
    print(f"ATH: {overview.stats.all_time_high}")
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Sequence

from goldfolio.services.constants import MAX_CHART_POINTS
from goldfolio.services.curve.builder import CurveBuilder
from goldfolio.services.curve.change import ChangeCalculator
from goldfolio.services.curve.chart import ChartPreparer
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

logger = logging.getLogger(__name__)


class PortfolioCurveService:
    """
    Composes the curve calculators.

    Holds only immutable configuration, so one instance can serve
    concurrent callers.
    """

    def __init__(
            self,
            tz: tzinfo | None = None,
            max_chart_points: int = MAX_CHART_POINTS,
    ) -> None:
        """
        Initialize the service.

        Args:
            tz: Timezone for calendar-day boundaries (None = system local)
            max_chart_points: Default downsampling bound for charts
        """
        self._tz = tz
        self._max_chart_points = max_chart_points
        self._builder = CurveBuilder()
        self._change = ChangeCalculator(tz)
        self._stats = HistoricalStatsCalculator()
        self._chart = ChartPreparer(tz)
        self._summary = PortfolioSummaryCalculator(self._builder)

    @property
    def tz(self) -> tzinfo | None:
        return self._tz

    @property
    def max_chart_points(self) -> int:
        return self._max_chart_points

    # =========================================================================
    # INDIVIDUAL RESULTS
    # =========================================================================

    def get_curve(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
    ) -> list[CurvePoint]:
        """Build the full valuation curve."""
        return self._builder.build(history, holdings)

    def get_daily_change(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
    ) -> DailyChange:
        """Calculate the change since the last point of a prior day."""
        return self._change.daily_change(self.get_curve(holdings, history))

    def get_stats(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
    ) -> HistoricalStats:
        """Calculate historical statistics over the full curve."""
        return self.calculate_stats(self.get_curve(holdings, history))

    def calculate_stats(self, curve: Sequence[CurvePoint]) -> HistoricalStats:
        """Calculate historical statistics over an already built curve."""
        return self._stats.calculate(curve)

    def get_chart(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
            time_range: TimeRange,
            max_points: int | None = None,
            now_ms: int | None = None,
    ) -> PreparedChart:
        """Prepare the display-ready curve for one time range."""
        return self._chart.prepare(
            self.get_curve(holdings, history),
            time_range,
            max_points=max_points or self._max_chart_points,
            now_ms=now_ms,
        )

    def get_summary(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
    ) -> PortfolioSummary:
        """Calculate value, invested capital and profit totals."""
        return self._summary.calculate(holdings, history)

    def get_asset_price_change(
            self,
            history: Sequence[PriceEvent],
            asset_id: int,
    ) -> AssetPriceChange:
        """Calculate the change between the two latest prices of one asset."""
        return self._change.asset_price_change(history, asset_id)

    # =========================================================================
    # OVERVIEW
    # =========================================================================

    def get_overview(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
            time_range: TimeRange = TimeRange.ONE_MONTH,
            max_points: int | None = None,
            now_ms: int | None = None,
    ) -> PortfolioOverview:
        """
        Calculate every engine output for one snapshot.

        The curve is built once and shared by all calculators.

        Args:
            holdings: Current holdings
            history: Price events in any order
            time_range: Chart window
            max_points: Chart downsampling bound (default from configuration)
            now_ms: Reference "now" for the chart window

        Returns:
            PortfolioOverview with data quality warnings attached
        """
        curve = self._builder.build(history, holdings)

        overview = PortfolioOverview(
            curve=tuple(curve),
            daily_change=self._change.daily_change(curve),
            stats=self._stats.calculate(curve),
            chart=self._chart.prepare(
                curve,
                time_range,
                max_points=max_points or self._max_chart_points,
                now_ms=now_ms,
            ),
            summary=self._summary.calculate(holdings, history),
            warnings=self._collect_warnings(holdings, history),
        )

        logger.info(
            f"Overview: {len(holdings)} holdings, {len(history)} events, "
            f"{len(curve)} curve points, {len(overview.chart.points)} chart points "
            f"({time_range.value})"
        )
        return overview

    @staticmethod
    def _collect_warnings(
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
    ) -> list[str]:
        """Describe data that the calculators silently ignored."""
        warnings: list[str] = []
        held_ids = {holding.id for holding in holdings}

        unknown_ids = sorted({e.asset_id for e in history if e.asset_id not in held_ids})
        if unknown_ids:
            warnings.append(
                f"Ignored price events for unknown assets: {unknown_ids}"
            )
            logger.warning(f"Price events reference unknown assets: {unknown_ids}")

        unpriced = sorted(held_ids - {e.asset_id for e in history})
        if unpriced and history:
            warnings.append(
                f"Assets valued at cost basis (no price history): {unpriced}"
            )

        return warnings
