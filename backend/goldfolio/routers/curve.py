# backend/goldfolio/routers/curve.py
"""
Portfolio curve endpoints.

Every endpoint evaluates the (assets, history) snapshot in the request body.
Nothing is stored between requests.

- POST /curve - Full valuation curve
- POST /curve/daily-change - Change since the last point of a prior day
- POST /curve/stats - ATH/ATL, best/worst step, max drawdown, total return
- POST /curve/chart - Display-ready curve for a time range
- POST /curve/overview - Everything above plus value/profit summary
- POST /curve/assets/{asset_id}/change - Change between an asset's two latest prices

Chart parameters:
- range: 1W, 1M, 6M, 1Y or ALL (default: 1M)
- max_points: Downsampling bound (default: MAX_CHART_POINTS setting)
- now: Reference time in epoch ms for the window (default: server time)
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from goldfolio.config import settings
from goldfolio.dependencies import get_portfolio_curve_service
from goldfolio.schemas.curve import (
    AssetPriceChangeResponse,
    ChartPointResponse,
    ChartResponse,
    CurvePointResponse,
    CurveResponse,
    DailyChangeResponse,
    HistoricalStatsResponse,
    PortfolioOverviewResponse,
    PortfolioSnapshotRequest,
    PortfolioSummaryResponse,
)
from goldfolio.services.constants import MAX_TIMESTAMP_MS
from goldfolio.services.curve import (
    AssetPriceChange,
    DailyChange,
    HistoricalStats,
    Holding,
    PortfolioCurveService,
    PortfolioSummary,
    PreparedChart,
    PriceEvent,
    TimeRange,
)
from goldfolio.services.curve.formatters import (
    format_axis_value,
    format_currency,
    format_marker_value,
    format_percent,
    format_point_date,
)

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/curve",
    tags=["Curve"],
)

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TIME_RANGE = TimeRange.ONE_MONTH.value
MAX_POINTS_LIMIT = 1000


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _decimal_to_str(value: Decimal) -> str:
    """Convert Decimal to string for JSON response, preserving precision."""
    if isinstance(value, int):
        value = Decimal(value)
    # Fixed-point notation: normalize() alone would give "2.5E+2" for 250
    return format(value.normalize(), "f")


def _to_domain(
        request: PortfolioSnapshotRequest,
) -> tuple[list[Holding], list[PriceEvent]]:
    """Convert the request body into engine value objects."""
    holdings = [
        Holding(
            id=asset.id,
            quantity=asset.quantity,
            cost_basis=asset.cost_basis,
            name=asset.name,
        )
        for asset in request.assets
    ]
    history = [
        PriceEvent(
            asset_id=event.asset_id,
            timestamp=event.timestamp,
            sell_price=event.sell_price,
            buy_price=event.buy_price,
            is_manual=event.is_manual,
        )
        for event in request.history
    ]
    return holdings, history


def _build_daily_change_response(change: DailyChange) -> DailyChangeResponse:
    return DailyChangeResponse(
        absolute=_decimal_to_str(change.absolute),
        percent=_decimal_to_str(change.percent),
        formatted_percent=format_percent(change.percent),
    )


def _build_stats_response(
        stats: HistoricalStats,
        has_sufficient_data: bool,
) -> HistoricalStatsResponse:
    return HistoricalStatsResponse(
        has_sufficient_data=has_sufficient_data,
        all_time_high=_decimal_to_str(stats.all_time_high),
        all_time_high_date=stats.all_time_high_date,
        all_time_low=_decimal_to_str(stats.all_time_low),
        all_time_low_date=stats.all_time_low_date,
        best_step_absolute=_decimal_to_str(stats.best_step_absolute),
        best_step_percent=_decimal_to_str(stats.best_step_percent),
        best_step_date=stats.best_step_date,
        worst_step_absolute=_decimal_to_str(stats.worst_step_absolute),
        worst_step_percent=_decimal_to_str(stats.worst_step_percent),
        worst_step_date=stats.worst_step_date,
        max_drawdown_percent=_decimal_to_str(stats.max_drawdown_percent),
        total_return_percent=_decimal_to_str(stats.total_return_percent),
    )


def _build_chart_response(
        chart: PreparedChart,
        service: PortfolioCurveService,
) -> ChartResponse:
    points = [
        ChartPointResponse(
            timestamp=point.timestamp,
            total_value=_decimal_to_str(point.total_value),
            date_label=format_point_date(point.timestamp, chart.time_range, service.tz),
            value_label=format_marker_value(point.total_value, settings.currency),
        )
        for point in chart.points
    ]
    return ChartResponse(
        range=chart.time_range.value,
        points=points,
        y_axis_min=_decimal_to_str(chart.y_axis_min),
        y_axis_max=_decimal_to_str(chart.y_axis_max),
        y_axis_min_label=format_axis_value(chart.y_axis_min),
        y_axis_max_label=format_axis_value(chart.y_axis_max),
        label_spacing=chart.label_spacing,
        date_format=chart.date_format,
    )


def _build_summary_response(summary: PortfolioSummary) -> PortfolioSummaryResponse:
    return PortfolioSummaryResponse(
        currency=settings.currency,
        total_value=_decimal_to_str(summary.total_value),
        total_invested=_decimal_to_str(summary.total_invested),
        total_profit=_decimal_to_str(summary.total_profit),
        profit_percent=_decimal_to_str(summary.profit_percent),
        total_value_label=format_currency(summary.total_value, settings.currency),
    )


def _build_asset_change_response(change: AssetPriceChange) -> AssetPriceChangeResponse:
    return AssetPriceChangeResponse(
        asset_id=change.asset_id,
        absolute=_decimal_to_str(change.absolute),
        percent=_decimal_to_str(change.percent),
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "",
    response_model=CurveResponse,
    summary="Build the portfolio valuation curve",
    response_description="One point per valuation instant (minute)"
)
def get_curve(
        snapshot: PortfolioSnapshotRequest,
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
) -> CurveResponse:
    """
    Merge the price history of all assets into one valuation curve.

    Each asset is valued at its most recent price (or its cost basis
    before its first price). Events within the same minute form one point.
    Events for assets not in `assets` are ignored.
    """
    holdings, history = _to_domain(snapshot)
    curve = service.get_curve(holdings, history)

    return CurveResponse(
        points=[
            CurvePointResponse(
                timestamp=point.timestamp,
                total_value=_decimal_to_str(point.total_value),
            )
            for point in curve
        ],
        count=len(curve),
    )


@router.post(
    "/daily-change",
    response_model=DailyChangeResponse,
    summary="Get the daily change",
    response_description="Change since the last point before today's midnight"
)
def get_daily_change(
        snapshot: PortfolioSnapshotRequest,
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
) -> DailyChangeResponse:
    """
    Compare the latest value against the last value of a previous day.

    Returns zeros when there is no point before the start of the latest
    point's calendar day.
    """
    holdings, history = _to_domain(snapshot)
    return _build_daily_change_response(service.get_daily_change(holdings, history))


@router.post(
    "/stats",
    response_model=HistoricalStatsResponse,
    summary="Get historical statistics",
    response_description="ATH/ATL, best/worst step, max drawdown and total return"
)
def get_stats(
        snapshot: PortfolioSnapshotRequest,
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
) -> HistoricalStatsResponse:
    """
    Calculate statistics over the full curve.

    All values are 0 (and `has_sufficient_data` is false) when the curve
    has fewer than two points.
    """
    holdings, history = _to_domain(snapshot)
    curve = service.get_curve(holdings, history)
    stats = service.calculate_stats(curve)
    return _build_stats_response(stats, has_sufficient_data=len(curve) >= 2)


@router.post(
    "/chart",
    response_model=ChartResponse,
    summary="Get display-ready chart data",
    response_description="Filtered, per-day, downsampled curve with axis bounds"
)
def get_chart(
        snapshot: PortfolioSnapshotRequest,
        time_range: str = Query(
            default=DEFAULT_TIME_RANGE,
            alias="range",
            description="Time range: 1W, 1M, 6M, 1Y or ALL"
        ),
        max_points: int | None = Query(
            default=None,
            ge=1,
            le=MAX_POINTS_LIMIT,
            description="Maximum number of plotted points (default from configuration)"
        ),
        now: int | None = Query(
            default=None,
            ge=0,
            le=MAX_TIMESTAMP_MS,
            description="Reference time in epoch ms (default: server time)"
        ),
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
) -> ChartResponse:
    """
    Prepare the curve for display.

    Keeps points inside the window, then the last point of each calendar
    day, then downsamples to at most `max_points` (plus the last point).
    """
    parsed_range = TimeRange.from_label(time_range)
    holdings, history = _to_domain(snapshot)
    chart = service.get_chart(
        holdings, history, parsed_range, max_points=max_points, now_ms=now
    )
    return _build_chart_response(chart, service)


@router.post(
    "/overview",
    response_model=PortfolioOverviewResponse,
    summary="Get the complete portfolio overview",
    response_description="Summary, daily change, stats and chart in one response"
)
def get_overview(
        snapshot: PortfolioSnapshotRequest,
        time_range: str = Query(
            default=DEFAULT_TIME_RANGE,
            alias="range",
            description="Time range: 1W, 1M, 6M, 1Y or ALL"
        ),
        max_points: int | None = Query(
            default=None,
            ge=1,
            le=MAX_POINTS_LIMIT,
            description="Maximum number of plotted points (default from configuration)"
        ),
        now: int | None = Query(
            default=None,
            ge=0,
            le=MAX_TIMESTAMP_MS,
            description="Reference time in epoch ms (default: server time)"
        ),
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
) -> PortfolioOverviewResponse:
    """
    Calculate every curve output for the snapshot in one pass.

    The `warnings` list reports ignored data, such as price events for
    assets that are not held.
    """
    parsed_range = TimeRange.from_label(time_range)
    holdings, history = _to_domain(snapshot)
    overview = service.get_overview(
        holdings, history, parsed_range, max_points=max_points, now_ms=now
    )

    return PortfolioOverviewResponse(
        summary=_build_summary_response(overview.summary),
        daily_change=_build_daily_change_response(overview.daily_change),
        stats=_build_stats_response(overview.stats, overview.has_sufficient_data),
        chart=_build_chart_response(overview.chart, service),
        curve_points=len(overview.curve),
        warnings=overview.warnings,
    )


@router.post(
    "/assets/{asset_id}/change",
    response_model=AssetPriceChangeResponse,
    summary="Get an asset's latest price change",
    response_description="Change between the asset's two most recent prices"
)
def get_asset_price_change(
        asset_id: int,
        snapshot: PortfolioSnapshotRequest,
        service: PortfolioCurveService = Depends(get_portfolio_curve_service),
) -> AssetPriceChangeResponse:
    """
    Compare an asset's two most recent sell prices.

    Returns zeros if the asset has fewer than two price events.
    """
    _, history = _to_domain(snapshot)
    return _build_asset_change_response(service.get_asset_price_change(history, asset_id))
