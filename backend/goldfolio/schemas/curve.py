# backend/goldfolio/schemas/curve.py
"""
Pydantic schemas for the Portfolio Curve API.

These schemas handle:
- The (assets, history) snapshot sent by the client
- Valuation curve and daily change
- Historical statistics
- Display-ready chart data
- Portfolio overview (everything combined)

IMPORTANT: All financial values are accepted as Decimal (JSON numbers or
strings) and returned as decimal strings to preserve precision.
Never use float for money!
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from goldfolio.services.constants import MAX_TIMESTAMP_MS


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class AssetInput(BaseModel):
    """One holding in the snapshot."""

    id: int = Field(..., description="Asset identifier (matches history.asset_id)")
    quantity: Decimal = Field(
        ...,
        ge=0,
        description="Number of units held",
        examples=["2", "0.5"]
    )
    cost_basis: Decimal = Field(
        ...,
        ge=0,
        description="Price paid per unit (used until the first price event)",
        examples=["1850.00"]
    )
    name: str | None = Field(
        default=None,
        max_length=200,
        description="Display name (informational only)",
        examples=["Vreneli 20 CHF"]
    )


class PriceEventInput(BaseModel):
    """One recorded price of an asset."""

    asset_id: int = Field(..., description="Asset the price belongs to")
    timestamp: int = Field(
        ...,
        ge=0,
        le=MAX_TIMESTAMP_MS,
        description="When the price was recorded (epoch milliseconds)",
        examples=[1736937000000]
    )
    sell_price: Decimal = Field(
        ...,
        ge=0,
        description="Price the dealer pays per unit (used for valuation)",
        examples=["1912.40"]
    )
    buy_price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Price the dealer asks per unit (informational)"
    )
    is_manual: bool = Field(
        default=True,
        description="True if entered by hand, False if fetched automatically"
    )


class PortfolioSnapshotRequest(BaseModel):
    """Holdings and price history to evaluate. Nothing is stored."""

    assets: list[AssetInput] = Field(
        default_factory=list,
        description="Current holdings"
    )
    history: list[PriceEventInput] = Field(
        default_factory=list,
        description="Price events in any order"
    )


# =============================================================================
# CURVE SCHEMAS
# =============================================================================

class CurvePointResponse(BaseModel):
    """Total portfolio value at one valuation instant."""

    timestamp: int = Field(..., description="Valuation instant (epoch ms, minute precision)")
    total_value: str = Field(..., description="Total portfolio value (decimal string)")


class CurveResponse(BaseModel):
    """Full valuation curve."""

    points: list[CurvePointResponse] = Field(
        ...,
        description="Points in strictly ascending timestamp order"
    )
    count: int = Field(..., description="Number of points")


class DailyChangeResponse(BaseModel):
    """Change since the last point of a previous calendar day."""

    absolute: str = Field(..., description="Absolute change (decimal string)")
    percent: str = Field(..., description="Percent change (decimal string, e.g. '2.5')")
    formatted_percent: str = Field(..., description="Display label, e.g. '+2.50%'")


class AssetPriceChangeResponse(BaseModel):
    """Change between the two latest prices of one asset."""

    asset_id: int
    absolute: str = Field(..., description="Absolute change (decimal string)")
    percent: str = Field(..., description="Percent change (decimal string)")


# =============================================================================
# STATS SCHEMAS
# =============================================================================

class HistoricalStatsResponse(BaseModel):
    """
    Historical performance statistics.

    Dates are epoch milliseconds. A date of 0 means "not available".
    """

    has_sufficient_data: bool = Field(
        ...,
        description="False if the curve has fewer than two points (all values 0)"
    )

    all_time_high: str
    all_time_high_date: int
    all_time_low: str
    all_time_low_date: int

    best_step_absolute: str = Field(..., description="Largest rise between adjacent points")
    best_step_percent: str
    best_step_date: int = Field(..., description="Timestamp of the later point of the best step")

    worst_step_absolute: str = Field(..., description="Largest fall between adjacent points")
    worst_step_percent: str
    worst_step_date: int = Field(..., description="Timestamp of the later point of the worst step")

    max_drawdown_percent: str = Field(..., description="Largest decline from a peak (positive)")
    total_return_percent: str = Field(..., description="Last value against first value")


# =============================================================================
# CHART SCHEMAS
# =============================================================================

class ChartPointResponse(BaseModel):
    """One plotted point with its display labels."""

    timestamp: int
    total_value: str = Field(..., description="Value (decimal string)")
    date_label: str = Field(..., description="Point date formatted for the range, e.g. 'Jan 15'")
    value_label: str = Field(..., description="Marker label, e.g. 'CHF 12.346'")


class ChartResponse(BaseModel):
    """Display-ready curve for one time range."""

    range: str = Field(..., description="Time range label (1W, 1M, 6M, 1Y, ALL)")
    points: list[ChartPointResponse]
    y_axis_min: str = Field(..., description="Lower axis bound (never negative)")
    y_axis_max: str = Field(..., description="Upper axis bound")
    y_axis_min_label: str = Field(..., description="Compact label, e.g. '12k'")
    y_axis_max_label: str = Field(..., description="Compact label, e.g. '14k'")
    label_spacing: int = Field(..., ge=1, description="Show every n-th x-axis label")
    date_format: str = Field(..., description="strftime pattern used for date labels")


# =============================================================================
# SUMMARY & OVERVIEW SCHEMAS
# =============================================================================

class PortfolioSummaryResponse(BaseModel):
    """Portfolio totals at the latest known prices."""

    currency: str
    total_value: str
    total_invested: str
    total_profit: str
    profit_percent: str
    total_value_label: str = Field(..., description="Formatted total value, e.g. 'CHF 12.345,60'")


class PortfolioOverviewResponse(BaseModel):
    """Every curve output for one snapshot."""

    summary: PortfolioSummaryResponse
    daily_change: DailyChangeResponse
    stats: HistoricalStatsResponse
    chart: ChartResponse
    curve_points: int = Field(..., description="Number of points in the full curve")
    warnings: list[str] = Field(
        default_factory=list,
        description="Data quality notes (e.g. events for unknown assets)"
    )
