# backend/goldfolio/services/curve/types.py
"""
Data types for the portfolio curve engine.

These dataclasses are used internally by the curve calculators.
They are NOT Pydantic schemas - those are defined in goldfolio/schemas/curve.py
for API serialization.

Design Principles:
- Immutable value objects (frozen=True), recomputed on every call
- Use Decimal for ALL financial values (never float)
- Timestamps are integer epoch milliseconds
- "No data" is a zero-valued default instance, not None

Type Hierarchy:
    Holding             - One asset position (quantity + cost basis)
    PriceEvent          - One recorded price for an asset
    CurvePoint          - Total portfolio value at one valuation instant
    DailyChange         - Change since the last point of a prior day
    AssetPriceChange    - Change between the two latest prices of one asset
    HistoricalStats     - ATH/ATL, best/worst step, drawdown, total return
    TimeRange           - Fixed chart windows (1W, 1M, 6M, 1Y, ALL)
    PreparedChart       - Display-ready curve with axis range
    PortfolioSummary    - Value, invested capital and profit totals
    PortfolioOverview   - Everything above for one snapshot
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from goldfolio.services.exceptions import InvalidTimeRangeError


# =============================================================================
# INPUT TYPES
# =============================================================================

@dataclass(frozen=True)
class Holding:
    """
    An asset held in the portfolio.

    Attributes:
        id: Asset identifier (matches PriceEvent.asset_id)
        quantity: Number of units held
        cost_basis: Price paid per unit, used as the price until the
            first price event for this asset is seen
        name: Display name (informational only)
    """

    id: int
    quantity: Decimal
    cost_basis: Decimal
    name: str | None = None


@dataclass(frozen=True)
class PriceEvent:
    """
    A single recorded price for an asset.

    Attributes:
        asset_id: Asset the price belongs to
        timestamp: When the price was recorded (epoch ms)
        sell_price: Price the dealer pays per unit (used for valuation)
        buy_price: Price the dealer asks per unit (informational)
        is_manual: True if entered by hand, False if fetched automatically

    Note:
        Events are not assumed to be sorted. Events for unknown assets
        are tolerated and ignored by the calculators.
    """

    asset_id: int
    timestamp: int
    sell_price: Decimal
    buy_price: Decimal = Decimal("0")
    is_manual: bool = True


# =============================================================================
# CURVE
# =============================================================================

@dataclass(frozen=True)
class CurvePoint:
    """
    Total portfolio value at one valuation instant.

    Within one curve, timestamps are strictly increasing and unique.
    """

    timestamp: int
    total_value: Decimal


# =============================================================================
# CHANGE
# =============================================================================

@dataclass(frozen=True)
class DailyChange:
    """
    Change of the latest curve value against the last value of a prior day.

    The default instance (0, 0) means "no baseline": there is no point
    before the start of the latest point's calendar day.
    """

    absolute: Decimal = Decimal("0")
    percent: Decimal = Decimal("0")


@dataclass(frozen=True)
class AssetPriceChange:
    """Change between the two most recent sell prices of one asset."""

    asset_id: int
    absolute: Decimal = Decimal("0")
    percent: Decimal = Decimal("0")


# =============================================================================
# HISTORICAL STATS
# =============================================================================

@dataclass(frozen=True)
class HistoricalStats:
    """
    Historical performance statistics derived from a curve.

    Attributes:
        all_time_high: Highest curve value (first occurrence on ties)
        all_time_high_date: Timestamp of the all-time high
        all_time_low: Lowest curve value (first occurrence on ties)
        all_time_low_date: Timestamp of the all-time low
        best_step_absolute: Largest increase between adjacent points (>= 0)
        best_step_percent: That increase relative to the earlier point
        best_step_date: Timestamp of the later point of the best step
        worst_step_absolute: Largest decrease between adjacent points (<= 0)
        worst_step_percent: That decrease relative to the earlier point
        worst_step_date: Timestamp of the later point of the worst step
        max_drawdown_percent: Largest decline from a running peak (positive)
        total_return_percent: Last value against first value

    Note:
        The default instance (all zeros, dates 0) is the "no data" sentinel
        returned for curves with fewer than two points. A zero date is
        reserved for this state.
    """

    all_time_high: Decimal = Decimal("0")
    all_time_high_date: int = 0
    all_time_low: Decimal = Decimal("0")
    all_time_low_date: int = 0
    best_step_absolute: Decimal = Decimal("0")
    best_step_percent: Decimal = Decimal("0")
    best_step_date: int = 0
    worst_step_absolute: Decimal = Decimal("0")
    worst_step_percent: Decimal = Decimal("0")
    worst_step_date: int = 0
    max_drawdown_percent: Decimal = Decimal("0")
    total_return_percent: Decimal = Decimal("0")


# =============================================================================
# TIME RANGE
# =============================================================================

class TimeRange(str, Enum):
    """
    Fixed chart windows.

    The value is the label used by clients (e.g. "1M").
    Per-range settings live in TIME_RANGE_SETTINGS.
    """

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @classmethod
    def from_label(cls, label: str) -> TimeRange:
        """
        Parse a client label (case-insensitive).

        Raises:
            InvalidTimeRangeError: If the label is not one of the fixed ranges
        """
        normalized = label.strip().upper()
        for time_range in cls:
            if time_range.value == normalized:
                return time_range
        raise InvalidTimeRangeError(label, [t.value for t in cls])

    @property
    def days(self) -> int | None:
        """Window length in days, or None for ALL."""
        return TIME_RANGE_SETTINGS[self].days

    @property
    def padding_factor(self) -> Decimal:
        """Fraction of the value span added above and below the curve."""
        return TIME_RANGE_SETTINGS[self].padding_factor

    @property
    def date_format(self) -> str:
        """strftime pattern for point labels."""
        return TIME_RANGE_SETTINGS[self].date_format


@dataclass(frozen=True)
class TimeRangeSettings:
    """
    Display settings for one time range.

    Attributes:
        days: Window length (None = unbounded)
        padding_factor: Y-axis padding relative to the value span
            (wider windows get tighter padding)
        date_format: strftime pattern (day name / month-day / month-year)
    """

    days: int | None
    padding_factor: Decimal
    date_format: str


TIME_RANGE_SETTINGS: dict[TimeRange, TimeRangeSettings] = {
    TimeRange.ONE_WEEK: TimeRangeSettings(7, Decimal("0.10"), "%a"),  # Mon
    TimeRange.ONE_MONTH: TimeRangeSettings(30, Decimal("0.08"), "%b %d"),  # Jan 15
    TimeRange.SIX_MONTHS: TimeRangeSettings(180, Decimal("0.05"), "%b %d"),  # Jan 15
    TimeRange.ONE_YEAR: TimeRangeSettings(365, Decimal("0.03"), "%b %y"),  # Jan 25
    TimeRange.ALL: TimeRangeSettings(None, Decimal("0.03"), "%b %y"),  # Jan 25
}


# =============================================================================
# CHART
# =============================================================================

@dataclass(frozen=True)
class PreparedChart:
    """
    Display-ready version of a curve for one time range.

    Attributes:
        time_range: Window the points were filtered to
        points: One point per calendar day, downsampled, ascending
        y_axis_min: Lower axis bound (never negative)
        y_axis_max: Upper axis bound
        label_spacing: Show every n-th x-axis label (>= 1)
        date_format: strftime pattern for x-axis labels
    """

    time_range: TimeRange
    points: tuple[CurvePoint, ...]
    y_axis_min: Decimal
    y_axis_max: Decimal
    label_spacing: int
    date_format: str

    @property
    def is_empty(self) -> bool:
        """True if there is nothing to plot."""
        return not self.points


# =============================================================================
# SUMMARY & OVERVIEW
# =============================================================================

@dataclass(frozen=True)
class PortfolioSummary:
    """
    Portfolio totals at the latest known prices.

    Attributes:
        total_value: Sum of quantity x latest known price
        total_invested: Sum of quantity x cost basis
        total_profit: total_value - total_invested
        profit_percent: total_profit relative to total_invested (0 if nothing invested)
    """

    total_value: Decimal = Decimal("0")
    total_invested: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    profit_percent: Decimal = Decimal("0")


@dataclass(frozen=True)
class PortfolioOverview:
    """
    Complete set of engine outputs for one (holdings, history) snapshot.

    Attributes:
        curve: Full valuation curve
        daily_change: Change since the last point of a prior day
        stats: Historical statistics over the full curve
        chart: Display-ready curve for the requested time range
        summary: Value / invested / profit totals
        warnings: Data quality notes (e.g. events for unknown assets)
    """

    curve: tuple[CurvePoint, ...]
    daily_change: DailyChange
    stats: HistoricalStats
    chart: PreparedChart
    summary: PortfolioSummary
    warnings: list[str] = field(default_factory=list)

    @property
    def has_sufficient_data(self) -> bool:
        """True if the stats were computed from at least two points."""
        return len(self.curve) >= 2
