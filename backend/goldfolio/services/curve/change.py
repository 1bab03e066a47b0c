# backend/goldfolio/services/curve/change.py
"""
Change calculations for the portfolio curve.

Daily change compares the latest curve value against the last value recorded
before the start of the latest point's calendar day. It is not a 24-hour
window: a curve whose previous point is three days old compares against
that point.

Per-asset change compares the two most recent prices of one asset.

All percentages are guarded against zero denominators (result 0).
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from decimal import Decimal
from typing import Sequence

from goldfolio.services.constants import HUNDRED, ZERO
from goldfolio.services.curve.types import (
    AssetPriceChange,
    CurvePoint,
    DailyChange,
    PriceEvent,
)
from goldfolio.utils.date_utils import UNREPRESENTABLE_TIMESTAMP_ERRORS, start_of_day_ms

logger = logging.getLogger(__name__)


def percent_change(absolute: Decimal, base: Decimal) -> Decimal:
    """
    Express a change relative to its base value.

    Returns:
        absolute / base * 100, or 0 if base is zero
    """
    if base == ZERO:
        return ZERO
    return absolute / base * HUNDRED


class ChangeCalculator:
    """
    Calculates day-over-day and per-asset changes.

    The calendar day boundary is local midnight in the configured timezone
    (system local time when tz is None).

    Example:
        calculator = ChangeCalculator(ZoneInfo("Europe/Zurich"))
        change = calculator.daily_change(curve)
        print(f"{change.absolute} ({change.percent}%)")
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    def daily_change(self, curve: Sequence[CurvePoint]) -> DailyChange:
        """
        Calculate the change since the last point of a previous day.

        Args:
            curve: Valuation curve, ascending by timestamp

        Returns:
            DailyChange, or DailyChange() if the curve is empty, has no
            point before today's midnight, or the latest timestamp has no
            calendar date
        """
        if not curve:
            return DailyChange()

        current = curve[-1]
        try:
            start_of_day = start_of_day_ms(current.timestamp, self._tz)
        except UNREPRESENTABLE_TIMESTAMP_ERRORS:
            logger.debug(f"No calendar day for timestamp {current.timestamp}")
            return DailyChange()

        baseline = self._find_baseline(curve, start_of_day)
        if baseline is None:
            logger.debug(
                f"No baseline before {start_of_day} for {len(curve)} points"
            )
            return DailyChange()

        absolute = current.total_value - baseline.total_value
        return DailyChange(
            absolute=absolute,
            percent=percent_change(absolute, baseline.total_value),
        )

    @staticmethod
    def _find_baseline(
            curve: Sequence[CurvePoint],
            before: int,
    ) -> CurvePoint | None:
        """Get the point with the greatest timestamp strictly before `before`."""
        baseline = None
        for point in curve:
            if point.timestamp < before and (
                    baseline is None or point.timestamp > baseline.timestamp
            ):
                baseline = point
        return baseline

    # =========================================================================
    # PER-ASSET CHANGE
    # =========================================================================

    def asset_price_change(
            self,
            history: Sequence[PriceEvent],
            asset_id: int,
    ) -> AssetPriceChange:
        """
        Calculate the change between the two latest prices of one asset.

        Args:
            history: Price events in any order (all assets)
            asset_id: Asset to inspect

        Returns:
            AssetPriceChange with zeros if the asset has fewer than two events
        """
        events = sorted(
            (event for event in history if event.asset_id == asset_id),
            key=lambda event: event.timestamp,
        )
        if len(events) < 2:
            return AssetPriceChange(asset_id=asset_id)

        previous, latest = events[-2], events[-1]
        absolute = latest.sell_price - previous.sell_price
        return AssetPriceChange(
            asset_id=asset_id,
            absolute=absolute,
            percent=percent_change(absolute, previous.sell_price),
        )
