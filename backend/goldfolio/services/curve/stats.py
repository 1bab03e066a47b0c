# backend/goldfolio/services/curve/stats.py
"""
Historical statistics for the portfolio curve.

This module contains pure functions for the individual metrics and a
HistoricalStatsCalculator that combines them:
- All-time high / low: extreme curve values (first occurrence wins ties)
- Best / worst step: largest rise and fall between adjacent points
- Max drawdown: largest decline from a running peak
- Total return: last value against first value

All functions are stateless and operate on Decimal values for precision.

Formulas:
    Step % = (V_i - V_i-1) / V_i-1 * 100

    Max Drawdown = max((Peak - V) / Peak) * 100

    Total Return = (V_last - V_first) / V_first * 100

Note:
    A "step" is the change between two consecutive curve points, which
    are not necessarily one day apart.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from goldfolio.services.constants import HUNDRED, ZERO
from goldfolio.services.curve.change import percent_change
from goldfolio.services.curve.types import CurvePoint, HistoricalStats

logger = logging.getLogger(__name__)


# =============================================================================
# EXTREMES
# =============================================================================

def find_all_time_extremes(
        curve: Sequence[CurvePoint],
) -> tuple[CurvePoint, CurvePoint]:
    """
    Find the highest and lowest points of a non-empty curve.

    Strict comparisons keep the first occurrence when values tie.

    Returns:
        Tuple of (high point, low point)
    """
    high = low = curve[0]
    for point in curve[1:]:
        if point.total_value > high.total_value:
            high = point
        if point.total_value < low.total_value:
            low = point
    return high, low


def calculate_step_extremes(
        curve: Sequence[CurvePoint],
) -> tuple[tuple[Decimal, Decimal, int], tuple[Decimal, Decimal, int]]:
    """
    Find the largest rise and the largest fall between adjacent points.

    Both start at zero, so a curve that never rises reports a best step of
    0 with date 0 (and likewise for a curve that never falls).

    Returns:
        ((best_absolute, best_percent, best_date),
         (worst_absolute, worst_percent, worst_date))
        where each date is the timestamp of the later point of the pair
    """
    best = (ZERO, ZERO, 0)
    worst = (ZERO, ZERO, 0)

    for previous, current in zip(curve, curve[1:]):
        change = current.total_value - previous.total_value
        if change > best[0]:
            best = (change, percent_change(change, previous.total_value), current.timestamp)
        if change < worst[0]:
            worst = (change, percent_change(change, previous.total_value), current.timestamp)

    return best, worst


# =============================================================================
# DRAWDOWN & RETURN
# =============================================================================

def calculate_max_drawdown_percent(curve: Sequence[CurvePoint]) -> Decimal:
    """
    Calculate the maximum drawdown as a positive percentage.

    The running peak starts at the first point. Drawdown is only measured
    while the peak is positive.

    Example:
        [100, 200, 150] -> peak 200, trough 150 -> 25%
    """
    if not curve:
        return ZERO

    peak = curve[0].total_value
    max_drawdown = ZERO

    for point in curve[1:]:
        value = point.total_value
        if value > peak:
            peak = value
        if peak > ZERO:
            drawdown = (peak - value) / peak * HUNDRED
            if drawdown > max_drawdown:
                max_drawdown = drawdown

    return max_drawdown


def calculate_total_return_percent(curve: Sequence[CurvePoint]) -> Decimal:
    """Calculate (last - first) / first * 100, or 0 if first is zero."""
    if not curve:
        return ZERO
    first = curve[0].total_value
    return percent_change(curve[-1].total_value - first, first)


# =============================================================================
# CALCULATOR
# =============================================================================

class HistoricalStatsCalculator:
    """
    Combines the statistic functions into one HistoricalStats result.

    Example:
        stats = HistoricalStatsCalculator().calculate(curve)
        print(f"ATH: {stats.all_time_high}, DD: {stats.max_drawdown_percent}%")
    """

    def calculate(self, curve: Sequence[CurvePoint]) -> HistoricalStats:
        """
        Calculate all historical statistics.

        Args:
            curve: Valuation curve, ascending by timestamp

        Returns:
            HistoricalStats, or HistoricalStats() for fewer than two points
        """
        if len(curve) < 2:
            logger.debug(f"Insufficient data for stats: {len(curve)} points")
            return HistoricalStats()

        high, low = find_all_time_extremes(curve)
        best, worst = calculate_step_extremes(curve)

        stats = HistoricalStats(
            all_time_high=high.total_value,
            all_time_high_date=high.timestamp,
            all_time_low=low.total_value,
            all_time_low_date=low.timestamp,
            best_step_absolute=best[0],
            best_step_percent=best[1],
            best_step_date=best[2],
            worst_step_absolute=worst[0],
            worst_step_percent=worst[1],
            worst_step_date=worst[2],
            max_drawdown_percent=calculate_max_drawdown_percent(curve),
            total_return_percent=calculate_total_return_percent(curve),
        )

        logger.debug(
            f"Stats over {len(curve)} points: ATH={stats.all_time_high}, "
            f"ATL={stats.all_time_low}, DD={stats.max_drawdown_percent:.2f}%"
        )
        return stats
