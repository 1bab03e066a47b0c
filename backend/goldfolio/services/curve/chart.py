# backend/goldfolio/services/curve/chart.py
"""
Chart preparation for the portfolio curve.

Turns a full valuation curve into a bounded, display-ready series:

    filter_by_time_range  - keep the window, then one point per calendar day
    downsample            - cap the number of points, keeping both endpoints
    y_axis_range          - padded value axis bounds (never below zero)
    axis_label_spacing    - show every n-th x-axis label

All operations are pure and never mutate their input.
"""

from __future__ import annotations

import logging
import time
from datetime import date, tzinfo
from decimal import Decimal
from typing import Sequence

from goldfolio.services.constants import (
    DEFAULT_Y_AXIS_RANGE,
    LABEL_SPACING_DENSE_MAX,
    LABEL_SPACING_MEDIUM_DIVISOR,
    LABEL_SPACING_MEDIUM_MAX,
    LABEL_SPACING_SPARSE_DIVISOR,
    MAX_CHART_POINTS,
    MIN_AXIS_SPREAD_RATIO,
    MS_PER_DAY,
    MS_PER_SECOND,
    TWO,
    ZERO,
)
from goldfolio.services.curve.types import CurvePoint, PreparedChart, TimeRange
from goldfolio.utils.date_utils import UNREPRESENTABLE_TIMESTAMP_ERRORS, calendar_day

logger = logging.getLogger(__name__)


def current_time_ms() -> int:
    """Get the current wall-clock time in epoch milliseconds."""
    return int(time.time() * MS_PER_SECOND)


class ChartPreparer:
    """
    Prepares curves for display.

    Calendar days are evaluated in the configured timezone (system local
    time when tz is None).

    Example:
        preparer = ChartPreparer(tz)
        chart = preparer.prepare(curve, TimeRange.ONE_MONTH)
        for point in chart.points[::chart.label_spacing]:
            ...
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    # =========================================================================
    # PIPELINE
    # =========================================================================

    def prepare(
            self,
            points: Sequence[CurvePoint],
            time_range: TimeRange,
            max_points: int = MAX_CHART_POINTS,
            now_ms: int | None = None,
    ) -> PreparedChart:
        """
        Run the full chart pipeline for one time range.

        Order: filter -> downsample -> axis range -> label spacing.

        Args:
            points: Full valuation curve
            time_range: Window to display
            max_points: Upper bound on the number of plotted points
            now_ms: Reference "now" for the window (defaults to current time)

        Returns:
            PreparedChart (empty points with the default axis for no data)
        """
        filtered = self.filter_by_time_range(points, time_range, now_ms)
        sampled = self.downsample(filtered, max_points)
        y_min, y_max = self.y_axis_range(sampled, time_range)

        logger.debug(
            f"Prepared {time_range.value} chart: {len(points)} -> "
            f"{len(filtered)} daily -> {len(sampled)} plotted points"
        )

        return PreparedChart(
            time_range=time_range,
            points=tuple(sampled),
            y_axis_min=y_min,
            y_axis_max=y_max,
            label_spacing=self.axis_label_spacing(len(sampled)),
            date_format=self.date_format(time_range),
        )

    # =========================================================================
    # FILTERING & SAMPLING
    # =========================================================================

    def filter_by_time_range(
            self,
            points: Sequence[CurvePoint],
            time_range: TimeRange,
            now_ms: int | None = None,
    ) -> list[CurvePoint]:
        """
        Keep points inside the window, then the last point of each day.

        Args:
            points: Curve points in any order
            time_range: Window length (ALL keeps everything)
            now_ms: Reference "now" (defaults to current time)

        Returns:
            At most one point per calendar day, ascending by timestamp.
            Points whose timestamp has no calendar date are skipped.
            Applying the filter twice gives the same result.
        """
        if not points:
            return []

        if time_range.days is None:
            cutoff = 0
        else:
            if now_ms is None:
                now_ms = current_time_ms()
            cutoff = now_ms - time_range.days * MS_PER_DAY

        last_per_day: dict[date, CurvePoint] = {}
        for point in points:
            if point.timestamp < cutoff:
                continue
            try:
                day = calendar_day(point.timestamp, self._tz)
            except UNREPRESENTABLE_TIMESTAMP_ERRORS:
                logger.debug(f"Skipping point without calendar day: {point.timestamp}")
                continue
            existing = last_per_day.get(day)
            if existing is None or point.timestamp > existing.timestamp:
                last_per_day[day] = point

        return sorted(last_per_day.values(), key=lambda point: point.timestamp)

    @staticmethod
    def downsample(
            points: Sequence[CurvePoint],
            max_points: int,
    ) -> list[CurvePoint]:
        """
        Reduce a series to roughly max_points by fixed-step sampling.

        The first and last points are always kept. The result may exceed
        max_points by one (the appended last point).

        Args:
            points: Series to reduce
            max_points: Target size (values <= 0 leave the series unchanged)

        Returns:
            New list of sampled points in their original order
        """
        if max_points <= 0 or len(points) <= max_points:
            return list(points)

        step = len(points) // max_points
        sampled = [point for index, point in enumerate(points) if index % step == 0]

        last_index = len(points) - 1
        if last_index % step != 0:
            sampled.append(points[last_index])

        return sampled

    # =========================================================================
    # AXES
    # =========================================================================

    @staticmethod
    def y_axis_range(
            points: Sequence[CurvePoint],
            time_range: TimeRange,
    ) -> tuple[Decimal, Decimal]:
        """
        Calculate padded value axis bounds.

        Padding is a fraction of the value span that shrinks for longer
        windows. A flat series still gets a minimum spread of 1% of the
        average value. The lower bound is clamped at zero.

        Returns:
            (y_min, y_max), or (0, 100) if there are no points
        """
        if not points:
            return DEFAULT_Y_AXIS_RANGE

        values = [point.total_value for point in points]
        min_value = min(values)
        max_value = max(values)

        padding = (max_value - min_value) * time_range.padding_factor
        min_padding = (min_value + max_value) / TWO * MIN_AXIS_SPREAD_RATIO / TWO
        adjusted = max(padding, min_padding)

        return max(ZERO, min_value - adjusted), max_value + adjusted

    @staticmethod
    def axis_label_spacing(point_count: int) -> int:
        """
        Get the x-axis label interval for a number of points.

        Dense series show every label; longer series aim for about six,
        then five labels. Never less than 1.
        """
        if point_count <= LABEL_SPACING_DENSE_MAX:
            return 1
        if point_count <= LABEL_SPACING_MEDIUM_MAX:
            return max(1, point_count // LABEL_SPACING_MEDIUM_DIVISOR)
        return max(1, point_count // LABEL_SPACING_SPARSE_DIVISOR)

    @staticmethod
    def date_format(time_range: TimeRange) -> str:
        """Get the strftime pattern used for x-axis labels."""
        return time_range.date_format
