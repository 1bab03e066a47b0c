# backend/goldfolio/services/curve/summary.py
"""
Portfolio summary totals.

    total_invested = Σ quantity × cost_basis
    total_value    = Σ quantity × latest known price
    total_profit   = total_value - total_invested
    profit_percent = total_profit / total_invested × 100

The latest known price comes from the same fold that builds the curve, so
total_value equals the last curve point whenever there is history.
"""

from __future__ import annotations

import logging
from typing import Sequence

from goldfolio.services.constants import ZERO
from goldfolio.services.curve.builder import CurveBuilder
from goldfolio.services.curve.change import percent_change
from goldfolio.services.curve.types import Holding, PortfolioSummary, PriceEvent

logger = logging.getLogger(__name__)


class PortfolioSummaryCalculator:
    """Calculates value, invested capital and profit for a holdings snapshot."""

    def __init__(self, builder: CurveBuilder | None = None) -> None:
        self._builder = builder or CurveBuilder()

    def calculate(
            self,
            holdings: Sequence[Holding],
            history: Sequence[PriceEvent],
    ) -> PortfolioSummary:
        """
        Calculate the summary totals.

        Returns:
            PortfolioSummary, all zeros for an empty holdings list
        """
        if not holdings:
            return PortfolioSummary()

        prices = self._builder.latest_prices(history, holdings)

        total_invested = sum(
            (holding.quantity * holding.cost_basis for holding in holdings), ZERO
        )
        total_value = sum(
            (holding.quantity * prices[holding.id] for holding in holdings), ZERO
        )
        total_profit = total_value - total_invested

        logger.debug(
            f"Summary for {len(holdings)} holdings: value={total_value}, "
            f"invested={total_invested}"
        )

        return PortfolioSummary(
            total_value=total_value,
            total_invested=total_invested,
            total_profit=total_profit,
            profit_percent=percent_change(total_profit, total_invested),
        )
